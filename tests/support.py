"""Fixtures shared by the test modules."""

from __future__ import annotations

from typing import Iterable, Optional

from party_rental.db.connection import get_connection
from party_rental.db.migrations import apply_migrations
from party_rental.domain.models import (
    Client,
    ClientRef,
    ClientType,
    InventoryItem,
    ItemSnapshot,
    ItemStatus,
    KitMember,
    KitSnapshot,
    Payment,
    PaymentMethod,
    Rental,
    RentalStatus,
)
from party_rental.repositories import ClientRepo, InventoryRepo, LocalDocumentStore


def make_store() -> LocalDocumentStore:
    connection = get_connection(":memory:")
    apply_migrations(connection)
    return LocalDocumentStore(connection)


def add_item(
    store: LocalDocumentStore,
    name: str,
    price: float = 10.0,
    quantity: int = 10,
    status: ItemStatus = ItemStatus.AVAILABLE,
    **extra,
) -> InventoryItem:
    return InventoryRepo(store).create(
        InventoryItem(
            id=None,
            name=name,
            category="Geral",
            quantity=quantity,
            price=price,
            status=status,
            **extra,
        )
    )


def add_client(
    store: LocalDocumentStore, name: str = "Maria Silva", phone: str = "11999990000"
) -> Client:
    return ClientRepo(store).create(
        Client(
            id=None,
            type=ClientType.INDIVIDUAL,
            name=name,
            phone=phone,
            email="",
        )
    )


def payment(amount: float, payment_id: str = "p1", on: str = "2024-06-01") -> Payment:
    return Payment(id=payment_id, date=on, amount=amount, method=PaymentMethod.PIX)


def build_rental(
    rental_id: str = "r1",
    client: tuple[str, str] = ("c1", "Maria Silva"),
    event_date: str = "2024-06-11",
    pickup_date: Optional[str] = "2024-06-10",
    return_date: Optional[str] = "2024-06-12",
    items: Iterable[tuple[str, str, int, float]] = (("a", "Cadeira", 1, 100.0),),
    kits: Iterable[tuple[str, str, float, Iterable[tuple[str, str]]]] = (),
    total_value: Optional[float] = None,
    discount: float = 0.0,
    status: RentalStatus = RentalStatus.BOOKED,
    payments: Iterable[Payment] = (),
    **extra,
) -> Rental:
    snapshots = [
        ItemSnapshot(id=item_id, name=name, quantity=quantity, price=price)
        for item_id, name, quantity, price in items
    ]
    kit_snapshots = [
        KitSnapshot(
            id=kit_id,
            name=name,
            price=price,
            items=tuple(KitMember(id=member_id, name=member) for member_id, member in members),
        )
        for kit_id, name, price, members in kits
    ]
    if total_value is None:
        total_value = sum(s.price * s.quantity for s in snapshots)
        total_value += sum(k.price for k in kit_snapshots)
    return Rental(
        id=rental_id,
        client=ClientRef(id=client[0], name=client[1]),
        event_date=event_date,
        pickup_date=pickup_date or "",
        return_date=return_date or "",
        total_value=total_value,
        discount=discount,
        status=status,
        payment_history=list(payments),
        items=snapshots,
        kits=kit_snapshots,
        **extra,
    )
