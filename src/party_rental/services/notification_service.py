"""Transient alerts derived from rentals and inventory."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Optional

from party_rental.config import PAYMENT_DUE_WINDOW_DAYS
from party_rental.domain.models import (
    InventoryItem,
    ItemStatus,
    Notification,
    NotificationType,
    Rental,
)
from party_rental.repositories.document_store import LocalDocumentStore
from party_rental.repositories.inventory_repo import InventoryRepo
from party_rental.repositories.rental_repo import RentalRepo
from party_rental.services.lifecycle import balance_due, is_overdue
from party_rental.utils.dates import try_parse_date
from party_rental.utils.formatting import format_currency, format_date


def overdue_notifications(rentals: Iterable[Rental], today: date) -> list[Notification]:
    return [
        Notification(
            id=f"overdue-{rental.id}",
            type=NotificationType.OVERDUE_RETURN,
            message=(
                f"Devolução de {rental.client.name} está atrasada "
                f"(prevista para {format_date(rental.return_date)})."
            ),
            reference_id=rental.id or "",
        )
        for rental in rentals
        if is_overdue(rental, today)
    ]


def payment_due_notifications(
    rentals: Iterable[Rental], today: date, window_days: int = PAYMENT_DUE_WINDOW_DAYS
) -> list[Notification]:
    limit = today + timedelta(days=window_days)
    notifications: list[Notification] = []
    for rental in rentals:
        event = try_parse_date(rental.event_date)
        balance = balance_due(rental)
        if event is None or balance <= 0 or not today < event <= limit:
            continue
        notifications.append(
            Notification(
                id=f"payment-{rental.id}",
                type=NotificationType.PAYMENT_DUE,
                message=(
                    f"Pagamento final de {rental.client.name} vence em breve: "
                    f"{format_currency(balance)} até {format_date(event)}."
                ),
                reference_id=rental.id or "",
            )
        )
    return notifications


def low_stock_notifications(inventory: Iterable[InventoryItem]) -> list[Notification]:
    return [
        Notification(
            id=f"stock-{item.id}",
            type=NotificationType.LOW_STOCK,
            message=f"Estoque baixo para {item.name} (Qtd: {item.quantity})",
            reference_id=item.id or "",
        )
        for item in inventory
        if item.status == ItemStatus.AVAILABLE
        and item.low_stock_threshold is not None
        and item.quantity <= item.low_stock_threshold
    ]


def derive_notifications(
    rentals: Iterable[Rental],
    inventory: Iterable[InventoryItem],
    today: Optional[date] = None,
    window_days: int = PAYMENT_DUE_WINDOW_DAYS,
) -> list[Notification]:
    """Overdue returns, then payments due soon, then low stock."""
    today = today or date.today()
    rentals = list(rentals)
    return (
        overdue_notifications(rentals, today)
        + payment_due_notifications(rentals, today, window_days)
        + low_stock_notifications(inventory)
    )


class NotificationService:
    def __init__(
        self, store: LocalDocumentStore, window_days: int = PAYMENT_DUE_WINDOW_DAYS
    ) -> None:
        self._window_days = window_days
        self._rental_repo = RentalRepo(store)
        self._inventory_repo = InventoryRepo(store)

    def list_notifications(self, today: Optional[date] = None) -> list[Notification]:
        return derive_notifications(
            self._rental_repo.list_all(),
            self._inventory_repo.list_all(),
            today,
            self._window_days,
        )
