"""Public booking surface: catalog, deposit booking and balance settlement."""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from party_rental.config import DEPOSIT_RATE, PUBLIC_BOOKING_NOTE
from party_rental.domain.models import (
    Address,
    Client,
    ClientRef,
    ClientType,
    InventoryItem,
    ItemSnapshot,
    Payment,
    PaymentMethod,
    Rental,
    RentalStatus,
)
from party_rental.logging_config import get_logger
from party_rental.repositories.client_repo import ClientRepo
from party_rental.repositories.document_store import LocalDocumentStore
from party_rental.repositories.inventory_repo import InventoryRepo
from party_rental.repositories.rental_repo import RentalRepo
from party_rental.services import lifecycle
from party_rental.services.errors import NotFoundError, ValidationError
from party_rental.services.inventory_service import available_items
from party_rental.services.money import require_amount, round_money
from party_rental.services.rental_service import new_payment_id
from party_rental.utils.dates import parse_date


class BookingService:
    """Operations used by the public catalog and the payment link page."""

    def __init__(
        self, store: LocalDocumentStore, deposit_rate: float = DEPOSIT_RATE
    ) -> None:
        self._deposit_rate = deposit_rate
        self._client_repo = ClientRepo(store)
        self._inventory_repo = InventoryRepo(store)
        self._rental_repo = RentalRepo(store)
        self._logger = get_logger(self.__class__.__name__)

    def catalog(self, on_date: str | date) -> list[InventoryItem]:
        items = available_items(
            self._inventory_repo.list_all(), self._rental_repo.list_all(), on_date
        )
        return sorted(items, key=lambda item: (item.category, item.name))

    def find_or_create_client(self, name: str, phone: str, email: str = "") -> Client:
        if not name or not name.strip():
            raise ValidationError("Informe seu nome.")
        if not phone or not phone.strip():
            raise ValidationError("Informe seu telefone.")
        existing = self._client_repo.find_by_phone(phone.strip())
        if existing:
            return existing
        client = self._client_repo.create(
            Client(
                id=None,
                type=ClientType.INDIVIDUAL,
                name=name.strip(),
                phone=phone.strip(),
                email=(email or "").strip(),
                address=Address(),
            )
        )
        self._logger.info("Cliente %s criado pelo catálogo público", client.id)
        return client

    def book_basic(
        self,
        client_id: str,
        event_date: str,
        item_ids: Iterable[str],
        deposit_amount: Optional[float] = None,
    ) -> Rental:
        """Book catalog items for one day and record the pix deposit."""
        if deposit_amount is not None:
            deposit_amount = require_amount(
                deposit_amount, "Valor do sinal inválido.", allow_zero=False
            )
        item_ids = list(dict.fromkeys(item_ids))
        if not item_ids:
            raise ValidationError("Selecione ao menos um item.")
        try:
            event = parse_date(event_date)
        except ValueError as exc:
            raise ValidationError("Data do evento inválida.") from exc
        if event is None:
            raise ValidationError("Informe a data do evento.")
        client = self._client_repo.get_by_id(client_id)
        if not client:
            raise NotFoundError(f"Cliente {client_id} não encontrado.")

        free = {item.id: item for item in self.catalog(event)}
        snapshots: list[ItemSnapshot] = []
        for item_id in item_ids:
            item = free.get(item_id)
            if item is None:
                raise ValidationError(
                    f"O item {item_id} não está disponível em {event.isoformat()}."
                )
            snapshots.append(
                ItemSnapshot(id=item.id, name=item.name, quantity=1, price=item.price)
            )
        total = round_money(sum(item.price for item in snapshots))
        if deposit_amount is None:
            deposit = round_money(total * self._deposit_rate)
        else:
            deposit = deposit_amount
        if deposit <= 0 or deposit > total:
            raise ValidationError("Valor do sinal inválido.")

        rental = Rental(
            id=None,
            client=ClientRef(id=client.id, name=client.name),
            event_date=event.isoformat(),
            pickup_date=event.isoformat(),
            return_date=event.isoformat(),
            total_value=total,
            notes=PUBLIC_BOOKING_NOTE,
            status=RentalStatus.BOOKED,
            items=snapshots,
        )
        rental = lifecycle.add_payment(
            rental,
            Payment(
                id=new_payment_id(),
                date=date.today().isoformat(),
                amount=deposit,
                method=PaymentMethod.PIX,
            ),
        )
        created = self._rental_repo.create(rental)
        self._logger.info(
            "Reserva online %s criada para %s (sinal %.2f)", created.id, client.name, deposit
        )
        return created

    def pay_balance(self, rental_id: str) -> Rental:
        """Settle the remaining balance through the payment link."""
        rental = self._rental_repo.get_by_id(rental_id)
        if not rental:
            raise NotFoundError(f"Aluguel {rental_id} não encontrado.")
        balance = lifecycle.balance_due(rental)
        if balance <= 0:
            raise ValidationError("Este aluguel não possui saldo a pagar.")
        payment = Payment(
            id=new_payment_id(
                (p.id for p in rental.payment_history), prefix="payment_link"
            ),
            date=date.today().isoformat(),
            amount=balance,
            method=PaymentMethod.PAYMENT_LINK,
        )
        updated = lifecycle.add_payment(rental, payment)
        if not self._rental_repo.update(updated):
            raise NotFoundError(f"Aluguel {rental_id} não encontrado.")
        self._logger.info("Saldo de %.2f quitado via link (aluguel %s)", balance, rental_id)
        return updated
