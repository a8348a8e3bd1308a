"""Inventory availability calculations and catalog maintenance."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Optional

from party_rental.config import MAINTENANCE_CATEGORY
from party_rental.domain.models import (
    InventoryItem,
    ItemStatus,
    LedgerEntry,
    Rental,
    RentalStatus,
)
from party_rental.logging_config import get_logger
from party_rental.repositories.document_store import LocalDocumentStore
from party_rental.repositories.inventory_repo import InventoryRepo
from party_rental.repositories.ledger_repo import ExpenseRepo
from party_rental.services.errors import NotFoundError, ValidationError
from party_rental.services.money import optional_amount, require_amount
from party_rental.utils.dates import parse_date, to_iso_date, try_parse_date

# Quotes do not reserve stock.
NON_BLOCKING_STATUSES = (RentalStatus.QUOTE_REQUESTED,)


def rental_period(rental: Rental) -> Optional[tuple[date, date]]:
    """Inclusive pickup/return interval; blank ends fall back to the event date."""
    event = try_parse_date(rental.event_date)
    start = try_parse_date(rental.pickup_date) or event
    end = try_parse_date(rental.return_date) or event
    if start is None or end is None:
        return None
    return start, end


def rental_item_ids(rental: Rental) -> set[str]:
    ids = {item.id for item in rental.items}
    for kit in rental.kits:
        ids.update(member.id for member in kit.items)
    return ids


def unavailable_item_ids(
    rentals: Iterable[Rental],
    start: str | date,
    end: str | date | None = None,
    exclude_rental_id: Optional[str] = None,
) -> set[str]:
    """Item ids blocked on a date, or on any day of an inclusive date range."""
    try:
        range_start = parse_date(start)
        range_end = parse_date(end) if end else range_start
    except ValueError as exc:
        raise ValidationError("Data inválida para consulta de disponibilidade.") from exc
    if range_start is None or range_end is None:
        raise ValidationError("Informe a data para consultar a disponibilidade.")
    if range_end < range_start:
        raise ValidationError("A data final deve ser igual ou posterior à inicial.")
    blocked: set[str] = set()
    for rental in rentals:
        if rental.status in NON_BLOCKING_STATUSES:
            continue
        if exclude_rental_id is not None and rental.id == exclude_rental_id:
            continue
        period = rental_period(rental)
        if period is None:
            continue
        pickup, return_ = period
        if pickup <= range_end and range_start <= return_:
            blocked.update(rental_item_ids(rental))
    return blocked


def is_item_available(item: InventoryItem, blocked_ids: set[str]) -> bool:
    return item.status == ItemStatus.AVAILABLE and item.id not in blocked_ids


def available_items(
    inventory: Iterable[InventoryItem],
    rentals: Iterable[Rental],
    start: str | date,
    end: str | date | None = None,
) -> list[InventoryItem]:
    blocked = unavailable_item_ids(rentals, start, end)
    return [item for item in inventory if is_item_available(item, blocked)]


def availability_calendar(
    item_id: str, rentals: Iterable[Rental], start: date, end: date
) -> dict[str, bool]:
    """Per-day booking state of one item: ``True`` when free of bookings."""
    rentals = list(rentals)
    result: dict[str, bool] = {}
    current = start
    while current <= end:
        result[current.isoformat()] = item_id not in unavailable_item_ids(rentals, current)
        current += timedelta(days=1)
    return result


class InventoryService:
    """Service for inventory records and the maintenance workflow."""

    def __init__(self, store: LocalDocumentStore) -> None:
        self._repo = InventoryRepo(store)
        self._expense_repo = ExpenseRepo(store)
        self._logger = get_logger(self.__class__.__name__)

    def list_items(self) -> list[InventoryItem]:
        return sorted(self._repo.list_all(), key=lambda item: item.name.casefold())

    def get_item(self, item_id: str) -> InventoryItem:
        item = self._repo.get_by_id(item_id)
        if not item:
            raise NotFoundError(f"Item {item_id} não encontrado.")
        return item

    def create_item(self, item: InventoryItem) -> InventoryItem:
        self._validate(item)
        created = self._repo.create(item)
        self._logger.info("Item %s cadastrado (%s)", created.id, created.name)
        return created

    def update_item(self, item: InventoryItem) -> InventoryItem:
        self._validate(item)
        if not item.id or not self._repo.update(item):
            raise NotFoundError(f"Item {item.id} não encontrado.")
        return item

    def delete_item(self, item_id: str) -> None:
        # Rentals keep their own snapshot of the item, so history is untouched.
        if not self._repo.delete(item_id):
            raise NotFoundError(f"Item {item_id} não encontrado.")

    def list_in_maintenance(self) -> list[InventoryItem]:
        return self._repo.list_by_status(ItemStatus.MAINTENANCE)

    def report_maintenance(self, item_id: str, reason: str) -> InventoryItem:
        if not reason or not reason.strip():
            raise ValidationError("Descreva a avaria ou o motivo da manutenção.")
        item = self.get_item(item_id)
        item.status = ItemStatus.MAINTENANCE
        item.maintenance_notes = reason.strip()
        self._repo.update(item)
        self._logger.info("Item %s enviado para manutenção", item_id)
        return item

    def register_maintenance(
        self,
        item_id: str,
        notes: str,
        cost: float = 0.0,
        on_date: Optional[str] = None,
    ) -> Optional[LedgerEntry]:
        """Update maintenance notes and book the repair cost as an expense."""
        cost = require_amount(cost, "O custo da manutenção não pode ser negativo.")
        item = self.get_item(item_id)
        item.maintenance_notes = notes
        self._repo.update(item)
        if cost == 0:
            return None
        try:
            expense_date = to_iso_date(on_date or date.today())
        except ValueError as exc:
            raise ValidationError("Data da manutenção inválida.") from exc
        return self._expense_repo.create(
            LedgerEntry(
                id=None,
                description=f"Custo de manutenção: {item.name}",
                category=MAINTENANCE_CATEGORY,
                date=expense_date,
                amount=cost,
                item_id=item.id,
            )
        )

    def complete_maintenance(self, item_id: str) -> InventoryItem:
        item = self.get_item(item_id)
        item.status = ItemStatus.AVAILABLE
        item.maintenance_notes = ""
        self._repo.update(item)
        self._logger.info("Manutenção do item %s concluída", item_id)
        return item

    def _validate(self, item: InventoryItem) -> None:
        if not item.name.strip():
            raise ValidationError("O nome do item é obrigatório.")
        if not item.category.strip():
            raise ValidationError("A categoria do item é obrigatória.")
        if item.quantity < 0:
            raise ValidationError("A quantidade não pode ser negativa.")
        item.price = require_amount(item.price, "O preço não pode ser negativo.")
        if item.low_stock_threshold is not None and item.low_stock_threshold < 0:
            raise ValidationError("O estoque mínimo não pode ser negativo.")
        item.purchase_cost = optional_amount(
            item.purchase_cost, "O custo de compra não pode ser negativo."
        )
