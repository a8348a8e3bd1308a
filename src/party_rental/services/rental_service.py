"""Rental service for booking and lifecycle business rules."""

from __future__ import annotations

import time
from dataclasses import replace
from datetime import date
from typing import Iterable, Mapping, Optional

from party_rental.domain.models import (
    ChecklistPhase,
    ClientRef,
    ItemSnapshot,
    ItemStatus,
    KitSnapshot,
    Payment,
    PaymentMethod,
    Rental,
    RentalStatus,
)
from party_rental.logging_config import get_logger
from party_rental.repositories.client_repo import ClientRepo
from party_rental.repositories.document_store import LocalDocumentStore
from party_rental.repositories.inventory_repo import InventoryRepo
from party_rental.repositories.kit_repo import KitRepo
from party_rental.repositories.rental_repo import RentalRepo
from party_rental.services import lifecycle
from party_rental.services.errors import NotFoundError, ValidationError
from party_rental.services.money import optional_amount, require_amount, round_money
from party_rental.utils.dates import parse_date, to_iso_date
from party_rental.utils.formatting import format_address

CREATABLE_STATUSES = (RentalStatus.BOOKED, RentalStatus.QUOTE_REQUESTED)


def new_payment_id(taken: Iterable[str] = (), prefix: str = "payment") -> str:
    taken = set(taken)
    stamp = int(time.time() * 1000)
    while f"{prefix}_{stamp}" in taken:
        stamp += 1
    return f"{prefix}_{stamp}"


class RentalService:
    """Service for rental business rules."""

    def __init__(self, store: LocalDocumentStore) -> None:
        self._rental_repo = RentalRepo(store)
        self._inventory_repo = InventoryRepo(store)
        self._kit_repo = KitRepo(store)
        self._client_repo = ClientRepo(store)
        self._logger = get_logger(self.__class__.__name__)

    def list_rentals(self) -> list[Rental]:
        return sorted(
            self._rental_repo.list_all(),
            key=lambda rental: rental.event_date,
            reverse=True,
        )

    def list_by_client(self, client_id: str) -> list[Rental]:
        return self._rental_repo.list_by_client(client_id)

    def get_rental(self, rental_id: str) -> Rental:
        rental = self._rental_repo.get_by_id(rental_id)
        if not rental:
            raise NotFoundError(f"Aluguel {rental_id} não encontrado.")
        return rental

    def _save(self, rental: Rental) -> Rental:
        if not self._rental_repo.update(rental):
            raise NotFoundError(f"Aluguel {rental.id} não encontrado.")
        return rental

    def _normalize_dates(
        self,
        event_date: str,
        pickup_date: Optional[str],
        return_date: Optional[str],
    ) -> tuple[str, str, str]:
        try:
            event = parse_date(event_date)
            pickup = parse_date(pickup_date) or event
            return_ = parse_date(return_date) or event
        except ValueError as exc:
            raise ValidationError(
                "Datas inválidas. Verifique o evento, a retirada e a devolução."
            ) from exc
        if event is None:
            raise ValidationError("Informe a data do evento.")
        if return_ < pickup:
            raise ValidationError(
                "A data de devolução deve ser igual ou posterior à retirada."
            )
        return event.isoformat(), pickup.isoformat(), return_.isoformat()

    def _item_snapshots(self, items: Mapping[str, int]) -> list[ItemSnapshot]:
        snapshots: list[ItemSnapshot] = []
        for item_id, quantity in items.items():
            item = self._inventory_repo.get_by_id(item_id)
            if not item:
                raise NotFoundError(f"Item {item_id} não encontrado.")
            if quantity <= 0:
                raise ValidationError(f"Quantidade inválida para {item.name}.")
            if quantity > item.quantity:
                raise ValidationError(
                    f"Quantidade indisponível para {item.name}: "
                    f"solicitado {quantity}, estoque {item.quantity}."
                )
            if item.status != ItemStatus.AVAILABLE:
                raise ValidationError(f"O item {item.name} não está disponível.")
            snapshots.append(
                ItemSnapshot(id=item.id, name=item.name, quantity=quantity, price=item.price)
            )
        return snapshots

    def _kit_snapshots(self, kit_ids: Iterable[str]) -> list[KitSnapshot]:
        snapshots: list[KitSnapshot] = []
        for kit_id in dict.fromkeys(kit_ids):
            kit = self._kit_repo.get_by_id(kit_id)
            if not kit:
                raise NotFoundError(f"Kit {kit_id} não encontrado.")
            for member in kit.items:
                item = self._inventory_repo.get_by_id(member.id)
                if not item or item.status != ItemStatus.AVAILABLE:
                    raise ValidationError(
                        f"O item {member.name} do kit {kit.name} não está disponível."
                    )
            snapshots.append(
                KitSnapshot(id=kit.id, name=kit.name, price=kit.price, items=tuple(kit.items))
            )
        return snapshots

    def create_rental(
        self,
        client_id: str,
        event_date: str,
        items: Optional[Mapping[str, int]] = None,
        kit_ids: Iterable[str] = (),
        pickup_date: Optional[str] = None,
        return_date: Optional[str] = None,
        discount: float = 0.0,
        notes: str = "",
        delivery_service: bool = False,
        delivery_fee: Optional[float] = None,
        setup_service: bool = False,
        setup_fee: Optional[float] = None,
        delivery_address: Optional[str] = None,
        status: RentalStatus = RentalStatus.BOOKED,
    ) -> Rental:
        """Book a rental, freezing client, item and kit snapshots and the total."""
        items = dict(items or {})
        kit_ids = list(kit_ids)
        if not items and not kit_ids:
            raise ValidationError("Selecione ao menos um item ou kit.")
        if status not in CREATABLE_STATUSES:
            raise ValidationError("Status inicial inválido para o aluguel.")
        fee_message = "As taxas de serviço não podem ser negativas."
        delivery_fee = optional_amount(delivery_fee, fee_message)
        setup_fee = optional_amount(setup_fee, fee_message)
        discount_message = "O desconto deve estar entre zero e o valor total."
        discount = require_amount(discount, discount_message)
        client = self._client_repo.get_by_id(client_id)
        if not client:
            raise NotFoundError(f"Cliente {client_id} não encontrado.")
        event_date, pickup_date, return_date = self._normalize_dates(
            event_date, pickup_date, return_date
        )
        item_snapshots = self._item_snapshots(items)
        kit_snapshots = self._kit_snapshots(kit_ids)
        in_kits = {member.id for kit in kit_snapshots for member in kit.items}
        duplicated = [item.name for item in item_snapshots if item.id in in_kits]
        if duplicated:
            raise ValidationError(
                "Itens já incluídos em um kit selecionado: " + ", ".join(duplicated)
            )

        total = sum(item.price * item.quantity for item in item_snapshots)
        total += sum(kit.price for kit in kit_snapshots)
        if delivery_service and delivery_fee:
            total += delivery_fee
        if setup_service and setup_fee:
            total += setup_fee
        total = round_money(total)
        if discount > total:
            raise ValidationError(discount_message)
        if delivery_service and not delivery_address:
            delivery_address = format_address(client.address) or None

        rental = Rental(
            id=None,
            client=ClientRef(id=client.id, name=client.name),
            event_date=event_date,
            pickup_date=pickup_date,
            return_date=return_date,
            total_value=total,
            discount=discount,
            notes=notes,
            status=status,
            items=item_snapshots,
            kits=kit_snapshots,
            delivery_service=delivery_service,
            delivery_fee=delivery_fee,
            setup_service=setup_service,
            setup_fee=setup_fee,
            delivery_address=delivery_address,
        )
        created = self._rental_repo.create(lifecycle.with_payment_status(rental))
        self._logger.info(
            "Aluguel %s criado para %s (total %.2f)", created.id, client.name, total
        )
        return created

    def delete_rental(self, rental_id: str) -> None:
        if not self._rental_repo.delete(rental_id):
            raise NotFoundError(f"Aluguel {rental_id} não encontrado.")

    def add_payment(
        self,
        rental_id: str,
        amount: float,
        method: PaymentMethod | str,
        paid_at: Optional[str | date] = None,
    ) -> Rental:
        amount = require_amount(
            amount, "O valor do pagamento deve ser maior que zero.", allow_zero=False
        )
        try:
            method = PaymentMethod(method)
        except ValueError as exc:
            raise ValidationError("Forma de pagamento inválida.") from exc
        try:
            paid_on = to_iso_date(paid_at or date.today())
        except ValueError as exc:
            raise ValidationError("Data do pagamento inválida.") from exc
        rental = self.get_rental(rental_id)
        payment = Payment(
            id=new_payment_id(p.id for p in rental.payment_history),
            date=paid_on,
            amount=amount,
            method=method,
        )
        updated = self._save(lifecycle.add_payment(rental, payment))
        self._logger.info(
            "Pagamento de %.2f registrado no aluguel %s", amount, rental_id
        )
        return updated

    def remove_payment(self, rental_id: str, payment_id: str) -> Rental:
        rental = self.get_rental(rental_id)
        updated = self._save(lifecycle.remove_payment(rental, payment_id))
        self._logger.info("Pagamento %s removido do aluguel %s", payment_id, rental_id)
        return updated

    def set_checklist_item(
        self,
        rental_id: str,
        phase: ChecklistPhase | str,
        item_id: str,
        checked: bool = True,
    ) -> Rental:
        rental = self.get_rental(rental_id)
        return self._save(
            lifecycle.set_checklist_item(rental, ChecklistPhase(phase), item_id, checked)
        )

    def check_kit(self, rental_id: str, phase: ChecklistPhase | str, kit_id: str) -> Rental:
        rental = self.get_rental(rental_id)
        return self._save(lifecycle.check_kit(rental, ChecklistPhase(phase), kit_id))

    def confirm_pickup(self, rental_id: str) -> Rental:
        return self._confirm(rental_id, ChecklistPhase.PICKUP)

    def confirm_return(self, rental_id: str) -> Rental:
        return self._confirm(rental_id, ChecklistPhase.RETURN)

    def _confirm(self, rental_id: str, phase: ChecklistPhase) -> Rental:
        rental = self.get_rental(rental_id)
        confirmed = lifecycle.confirm_phase(rental, phase)
        if confirmed.status == rental.status:
            return rental
        self._logger.info(
            "Aluguel %s: %s -> %s", rental_id, rental.status.value, confirmed.status.value
        )
        return self._save(confirmed)

    def report_damage(self, rental_id: str, item_id: str, reason: str) -> Rental:
        """Send a damaged item to maintenance and log it on the rental."""
        if not reason or not reason.strip():
            raise ValidationError("Descreva o motivo da avaria.")
        reason = reason.strip()
        rental = self.get_rental(rental_id)
        if item_id not in lifecycle.checklist_item_ids(rental):
            raise ValidationError(f"O item {item_id} não faz parte deste aluguel.")
        item = self._inventory_repo.get_by_id(item_id)
        if not item:
            raise NotFoundError(f"Item {item_id} não encontrado.")
        item.status = ItemStatus.MAINTENANCE
        item.maintenance_notes = reason
        self._inventory_repo.update(item)
        note = f"Item avariado reportado: {item.name}. Motivo: {reason}"
        updated = self._save(replace(rental, notes=lifecycle.append_note(rental.notes, note)))
        self._logger.warning("Avaria no item %s (aluguel %s)", item_id, rental_id)
        return updated

    def update_details(
        self,
        rental_id: str,
        discount: Optional[float] = None,
        notes: Optional[str] = None,
        delivery_address: Optional[str] = None,
    ) -> Rental:
        rental = self.get_rental(rental_id)
        if discount is not None:
            message = "O desconto deve estar entre zero e o valor total."
            discount = require_amount(discount, message)
            if discount > rental.total_value:
                raise ValidationError(message)
            rental = replace(rental, discount=discount)
        if notes is not None:
            rental = replace(rental, notes=notes)
        if delivery_address is not None:
            rental = replace(rental, delivery_address=delivery_address)
        return self._save(lifecycle.with_payment_status(rental))
