"""Rental lifecycle rules.

Pure functions over :class:`Rental` snapshots. Nothing here touches the
store; :mod:`party_rental.services.rental_service` loads a rental, applies one
of these functions and writes the result back.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Iterable, Optional

from party_rental.domain.models import (
    ChecklistPhase,
    Payment,
    PaymentStatus,
    Rental,
    RentalStatus,
)
from party_rental.services.errors import NotFoundError, ValidationError
from party_rental.services.money import require_amount, round_money
from party_rental.utils.dates import try_parse_date

PHASE_TARGET_STATUS = {
    ChecklistPhase.PICKUP: RentalStatus.PICKED_UP,
    ChecklistPhase.RETURN: RentalStatus.RETURNED,
}

# Statuses from which each confirmation may start.
PHASE_SOURCE_STATUSES = {
    ChecklistPhase.PICKUP: (RentalStatus.BOOKED, RentalStatus.OVERDUE),
    ChecklistPhase.RETURN: (RentalStatus.PICKED_UP, RentalStatus.OVERDUE),
}

# Statuses at or past each phase; confirming again is a no-op.
PHASE_REACHED_STATUSES = {
    ChecklistPhase.PICKUP: (RentalStatus.PICKED_UP, RentalStatus.RETURNED),
    ChecklistPhase.RETURN: (RentalStatus.RETURNED,),
}


def total_paid(payments: Iterable[Payment]) -> float:
    return round_money(sum(payment.amount for payment in payments))


def final_value(rental: Rental) -> float:
    return round_money(rental.total_value - rental.discount)


def balance_due(rental: Rental) -> float:
    """Amount still owed; negative when the client overpaid."""
    return round_money(final_value(rental) - total_paid(rental.payment_history))


def derive_payment_status(paid: float, final: float) -> PaymentStatus:
    paid, final = round_money(paid), round_money(final)
    if paid == 0:
        return PaymentStatus.PENDING
    if paid < final:
        return PaymentStatus.PARTIAL
    return PaymentStatus.PAID


def with_payment_status(rental: Rental) -> Rental:
    status = derive_payment_status(total_paid(rental.payment_history), final_value(rental))
    return replace(rental, payment_status=status)


def add_payment(rental: Rental, payment: Payment) -> Rental:
    amount = require_amount(
        payment.amount,
        "O valor do pagamento deve ser maior que zero.",
        allow_zero=False,
    )
    payment = replace(payment, amount=amount)
    updated = replace(rental, payment_history=[*rental.payment_history, payment])
    return with_payment_status(updated)


def remove_payment(rental: Rental, payment_id: str) -> Rental:
    remaining = [p for p in rental.payment_history if p.id != payment_id]
    if len(remaining) == len(rental.payment_history):
        raise NotFoundError("Pagamento não encontrado.")
    return with_payment_status(replace(rental, payment_history=remaining))


def checklist_item_ids(rental: Rental) -> list[str]:
    """Item ids that must be verified, booked directly or through a kit."""
    ids: dict[str, None] = {}
    for item in rental.items:
        ids.setdefault(item.id, None)
    for kit in rental.kits:
        for member in kit.items:
            ids.setdefault(member.id, None)
    return list(ids)


def _checklist(rental: Rental, phase: ChecklistPhase) -> dict[str, bool]:
    if phase == ChecklistPhase.PICKUP:
        return rental.pickup_checklist
    return rental.return_checklist


def _with_checklist(
    rental: Rental, phase: ChecklistPhase, checklist: dict[str, bool]
) -> Rental:
    if phase == ChecklistPhase.PICKUP:
        return replace(rental, pickup_checklist=checklist)
    return replace(rental, return_checklist=checklist)


def pending_checklist_items(rental: Rental, phase: ChecklistPhase) -> list[str]:
    checklist = _checklist(rental, phase)
    return [item_id for item_id in checklist_item_ids(rental) if not checklist.get(item_id)]


def is_checklist_complete(rental: Rental, phase: ChecklistPhase) -> bool:
    return not pending_checklist_items(rental, phase)


def set_checklist_item(
    rental: Rental, phase: ChecklistPhase, item_id: str, checked: bool = True
) -> Rental:
    if item_id not in checklist_item_ids(rental):
        raise ValidationError(f"O item {item_id} não faz parte deste aluguel.")
    checklist = {**_checklist(rental, phase), item_id: checked}
    return _with_checklist(rental, phase, checklist)


def check_kit(rental: Rental, phase: ChecklistPhase, kit_id: str) -> Rental:
    """Mark every member of a booked kit as verified."""
    kit = next((kit for kit in rental.kits if kit.id == kit_id), None)
    if kit is None:
        raise ValidationError(f"O kit {kit_id} não faz parte deste aluguel.")
    checklist = dict(_checklist(rental, phase))
    for member in kit.items:
        checklist[member.id] = True
    return _with_checklist(rental, phase, checklist)


def confirm_phase(rental: Rental, phase: ChecklistPhase) -> Rental:
    """Advance the rental past pickup or return.

    Returns the rental unchanged when the phase was already confirmed.
    """
    if rental.status in PHASE_REACHED_STATUSES[phase]:
        return rental
    if rental.status not in PHASE_SOURCE_STATUSES[phase]:
        if phase == ChecklistPhase.PICKUP:
            raise ValidationError("Orçamentos precisam ser confirmados antes da retirada.")
        raise ValidationError("A devolução exige que a retirada tenha sido confirmada.")
    pending = pending_checklist_items(rental, phase)
    if pending:
        raise ValidationError(
            "Checklist incompleto: {count} item(ns) sem verificação.".format(
                count=len(pending)
            )
        )
    return replace(rental, status=PHASE_TARGET_STATUS[phase])


def is_overdue(rental: Rental, today: Optional[date] = None) -> bool:
    if rental.status == RentalStatus.RETURNED:
        return False
    return_date = try_parse_date(rental.return_date)
    if return_date is None:
        return False
    return return_date < (today or date.today())


def effective_status(rental: Rental, today: Optional[date] = None) -> RentalStatus:
    """Stored status, or ``overdue`` when the return date has passed."""
    if is_overdue(rental, today):
        return RentalStatus.OVERDUE
    return rental.status


def append_note(notes: str, line: str) -> str:
    return f"{notes or ''}\n{line}".strip()
