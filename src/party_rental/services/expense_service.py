"""Ledger service for standalone expenses and revenues."""

from __future__ import annotations

from typing import Optional

from party_rental.domain.models import LedgerEntry, PaymentMethod
from party_rental.repositories.document_store import LocalDocumentStore
from party_rental.repositories.ledger_repo import ExpenseRepo, RevenueRepo
from party_rental.services.errors import NotFoundError, ValidationError
from party_rental.services.money import require_amount
from party_rental.utils.dates import to_iso_date


class LedgerService:
    """Service for expense and revenue operations."""

    def __init__(self, store: LocalDocumentStore) -> None:
        self._expense_repo = ExpenseRepo(store)
        self._revenue_repo = RevenueRepo(store)

    def list_expenses(self) -> list[LedgerEntry]:
        return sorted(self._expense_repo.list_all(), key=lambda e: e.date, reverse=True)

    def list_revenues(self) -> list[LedgerEntry]:
        return sorted(self._revenue_repo.list_all(), key=lambda e: e.date, reverse=True)

    def list_expense_categories(self) -> list[str]:
        return self._expense_repo.list_categories()

    def create_expense(
        self,
        date: str,
        category: str,
        description: str,
        amount: float,
        payment_method: Optional[str] = None,
    ) -> LedgerEntry:
        entry = self._build(date, category, description, amount, payment_method)
        return self._expense_repo.create(entry)

    def create_revenue(
        self,
        date: str,
        category: str,
        description: str,
        amount: float,
        payment_method: Optional[str] = None,
    ) -> LedgerEntry:
        entry = self._build(date, category, description, amount, payment_method)
        return self._revenue_repo.create(entry)

    def delete_expense(self, expense_id: str) -> None:
        if not self._expense_repo.delete(expense_id):
            raise NotFoundError("Despesa não encontrada.")

    def delete_revenue(self, revenue_id: str) -> None:
        if not self._revenue_repo.delete(revenue_id):
            raise NotFoundError("Receita não encontrada.")

    def _build(
        self,
        date: str,
        category: str,
        description: str,
        amount: float,
        payment_method: Optional[str],
    ) -> LedgerEntry:
        if not description or not description.strip():
            raise ValidationError("A descrição é obrigatória.")
        amount = require_amount(amount, "O valor deve ser maior que zero.", allow_zero=False)
        if not date:
            raise ValidationError("A data é obrigatória.")
        try:
            iso_date = to_iso_date(date)
        except ValueError as exc:
            raise ValidationError("Data inválida.") from exc
        method = None
        if payment_method:
            try:
                method = PaymentMethod(payment_method)
            except ValueError as exc:
                raise ValidationError("Forma de pagamento inválida.") from exc
        return LedgerEntry(
            id=None,
            description=description.strip(),
            category=(category or "").strip(),
            date=iso_date,
            amount=amount,
            payment_method=method,
        )
