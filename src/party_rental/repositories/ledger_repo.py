"""Repositories for the expense and revenue ledgers."""

from __future__ import annotations

from party_rental.domain.models import LedgerEntry
from party_rental.repositories.collection_repo import CollectionRepo
from party_rental.repositories.document_store import (
    EXPENSES,
    LocalDocumentStore,
    REVENUES,
)
from party_rental.repositories.mappers import (
    ledger_entry_from_record,
    ledger_entry_to_record,
)


class _LedgerRepo(CollectionRepo[LedgerEntry]):
    def __init__(self, store: LocalDocumentStore) -> None:
        super().__init__(store, ledger_entry_from_record, ledger_entry_to_record)

    def list_categories(self) -> list[str]:
        return sorted({entry.category for entry in self.list_all() if entry.category.strip()})


class ExpenseRepo(_LedgerRepo):
    """Data access for expenses."""

    collection = EXPENSES


class RevenueRepo(_LedgerRepo):
    """Data access for standalone revenues."""

    collection = REVENUES
