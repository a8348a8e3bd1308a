"""Repositories for data access."""

from party_rental.repositories.client_repo import ClientRepo
from party_rental.repositories.document_store import COLLECTIONS, LocalDocumentStore
from party_rental.repositories.inventory_repo import InventoryRepo
from party_rental.repositories.kit_repo import KitRepo
from party_rental.repositories.ledger_repo import ExpenseRepo, RevenueRepo
from party_rental.repositories.rental_repo import RentalRepo
from party_rental.repositories.settings_repo import SettingsRepo

__all__ = [
    "COLLECTIONS",
    "ClientRepo",
    "ExpenseRepo",
    "InventoryRepo",
    "KitRepo",
    "LocalDocumentStore",
    "RentalRepo",
    "RevenueRepo",
    "SettingsRepo",
]
