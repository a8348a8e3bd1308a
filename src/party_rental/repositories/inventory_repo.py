"""Repository for inventory items."""

from __future__ import annotations

from party_rental.domain.models import InventoryItem, ItemStatus
from party_rental.repositories.collection_repo import CollectionRepo
from party_rental.repositories.document_store import INVENTORY, LocalDocumentStore
from party_rental.repositories.mappers import (
    inventory_item_from_record,
    inventory_item_to_record,
)


class InventoryRepo(CollectionRepo[InventoryItem]):
    """CRUD operations for inventory items."""

    collection = INVENTORY

    def __init__(self, store: LocalDocumentStore) -> None:
        super().__init__(store, inventory_item_from_record, inventory_item_to_record)

    def list_by_status(self, status: ItemStatus) -> list[InventoryItem]:
        return [item for item in self.list_all() if item.status == status]
