"""Repository for kits."""

from __future__ import annotations

from party_rental.domain.models import Kit
from party_rental.repositories.collection_repo import CollectionRepo
from party_rental.repositories.document_store import KITS, LocalDocumentStore
from party_rental.repositories.mappers import kit_from_record, kit_to_record


class KitRepo(CollectionRepo[Kit]):
    """CRUD operations for kits."""

    collection = KITS

    def __init__(self, store: LocalDocumentStore) -> None:
        super().__init__(store, kit_from_record, kit_to_record)
