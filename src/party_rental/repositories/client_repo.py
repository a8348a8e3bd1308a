"""Repository for clients."""

from __future__ import annotations

from typing import Optional

from party_rental.domain.models import Client
from party_rental.repositories.collection_repo import CollectionRepo
from party_rental.repositories.document_store import CLIENTS, LocalDocumentStore
from party_rental.repositories.mappers import client_from_record, client_to_record


class ClientRepo(CollectionRepo[Client]):
    """CRUD operations for clients."""

    collection = CLIENTS

    def __init__(self, store: LocalDocumentStore) -> None:
        super().__init__(store, client_from_record, client_to_record)

    def find_by_phone(self, phone: str) -> Optional[Client]:
        for client in self.list_all():
            if client.phone == phone:
                return client
        return None

    def search_by_name(self, term: str) -> list[Client]:
        term = term.strip().casefold()
        clients = sorted(self.list_all(), key=lambda client: client.name.casefold())
        if not term:
            return clients
        return [client for client in clients if term in client.name.casefold()]
