"""Repository for rentals."""

from __future__ import annotations

from party_rental.domain.models import Rental
from party_rental.repositories.collection_repo import CollectionRepo
from party_rental.repositories.document_store import LocalDocumentStore, RENTALS
from party_rental.repositories.mappers import rental_from_record, rental_to_record


class RentalRepo(CollectionRepo[Rental]):
    """CRUD operations for rentals."""

    collection = RENTALS

    def __init__(self, store: LocalDocumentStore) -> None:
        super().__init__(store, rental_from_record, rental_to_record)

    def list_by_client(self, client_id: str) -> list[Rental]:
        return [rental for rental in self.list_all() if rental.client.id == client_id]
