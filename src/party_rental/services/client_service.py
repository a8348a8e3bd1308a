"""Client service for business rules."""

from __future__ import annotations

from party_rental.domain.models import Client, ClientType
from party_rental.logging_config import get_logger
from party_rental.repositories.client_repo import ClientRepo
from party_rental.repositories.document_store import LocalDocumentStore
from party_rental.services.errors import NotFoundError, ValidationError


class ClientService:
    """Service for client operations."""

    def __init__(self, store: LocalDocumentStore) -> None:
        self._repo = ClientRepo(store)
        self._logger = get_logger(self.__class__.__name__)

    def list_clients(self, term: str = "") -> list[Client]:
        return self._repo.search_by_name(term)

    def get_client(self, client_id: str) -> Client:
        client = self._repo.get_by_id(client_id)
        if not client:
            raise NotFoundError("Cliente não encontrado.")
        return client

    def create_client(self, client: Client) -> Client:
        self._validate(client)
        created = self._repo.create(client)
        self._logger.info("Cliente %s cadastrado", created.id)
        return created

    def update_client(self, client: Client) -> Client:
        self._validate(client)
        if not client.id or not self._repo.update(client):
            raise NotFoundError("Cliente não encontrado.")
        return client

    def delete_client(self, client_id: str) -> None:
        # Rentals keep a name snapshot, so past bookings still read correctly.
        if not self._repo.delete(client_id):
            raise NotFoundError("Cliente não encontrado.")

    def _validate(self, client: Client) -> None:
        if not client.name or not client.name.strip():
            raise ValidationError("O nome do cliente é obrigatório.")
        if not client.phone or not client.phone.strip():
            raise ValidationError("O telefone do cliente é obrigatório.")
        try:
            ClientType(client.type)
        except ValueError as exc:
            raise ValidationError("Tipo de cliente inválido (use pf ou pj).") from exc
