"""Typed CRUD over one document-store collection."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, Generic, Mapping, Optional, TypeVar

from party_rental.logging_config import get_logger
from party_rental.repositories.document_store import LocalDocumentStore

T = TypeVar("T")


class CollectionRepo(Generic[T]):
    """Map records of a collection to domain dataclasses and back."""

    collection: str = ""

    def __init__(
        self,
        store: LocalDocumentStore,
        from_record: Callable[[Mapping[str, Any]], T],
        to_record: Callable[[T], dict[str, Any]],
    ) -> None:
        self._store = store
        self._from_record = from_record
        self._to_record = to_record
        self._logger = get_logger(self.__class__.__name__)

    def list_all(self) -> list[T]:
        return [self._from_record(record) for record in self._store.list(self.collection)]

    def get_by_id(self, record_id: str) -> Optional[T]:
        record = self._store.get(self.collection, record_id)
        return self._from_record(record) if record else None

    def create(self, entity: T) -> T:
        record_id = self._store.create(self.collection, self._to_record(entity))
        return replace(entity, id=record_id)

    def update(self, entity: T) -> bool:
        record_id = getattr(entity, "id", None)
        if not record_id:
            return False
        return self._store.update(self.collection, record_id, self._to_record(entity))

    def delete(self, record_id: str) -> bool:
        return self._store.delete(self.collection, record_id)
