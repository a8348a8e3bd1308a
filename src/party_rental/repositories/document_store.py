"""Local document store backed by SQLite.

Each collection is kept as a single JSON array in the ``collections`` table,
mirroring how the browser fallback kept one serialized array per key. Reads
return plain dict records; writes replace the whole array in one statement,
so every operation is a single-row write with last-write-wins semantics.
"""

from __future__ import annotations

import json
import sqlite3
import time
from datetime import datetime
from typing import Any, Optional

from party_rental.config import LOCAL_ID_PREFIX, SETTINGS_SINGLETON_ID
from party_rental.db.connection import transaction
from party_rental.logging_config import get_logger
from party_rental.services.errors import PersistenceError

INVENTORY = "inventory"
CLIENTS = "clients"
KITS = "kits"
RENTALS = "rentals"
EXPENSES = "expenses"
REVENUES = "revenues"
SETTINGS = "settings"

COLLECTIONS = (INVENTORY, CLIENTS, KITS, RENTALS, EXPENSES, REVENUES, SETTINGS)

Record = dict[str, Any]


def _now_iso() -> str:
    return datetime.now().isoformat(timespec="seconds")


class LocalDocumentStore:
    """Document operations per collection over a single SQLite file."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection
        self._connection.row_factory = sqlite3.Row
        self._logger = get_logger(self.__class__.__name__)
        self._last_id_ms = 0

    def list(self, collection: str) -> list[Record]:
        return [dict(record) for record in self._load(collection)]

    def get(self, collection: str, record_id: str) -> Optional[Record]:
        for record in self._load(collection):
            if record.get("id") == record_id:
                return dict(record)
        return None

    def create(self, collection: str, data: Record) -> str:
        records = self._load(collection)
        taken = {record.get("id") for record in records}
        record_id = self._next_id(taken)
        records.append({**data, "id": record_id})
        self._save(collection, records)
        self._logger.info("Registro %s criado em %s", record_id, collection)
        return record_id

    def update(self, collection: str, record_id: str, data: Record) -> bool:
        records = self._load(collection)
        found = False
        for index, record in enumerate(records):
            if record.get("id") == record_id:
                records[index] = {**record, **data, "id": record_id}
                found = True
                break
        if not found:
            return False
        self._save(collection, records)
        return True

    def delete(self, collection: str, record_id: str) -> bool:
        records = self._load(collection)
        remaining = [record for record in records if record.get("id") != record_id]
        if len(remaining) == len(records):
            return False
        self._save(collection, remaining)
        self._logger.info("Registro %s removido de %s", record_id, collection)
        return True

    def get_singleton(
        self, collection: str, record_id: str = SETTINGS_SINGLETON_ID
    ) -> Optional[Record]:
        return self.get(collection, record_id)

    def set_singleton(
        self,
        collection: str,
        data: Record,
        record_id: str = SETTINGS_SINGLETON_ID,
    ) -> None:
        self._save(collection, [{**data, "id": record_id}])

    def _next_id(self, taken: set[Any]) -> str:
        stamp = max(int(time.time() * 1000), self._last_id_ms + 1)
        while f"{LOCAL_ID_PREFIX}{stamp}" in taken:
            stamp += 1
        self._last_id_ms = stamp
        return f"{LOCAL_ID_PREFIX}{stamp}"

    def _check_collection(self, collection: str) -> None:
        if collection not in COLLECTIONS:
            raise ValueError(f"Coleção desconhecida: {collection}")

    def _load(self, collection: str) -> list[Record]:
        self._check_collection(collection)
        try:
            row = self._connection.execute(
                "SELECT payload FROM collections WHERE name = ?",
                (collection,),
            ).fetchone()
        except sqlite3.Error as exc:
            self._logger.exception("Failed to read collection %s", collection)
            raise PersistenceError(
                f"Não foi possível carregar '{collection}'."
            ) from exc
        if row is None:
            return []
        try:
            data = json.loads(row["payload"])
        except json.JSONDecodeError:
            self._logger.warning("Conteúdo inválido na coleção %s; ignorado.", collection)
            return []
        if not isinstance(data, list):
            self._logger.warning("Coleção %s não é uma lista; ignorada.", collection)
            return []
        return [record for record in data if isinstance(record, dict)]

    def _save(self, collection: str, records: list[Record]) -> None:
        self._check_collection(collection)
        payload = json.dumps(records, ensure_ascii=False)
        try:
            with transaction(self._connection):
                self._connection.execute(
                    """
                    INSERT INTO collections (name, payload, updated_at)
                    VALUES (?, ?, ?)
                    ON CONFLICT(name) DO UPDATE SET
                        payload = excluded.payload,
                        updated_at = excluded.updated_at
                    """,
                    (collection, payload, _now_iso()),
                )
        except sqlite3.Error as exc:
            self._logger.exception("Failed to write collection %s", collection)
            raise PersistenceError(
                f"Não foi possível salvar '{collection}'."
            ) from exc
