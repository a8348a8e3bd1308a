"""Repository for the company settings singleton."""

from __future__ import annotations

from typing import Optional

from party_rental.domain.models import CompanySettings
from party_rental.repositories.document_store import LocalDocumentStore, SETTINGS
from party_rental.repositories.mappers import settings_from_record, settings_to_record


class SettingsRepo:
    """Load and overwrite the single settings record."""

    def __init__(self, store: LocalDocumentStore) -> None:
        self._store = store

    def get(self) -> Optional[CompanySettings]:
        record = self._store.get_singleton(SETTINGS)
        return settings_from_record(record) if record else None

    def save(self, settings: CompanySettings) -> None:
        self._store.set_singleton(SETTINGS, settings_to_record(settings))
