"""Company settings service."""

from __future__ import annotations

from party_rental.domain.models import CompanySettings
from party_rental.logging_config import get_logger
from party_rental.repositories.document_store import LocalDocumentStore
from party_rental.repositories.settings_repo import SettingsRepo
from party_rental.services.errors import ValidationError
from party_rental.version import __company__


class SettingsService:
    """Load and save the company settings singleton."""

    def __init__(self, store: LocalDocumentStore) -> None:
        self._repo = SettingsRepo(store)
        self._logger = get_logger(self.__class__.__name__)

    def load(self) -> CompanySettings:
        settings = self._repo.get()
        if settings is None:
            return CompanySettings(company_name=__company__)
        return settings

    def save(self, settings: CompanySettings) -> CompanySettings:
        if not settings.company_name.strip():
            raise ValidationError("O nome da empresa é obrigatório.")
        self._repo.save(settings)
        self._logger.info("Configurações da empresa atualizadas")
        return settings
