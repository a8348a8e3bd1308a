"""Kit (bundle) service."""

from __future__ import annotations

from typing import Iterable

from party_rental.domain.models import Kit, KitMember
from party_rental.logging_config import get_logger
from party_rental.repositories.document_store import LocalDocumentStore
from party_rental.repositories.inventory_repo import InventoryRepo
from party_rental.repositories.kit_repo import KitRepo
from party_rental.services.errors import NotFoundError, ValidationError
from party_rental.services.money import require_amount


class KitService:
    """Service for kit operations."""

    def __init__(self, store: LocalDocumentStore) -> None:
        self._repo = KitRepo(store)
        self._inventory_repo = InventoryRepo(store)
        self._logger = get_logger(self.__class__.__name__)

    def list_kits(self) -> list[Kit]:
        return sorted(self._repo.list_all(), key=lambda kit: kit.name.casefold())

    def get_kit(self, kit_id: str) -> Kit:
        kit = self._repo.get_by_id(kit_id)
        if not kit:
            raise NotFoundError(f"Kit {kit_id} não encontrado.")
        return kit

    def create_kit(self, name: str, price: float, item_ids: Iterable[str]) -> Kit:
        kit = self._build(None, name, price, item_ids)
        created = self._repo.create(kit)
        self._logger.info("Kit %s criado com %d itens", created.id, len(created.items))
        return created

    def update_kit(self, kit_id: str, name: str, price: float, item_ids: Iterable[str]) -> Kit:
        kit = self._build(kit_id, name, price, item_ids)
        if not self._repo.update(kit):
            raise NotFoundError(f"Kit {kit_id} não encontrado.")
        return kit

    def delete_kit(self, kit_id: str) -> None:
        if not self._repo.delete(kit_id):
            raise NotFoundError(f"Kit {kit_id} não encontrado.")

    def _build(
        self, kit_id: str | None, name: str, price: float, item_ids: Iterable[str]
    ) -> Kit:
        if not name or not name.strip():
            raise ValidationError("O nome do kit é obrigatório.")
        price = require_amount(price, "O preço do kit não pode ser negativo.")
        item_ids = list(dict.fromkeys(item_ids))
        if not item_ids:
            raise ValidationError("Selecione ao menos um item para o kit.")
        inventory = {item.id: item for item in self._inventory_repo.list_all()}
        missing = [item_id for item_id in item_ids if item_id not in inventory]
        if missing:
            raise ValidationError("Itens não encontrados: " + ", ".join(missing))
        return Kit(
            id=kit_id,
            name=name.strip(),
            price=price,
            item_ids=item_ids,
            items=[KitMember(id=item_id, name=inventory[item_id].name) for item_id in item_ids],
        )
