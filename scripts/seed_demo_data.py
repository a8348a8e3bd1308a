"""Seed demo data into the PartyRental local store."""

from __future__ import annotations

import argparse
import random
import sys
from dataclasses import dataclass
from datetime import date, timedelta
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = REPO_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from party_rental.db.connection import get_connection
from party_rental.db.migrations import apply_migrations
from party_rental.domain.models import (
    Address,
    Client,
    ClientType,
    CompanySettings,
    InventoryItem,
    PaymentInfo,
    PaymentMethod,
)
from party_rental.paths import get_db_path
from party_rental.repositories import InventoryRepo, LocalDocumentStore
from party_rental.services.client_service import ClientService
from party_rental.services.expense_service import LedgerService
from party_rental.services.inventory_service import InventoryService
from party_rental.services.kit_service import KitService
from party_rental.services.rental_service import RentalService
from party_rental.services.settings_service import SettingsService

SEED_TAG = "Seed Demo"
DEFAULT_SEED = 42


@dataclass(frozen=True)
class ItemSeed:
    key: str
    name: str
    category: str
    quantity: int
    price: float
    purchase_cost: float
    low_stock_threshold: int | None = None


ITEM_SEEDS = [
    ItemSeed("chairs", "Cadeira Tiffany", "Mobiliário", 120, 6.0, 90.0, 20),
    ItemSeed("tables", "Mesa redonda", "Mobiliário", 20, 25.0, 380.0, 4),
    ItemSeed("bounce", "Pula-pula", "Brinquedos", 2, 350.0, 2800.0, 1),
    ItemSeed("ball_pool", "Piscina de bolinhas", "Brinquedos", 1, 280.0, 1900.0),
    ItemSeed("sound", "Caixa de som", "Som e luz", 3, 120.0, 1500.0),
    ItemSeed("lights", "Varal de luzes", "Som e luz", 6, 45.0, 220.0, 2),
    ItemSeed("cloths", "Toalha de mesa", "Decoração", 40, 8.0, 35.0, 10),
]

CLIENT_SEEDS = [
    ("Ana Souza", "(11) 98888-1001", "ana@example.com", ClientType.INDIVIDUAL),
    ("Buffet Alegria LTDA", "(11) 3333-2002", "contato@alegria.example.com", ClientType.ORGANIZATION),
    ("Carlos Lima", "(11) 97777-3003", "carlos@example.com", ClientType.INDIVIDUAL),
    ("Daniela Reis", "(11) 96666-4004", "dani@example.com", ClientType.INDIVIDUAL),
]


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed demo data for PartyRental")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Remove o banco atual e recria antes de inserir dados.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=DEFAULT_SEED,
        help="Seed para aleatoriedade.",
    )
    return parser.parse_args()


def _seed_exists(store: LocalDocumentStore) -> bool:
    return any(item.name.startswith(SEED_TAG) for item in InventoryRepo(store).list_all())


def _seed_inventory(store: LocalDocumentStore) -> dict[str, str]:
    service = InventoryService(store)
    ids: dict[str, str] = {}
    for seed in ITEM_SEEDS:
        item = service.create_item(
            InventoryItem(
                id=None,
                name=f"{SEED_TAG} - {seed.name}",
                category=seed.category,
                quantity=seed.quantity,
                price=seed.price,
                purchase_cost=seed.purchase_cost,
                low_stock_threshold=seed.low_stock_threshold,
            )
        )
        ids[seed.key] = item.id
    return ids


def _seed_clients(store: LocalDocumentStore) -> list[str]:
    service = ClientService(store)
    ids: list[str] = []
    for name, phone, email, client_type in CLIENT_SEEDS:
        client = service.create_client(
            Client(
                id=None,
                type=client_type,
                name=name,
                phone=phone,
                email=email,
                address=Address(
                    cep="01310-100",
                    street="Avenida Paulista",
                    number=str(1000 + len(ids)),
                    neighborhood="Bela Vista",
                    city="São Paulo",
                    state="SP",
                ),
                how_found="Indicação",
            )
        )
        ids.append(client.id)
    return ids


def _seed_rentals(
    store: LocalDocumentStore,
    rng: random.Random,
    item_ids: dict[str, str],
    client_ids: list[str],
    kit_id: str,
) -> int:
    service = RentalService(store)
    today = date.today()
    created = 0
    for offset in (-75, -40, -12, -3, 0, 4, 9, 21):
        event = today + timedelta(days=offset)
        if offset % 2 == 0:
            items = {item_ids["chairs"]: rng.randint(20, 80), item_ids["tables"]: rng.randint(2, 8)}
            kits: list[str] = []
        else:
            items = {item_ids["sound"]: 1}
            kits = [kit_id]
        rental = service.create_rental(
            client_id=rng.choice(client_ids),
            event_date=event.isoformat(),
            items=items,
            kit_ids=kits,
            pickup_date=(event - timedelta(days=1)).isoformat(),
            return_date=(event + timedelta(days=1)).isoformat(),
            delivery_service=offset >= 0,
            delivery_fee=60.0 if offset >= 0 else None,
        )
        final_value = rental.total_value - rental.discount
        deposit = round(final_value * 0.5, 2)
        service.add_payment(
            rental.id, deposit, PaymentMethod.PIX, paid_at=event - timedelta(days=10)
        )
        if offset < 0:
            service.add_payment(
                rental.id, final_value - deposit, PaymentMethod.CARD, paid_at=event
            )
            for phase in ("pickup", "return"):
                for item_id in items:
                    service.set_checklist_item(rental.id, phase, item_id)
                for kit in kits:
                    service.check_kit(rental.id, phase, kit)
                if phase == "pickup":
                    service.confirm_pickup(rental.id)
                elif offset < -5:
                    service.confirm_return(rental.id)
        created += 1
    return created


def main() -> None:
    args = _parse_args()
    rng = random.Random(args.seed)

    db_path = get_db_path()
    if args.reset and db_path.exists():
        db_path.unlink()
        print(f"Banco removido: {db_path}")

    print(f"Usando banco de dados: {db_path}")
    connection = get_connection(db_path)
    try:
        apply_migrations(connection)
        store = LocalDocumentStore(connection)
        if _seed_exists(store) and not args.reset:
            print("Dados de seed já encontrados. Use --reset para recriar o banco.")
            return

        item_ids = _seed_inventory(store)
        client_ids = _seed_clients(store)
        kit = KitService(store).create_kit(
            f"{SEED_TAG} - Kit Festa Infantil",
            520.0,
            [item_ids["bounce"], item_ids["ball_pool"], item_ids["lights"]],
        )
        rentals = _seed_rentals(store, rng, item_ids, client_ids, kit.id)

        inventory = InventoryService(store)
        inventory.report_maintenance(item_ids["lights"], "Fiação com mau contato.")
        inventory.register_maintenance(
            item_ids["lights"], "Troca de fiação.", cost=85.0
        )

        ledger = LedgerService(store)
        ledger.create_expense(
            date.today().replace(day=1).isoformat(), "Aluguel", "Aluguel do galpão", 1800.0
        )
        ledger.create_revenue(
            date.today().isoformat(), "Serviços", "Montagem avulsa", 250.0, "pix"
        )

        SettingsService(store).save(
            CompanySettings(
                company_name="Festa & Cia Locações",
                cnpj="12.345.678/0001-90",
                address="Avenida Paulista, 1000 - São Paulo/SP",
                payment_info=PaymentInfo(pix_key="financeiro@festaecia.example.com"),
                contract_terms="O locatário se responsabiliza pelos itens até a devolução.",
            )
        )
        print(f"Seed concluído: {len(item_ids)} itens, {len(client_ids)} clientes, {rentals} aluguéis.")
    finally:
        connection.close()


if __name__ == "__main__":
    main()
