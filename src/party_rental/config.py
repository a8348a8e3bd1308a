"""Application configuration."""

from __future__ import annotations

from dataclasses import dataclass

from party_rental.version import __app_name__, __company__

APP_NAME = __app_name__
APP_DATA_DIRNAME = "PartyRental"
APP_HOME_ENV = "PARTY_RENTAL_HOME"
DB_FILENAME = "party_rental.db"
LOGS_DIRNAME = "logs"
LOG_FILENAME = "app.log"
LOG_MAX_BYTES = 1_000_000
LOG_BACKUP_COUNT = 3
CONFIG_FILENAME = "config.json"

SETTINGS_SINGLETON_ID = "company"
LOCAL_ID_PREFIX = "local_"

DEPOSIT_RATE = 0.5
PAYMENT_DUE_WINDOW_DAYS = 7
TREND_MONTHS = 6
POPULAR_ITEMS_LIMIT = 5
MAINTENANCE_CATEGORY = "Manutenção"
PUBLIC_BOOKING_NOTE = "Reserva online via catálogo público com sinal de 50%."

VIACEP_URL = "https://viacep.com.br/ws/{cep}/json/"
VIACEP_TIMEOUT_SECONDS = 10


@dataclass(frozen=True)
class AppConfig:
    """Static configuration values for PartyRental."""

    app_name: str = APP_NAME
    organization_name: str = __company__
    deposit_rate: float = DEPOSIT_RATE
    payment_due_window_days: int = PAYMENT_DUE_WINDOW_DAYS
    maintenance_category: str = MAINTENANCE_CATEGORY
