"""Shared JSON configuration storage."""

from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path
from typing import Any

from party_rental.config import AppConfig
from party_rental.logging_config import get_logger


def load_config_data(config_path: Path) -> dict[str, Any]:
    """Load configuration JSON data from disk."""
    if not config_path.exists():
        return {}
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        get_logger(__name__).warning("Configuração ilegível em %s", config_path)
        return {}
    if isinstance(data, dict):
        return data
    return {}


def save_config_data(config_path: Path, data: dict[str, Any]) -> None:
    """Persist configuration JSON data to disk."""
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(
        json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8"
    )


def load_app_config(config_path: Path) -> AppConfig:
    """Read the ``business`` section of config.json over the defaults."""
    defaults = AppConfig()
    section = load_config_data(config_path).get("business")
    if not isinstance(section, dict):
        return defaults
    try:
        deposit_rate = float(section.get("deposit_rate", defaults.deposit_rate))
        window_days = int(
            section.get("payment_due_window_days", defaults.payment_due_window_days)
        )
    except (TypeError, ValueError):
        get_logger(__name__).warning("Seção 'business' inválida em %s", config_path)
        return defaults
    if not 0 < deposit_rate <= 1 or window_days < 0:
        get_logger(__name__).warning("Valores fora do intervalo em %s", config_path)
        return defaults
    return replace(
        defaults, deposit_rate=deposit_rate, payment_due_window_days=window_days
    )


def save_app_config(config_path: Path, config: AppConfig) -> None:
    data = load_config_data(config_path)
    data["business"] = {
        "deposit_rate": config.deposit_rate,
        "payment_due_window_days": config.payment_due_window_days,
    }
    save_config_data(config_path, data)
