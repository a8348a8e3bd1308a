"""Display formatting helpers (pt-BR)."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from party_rental.domain.models import Address

MONTH_ABBREVIATIONS = (
    "JAN",
    "FEV",
    "MAR",
    "ABR",
    "MAI",
    "JUN",
    "JUL",
    "AGO",
    "SET",
    "OUT",
    "NOV",
    "DEZ",
)


def format_currency(value: float) -> str:
    formatted = f"{abs(value):,.2f}"
    text = f"R$ {formatted.replace(',', 'X').replace('.', ',').replace('X', '.')}"
    return f"-{text}" if value < 0 else text


def format_date(value: str | date | None) -> str:
    if not value:
        return "—"
    if isinstance(value, date):
        return value.strftime("%d/%m/%Y")
    try:
        return datetime.strptime(value, "%Y-%m-%d").strftime("%d/%m/%Y")
    except ValueError:
        return value


def month_label(month: int) -> str:
    """Short uppercase pt-BR label for a month number (1-12)."""
    return MONTH_ABBREVIATIONS[month - 1]


def format_address(address: Address) -> str:
    """Single-line address, skipping blank parts."""
    street = ", ".join(part for part in (address.street, address.number) if part)
    if address.complement:
        street = f"{street} - {address.complement}" if street else address.complement
    city = "/".join(part for part in (address.city, address.state) if part)
    parts = [street, address.neighborhood, city, address.cep]
    return ", ".join(part for part in parts if part)
