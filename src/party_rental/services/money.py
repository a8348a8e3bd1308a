"""Monetary helpers shared by the services.

Amounts are kept as floats in reais, normalized to whole cents before they
are stored or compared.
"""

from __future__ import annotations

import math
from numbers import Real
from typing import Any

from party_rental.services.errors import ValidationError


def round_money(value: float) -> float:
    return round(float(value), 2) + 0.0


def require_amount(value: Any, message: str, *, allow_zero: bool = True) -> float:
    """Return ``value`` rounded to cents or raise :class:`ValidationError`.

    Booleans, non-numbers, NaN, infinities and negatives are rejected; zero
    only when ``allow_zero`` is false.
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValidationError(message)
    amount = float(value)
    if not math.isfinite(amount) or amount < 0:
        raise ValidationError(message)
    amount = round_money(amount)
    if amount == 0 and not allow_zero:
        raise ValidationError(message)
    return amount


def optional_amount(value: Any, message: str) -> float | None:
    if value is None:
        return None
    return require_amount(value, message)
