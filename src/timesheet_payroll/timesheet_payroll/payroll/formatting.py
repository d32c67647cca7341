from __future__ import annotations

from typing import Optional

from ..core.constants import CURRENCY_SYMBOLS, DEFAULT_CURRENCY, HOURS_DISPLAY_DECIMALS, MONEY_DECIMALS


def round_hours(value: Optional[float]) -> float:
    """Display rounding for hour figures (one decimal)."""
    return round(float(value or 0), HOURS_DISPLAY_DECIMALS)


def format_currency(value: Optional[float], currency: str = DEFAULT_CURRENCY) -> str:
    """``R$ 1.234,56`` for BRL, ``$1,234.56`` style for the others."""

    amount = round(float(value or 0), MONEY_DECIMALS)
    code = (currency or DEFAULT_CURRENCY).upper()
    symbol = CURRENCY_SYMBOLS.get(code, code)
    text = f"{abs(amount):,.{MONEY_DECIMALS}f}"
    sign = "-" if amount < 0 else ""
    if code == "BRL":
        text = text.replace(",", "_").replace(".", ",").replace("_", ".")
        return f"{sign}{symbol} {text}"
    return f"{sign}{symbol}{text}"
