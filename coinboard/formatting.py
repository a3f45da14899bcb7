import math
from typing import Optional

CURRENCY_SYMBOLS = {
    'USD': '$',
    'EUR': '€',
    'GBP': '£',
    'JPY': '¥',
}


def _is_missing(value: Optional[float]) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def format_currency(
    value: Optional[float],
    digits: int = 2,
    currency: str = 'USD',
    show_symbol: bool = True
) -> str:
    """
    Format a number with thousands separators and fixed fraction digits.

    Missing values (None or NaN) render as `$0.00`, or `0.00` without symbol.
    Currencies without a known symbol are prefixed by their code.
    """

    if _is_missing(value):
        return '$0.00' if show_symbol else '0.00'

    amount = f"{abs(value):,.{digits}f}"
    sign = '-' if value < 0 and float(amount.replace(',', '')) != 0 else ''
    if not show_symbol:
        return f"{sign}{amount}"

    code = (currency or 'USD').upper()
    symbol = CURRENCY_SYMBOLS.get(code, f"{code} ")
    return f"{sign}{symbol}{amount}"


def format_percentage(value: Optional[float], digits: int = 2) -> str:
    if _is_missing(value):
        value = 0.0
    return f"{value:.{digits}f}%"
