"""Locale-aware currency formatting for view models"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Tuple

CURRENCY_SYMBOLS: Dict[str, str] = {
    "EUR": "€",
    "USD": "$",
    "GBP": "£",
    "PLN": "zł",
    "CHF": "CHF",
}

# locale -> (decimal separator, group separator, pattern)
LOCALE_FORMATS: Dict[str, Tuple[str, str, str]] = {
    "nl-BE": (",", ".", "{symbol} {amount}"),
    "en-US": (".", ",", "{symbol}{amount}"),
    "en-GB": (".", ",", "{symbol}{amount}"),
    "de-DE": (",", ".", "{amount} {symbol}"),
    "fr-FR": (",", " ", "{amount} {symbol}"),
}


def _group_thousands(digits: str, separator: str) -> str:
    groups = []
    while len(digits) > 3:
        groups.insert(0, digits[-3:])
        digits = digits[:-3]
    groups.insert(0, digits)
    return separator.join(groups)


def format_currency(amount: Decimal | int | float, currency: str = "EUR", locale: str = "nl-BE") -> str:
    """
    Format an amount for display, rounded half-up to cents.

    Example:
        format_currency(Decimal("1234.5"))  -> "€ 1.234,50"
        format_currency(70.75, "USD", "en-US") -> "$70.75"
    """
    if locale not in LOCALE_FORMATS:
        raise ValueError(f"Unsupported locale: {locale}")
    decimal_sep, group_sep, pattern = LOCALE_FORMATS[locale]

    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    whole, fraction = f"{abs(value):.2f}".split(".")

    formatted = pattern.format(
        symbol=CURRENCY_SYMBOLS.get(currency, currency),
        amount=f"{_group_thousands(whole, group_sep)}{decimal_sep}{fraction}",
    )
    return f"{sign}{formatted}"
