"""Currency conversion and display helpers.

Rates are fixed, USD-based reference rates used only to present prices to
travellers; they are not market data.

>>> convert_currency(12400, "UZS", "USD")
1.0
>>> format_price(12000, "UZS")
"12,000 so'm"
>>> format_price(3.5, "EUR")
'€3.50'
"""

import math
from typing import Dict

CURRENCY_RATES: Dict[str, float] = {
    "USD": 1,
    "UZS": 12400,
    "RUB": 92,
    "EUR": 0.92,
    "GBP": 0.79,
    "KZT": 450,
    "TRY": 32,
}

CURRENCY_SYMBOLS: Dict[str, str] = {
    "USD": "$",
    "UZS": "so'm",
    "RUB": "₽",
    "EUR": "€",
    "GBP": "£",
    "KZT": "₸",
    "TRY": "₺",
}

# Currencies shown as whole amounts with a trailing symbol
WHOLE_UNIT_CURRENCIES = ("UZS", "KZT")


def convert_currency(amount: float, from_currency: str, to_currency: str) -> float:
    """Convert ``amount`` between currencies via USD.

    Unknown currency codes are treated as rate 1.
    """
    in_usd = amount / (CURRENCY_RATES.get(from_currency) or 1)
    return in_usd * (CURRENCY_RATES.get(to_currency) or 1)


def format_price(amount: float, currency: str) -> str:
    symbol = CURRENCY_SYMBOLS.get(currency, currency)
    if currency in WHOLE_UNIT_CURRENCIES:
        return f"{math.floor(amount + 0.5):,} {symbol}"
    return f"{symbol}{amount:.2f}"
