"""Currency conversion and symbol lookup"""

from typing import Dict

from payplus_roi.config import settings
from payplus_roi.domain.exceptions import UnknownCurrency
from payplus_roi.utils.numeric import round_money


def conversion_factor(from_currency: str, to_currency: str, rates: Dict[str, float]) -> float:
    """
    Factor that turns an amount in `from_currency` into `to_currency`.

    Rates are units of each currency per 1 USD, so the factor is rate(to) / rate(from).
    """
    for code in (from_currency, to_currency):
        if code not in rates:
            raise UnknownCurrency(f"No exchange rate configured for {code!r}")
    return rates[to_currency] / rates[from_currency]


def convert(amount: float, from_currency: str, to_currency: str, rates: Dict[str, float] | None = None) -> float:
    """
    Convert a monetary amount and round it to cents (half away from zero).

    Converting to the same currency returns the amount untouched.
    """
    if from_currency == to_currency:
        return amount
    factor = conversion_factor(from_currency, to_currency, rates if rates is not None else settings.exchange_rates)
    return round_money(amount * factor)


def get_symbol(currency: str, symbols: Dict[str, str] | None = None) -> str:
    """Return the display symbol for a currency code"""
    table = symbols if symbols is not None else settings.currency_symbols
    try:
        return table[currency]
    except KeyError:
        raise UnknownCurrency(f"No symbol configured for {currency!r}") from None
