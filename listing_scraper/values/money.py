from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from listing_scraper.errors import InvalidConfiguration, InvalidFormat, UnknownCurrency


PRICE_RE = re.compile(r"([^\d]+)(\d+(?:\.\d+)?)")


class CurrencySymbol(str, Enum):
    GBP = "£"
    USD = "$"
    EUR = "€"
    JPY = "¥"

    @classmethod
    def valid_symbols(cls) -> str:
        return ", ".join(member.value for member in cls)


@dataclass(frozen=True)
class MoneyAmount:
    """An exact amount of money held in the currency's smallest unit.

    ``MoneyAmount.parse("£4.40")`` stores 440 pence. Rounding to the minor unit
    is half away from zero on the decimal literal as written, so ``"£4.405"``
    becomes 441 and never depends on binary float representation.
    """

    minor_units: int
    currency: CurrencySymbol
    minor_units_per_major: int = 100

    def __post_init__(self) -> None:
        if self.minor_units_per_major <= 0:
            raise InvalidConfiguration("Minor units per major unit must be a positive integer.")

    @classmethod
    def parse(cls, text: str, minor_units_per_major: int = 100) -> MoneyAmount:
        if minor_units_per_major <= 0:
            raise InvalidConfiguration("Minor units per major unit must be a positive integer.")

        match = PRICE_RE.match(text.strip())
        if not match:
            raise InvalidFormat(f"Invalid price format: {text!r}")

        symbol = match.group(1).strip()
        try:
            currency = CurrencySymbol(symbol)
        except ValueError:
            raise UnknownCurrency(
                f"Invalid currency symbol: {symbol}. Valid symbols are: {CurrencySymbol.valid_symbols()}",
                details={"symbol": symbol},
            ) from None

        scaled = Decimal(match.group(2)) * minor_units_per_major
        minor_units = int(scaled.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
        return cls(minor_units=minor_units, currency=currency, minor_units_per_major=minor_units_per_major)

    @property
    def major_units(self) -> float:
        return self.minor_units / self.minor_units_per_major

    @property
    def symbol(self) -> str:
        return self.currency.value

    def __str__(self) -> str:
        return f"{self.symbol}{self.major_units:.2f}"
