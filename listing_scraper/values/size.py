from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from listing_scraper.errors import InvalidFormat, UnknownUnit


SIZE_RE = re.compile(r"(\d+(?:\.\d+)?)\s*([a-zA-Z]+)")


class SizeUnit(str, Enum):
    B = "B"
    KB = "KB"
    MB = "MB"
    GB = "GB"
    TB = "TB"
    PB = "PB"

    @property
    def exponent(self) -> int:
        return list(SizeUnit).index(self)

    @classmethod
    def from_token(cls, token: str) -> SizeUnit:
        unit = token.strip().upper()
        try:
            return cls(unit)
        except ValueError:
            valid = ", ".join(member.value for member in cls)
            raise UnknownUnit(f"Invalid unit: {unit}. Valid units are: {valid}", details={"unit": unit}) from None


@dataclass(frozen=True)
class ByteSize:
    """A storage capacity in bytes using decimal (1000-based) units."""

    bytes: float

    @classmethod
    def parse(cls, text: str) -> ByteSize:
        match = SIZE_RE.search(text)
        if not match:
            raise InvalidFormat(f"Invalid size string format: {text!r}")
        return cls.from_unit(float(match.group(1)), SizeUnit.from_token(match.group(2)))

    @classmethod
    def from_unit(cls, magnitude: float, unit: SizeUnit | str) -> ByteSize:
        if not isinstance(unit, SizeUnit):
            unit = SizeUnit.from_token(unit)
        return cls(bytes=float(magnitude) * (1000**unit.exponent))

    @property
    def kilobytes(self) -> float:
        return self.bytes / 1000

    @property
    def megabytes(self) -> float:
        return self.kilobytes / 1000

    @property
    def gigabytes(self) -> float:
        return self.megabytes / 1000

    @property
    def terabytes(self) -> float:
        return self.gigabytes / 1000

    @property
    def petabytes(self) -> float:
        return self.terabytes / 1000

    def __str__(self) -> str:
        return f"{self.megabytes:g} MB"
