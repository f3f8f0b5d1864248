from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import date

from listing_scraper.values.money import MoneyAmount
from listing_scraper.values.size import ByteSize


@dataclass(frozen=True)
class ProductRecord:
    title: str
    price: MoneyAmount
    image_url: str
    capacity: ByteSize
    colour: str
    availability_text: str
    is_available: bool
    shipping_text: str = ""
    shipping_date: date | None = None


class ProductSet:
    """Insertion-ordered set of records; two records are the same member when every field is equal."""

    def __init__(self, records: Iterable[ProductRecord] = ()) -> None:
        self._records: dict[ProductRecord, None] = {}
        for record in records:
            self.add(record)

    def add(self, record: ProductRecord) -> bool:
        if record in self._records:
            return False
        self._records[record] = None
        return True

    def __contains__(self, record: object) -> bool:
        return record in self._records

    def __iter__(self) -> Iterator[ProductRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def to_list(self) -> list[ProductRecord]:
        return list(self._records)
