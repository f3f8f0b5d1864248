from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from datetime import date
from pathlib import Path

from pydantic import BaseModel, Field

from listing_scraper.errors import WriteError
from listing_scraper.models import ProductRecord


logger = logging.getLogger(__name__)


class ProductOut(BaseModel):
    title: str
    price: float
    image_url: str = Field(serialization_alias="imageUrl")
    capacity_mb: int | float = Field(serialization_alias="capacityMB")
    colour: str
    availability_text: str = Field(serialization_alias="availabilityText")
    is_available: bool = Field(serialization_alias="isAvailable")
    shipping_text: str | None = Field(default=None, serialization_alias="shippingText")
    shipping_date: date | None = Field(default=None, serialization_alias="shippingDate")

    @classmethod
    def from_record(cls, record: ProductRecord) -> ProductOut:
        megabytes = record.capacity.megabytes
        return cls(
            title=record.title,
            price=record.price.major_units,
            image_url=record.image_url,
            capacity_mb=int(megabytes) if megabytes.is_integer() else megabytes,
            colour=record.colour,
            availability_text=record.availability_text,
            is_available=record.is_available,
            shipping_text=record.shipping_text or None,
            shipping_date=record.shipping_date,
        )


def serialize_products(records: Iterable[ProductRecord]) -> bytes:
    payload = [
        ProductOut.from_record(record).model_dump(mode="json", by_alias=True, exclude_none=True)
        for record in records
    ]
    return json.dumps(payload, ensure_ascii=False, indent=2).encode("utf-8")


class JsonFileSink:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def write(self, payload: bytes) -> None:
        try:
            self.path.write_bytes(payload)
        except OSError as exc:
            raise WriteError(f"Unable to write {self.path}: {exc}", details={"path": str(self.path)}) from exc
        logger.info("Wrote %s bytes to %s", len(payload), self.path)
