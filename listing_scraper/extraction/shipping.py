from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date, datetime, time

import dateparser

from listing_scraper.errors import DateParseFailure


# Shipping and delivery phrases as printed on the listing cards, e.g.
# "Free Delivery Tomorrow", "Delivery by 25 Oct 2024", "Delivers Wed 23rd Oct",
# "Order within 6 hours and have it Tuesday", "Available on 1 Nov 2024",
# "Free Shipping", "Unavailable for delivery".
SHIPPING_RE = re.compile(
    r"(?:(?:Free )?Deliver(?:y|ies|s)(?: from| by)?"
    r"|Order within \d hours and have it"
    r"|Available on"
    r"|Free Shipping\s?"
    r"|Unavailable for delivery\s?)"
    r"(?:\s(.+))?"
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShippingInfo:
    text: str = ""
    date: date | None = None


def parse_shipping_date(text: str, today: date) -> date:
    parsed = dateparser.parse(
        text,
        languages=["en"],
        settings={
            "RELATIVE_BASE": datetime.combine(today, time()),
            "PREFER_DATES_FROM": "future",
        },
    )
    if parsed is None:
        raise DateParseFailure(f"Unable to parse shipping date from {text!r}", details={"text": text})
    return parsed.date()


class ShippingExtractor:
    def __init__(
        self,
        today: date | None = None,
        date_parser: Callable[[str, date], date] = parse_shipping_date,
    ) -> None:
        self.today = today or date.today()
        self.date_parser = date_parser

    def extract(self, fragments: Iterable[str]) -> ShippingInfo:
        for fragment in fragments:
            match = SHIPPING_RE.search(fragment)
            if not match:
                continue

            trailing = (match.group(1) or "").strip()
            shipping_date = None
            if trailing:
                try:
                    shipping_date = self.date_parser(trailing, self.today)
                except DateParseFailure as exc:
                    logger.debug("Leaving shipping date unset: %s", exc)
            return ShippingInfo(text=match.group(0), date=shipping_date)

        return ShippingInfo()
