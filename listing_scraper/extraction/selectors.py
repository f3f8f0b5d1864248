from __future__ import annotations

import re
from dataclasses import dataclass, field


@dataclass(frozen=True)
class ListingSelectors:
    """Where each field lives in the listing markup.

    Markup drift on the site should only ever need an edit here.
    """

    pagination: str = "#pages a"
    product: str = "#products .product"
    variant: str = "[data-colour]"
    colour_attribute: str = "data-colour"
    title: str = ".product-name"
    capacity: str = ".product-capacity"
    image: str = "img[src]"
    price_pattern: re.Pattern[str] = field(default_factory=lambda: re.compile(r"^\s*[£$€¥]\s*\d"))
    availability_marker: str = "Availability:"
    in_stock_prefix: str = "In Stock"


DEFAULT_SELECTORS = ListingSelectors()
