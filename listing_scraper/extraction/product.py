from __future__ import annotations

import logging

from bs4 import Tag

from listing_scraper.extraction.selectors import DEFAULT_SELECTORS, ListingSelectors
from listing_scraper.extraction.shipping import ShippingExtractor
from listing_scraper.fetchers.document import ListingDocument
from listing_scraper.models import ProductRecord
from listing_scraper.values.money import MoneyAmount
from listing_scraper.values.size import ByteSize


NO_TITLE = "No title found"
NO_PRICE = "No price found"
NO_CAPACITY = "No capacity found"

logger = logging.getLogger(__name__)


class ProductRecordBuilder:
    """Turns one product card on a listing page into records, one per colour variant.

    Price and capacity parse failures are raised to the caller; a missing
    element falls back to a placeholder text that fails parsing the same way.
    """

    def __init__(
        self,
        document: ListingDocument,
        selectors: ListingSelectors = DEFAULT_SELECTORS,
        shipping_extractor: ShippingExtractor | None = None,
    ) -> None:
        self.document = document
        self.selectors = selectors
        self.shipping_extractor = shipping_extractor or ShippingExtractor()

    def build_all(self, product_node: Tag) -> list[ProductRecord]:
        return [self.build(product_node, variant) for variant in self.document.select(self.selectors.variant, product_node)]

    def build(self, product_node: Tag, variant_node: Tag) -> ProductRecord:
        availability_text = self._extract_availability_text(product_node)
        shipping = self.shipping_extractor.extract(self.document.strings(product_node))
        colour = self.document.attr(variant_node, self.selectors.colour_attribute, default="") or ""

        return ProductRecord(
            title=self.document.text(product_node, self.selectors.title, default=NO_TITLE),
            price=MoneyAmount.parse(self._extract_price_text(product_node)),
            image_url=self._extract_image_url(product_node),
            capacity=ByteSize.parse(self.document.text(product_node, self.selectors.capacity, default=NO_CAPACITY)),
            colour=colour.strip().lower(),
            availability_text=availability_text,
            is_available=availability_text.startswith(self.selectors.in_stock_prefix),
            shipping_text=shipping.text,
            shipping_date=shipping.date,
        )

    def _extract_price_text(self, product_node: Tag) -> str:
        return self.document.find_string(product_node, self.selectors.price_pattern) or NO_PRICE

    def _extract_image_url(self, product_node: Tag) -> str:
        image = self.document.select_one(self.selectors.image, product_node)
        if image is None:
            return ""
        src = self.document.attr(image, "src", default="") or ""
        return self.document.resolve_url(src) if src else ""

    def _extract_availability_text(self, product_node: Tag) -> str:
        marker = self.selectors.availability_marker
        text = self.document.find_string_containing(product_node, marker)
        if text is None:
            logger.debug("No availability text found on %s", self.document.url)
            return ""
        return text.split(marker, 1)[1].strip()
