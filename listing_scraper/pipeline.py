from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from listing_scraper.errors import ExtractionError
from listing_scraper.extraction.product import ProductRecordBuilder
from listing_scraper.extraction.selectors import DEFAULT_SELECTORS, ListingSelectors
from listing_scraper.extraction.shipping import ShippingExtractor
from listing_scraper.fetchers.document import ListingDocument
from listing_scraper.models import ProductSet
from listing_scraper.output import serialize_products


logger = logging.getLogger(__name__)


class DocumentFetcher(Protocol):
    def fetch(self, url: str) -> ListingDocument: ...


class OutputSink(Protocol):
    def write(self, payload: bytes) -> None: ...


@dataclass
class ScrapeRun:
    status: str = "running"
    pages_total: int = 0
    items_total: int = 0
    items_new: int = 0
    items_duplicate: int = 0
    items_failed: int = 0
    products: ProductSet = field(default_factory=ProductSet)


def page_url(base_url: str, page: int) -> str:
    return f"{base_url.rstrip('/')}/?page={page}"


class ListingPipeline:
    def __init__(
        self,
        fetcher: DocumentFetcher,
        sink: OutputSink,
        base_url: str,
        skip_invalid_products: bool = True,
        selectors: ListingSelectors = DEFAULT_SELECTORS,
        shipping_extractor_factory: Callable[[], ShippingExtractor] = ShippingExtractor,
    ) -> None:
        self.fetcher = fetcher
        self.sink = sink
        self.base_url = base_url
        self.skip_invalid_products = skip_invalid_products
        self.selectors = selectors
        self.shipping_extractor = shipping_extractor_factory()

    def run(self) -> ScrapeRun:
        run = ScrapeRun()

        first_page = self.fetcher.fetch(self.base_url)
        run.pages_total = len(first_page.select(self.selectors.pagination))
        if run.pages_total == 0:
            logger.warning("No pagination links found on %s; nothing to scrape", self.base_url)

        for page in range(1, run.pages_total + 1):
            url = page_url(self.base_url, page)
            logger.info("Scraping page %s/%s: %s", page, run.pages_total, url)
            self._scrape_page(self.fetcher.fetch(url), run)

        self.sink.write(serialize_products(run.products))
        run.status = "completed"
        return run

    def _scrape_page(self, document: ListingDocument, run: ScrapeRun) -> None:
        builder = ProductRecordBuilder(document, selectors=self.selectors, shipping_extractor=self.shipping_extractor)

        for index, product_node in enumerate(document.select(self.selectors.product), start=1):
            try:
                records = builder.build_all(product_node)
            except ExtractionError as exc:
                if not self.skip_invalid_products:
                    logger.error("Aborting run: product %s on %s failed extraction (%s)", index, document.url, exc)
                    raise
                run.items_failed += 1
                logger.warning("Skipping product %s on %s: %s", index, document.url, exc)
                continue

            for record in records:
                run.items_total += 1
                if run.products.add(record):
                    run.items_new += 1
                    logger.debug("Collected %s (%s, %s, %s)", record.title, record.colour, record.price, record.capacity)
                else:
                    run.items_duplicate += 1
