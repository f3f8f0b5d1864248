from __future__ import annotations

import argparse
import logging
import sys

from listing_scraper.config import ScraperSettings, get_settings
from listing_scraper.errors import InvalidConfiguration, ScraperError
from listing_scraper.fetchers.http import HttpDocumentFetcher
from listing_scraper.output import JsonFileSink
from listing_scraper.pipeline import ListingPipeline


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def run_once(settings: ScraperSettings, base_url: str, output_path: str, skip_invalid_products: bool) -> None:
    with HttpDocumentFetcher(
        timeout_seconds=settings.timeout_seconds,
        request_delay_seconds=settings.request_delay_seconds,
        max_fetch_retries=settings.max_fetch_retries,
        retry_backoff_seconds=settings.retry_backoff_seconds,
        user_agent=settings.user_agent,
    ) as fetcher:
        pipeline = ListingPipeline(
            fetcher=fetcher,
            sink=JsonFileSink(output_path),
            base_url=base_url,
            skip_invalid_products=skip_invalid_products,
        )
        run = pipeline.run()

    print(
        f"status={run.status} pages={run.pages_total} total={run.items_total} "
        f"new={run.items_new} duplicate={run.items_duplicate} failed={run.items_failed} output={output_path}"
    )


def _report_failure(exc: ScraperError) -> int:
    logger.error("Scrape failed stage=%s code=%s: %s", exc.stage, exc.code, exc.message)
    return 1


def main(argv: list[str] | None = None) -> int:
    try:
        settings = get_settings()
    except InvalidConfiguration as exc:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
        return _report_failure(exc)

    parser = argparse.ArgumentParser(description="Scrape a paginated product listing into JSON")
    parser.add_argument("--base-url", default=settings.base_url)
    parser.add_argument("--output", default=settings.output_path)
    parser.add_argument("--log-level", default=settings.log_level, choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument(
        "--abort-on-invalid-product",
        action="store_true",
        help="Stop the whole run when a product cannot be extracted instead of skipping it",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format=LOG_FORMAT)

    try:
        run_once(
            settings=settings,
            base_url=args.base_url,
            output_path=args.output,
            skip_invalid_products=settings.skip_invalid_products and not args.abort_on_invalid_product,
        )
    except ScraperError as exc:
        return _report_failure(exc)
    return 0


if __name__ == "__main__":
    sys.exit(main())
