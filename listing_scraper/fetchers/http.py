from __future__ import annotations

import logging
import time

import httpx

from listing_scraper.errors import FetchError
from listing_scraper.fetchers.document import ListingDocument


RETRYABLE_HTTP_STATUSES = {408, 425, 429, 500, 502, 503, 504}
DEFAULT_USER_AGENT = "ListingScraper/1.0 (+https://github.com/listing-scraper; product-listing-extraction)"

logger = logging.getLogger(__name__)


class HttpDocumentFetcher:
    def __init__(
        self,
        timeout_seconds: float = 15.0,
        request_delay_seconds: float = 0.0,
        max_fetch_retries: int = 2,
        retry_backoff_seconds: float = 0.6,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self.request_delay_seconds = max(0.0, request_delay_seconds)
        self.max_fetch_retries = max(0, max_fetch_retries)
        self.retry_backoff_seconds = max(0.0, retry_backoff_seconds)
        self._last_request_at: float | None = None
        self.client = httpx.Client(
            timeout=timeout_seconds,
            headers={"User-Agent": user_agent},
            follow_redirects=True,
        )

    def __enter__(self) -> HttpDocumentFetcher:
        return self

    def __exit__(self, *_exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.client.close()

    def fetch(self, url: str) -> ListingDocument:
        retries = 0
        while True:
            try:
                response = self._get(url)
            except FetchError as exc:
                if not exc.retryable or retries >= self.max_fetch_retries:
                    raise
                backoff = self.retry_backoff_seconds * (2**retries)
                retries += 1
                logger.debug("Retry %s/%s for %s in %.1fs after %s", retries, self.max_fetch_retries, url, backoff, exc)
                if backoff > 0:
                    time.sleep(backoff)
                continue
            return ListingDocument.from_html(str(response.url), response.text)

    def _get(self, url: str) -> httpx.Response:
        self._wait_for_request_slot()
        try:
            response = self.client.get(url)
        except (httpx.TimeoutException, httpx.NetworkError) as exc:
            raise FetchError(f"Unable to fetch {url}: {exc}", details={"url": url}, retryable=True) from exc
        except httpx.HTTPError as exc:
            raise FetchError(f"Unable to fetch {url}: {exc}", details={"url": url}) from exc
        finally:
            self._last_request_at = time.monotonic()

        if not response.is_success:
            status = response.status_code
            raise FetchError(
                f"HTTP {status} fetching {url}",
                details={"url": url, "status": status},
                retryable=status in RETRYABLE_HTTP_STATUSES,
            )
        return response

    def _wait_for_request_slot(self) -> None:
        if self.request_delay_seconds <= 0 or self._last_request_at is None:
            return
        remaining = self.request_delay_seconds - (time.monotonic() - self._last_request_at)
        if remaining > 0:
            time.sleep(remaining)
