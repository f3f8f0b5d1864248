from __future__ import annotations

from typing import Any


class ScraperError(Exception):
    code: str = "scraper_error"
    stage: str = "scrape"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ExtractionError(ScraperError, ValueError):
    code = "extraction_error"
    stage = "extract"


class InvalidFormat(ExtractionError):
    code = "invalid_format"


class UnknownCurrency(ExtractionError):
    code = "unknown_currency"


class UnknownUnit(ExtractionError):
    code = "unknown_unit"


class InvalidConfiguration(ScraperError, ValueError):
    code = "invalid_configuration"
    stage = "config"


class DateParseFailure(ScraperError, ValueError):
    code = "date_parse_failure"
    stage = "extract"


class FetchError(ScraperError):
    code = "fetch_error"
    stage = "fetch"

    def __init__(self, message: str, details: dict[str, Any] | None = None, retryable: bool = False) -> None:
        super().__init__(message, details=details)
        self.retryable = retryable


class WriteError(ScraperError):
    code = "write_error"
    stage = "write"
