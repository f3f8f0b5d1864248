from functools import lru_cache

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from listing_scraper.errors import InvalidConfiguration
from listing_scraper.fetchers.http import DEFAULT_USER_AGENT


class ScraperSettings(BaseSettings):
    base_url: str = "https://www.magpiehq.com/developer-challenge/smartphones"
    output_path: str = "output.json"
    timeout_seconds: float = 15.0
    max_fetch_retries: int = 2
    retry_backoff_seconds: float = 0.6
    request_delay_seconds: float = 0.0
    user_agent: str = DEFAULT_USER_AGENT
    skip_invalid_products: bool = True
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_prefix="LISTING_SCRAPER_")


@lru_cache
def get_settings() -> ScraperSettings:
    try:
        return ScraperSettings()
    except ValidationError as exc:
        fields = sorted({".".join(str(part) for part in error["loc"]) for error in exc.errors()})
        raise InvalidConfiguration(f"Invalid settings: {', '.join(fields)}") from exc
