"""Remote catalog source configuration."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_float, env_int, env_str
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_SOLUTIONS_URL = (
    "https://www.opentext.com/products-and-solutions/partners-and-alliances/"
    "partner-solutions-catalog"
)
DEFAULT_PARTNERS_URL = "https://www.opentext.com/partners/partner-directory"


@dataclass(frozen=True, slots=True)
class CatalogSourceConfig:
    solutions_url: str
    partners_url: str
    resilience: ResilienceConfig


def get_catalog_config() -> CatalogSourceConfig:
    solutions_url = env_str("PARTNERCATALOG_SOLUTIONS_URL", DEFAULT_SOLUTIONS_URL)
    partners_url = env_str("PARTNERCATALOG_PARTNERS_URL", DEFAULT_PARTNERS_URL)
    requests_per_second = env_float("PARTNERCATALOG_REQUESTS_PER_SECOND", 5.0, minimum=0.1)
    timeout_seconds = env_float("PARTNERCATALOG_TIMEOUT_SECONDS", 15.0, minimum=1.0)
    # the collectors own page retries; transport retries are opt-in
    transport_retries = env_int("PARTNERCATALOG_TRANSPORT_RETRIES", 0, minimum=0)

    resilience = ResilienceConfig(
        name="partnercatalog",
        timeout_seconds=timeout_seconds,
        ratelimit=RateLimit(max_calls=1, per_seconds=1.0 / requests_per_second),
        retry=RetryPolicy(total=transport_retries),
    )
    return CatalogSourceConfig(
        solutions_url=solutions_url,
        partners_url=partners_url,
        resilience=resilience,
    )
