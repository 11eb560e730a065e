from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_CATALOG_BASE_URL = "https://pokeapi.co/api/v2"


@dataclass(frozen=True)
class Settings:
    catalog_base_url: str = DEFAULT_CATALOG_BASE_URL
    catalog_timeout: float = 10.0
    max_attempts: int = 3
    retry_delay: float = 1.0
    batch_threshold: int = 50
    batch_size: int = 50
    batch_delay: float = 0.1
    default_region: str | None = None


def _ms_env(name: str, default_ms: int) -> float:
    return int(os.getenv(name, str(default_ms))) / 1000.0


def load_settings() -> Settings:
    return Settings(
        catalog_base_url=os.getenv("CATALOG_BASE_URL", DEFAULT_CATALOG_BASE_URL).rstrip("/"),
        catalog_timeout=_ms_env("CATALOG_TIMEOUT_MS", 10000),
        max_attempts=int(os.getenv("FETCH_MAX_ATTEMPTS", "3")),
        retry_delay=_ms_env("FETCH_RETRY_DELAY_MS", 1000),
        batch_threshold=int(os.getenv("FETCH_BATCH_THRESHOLD", "50")),
        batch_size=int(os.getenv("FETCH_BATCH_SIZE", "50")),
        batch_delay=_ms_env("FETCH_BATCH_DELAY_MS", 100),
        default_region=os.getenv("DEFAULT_REGION", "").strip() or None,
    )
