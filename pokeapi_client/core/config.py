# pokeapi_client/core/config.py
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache
from typing import Any, Optional, Union

import httpx
from pydantic_settings import BaseSettings

from .errors import ConfigurationError

# ----- PokeAPI static metadata -----
DEFAULT_BASE_URL = "https://pokeapi.co/api/v2"
DEFAULT_TIMEOUT = 30.0            # seconds, per attempt
DEFAULT_MAX_ELAPSED_TIME = 10.0   # seconds, whole retry loop
DEFAULT_PAGE_LIMIT = 20           # the API's own default page size

# Resource names as they appear in the URL path
POKEMON = "pokemon"
ABILITY = "ability"
BERRY = "berry"

Duration = Union[int, float, timedelta]


# ----- Environment settings -----
class Settings(BaseSettings):
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    max_elapsed_time: float = DEFAULT_MAX_ELAPSED_TIME
    retry_client_errors: bool = True
    log_level: str = "INFO"

    class Config:
        env_prefix = "POKEAPI_"
        env_file = ".env"
        case_sensitive = False


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# ----- Per-client configuration -----
def _seconds(value: Any, name: str) -> float:
    if isinstance(value, timedelta):
        return value.total_seconds()
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{name} must be a number of seconds or a timedelta, got {value!r}")
    return float(value)


@dataclass(frozen=True)
class ClientConfig:
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    max_elapsed_time: float = DEFAULT_MAX_ELAPSED_TIME
    retry_client_errors: bool = True

    def __post_init__(self) -> None:
        timeout = _seconds(self.timeout, "timeout")
        if not 0 < timeout < math.inf:
            raise ConfigurationError(f"timeout must be a positive, finite number of seconds, got {timeout}")
        budget = _seconds(self.max_elapsed_time, "max_elapsed_time")
        if not 0 <= budget < math.inf:
            raise ConfigurationError(f"max_elapsed_time must be a finite, non-negative number of seconds, got {budget}")

        try:
            url = httpx.URL(self.base_url)
        except (httpx.InvalidURL, TypeError) as e:
            raise ConfigurationError(f"invalid base_url {self.base_url!r}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise ConfigurationError(f"base_url must be an absolute http(s) url, got {self.base_url!r}")

        # frozen: normalise through object.__setattr__
        object.__setattr__(self, "timeout", timeout)
        object.__setattr__(self, "max_elapsed_time", budget)
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))


# Names accepted by build_config(); everything else is a caller error.
OPTIONS = frozenset({"timeout"})


def build_config(settings: Optional[Settings] = None, **options: Any) -> ClientConfig:
    """
    Build a ClientConfig from the environment defaults plus named options.

    Only ``timeout`` is recognised (seconds or a timedelta); unset options keep
    their defaults, unknown ones raise ConfigurationError.
    """
    unknown = set(options) - OPTIONS
    if unknown:
        raise ConfigurationError(f"unknown client option(s): {', '.join(sorted(unknown))}")

    s = settings or get_settings()
    timeout = options.get("timeout", s.timeout)
    return ClientConfig(
        base_url=s.base_url,
        timeout=_seconds(timeout, "timeout"),
        max_elapsed_time=s.max_elapsed_time,
        retry_client_errors=s.retry_client_errors,
    )
