# pokeapi_client/core/errors.py
from __future__ import annotations

from typing import Optional


class PokeApiError(RuntimeError):
    pass


class ConfigurationError(PokeApiError, ValueError):
    """Invalid client option (bad timeout, unknown option name, bad base url)."""


class RequestBuildError(PokeApiError):
    """URL could not be built or handed to httpx. Never retried."""


class TransportFailure(PokeApiError):
    """
    Common base for the connection/status kind of failure.

    Both subclasses are retried by the transport; whichever one is raised
    last is what the caller sees once the backoff budget runs out.
    """

    def __init__(self, message: str, *, url: str, attempts: int = 1):
        super().__init__(message)
        self.url = url
        self.attempts = attempts


class ApiConnectionError(TransportFailure):
    pass


class UnexpectedStatusError(TransportFailure):
    def __init__(self, url: str, status_code: int, body: str = "", *, attempts: int = 1):
        super().__init__(f"GET {url} -> {status_code}: {body}", url=url, attempts=attempts)
        self.status_code = status_code
        self.body = body


class DecodeError(PokeApiError):
    def __init__(self, message: str, *, target: str, url: Optional[str] = None):
        super().__init__(message)
        self.target = target
        self.url = url
