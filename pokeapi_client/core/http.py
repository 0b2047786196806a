from __future__ import annotations
import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, Optional

import httpx

from .config import DEFAULT_MAX_ELAPSED_TIME, DEFAULT_TIMEOUT
from .errors import (
    ApiConnectionError,
    DecodeError,
    RequestBuildError,
    TransportFailure,
    UnexpectedStatusError,
)

# 4xx statuses that still deserve another try when client errors fail fast
RETRYABLE_CLIENT_STATUSES = (408, 429)

_BODY_EXCERPT = 200


@dataclass(frozen=True)
class BackoffPolicy:
    """Exponential backoff with jitter, bounded by total elapsed time."""
    initial_interval: float = 0.5
    multiplier: float = 1.5
    max_interval: float = 60.0
    randomization_factor: float = 0.5
    max_elapsed_time: float = DEFAULT_MAX_ELAPSED_TIME

    def delay(self, attempt: int, rng: random.Random) -> float:
        """Wait before the next try, after `attempt` failures (1-based)."""
        interval = min(self.initial_interval * (self.multiplier ** (attempt - 1)), self.max_interval)
        spread = interval * self.randomization_factor
        return rng.uniform(interval - spread, interval + spread)


@dataclass(frozen=True)
class RequestOutcome:
    status_code: int
    body: bytes
    attempts: int = 1


class HttpRetryingClient:
    """httpx client that retries a GET until it sees a 200 or the backoff budget runs out."""
    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        policy: Optional[BackoffPolicy] = None,
        retry_client_errors: bool = True,
        logger: Optional[logging.Logger] = None,
        transport: Optional[httpx.BaseTransport] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
        rng: Optional[random.Random] = None,
    ):
        self._timeout = timeout
        self._policy = policy or BackoffPolicy()
        self._retry_client_errors = retry_client_errors
        self._log = logger or logging.getLogger("pokeapi_client.http")
        self._sleep = sleep
        self._clock = clock
        self._rng = rng or random.Random()
        self._http = httpx.Client(
            timeout=timeout,
            headers={"Accept": "application/json"},
            follow_redirects=True,
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "HttpRetryingClient":
        return self

    def __exit__(self, *_exc) -> None:
        self.close()

    # ------------ single attempt ------------
    def _attempt(self, url: str, timeout: float) -> httpx.Response:
        self._log.info("Sending request to server: GET %s", url)
        try:
            resp = self._http.get(url, timeout=timeout)
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
            self._log.error("Failed to create request for %s: %s", url, e)
            raise RequestBuildError(f"cannot request {url!r}: {e}") from e
        except httpx.DecodingError as e:
            self._log.error("Failed to read response body from %s: %s", url, e)
            raise DecodeError(f"cannot read body of {url}: {e}", target="response body", url=url) from e
        except httpx.TransportError as e:
            self._log.warning("Failed to send request to %s: %s", url, e)
            raise ApiConnectionError(f"GET {url} failed: {e}", url=url) from e
        except httpx.RequestError as e:
            # redirect loops and other request-level failures
            self._log.warning("Request to %s failed: %s", url, e)
            raise ApiConnectionError(f"GET {url} failed: {e}", url=url) from e

        self._log.info("Server returned status code %d for %s", resp.status_code, url)
        if resp.status_code != httpx.codes.OK:
            raise UnexpectedStatusError(url, resp.status_code, resp.text[:_BODY_EXCERPT])
        return resp

    def _retryable(self, exc: TransportFailure) -> bool:
        if self._retry_client_errors or not isinstance(exc, UnexpectedStatusError):
            return True
        return not (400 <= exc.status_code < 500) or exc.status_code in RETRYABLE_CLIENT_STATUSES

    # ------------ retrying GET ------------
    def get(self, url: str, *, timeout: Optional[float] = None) -> RequestOutcome:
        per_attempt = self._timeout if timeout is None else timeout
        started = self._clock()
        attempt = 0
        while True:
            attempt += 1
            try:
                resp = self._attempt(url, per_attempt)
                return RequestOutcome(status_code=resp.status_code, body=resp.content, attempts=attempt)
            except TransportFailure as e:
                e.attempts = attempt
                if not self._retryable(e):
                    self._log.error("Giving up on %s: %s", url, e)
                    raise
                wait = self._policy.delay(attempt, self._rng)
                # an attempt already in flight is never cut short, so the
                # budget can be overrun by at most one attempt's duration
                if self._clock() - started + wait > self._policy.max_elapsed_time:
                    self._log.error("Failed to connect to server after %d attempt(s): %s", attempt, e)
                    raise
                self._log.info("Retrying %s in %.2fs (attempt %d)", url, wait, attempt + 1)
                self._sleep(wait)
