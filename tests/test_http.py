from __future__ import annotations

import random
from typing import List

import httpx
import pytest

from pokeapi_client.core.errors import (
    ApiConnectionError,
    DecodeError,
    TransportFailure,
    UnexpectedStatusError,
)
from pokeapi_client.core.http import BackoffPolicy, HttpRetryingClient

URL = "https://pokeapi.co/api/v2/pokemon/1"


class FakeClock:
    """Monotonic clock that only moves when the client sleeps."""

    def __init__(self) -> None:
        self.now = 0.0
        self.slept: List[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.slept.append(seconds)
        self.now += seconds


def _client(handler, clock: FakeClock, **kwargs) -> HttpRetryingClient:
    return HttpRetryingClient(
        timeout=5.0,
        transport=httpx.MockTransport(handler),
        sleep=clock.sleep,
        clock=clock,
        rng=random.Random(7),
        **kwargs,
    )


def test_first_200_returns_body() -> None:
    clock = FakeClock()

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        return httpx.Response(200, content=b'{"id":1}')

    outcome = _client(handler, clock).get(URL)
    assert outcome.status_code == 200
    assert outcome.body == b'{"id":1}'
    assert outcome.attempts == 1
    assert clock.slept == []


def test_retries_500s_until_200() -> None:
    clock = FakeClock()
    responses = [httpx.Response(500), httpx.Response(500), httpx.Response(500), httpx.Response(200, text="{}")]
    consumed = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        resp = responses[consumed["count"]]
        consumed["count"] += 1
        return resp

    outcome = _client(handler, clock).get(URL)
    assert outcome.status_code == 200
    assert outcome.attempts == consumed["count"] == 4
    assert len(clock.slept) == 3


def test_never_200_exhausts_budget() -> None:
    clock = FakeClock()
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        return httpx.Response(503, text="Service Unavailable")

    client = _client(handler, clock, policy=BackoffPolicy(max_elapsed_time=10.0))
    with pytest.raises(TransportFailure) as info:
        client.get(URL)

    err = info.value
    assert isinstance(err, UnexpectedStatusError)
    assert not isinstance(err, DecodeError)
    assert err.status_code == 503
    assert err.attempts == calls["count"] > 1
    assert sum(clock.slept) <= 10.0


def test_client_errors_retried_by_default() -> None:
    clock = FakeClock()
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        return httpx.Response(404, text="Not Found")

    with pytest.raises(UnexpectedStatusError) as info:
        _client(handler, clock).get(URL)
    assert info.value.status_code == 404
    assert calls["count"] > 1


def test_client_errors_fail_fast_when_disabled() -> None:
    clock = FakeClock()
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        return httpx.Response(404, text="Not Found")

    with pytest.raises(UnexpectedStatusError) as info:
        _client(handler, clock, retry_client_errors=False).get(URL)
    assert info.value.attempts == 1
    assert calls["count"] == 1
    assert clock.slept == []


def test_rate_limit_still_retried_when_client_errors_fail_fast() -> None:
    clock = FakeClock()
    responses = [httpx.Response(429), httpx.Response(200, text="{}")]

    def handler(request: httpx.Request) -> httpx.Response:
        return responses.pop(0)

    outcome = _client(handler, clock, retry_client_errors=False).get(URL)
    assert outcome.attempts == 2


def test_connection_errors_are_retried_then_surfaced() -> None:
    clock = FakeClock()
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ApiConnectionError) as info:
        _client(handler, clock).get(URL)
    assert info.value.attempts == calls["count"] > 1
    assert isinstance(info.value.__cause__, httpx.ConnectError)


def test_timeout_then_success() -> None:
    clock = FakeClock()
    state = {"first": True}

    def handler(request: httpx.Request) -> httpx.Response:
        if state["first"]:
            state["first"] = False
            raise httpx.ReadTimeout("timed out", request=request)
        return httpx.Response(200, text="{}")

    assert _client(handler, clock).get(URL).attempts == 2


def test_zero_budget_means_single_attempt() -> None:
    clock = FakeClock()
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        return httpx.Response(500)

    with pytest.raises(UnexpectedStatusError):
        _client(handler, clock, policy=BackoffPolicy(max_elapsed_time=0)).get(URL)
    assert calls["count"] == 1


def test_backoff_delay_grows_and_is_capped() -> None:
    policy = BackoffPolicy(initial_interval=1.0, multiplier=2.0, max_interval=4.0, randomization_factor=0.0)
    rng = random.Random(0)
    assert [policy.delay(n, rng) for n in range(1, 6)] == [1.0, 2.0, 4.0, 4.0, 4.0]


def test_backoff_delay_jitter_stays_in_range() -> None:
    policy = BackoffPolicy(initial_interval=1.0, randomization_factor=0.5)
    rng = random.Random(1)
    for _ in range(50):
        assert 0.5 <= policy.delay(1, rng) <= 1.5


def test_redirect_is_followed_to_final_200() -> None:
    clock = FakeClock()
    seen: List[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.path)
        if request.url.path == "/api/v2/pokemon/1":
            return httpx.Response(301, headers={"Location": "https://pokeapi.co/api/v2/pokemon/1/"})
        return httpx.Response(200, content=b'{"id":1}')

    outcome = _client(handler, clock).get(URL)
    assert outcome.status_code == 200
    assert outcome.attempts == 1
    assert seen == ["/api/v2/pokemon/1", "/api/v2/pokemon/1/"]
    assert clock.slept == []


def test_redirect_loop_is_a_connection_error() -> None:
    clock = FakeClock()

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(308, headers={"Location": URL})

    with pytest.raises(ApiConnectionError) as info:
        _client(handler, clock, policy=BackoffPolicy(max_elapsed_time=0)).get(URL)
    assert isinstance(info.value.__cause__, httpx.TooManyRedirects)


def test_bad_content_encoding_is_a_decode_error() -> None:
    clock = FakeClock()
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        return httpx.Response(200, headers={"Content-Encoding": "gzip"}, content=b"not gzip")

    with pytest.raises(DecodeError) as info:
        _client(handler, clock).get(URL)
    assert isinstance(info.value.__cause__, httpx.DecodingError)
    assert info.value.url == URL
    assert calls["count"] == 1
    assert clock.slept == []
