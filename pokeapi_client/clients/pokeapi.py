# pokeapi_client/clients/pokeapi.py
from __future__ import annotations

import logging
import random
import time
from typing import Callable, Optional, Type, Union
from urllib.parse import quote

import httpx

from ..core.config import (
    ABILITY,
    BERRY,
    DEFAULT_PAGE_LIMIT,
    POKEMON,
    ClientConfig,
    build_config,
)
from ..core.errors import DecodeError, RequestBuildError
from ..core.http import BackoffPolicy, HttpRetryingClient
from ..schemas.ability import Ability
from ..schemas.berry import Berry
from ..schemas.common import Listing, M, ResourceResult, Resources, Single, decode
from ..schemas.pokemon import Pokemon

Identifier = Union[int, str]


class PokeApiClient:
    """
    Typed wrapper over the PokeAPI REST surface (https://pokeapi.co/api/v2).

      - single:      GET /{resource}/{id or name}
      - collection:  GET /{resource}/?limit=&offset=

    Every call goes through HttpRetryingClient (200 or retry until the
    backoff budget is spent) and is decoded into a pydantic record.
    """

    # ------------ lifecycle ------------
    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        logger: Optional[logging.Logger] = None,
        transport: Optional[httpx.BaseTransport] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
        rng: Optional[random.Random] = None,
    ):
        self._config = config or build_config()
        self._log = logger or logging.getLogger("pokeapi_client.client")
        self._http = HttpRetryingClient(
            timeout=self._config.timeout,
            policy=BackoffPolicy(max_elapsed_time=self._config.max_elapsed_time),
            retry_client_errors=self._config.retry_client_errors,
            logger=logger,
            transport=transport,
            sleep=sleep,
            clock=clock,
            rng=rng,
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "PokeApiClient":
        return self

    def __exit__(self, *_exc) -> None:
        self.close()

    # ------------ url builders ------------
    @staticmethod
    def _segment(value: Identifier, what: str) -> str:
        text = str(value).strip()
        if not text:
            raise RequestBuildError(f"{what} must not be empty")
        return quote(text, safe="")

    def resource_url(self, resource: str, identifier: Identifier) -> str:
        """base/{resource}/{identifier}; ids and slugs alike, no client-side checks."""
        return f"{self._config.base_url}/{self._segment(resource, 'resource')}/{self._segment(identifier, 'identifier')}"

    def collection_url(self, resource: str, limit: int, offset: int) -> str:
        for name, value in (("limit", limit), ("offset", offset)):
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise RequestBuildError(f"{name} must be a non-negative integer, got {value!r}")
        base = f"{self._config.base_url}/{self._segment(resource, 'resource')}/"
        try:
            return str(httpx.URL(base, params={"limit": str(limit), "offset": str(offset)}))
        except httpx.InvalidURL as e:
            raise RequestBuildError(f"cannot build collection url for {resource!r}: {e}") from e

    # ------------ fetch + decode ------------
    def _fetch(self, url: str, model: Type[M]) -> M:
        outcome = self._http.get(url, timeout=self._config.timeout)
        try:
            return decode(outcome.body, model, url=url)
        except DecodeError:
            self._log.error("Failed to decode %s from %s", model.__name__, url)
            raise

    def _single_or_list(
        self, resource: str, model: Type[M], id_or_name: Identifier, limit: int, offset: int
    ) -> ResourceResult[M]:
        if str(id_or_name).strip():
            return Single(self._fetch(self.resource_url(resource, id_or_name), model))
        return Listing(self.get_resources(resource, limit, offset))

    # ------------ collections ------------
    def get_resources(self, name: str, limit: int, offset: int) -> Resources:
        """One page of any named collection, e.g. get_resources("contest-effect", 10, 10)."""
        result = self._fetch(self.collection_url(name, limit, offset), Resources)
        self._log.info("Resources received successfully: %s (limit=%d offset=%d)", name, limit, offset)
        return result

    # ------------ single records ------------
    def get_pokemon(self, id_or_name: Identifier) -> Pokemon:
        pokemon = self._fetch(self.resource_url(POKEMON, id_or_name), Pokemon)
        self._log.info("Pokemon %s received successfully", id_or_name)
        return pokemon

    def get_ability(self, id_or_name: Identifier) -> Ability:
        ability = self._fetch(self.resource_url(ABILITY, id_or_name), Ability)
        self._log.info("Ability %s received successfully", id_or_name)
        return ability

    def get_berry(self, id_or_name: Identifier) -> Berry:
        berry = self._fetch(self.resource_url(BERRY, id_or_name), Berry)
        self._log.info("Berry %s received successfully", id_or_name)
        return berry

    # ------------ single-or-list ------------
    def pokemon(
        self, id_or_name: Identifier = "", *, limit: int = DEFAULT_PAGE_LIMIT, offset: int = 0
    ) -> ResourceResult[Pokemon]:
        """
        Single(Pokemon) when an id/name is given, Listing(Resources) when it is empty.
        Check ``result.kind`` (or isinstance) before touching the payload.
        """
        return self._single_or_list(POKEMON, Pokemon, id_or_name, limit, offset)

    def ability(
        self, id_or_name: Identifier = "", *, limit: int = DEFAULT_PAGE_LIMIT, offset: int = 0
    ) -> ResourceResult[Ability]:
        return self._single_or_list(ABILITY, Ability, id_or_name, limit, offset)

    def berry(
        self, id_or_name: Identifier = "", *, limit: int = DEFAULT_PAGE_LIMIT, offset: int = 0
    ) -> ResourceResult[Berry]:
        return self._single_or_list(BERRY, Berry, id_or_name, limit, offset)
