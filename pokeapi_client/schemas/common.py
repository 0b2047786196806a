from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, List, Literal, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, ValidationError, model_validator

from ..core.errors import DecodeError


class PokeModel(BaseModel):
    """
    Base for every PokeAPI record.

    Unknown keys are ignored and ``null`` values are dropped before
    validation, so a missing or null field takes its zero value. Scalars are
    strict: a JSON string where a number is expected is a decode error.
    """
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class NamedResource(PokeModel):
    name: StrictStr = ""
    url: StrictStr = ""


class Resources(PokeModel):
    """One page of a collection listing."""
    count: StrictInt = 0
    next: StrictStr = ""
    previous: StrictStr = ""
    results: List[NamedResource] = Field(default_factory=list)


class Name(PokeModel):
    name: StrictStr = ""
    language: NamedResource = Field(default_factory=NamedResource)


M = TypeVar("M", bound=PokeModel)


def decode(body: Union[bytes, str], model: Type[M], *, url: Optional[str] = None) -> M:
    try:
        return model.model_validate_json(body)
    except ValidationError as e:
        raise DecodeError(f"cannot decode {model.__name__}: {e}", target=model.__name__, url=url) from e


# ----- single-or-list results -----
@dataclass(frozen=True)
class Single(Generic[M]):
    record: M
    kind: Literal["single"] = field(default="single", init=False)


@dataclass(frozen=True)
class Listing:
    page: Resources
    kind: Literal["list"] = field(default="list", init=False)


ResourceResult = Union[Single[M], Listing]
