from __future__ import annotations

from typing import List

from pydantic import Field, StrictInt, StrictStr

from .common import NamedResource, PokeModel


class BerryFlavor(PokeModel):
    potency: StrictInt = 0
    flavor: NamedResource = Field(default_factory=NamedResource)


class Berry(PokeModel):
    """GET /berry/{id or name}"""
    id: StrictInt = 0
    name: StrictStr = ""
    growth_time: StrictInt = 0
    max_harvest: StrictInt = 0
    natural_gift_power: StrictInt = 0
    size: StrictInt = 0
    smoothness: StrictInt = 0
    soil_dryness: StrictInt = 0
    firmness: NamedResource = Field(default_factory=NamedResource)
    flavors: List[BerryFlavor] = Field(default_factory=list)
    item: NamedResource = Field(default_factory=NamedResource)
    natural_gift_type: NamedResource = Field(default_factory=NamedResource)
