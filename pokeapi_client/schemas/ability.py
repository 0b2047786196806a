from __future__ import annotations

from typing import List

from pydantic import Field, StrictBool, StrictInt, StrictStr

from .common import Name, NamedResource, PokeModel


class VerboseEffect(PokeModel):
    effect: StrictStr = ""
    short_effect: StrictStr = ""
    language: NamedResource = Field(default_factory=NamedResource)

class AbilityPokemon(PokeModel):
    is_hidden: StrictBool = False
    slot: StrictInt = 0
    pokemon: NamedResource = Field(default_factory=NamedResource)


class Ability(PokeModel):
    """GET /ability/{id or name}"""
    id: StrictInt = 0
    name: StrictStr = ""
    is_main_series: StrictBool = False
    generation: NamedResource = Field(default_factory=NamedResource)
    names: List[Name] = Field(default_factory=list)
    effect_entries: List[VerboseEffect] = Field(default_factory=list)
    pokemon: List[AbilityPokemon] = Field(default_factory=list)
