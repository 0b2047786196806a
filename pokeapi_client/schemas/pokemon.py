from __future__ import annotations

from typing import List

from pydantic import Field, StrictBool, StrictInt, StrictStr

from .common import NamedResource, PokeModel


class PokemonAbility(PokeModel):
    ability: NamedResource = Field(default_factory=NamedResource)
    is_hidden: StrictBool = False
    slot: StrictInt = 0

class Cries(PokeModel):
    latest: StrictStr = ""
    legacy: StrictStr = ""

class GameIndex(PokeModel):
    game_index: StrictInt = 0
    version: NamedResource = Field(default_factory=NamedResource)

class VersionDetail(PokeModel):
    rarity: StrictInt = 0
    version: NamedResource = Field(default_factory=NamedResource)

class HeldItem(PokeModel):
    item: NamedResource = Field(default_factory=NamedResource)
    version_details: List[VersionDetail] = Field(default_factory=list)

class VersionGroupDetail(PokeModel):
    level_learned_at: StrictInt = 0
    move_learn_method: NamedResource = Field(default_factory=NamedResource)
    version_group: NamedResource = Field(default_factory=NamedResource)

class PokemonMove(PokeModel):
    move: NamedResource = Field(default_factory=NamedResource)
    version_group_details: List[VersionGroupDetail] = Field(default_factory=list)


# ----- sprites -----
class DreamWorld(PokeModel):
    front_default: StrictStr = ""
    front_female: StrictStr = ""

class Home(PokeModel):
    front_default: StrictStr = ""
    front_female: StrictStr = ""
    front_shiny: StrictStr = ""
    front_shiny_female: StrictStr = ""

class OfficialArtwork(PokeModel):
    front_default: StrictStr = ""
    front_shiny: StrictStr = ""

class Showdown(PokeModel):
    back_default: StrictStr = ""
    back_female: StrictStr = ""
    back_shiny: StrictStr = ""
    back_shiny_female: StrictStr = ""
    front_default: StrictStr = ""
    front_female: StrictStr = ""
    front_shiny: StrictStr = ""
    front_shiny_female: StrictStr = ""

class OtherSprites(PokeModel):
    dream_world: DreamWorld = Field(default_factory=DreamWorld)
    home: Home = Field(default_factory=Home)
    official_artwork: OfficialArtwork = Field(default_factory=OfficialArtwork, alias="official-artwork")
    showdown: Showdown = Field(default_factory=Showdown)

class Sprites(PokeModel):
    back_default: StrictStr = ""
    back_female: StrictStr = ""
    back_shiny: StrictStr = ""
    back_shiny_female: StrictStr = ""
    front_default: StrictStr = ""
    front_female: StrictStr = ""
    front_shiny: StrictStr = ""
    front_shiny_female: StrictStr = ""
    other: OtherSprites = Field(default_factory=OtherSprites)


class Stat(PokeModel):
    base_stat: StrictInt = 0
    effort: StrictInt = 0
    stat: NamedResource = Field(default_factory=NamedResource)

class PokemonType(PokeModel):
    slot: StrictInt = 0
    type: NamedResource = Field(default_factory=NamedResource)


class Pokemon(PokeModel):
    """GET /pokemon/{id or name}"""
    id: StrictInt = 0
    name: StrictStr = ""
    base_experience: StrictInt = 0
    height: StrictInt = 0
    weight: StrictInt = 0
    is_default: StrictBool = False
    order: StrictInt = 0
    abilities: List[PokemonAbility] = Field(default_factory=list)
    cries: Cries = Field(default_factory=Cries)
    forms: List[NamedResource] = Field(default_factory=list)
    game_indices: List[GameIndex] = Field(default_factory=list)
    held_items: List[HeldItem] = Field(default_factory=list)
    moves: List[PokemonMove] = Field(default_factory=list)
    species: NamedResource = Field(default_factory=NamedResource)
    sprites: Sprites = Field(default_factory=Sprites)
    stats: List[Stat] = Field(default_factory=list)
    types: List[PokemonType] = Field(default_factory=list)
