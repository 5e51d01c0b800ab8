"""Pokémon (varieties) and their cosmetic forms.

While a species is "Raichu", there is one ``pokemon`` for Kanto Raichu and
another for Alolan Raichu; each ``pokemon`` in turn has one or more purely
cosmetic ``pokemon-form`` resources.
"""

from pydantic import BaseModel, ConfigDict

from ..kinds import KINDS, ResourceKind
from .common import LocalizedName, Reference, Resource, VersionGameIndex


class PokemonAbility(BaseModel):
    is_hidden: bool
    slot: int
    ability: Reference

    model_config = ConfigDict(frozen=True)


class PokemonType(BaseModel):
    slot: int
    type: Reference

    model_config = ConfigDict(frozen=True)


class PokemonStat(BaseModel):
    """A base stat; ``effort`` is the EV yield for defeating the Pokémon."""

    base_stat: int
    effort: int
    stat: Reference

    model_config = ConfigDict(frozen=True)


class MoveLearnDetail(BaseModel):
    level_learned_at: int
    move_learn_method: Reference
    version_group: Reference

    model_config = ConfigDict(frozen=True)


class PokemonMove(BaseModel):
    move: Reference
    version_group_details: tuple[MoveLearnDetail, ...] = ()

    model_config = ConfigDict(frozen=True)


class HeldItemVersion(BaseModel):
    rarity: int
    version: Reference

    model_config = ConfigDict(frozen=True)


class HeldItem(BaseModel):
    item: Reference
    version_details: tuple[HeldItemVersion, ...] = ()

    model_config = ConfigDict(frozen=True)


class Sprites(BaseModel):
    """Sprite image URLs; any of them may be missing upstream.

    The nested ``other`` and ``versions`` trees are kept as extras.
    """

    front_default: str | None = None
    front_shiny: str | None = None
    front_female: str | None = None
    front_shiny_female: str | None = None
    back_default: str | None = None
    back_shiny: str | None = None
    back_female: str | None = None
    back_shiny_female: str | None = None

    model_config = ConfigDict(frozen=True, extra="allow")


@KINDS.register
class Pokemon(Resource):
    """A Pokémon variety.

    Attributes:
        species: Back-reference to the species this variety belongs to.
        is_default: Whether this is the species' default variety.
        height: Height in decimetres.
        weight: Weight in hectograms.
        forms: The cosmetic ``pokemon-form`` resources of this variety.
        location_area_encounters: URL of the encounter sub-listing.
    """

    kind = ResourceKind.POKEMON

    name: str
    species: Reference
    is_default: bool

    order: int | None = None
    height: int | None = None
    weight: int | None = None
    base_experience: int | None = None
    forms: tuple[Reference, ...] = ()
    abilities: tuple[PokemonAbility, ...] = ()
    types: tuple[PokemonType, ...] = ()
    stats: tuple[PokemonStat, ...] = ()
    moves: tuple[PokemonMove, ...] = ()
    held_items: tuple[HeldItem, ...] = ()
    game_indices: tuple[VersionGameIndex, ...] = ()
    sprites: Sprites = Sprites()
    location_area_encounters: str | None = None

    @property
    def default_form(self) -> Reference | None:
        return self.forms[0] if self.forms else None


class FormSprites(BaseModel):
    front_default: str | None = None
    front_shiny: str | None = None
    back_default: str | None = None
    back_shiny: str | None = None

    model_config = ConfigDict(frozen=True, extra="allow")


@KINDS.register
class PokemonForm(Resource):
    """A cosmetic form of a ``pokemon``; ``pokemon`` links back to it."""

    kind = ResourceKind.FORM

    name: str
    pokemon: Reference

    form_name: str = ""
    order: int | None = None
    form_order: int | None = None
    is_default: bool = False
    is_battle_only: bool = False
    is_mega: bool = False
    version_group: Reference | None = None
    types: tuple[PokemonType, ...] = ()
    sprites: FormSprites = FormSprites()
    names: tuple[LocalizedName, ...] = ()
    form_names: tuple[LocalizedName, ...] = ()
