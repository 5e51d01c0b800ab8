"""Pokémon species and the Pokédex groupings that hang off them.

A species ("Pikachu") is the root of most graph walks: it links to its
varieties (``pokemon`` resources, one per form such as Alolan Raichu), its
evolution chain, and the colour/shape/habitat/egg-group/growth-rate buckets.
Reference: https://pokeapi.co/docs/v2#pokemon-species
"""

from pydantic import BaseModel, ConfigDict

from ..kinds import KINDS, ResourceKind
from .common import (
    Description,
    FlavorText,
    Genus,
    LanguageTagged,
    LocalizedName,
    Reference,
    Resource,
)


class Variety(BaseModel):
    """One ``pokemon`` belonging to a species."""

    is_default: bool
    pokemon: Reference

    model_config = ConfigDict(frozen=True)


class PokedexNumber(BaseModel):
    entry_number: int
    pokedex: Reference

    model_config = ConfigDict(frozen=True)


class PalParkEncounter(BaseModel):
    base_score: int
    rate: int
    area: Reference

    model_config = ConfigDict(frozen=True)


@KINDS.register
class Species(Resource):
    """A Pokémon species.

    Attributes:
        order: Sort order; evolution families are grouped and sorted by stage.
        generation: The generation the species was introduced in.
        varieties: The ``pokemon`` resources of this species; exactly one is
            the default.
        gender_rate: Chance of being female in eighths, -1 for genderless.
        evolves_from_species: The pre-evolution, if any.
        evolution_chain: The evolution chain (a URL-only reference).
    """

    kind = ResourceKind.SPECIES

    name: str
    order: int
    generation: Reference
    varieties: tuple[Variety, ...]

    names: tuple[LocalizedName, ...] = ()
    gender_rate: int | None = None
    capture_rate: int | None = None
    base_happiness: int | None = None
    hatch_counter: int | None = None
    is_baby: bool = False
    is_legendary: bool = False
    is_mythical: bool = False
    has_gender_differences: bool = False
    forms_switchable: bool = False
    growth_rate: Reference | None = None
    egg_groups: tuple[Reference, ...] = ()
    color: Reference | None = None
    shape: Reference | None = None
    habitat: Reference | None = None
    evolves_from_species: Reference | None = None
    evolution_chain: Reference | None = None
    pokedex_numbers: tuple[PokedexNumber, ...] = ()
    flavor_text_entries: tuple[FlavorText, ...] = ()
    genera: tuple[Genus, ...] = ()
    form_descriptions: tuple[Description, ...] = ()
    pal_park_encounters: tuple[PalParkEncounter, ...] = ()

    @property
    def default_variety(self) -> Reference | None:
        """Reference to the default ``pokemon`` (form) of this species."""
        for variety in self.varieties:
            if variety.is_default:
                return variety.pokemon
        return self.varieties[0].pokemon if self.varieties else None


@KINDS.register
class EggGroup(Resource):
    kind = ResourceKind.EGG_GROUP

    name: str
    names: tuple[LocalizedName, ...] = ()
    pokemon_species: tuple[Reference, ...] = ()


class GrowthRateLevel(BaseModel):
    """Experience needed to reach ``level``."""

    level: int
    experience: int

    model_config = ConfigDict(frozen=True)


@KINDS.register
class GrowthRate(Resource):
    """How fast a species levels up; ``formula`` is LaTeX."""

    kind = ResourceKind.GROWTH_RATE

    name: str
    formula: str
    levels: tuple[GrowthRateLevel, ...] = ()
    descriptions: tuple[Description, ...] = ()
    pokemon_species: tuple[Reference, ...] = ()


@KINDS.register
class PokemonColor(Resource):
    kind = ResourceKind.COLOR

    name: str
    names: tuple[LocalizedName, ...] = ()
    pokemon_species: tuple[Reference, ...] = ()


class AwesomeName(LanguageTagged):
    awesome_name: str


@KINDS.register
class PokemonShape(Resource):
    """Body shape; ``awesome_names`` are the "scientific" shape names."""

    kind = ResourceKind.SHAPE

    name: str
    names: tuple[LocalizedName, ...] = ()
    awesome_names: tuple[AwesomeName, ...] = ()
    pokemon_species: tuple[Reference, ...] = ()


@KINDS.register
class PokemonHabitat(Resource):
    kind = ResourceKind.HABITAT

    name: str
    names: tuple[LocalizedName, ...] = ()
    pokemon_species: tuple[Reference, ...] = ()
