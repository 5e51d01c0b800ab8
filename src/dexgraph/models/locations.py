"""Regions, locations and the areas where wild Pokémon are encountered."""

from pydantic import BaseModel, ConfigDict

from ..kinds import KINDS, ResourceKind
from .common import GenerationGameIndex, LocalizedName, Reference, Resource


@KINDS.register
class Region(Resource):
    kind = ResourceKind.REGION

    name: str

    main_generation: Reference | None = None
    names: tuple[LocalizedName, ...] = ()
    locations: tuple[Reference, ...] = ()
    pokedexes: tuple[Reference, ...] = ()
    version_groups: tuple[Reference, ...] = ()


@KINDS.register
class Location(Resource):
    kind = ResourceKind.LOCATION

    name: str

    region: Reference | None = None
    names: tuple[LocalizedName, ...] = ()
    areas: tuple[Reference, ...] = ()
    game_indices: tuple[GenerationGameIndex, ...] = ()


class Encounter(BaseModel):
    min_level: int
    max_level: int
    chance: int
    method: Reference
    condition_values: tuple[Reference, ...] = ()

    model_config = ConfigDict(frozen=True)


class VersionEncounters(BaseModel):
    version: Reference
    max_chance: int
    encounter_details: tuple[Encounter, ...] = ()

    model_config = ConfigDict(frozen=True)


class PokemonEncounter(BaseModel):
    pokemon: Reference
    version_details: tuple[VersionEncounters, ...] = ()

    model_config = ConfigDict(frozen=True)


class EncounterMethodVersion(BaseModel):
    rate: int
    version: Reference

    model_config = ConfigDict(frozen=True)


class EncounterMethodRate(BaseModel):
    encounter_method: Reference
    version_details: tuple[EncounterMethodVersion, ...] = ()

    model_config = ConfigDict(frozen=True)


@KINDS.register
class LocationArea(Resource):
    kind = ResourceKind.LOCATION_AREA

    name: str
    location: Reference

    game_index: int | None = None
    names: tuple[LocalizedName, ...] = ()
    encounter_method_rates: tuple[EncounterMethodRate, ...] = ()
    pokemon_encounters: tuple[PokemonEncounter, ...] = ()


@KINDS.register
class EncounterMethod(Resource):
    """How a wild encounter is triggered: tall grass, surfing, fishing..."""

    kind = ResourceKind.ENCOUNTER_METHOD

    name: str

    order: int | None = None
    names: tuple[LocalizedName, ...] = ()


@KINDS.register
class EncounterCondition(Resource):
    kind = ResourceKind.ENCOUNTER_CONDITION

    name: str
    names: tuple[LocalizedName, ...] = ()
    values: tuple[Reference, ...] = ()


@KINDS.register
class EncounterConditionValue(Resource):
    """One state of a condition, e.g. ``time-morning`` of ``time``."""

    kind = ResourceKind.ENCOUNTER_CONDITION_VALUE

    name: str
    condition: Reference

    names: tuple[LocalizedName, ...] = ()
