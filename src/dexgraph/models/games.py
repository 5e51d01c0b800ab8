"""Generations, versions, version groups, Pokédexes and languages."""

from pydantic import BaseModel, ConfigDict

from ..kinds import KINDS, ResourceKind
from .common import Description, LocalizedName, Reference, Resource


@KINDS.register
class Generation(Resource):
    kind = ResourceKind.GENERATION

    name: str
    main_region: Reference

    names: tuple[LocalizedName, ...] = ()
    version_groups: tuple[Reference, ...] = ()
    abilities: tuple[Reference, ...] = ()
    moves: tuple[Reference, ...] = ()
    pokemon_species: tuple[Reference, ...] = ()
    types: tuple[Reference, ...] = ()


@KINDS.register
class Version(Resource):
    kind = ResourceKind.VERSION

    name: str
    version_group: Reference

    names: tuple[LocalizedName, ...] = ()


@KINDS.register
class VersionGroup(Resource):
    kind = ResourceKind.VERSION_GROUP

    name: str
    generation: Reference

    order: int | None = None
    versions: tuple[Reference, ...] = ()
    pokedexes: tuple[Reference, ...] = ()
    regions: tuple[Reference, ...] = ()
    move_learn_methods: tuple[Reference, ...] = ()


class PokedexEntry(BaseModel):
    entry_number: int
    pokemon_species: Reference

    model_config = ConfigDict(frozen=True)


@KINDS.register
class Pokedex(Resource):
    kind = ResourceKind.POKEDEX

    name: str

    is_main_series: bool = True
    names: tuple[LocalizedName, ...] = ()
    descriptions: tuple[Description, ...] = ()
    region: Reference | None = None
    version_groups: tuple[Reference, ...] = ()
    pokemon_entries: tuple[PokedexEntry, ...] = ()


@KINDS.register
class Language(Resource):
    """A language localized text can be written in.

    ``iso639`` and ``iso3166`` are the language and country codes; neither
    is unique across languages.
    """

    kind = ResourceKind.LANGUAGE

    name: str

    official: bool = False
    iso639: str | None = None
    iso3166: str | None = None
    names: tuple[LocalizedName, ...] = ()
