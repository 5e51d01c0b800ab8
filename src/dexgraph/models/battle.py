"""Abilities, types, stats, natures and characteristics."""

from pydantic import BaseModel, ConfigDict

from ..kinds import KINDS, ResourceKind
from .common import (
    Description,
    Effect,
    FlavorText,
    GenerationGameIndex,
    LocalizedName,
    Reference,
    Resource,
)


class AbilityPokemon(BaseModel):
    is_hidden: bool
    slot: int
    pokemon: Reference

    model_config = ConfigDict(frozen=True)


@KINDS.register
class Ability(Resource):
    kind = ResourceKind.ABILITY

    name: str
    generation: Reference

    is_main_series: bool = True
    names: tuple[LocalizedName, ...] = ()
    effect_entries: tuple[Effect, ...] = ()
    flavor_text_entries: tuple[FlavorText, ...] = ()
    pokemon: tuple[AbilityPokemon, ...] = ()


class TypeRelations(BaseModel):
    """Damage multipliers; ``double_damage_to`` lists types this one hits hard."""

    no_damage_to: tuple[Reference, ...] = ()
    half_damage_to: tuple[Reference, ...] = ()
    double_damage_to: tuple[Reference, ...] = ()
    no_damage_from: tuple[Reference, ...] = ()
    half_damage_from: tuple[Reference, ...] = ()
    double_damage_from: tuple[Reference, ...] = ()

    model_config = ConfigDict(frozen=True)


class TypePokemon(BaseModel):
    slot: int
    pokemon: Reference

    model_config = ConfigDict(frozen=True)


@KINDS.register
class Type(Resource):
    """An elemental type such as ``electric``."""

    kind = ResourceKind.TYPE

    name: str
    damage_relations: TypeRelations

    names: tuple[LocalizedName, ...] = ()
    generation: Reference | None = None
    move_damage_class: Reference | None = None
    game_indices: tuple[GenerationGameIndex, ...] = ()
    pokemon: tuple[TypePokemon, ...] = ()
    moves: tuple[Reference, ...] = ()

    def multiplier_against(self, other: str) -> float:
        """Damage multiplier of this type's moves against the type named ``other``."""
        relations = self.damage_relations
        if any(ref.name == other for ref in relations.no_damage_to):
            return 0.0
        if any(ref.name == other for ref in relations.half_damage_to):
            return 0.5
        if any(ref.name == other for ref in relations.double_damage_to):
            return 2.0
        return 1.0


class MoveStatAffect(BaseModel):
    change: int
    move: Reference

    model_config = ConfigDict(frozen=True)


class MoveStatAffectSets(BaseModel):
    increase: tuple[MoveStatAffect, ...] = ()
    decrease: tuple[MoveStatAffect, ...] = ()

    model_config = ConfigDict(frozen=True)


class NatureStatAffectSets(BaseModel):
    increase: tuple[Reference, ...] = ()
    decrease: tuple[Reference, ...] = ()

    model_config = ConfigDict(frozen=True)


@KINDS.register
class Stat(Resource):
    kind = ResourceKind.STAT

    name: str

    game_index: int | None = None
    is_battle_only: bool = False
    names: tuple[LocalizedName, ...] = ()
    move_damage_class: Reference | None = None
    affecting_moves: MoveStatAffectSets = MoveStatAffectSets()
    affecting_natures: NatureStatAffectSets = NatureStatAffectSets()
    characteristics: tuple[Reference, ...] = ()


class PokeathlonStatChange(BaseModel):
    max_change: int
    pokeathlon_stat: Reference

    model_config = ConfigDict(frozen=True)


class BattleStylePreference(BaseModel):
    low_hp_preference: int
    high_hp_preference: int
    move_battle_style: Reference

    model_config = ConfigDict(frozen=True)


@KINDS.register
class Nature(Resource):
    """A nature; neutral natures have null increased/decreased stats."""

    kind = ResourceKind.NATURE

    name: str

    names: tuple[LocalizedName, ...] = ()
    increased_stat: Reference | None = None
    decreased_stat: Reference | None = None
    likes_flavor: Reference | None = None
    hates_flavor: Reference | None = None
    pokeathlon_stat_changes: tuple[PokeathlonStatChange, ...] = ()
    move_battle_style_preferences: tuple[BattleStylePreference, ...] = ()


@KINDS.register
class Characteristic(Resource):
    """Summary text shown for a Pokémon's highest IV; has no API name."""

    kind = ResourceKind.CHARACTERISTIC

    gene_modulo: int
    highest_stat: Reference

    possible_values: tuple[int, ...] = ()
    descriptions: tuple[Description, ...] = ()


@KINDS.register
class MoveBattleStyle(Resource):
    """A Battle Palace style that natures bias move selection towards."""

    kind = ResourceKind.MOVE_BATTLE_STYLE

    name: str
    names: tuple[LocalizedName, ...] = ()


class NaturePokeathlonStatAffect(BaseModel):
    max_change: int
    nature: Reference

    model_config = ConfigDict(frozen=True)


class NaturePokeathlonStatAffectSets(BaseModel):
    increase: tuple[NaturePokeathlonStatAffect, ...] = ()
    decrease: tuple[NaturePokeathlonStatAffect, ...] = ()

    model_config = ConfigDict(frozen=True)


@KINDS.register
class PokeathlonStat(Resource):
    kind = ResourceKind.POKEATHLON_STAT

    name: str
    names: tuple[LocalizedName, ...] = ()
    affecting_natures: NaturePokeathlonStatAffectSets = NaturePokeathlonStatAffectSets()
