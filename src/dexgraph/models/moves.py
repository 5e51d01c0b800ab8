"""Moves and the small lookup kinds that classify them."""

from pydantic import BaseModel, ConfigDict

from ..kinds import KINDS, ResourceKind
from .common import Description, Effect, FlavorText, LocalizedName, Reference, Resource


class MoveMeta(BaseModel):
    """Battle mechanics of a move; every field is optional upstream."""

    ailment: Reference | None = None
    category: Reference | None = None
    min_hits: int | None = None
    max_hits: int | None = None
    min_turns: int | None = None
    max_turns: int | None = None
    drain: int | None = None
    healing: int | None = None
    crit_rate: int | None = None
    ailment_chance: int | None = None
    flinch_chance: int | None = None
    stat_chance: int | None = None

    model_config = ConfigDict(frozen=True)


class MachineVersion(BaseModel):
    machine: Reference
    version_group: Reference

    model_config = ConfigDict(frozen=True)


class PastMoveValues(BaseModel):
    """Values a move had before ``version_group`` changed them."""

    version_group: Reference
    accuracy: int | None = None
    power: int | None = None
    pp: int | None = None
    effect_chance: int | None = None
    type: Reference | None = None
    effect_entries: tuple[Effect, ...] = ()

    model_config = ConfigDict(frozen=True)


class StatChange(BaseModel):
    change: int
    stat: Reference

    model_config = ConfigDict(frozen=True)


@KINDS.register
class Move(Resource):
    """A move.

    ``accuracy``, ``power`` and ``pp`` are null upstream for moves where they
    do not apply (e.g. status moves have no power).
    """

    kind = ResourceKind.MOVE

    name: str
    type: Reference

    names: tuple[LocalizedName, ...] = ()
    accuracy: int | None = None
    power: int | None = None
    pp: int | None = None
    priority: int = 0
    effect_chance: int | None = None
    damage_class: Reference | None = None
    target: Reference | None = None
    generation: Reference | None = None
    meta: MoveMeta | None = None
    stat_changes: tuple[StatChange, ...] = ()
    effect_entries: tuple[Effect, ...] = ()
    flavor_text_entries: tuple[FlavorText, ...] = ()
    machines: tuple[MachineVersion, ...] = ()
    past_values: tuple[PastMoveValues, ...] = ()
    learned_by_pokemon: tuple[Reference, ...] = ()
    contest_type: Reference | None = None
    contest_effect: Reference | None = None
    super_contest_effect: Reference | None = None


@KINDS.register
class MoveAilment(Resource):
    kind = ResourceKind.MOVE_AILMENT

    name: str
    names: tuple[LocalizedName, ...] = ()
    moves: tuple[Reference, ...] = ()


@KINDS.register
class MoveDamageClass(Resource):
    kind = ResourceKind.MOVE_DAMAGE_CLASS

    name: str
    names: tuple[LocalizedName, ...] = ()
    descriptions: tuple[Description, ...] = ()
    moves: tuple[Reference, ...] = ()


@KINDS.register
class MoveLearnMethod(Resource):
    kind = ResourceKind.MOVE_LEARN_METHOD

    name: str
    names: tuple[LocalizedName, ...] = ()
    descriptions: tuple[Description, ...] = ()
    version_groups: tuple[Reference, ...] = ()


@KINDS.register
class MoveTarget(Resource):
    kind = ResourceKind.MOVE_TARGET

    name: str
    names: tuple[LocalizedName, ...] = ()
    descriptions: tuple[Description, ...] = ()
    moves: tuple[Reference, ...] = ()


@KINDS.register
class MoveCategory(Resource):
    """A coarse grouping of move effects, e.g. ``damage+ailment``."""

    kind = ResourceKind.MOVE_CATEGORY

    name: str
    descriptions: tuple[Description, ...] = ()
    moves: tuple[Reference, ...] = ()
