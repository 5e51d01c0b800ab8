"""Contest types and the effects moves have in (Super) Contests."""

from pydantic import ConfigDict

from ..kinds import KINDS, ResourceKind
from .common import Effect, FlavorText, LanguageTagged, Reference, Resource


class ContestName(LanguageTagged):
    """Localized name of a contest type, with the color the games show it in."""

    name: str
    color: str | None = None

    model_config = ConfigDict(frozen=True, extra="allow")


@KINDS.register
class ContestType(Resource):
    kind = ResourceKind.CONTEST_TYPE

    name: str
    berry_flavor: Reference

    names: tuple[ContestName, ...] = ()


@KINDS.register
class ContestEffect(Resource):
    """Hearts gained (``appeal``) and taken from the previous entrant (``jam``)."""

    kind = ResourceKind.CONTEST_EFFECT

    appeal: int
    jam: int

    effect_entries: tuple[Effect, ...] = ()
    flavor_text_entries: tuple[FlavorText, ...] = ()


@KINDS.register
class SuperContestEffect(Resource):
    kind = ResourceKind.SUPER_CONTEST_EFFECT

    appeal: int

    flavor_text_entries: tuple[FlavorText, ...] = ()
    moves: tuple[Reference, ...] = ()
