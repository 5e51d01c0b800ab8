"""Evolution chains.

A chain is a tree of :class:`ChainLink` nodes rooted at the base species of
a family. The species references in the tree link back to species resources,
which themselves link back to the chain, so walking the graph in either
direction goes through the client's cache.
"""

from pydantic import BaseModel, ConfigDict

from ..kinds import KINDS, ResourceKind
from .common import LocalizedName, Reference, Resource


class EvolutionDetail(BaseModel):
    """Conditions for one evolution step; most fields are null upstream."""

    trigger: Reference
    min_level: int | None = None
    item: Reference | None = None
    held_item: Reference | None = None
    known_move: Reference | None = None
    known_move_type: Reference | None = None
    location: Reference | None = None
    party_species: Reference | None = None
    party_type: Reference | None = None
    trade_species: Reference | None = None
    gender: int | None = None
    min_happiness: int | None = None
    min_beauty: int | None = None
    min_affection: int | None = None
    relative_physical_stats: int | None = None
    time_of_day: str = ""
    needs_overworld_rain: bool = False
    turn_upside_down: bool = False

    model_config = ConfigDict(frozen=True, extra="allow")


class ChainLink(BaseModel):
    species: Reference
    is_baby: bool = False
    evolution_details: tuple[EvolutionDetail, ...] = ()
    evolves_to: tuple["ChainLink", ...] = ()

    model_config = ConfigDict(frozen=True)

    def walk(self):
        """Yields this link and every link below it, depth first."""
        yield self
        for link in self.evolves_to:
            yield from link.walk()


@KINDS.register
class EvolutionChain(Resource):
    kind = ResourceKind.EVOLUTION_CHAIN

    chain: ChainLink

    baby_trigger_item: Reference | None = None

    def species(self) -> list[Reference]:
        """Species references of the whole family in depth-first order."""
        return [link.species for link in self.chain.walk()]


@KINDS.register
class EvolutionTrigger(Resource):
    kind = ResourceKind.EVOLUTION_TRIGGER

    name: str
    names: tuple[LocalizedName, ...] = ()
    pokemon_species: tuple[Reference, ...] = ()
