"""Berries and the firmness/flavor kinds that describe them.

A berry is distinct from the item of the same name; ``Berry.item`` links to
the item resource.
"""

from pydantic import BaseModel, ConfigDict

from ..kinds import KINDS, ResourceKind
from .common import LocalizedName, Reference, Resource


class BerryFlavorPotency(BaseModel):
    potency: int
    flavor: Reference

    model_config = ConfigDict(frozen=True)


@KINDS.register
class Berry(Resource):
    kind = ResourceKind.BERRY

    name: str
    firmness: Reference
    item: Reference

    growth_time: int | None = None
    max_harvest: int | None = None
    natural_gift_power: int | None = None
    natural_gift_type: Reference | None = None
    size: int | None = None
    smoothness: int | None = None
    soil_dryness: int | None = None
    flavors: tuple[BerryFlavorPotency, ...] = ()

    def potency_of(self, flavor: str) -> int:
        """Potency of the flavor named ``flavor``; 0 when the berry lacks it."""
        for entry in self.flavors:
            if entry.flavor.name == flavor:
                return entry.potency
        return 0


@KINDS.register
class BerryFirmness(Resource):
    kind = ResourceKind.BERRY_FIRMNESS

    name: str
    names: tuple[LocalizedName, ...] = ()
    berries: tuple[Reference, ...] = ()


class FlavorBerryPotency(BaseModel):
    potency: int
    berry: Reference

    model_config = ConfigDict(frozen=True)


@KINDS.register
class BerryFlavor(Resource):
    kind = ResourceKind.BERRY_FLAVOR

    name: str

    contest_type: Reference | None = None
    names: tuple[LocalizedName, ...] = ()
    berries: tuple[FlavorBerryPotency, ...] = ()
