"""Items, their classification kinds, and machines (TMs/HMs)."""

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


class ItemSprites(BaseModel):
    default: str | None = None

    model_config = ConfigDict(frozen=True, extra="allow")


class ItemHolderVersion(BaseModel):
    rarity: int
    version: Reference

    model_config = ConfigDict(frozen=True)


class ItemHolder(BaseModel):
    pokemon: Reference
    version_details: tuple[ItemHolderVersion, ...] = ()

    model_config = ConfigDict(frozen=True)


class ItemMachine(BaseModel):
    machine: Reference
    version_group: Reference

    model_config = ConfigDict(frozen=True)


@KINDS.register
class Item(Resource):
    kind = ResourceKind.ITEM

    name: str
    category: Reference

    cost: int = 0
    fling_power: int | None = None
    fling_effect: Reference | None = None
    attributes: tuple[Reference, ...] = ()
    names: tuple[LocalizedName, ...] = ()
    effect_entries: tuple[Effect, ...] = ()
    flavor_text_entries: tuple[FlavorText, ...] = ()
    game_indices: tuple[GenerationGameIndex, ...] = ()
    sprites: ItemSprites = ItemSprites()
    held_by_pokemon: tuple[ItemHolder, ...] = ()
    baby_trigger_for: Reference | None = None
    machines: tuple[ItemMachine, ...] = ()


@KINDS.register
class ItemAttribute(Resource):
    kind = ResourceKind.ITEM_ATTRIBUTE

    name: str
    names: tuple[LocalizedName, ...] = ()
    descriptions: tuple[Description, ...] = ()
    items: tuple[Reference, ...] = ()


@KINDS.register
class ItemCategory(Resource):
    kind = ResourceKind.ITEM_CATEGORY

    name: str
    pocket: Reference

    names: tuple[LocalizedName, ...] = ()
    items: tuple[Reference, ...] = ()


@KINDS.register
class ItemPocket(Resource):
    kind = ResourceKind.ITEM_POCKET

    name: str
    names: tuple[LocalizedName, ...] = ()
    categories: tuple[Reference, ...] = ()


@KINDS.register
class Machine(Resource):
    """A TM/HR/TR binding an item to a move within one version group."""

    kind = ResourceKind.MACHINE

    item: Reference
    move: Reference
    version_group: Reference


@KINDS.register
class ItemFlingEffect(Resource):
    """What happens when an item is thrown with the move Fling."""

    kind = ResourceKind.ITEM_FLING_EFFECT

    name: str
    effect_entries: tuple[Effect, ...] = ()
    items: tuple[Reference, ...] = ()
