# dexgraph/models/__init__.py
"""Typed PokéAPI resource models.

Importing this package registers every built-in resource kind in
:data:`dexgraph.kinds.KINDS`.
"""

from .battle import (
    Ability,
    Characteristic,
    MoveBattleStyle,
    Nature,
    PokeathlonStat,
    Stat,
    Type,
)
from .berries import Berry, BerryFirmness, BerryFlavor
from .common import (
    Description,
    Effect,
    FlavorText,
    Genus,
    LocalizedName,
    Reference,
    Resource,
    pick_language,
)
from .contests import ContestEffect, ContestType, SuperContestEffect
from .evolution import ChainLink, EvolutionChain, EvolutionDetail, EvolutionTrigger
from .games import Generation, Language, Pokedex, Version, VersionGroup
from .items import (
    Item,
    ItemAttribute,
    ItemCategory,
    ItemFlingEffect,
    ItemPocket,
    Machine,
)
from .listing import ResourceList
from .locations import (
    EncounterCondition,
    EncounterConditionValue,
    EncounterMethod,
    Location,
    LocationArea,
    Region,
)
from .moves import (
    Move,
    MoveAilment,
    MoveCategory,
    MoveDamageClass,
    MoveLearnMethod,
    MoveTarget,
)
from .pokemon import Pokemon, PokemonForm
from .species import (
    EggGroup,
    GrowthRate,
    PokemonColor,
    PokemonHabitat,
    PokemonShape,
    Species,
)

AnyResource = (
    Species
    | Pokemon
    | PokemonForm
    | Move
    | MoveAilment
    | MoveDamageClass
    | MoveLearnMethod
    | MoveTarget
    | Ability
    | Type
    | Stat
    | Nature
    | Characteristic
    | Generation
    | Version
    | VersionGroup
    | Pokedex
    | Language
    | Item
    | ItemAttribute
    | ItemCategory
    | ItemPocket
    | Machine
    | Region
    | Location
    | LocationArea
    | EggGroup
    | GrowthRate
    | PokemonColor
    | PokemonShape
    | PokemonHabitat
    | EvolutionChain
    | EvolutionTrigger
    | MoveCategory
    | MoveBattleStyle
    | PokeathlonStat
    | ItemFlingEffect
    | EncounterMethod
    | EncounterCondition
    | EncounterConditionValue
    | Berry
    | BerryFirmness
    | BerryFlavor
    | ContestType
    | ContestEffect
    | SuperContestEffect
)
"""Union of every built-in resource model."""

__all__ = [
    "Ability",
    "AnyResource",
    "Berry",
    "BerryFirmness",
    "BerryFlavor",
    "ChainLink",
    "Characteristic",
    "ContestEffect",
    "ContestType",
    "Description",
    "Effect",
    "EggGroup",
    "EncounterCondition",
    "EncounterConditionValue",
    "EncounterMethod",
    "EvolutionChain",
    "EvolutionDetail",
    "EvolutionTrigger",
    "FlavorText",
    "Generation",
    "Genus",
    "GrowthRate",
    "Item",
    "ItemAttribute",
    "ItemCategory",
    "ItemFlingEffect",
    "ItemPocket",
    "Language",
    "LocalizedName",
    "Location",
    "LocationArea",
    "Machine",
    "Move",
    "MoveAilment",
    "MoveBattleStyle",
    "MoveCategory",
    "MoveDamageClass",
    "MoveLearnMethod",
    "MoveTarget",
    "Nature",
    "PokeathlonStat",
    "Pokedex",
    "Pokemon",
    "PokemonColor",
    "PokemonForm",
    "PokemonHabitat",
    "PokemonShape",
    "Reference",
    "Region",
    "Resource",
    "ResourceList",
    "Species",
    "Stat",
    "SuperContestEffect",
    "Type",
    "Version",
    "VersionGroup",
    "pick_language",
]
