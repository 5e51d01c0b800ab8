"""Registry of resource kinds understood by the client.

PokéAPI's schema grows over time, so the set of kinds is data rather than
code: each resource model registers itself under its endpoint name, and a
client can be handed a registry extended with additional kinds.
"""

import re
from collections.abc import Iterator
from enum import StrEnum
from typing import TYPE_CHECKING, TypeVar

from .exceptions import ConfigurationError, UnknownResourceKindError
from .log_config import logger

if TYPE_CHECKING:
    from .models.common import Resource

ModelT = TypeVar("ModelT", bound="type[Resource]")

KIND_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9-]*$")


class ResourceKind(StrEnum):
    """Endpoint names of the built-in resource kinds."""

    SPECIES = "pokemon-species"
    POKEMON = "pokemon"
    FORM = "pokemon-form"
    MOVE = "move"
    MOVE_AILMENT = "move-ailment"
    MOVE_DAMAGE_CLASS = "move-damage-class"
    MOVE_LEARN_METHOD = "move-learn-method"
    MOVE_TARGET = "move-target"
    MOVE_CATEGORY = "move-category"
    MOVE_BATTLE_STYLE = "move-battle-style"
    ABILITY = "ability"
    TYPE = "type"
    STAT = "stat"
    NATURE = "nature"
    CHARACTERISTIC = "characteristic"
    POKEATHLON_STAT = "pokeathlon-stat"
    GENERATION = "generation"
    VERSION = "version"
    VERSION_GROUP = "version-group"
    POKEDEX = "pokedex"
    LANGUAGE = "language"
    ITEM = "item"
    ITEM_ATTRIBUTE = "item-attribute"
    ITEM_CATEGORY = "item-category"
    ITEM_POCKET = "item-pocket"
    ITEM_FLING_EFFECT = "item-fling-effect"
    MACHINE = "machine"
    REGION = "region"
    LOCATION = "location"
    LOCATION_AREA = "location-area"
    ENCOUNTER_METHOD = "encounter-method"
    ENCOUNTER_CONDITION = "encounter-condition"
    ENCOUNTER_CONDITION_VALUE = "encounter-condition-value"
    EGG_GROUP = "egg-group"
    GROWTH_RATE = "growth-rate"
    COLOR = "pokemon-color"
    SHAPE = "pokemon-shape"
    HABITAT = "pokemon-habitat"
    EVOLUTION_CHAIN = "evolution-chain"
    EVOLUTION_TRIGGER = "evolution-trigger"
    BERRY = "berry"
    BERRY_FIRMNESS = "berry-firmness"
    BERRY_FLAVOR = "berry-flavor"
    CONTEST_TYPE = "contest-type"
    CONTEST_EFFECT = "contest-effect"
    SUPER_CONTEST_EFFECT = "super-contest-effect"


class KindRegistry:
    """Maps kind names to the resource model that decodes them.

    Models register themselves with the :meth:`register` decorator, reading
    the endpoint name from their ``kind`` class variable.
    """

    def __init__(self, models: "dict[str, type[Resource]] | None" = None):
        self._models: dict[str, type[Resource]] = dict(models or {})

    def register(self, model: ModelT, *, name: str | None = None) -> ModelT:
        """Registers ``model`` under ``name`` (defaults to ``model.kind``).

        Raises:
            ConfigurationError: If the name is malformed or already taken by a
                different model.
        """
        kind_name = str(name or model.kind)
        if not KIND_NAME_PATTERN.match(kind_name):
            raise ConfigurationError(f"Invalid resource kind name {kind_name!r}.")
        existing = self._models.get(kind_name)
        if existing is not None and existing is not model:
            raise ConfigurationError(
                f"Kind {kind_name!r} is already registered to {existing.__name__}."
            )
        self._models[kind_name] = model
        logger.trace(f"Registered resource kind {kind_name!r} -> {model.__name__}")
        return model

    def model_for(self, kind: str) -> "type[Resource]":
        """Returns the model registered for ``kind``.

        Raises:
            UnknownResourceKindError: If no model is registered under ``kind``.
        """
        try:
            return self._models[str(kind)]
        except KeyError:
            raise UnknownResourceKindError(str(kind)) from None

    def copy(self) -> "KindRegistry":
        """Returns an independent registry with the same kinds."""
        return KindRegistry(self._models)

    def names(self) -> frozenset[str]:
        return frozenset(self._models)

    def __contains__(self, kind: object) -> bool:
        return str(kind) in self._models

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._models))

    def __len__(self) -> int:
        return len(self._models)


KINDS = KindRegistry()
"""The default registry, populated by :mod:`dexgraph.models`."""
