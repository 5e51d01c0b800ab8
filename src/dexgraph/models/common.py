"""Shared building blocks for PokéAPI resource models.

This module defines the :class:`Reference` hyperlink type that every resource
uses to point at other resources, the thin :class:`Resource` base shared by all
resource kinds, and the localized text entries PokéAPI attaches to most of
them. All models are frozen; tuples are used for collections so a decoded
resource cannot be mutated in place.
"""

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationInfo, model_validator

from ..constants import DEFAULT_LANGUAGE
from ..exceptions import UnknownResourceKindError, UnrecognizedEndpointError
from ..identifier import Identifier
from ..kinds import KINDS
from ..log_config import logger

if TYPE_CHECKING:
    from ..client import DexGraphClient

EntryT = TypeVar("EntryT", bound="LanguageTagged")


class Reference(BaseModel):
    """A not-yet-fetched pointer to another resource.

    Built from PokéAPI's ``{"name": ..., "url": ...}`` objects. The ``name``
    is kept exactly as the embedding resource spelled it. When the URL cannot
    be normalized the reference is still created, with ``identifier=None``,
    so one broken cross-link never prevents decoding the rest of a resource.

    Attributes:
        url: The raw URL as received from the service.
        name: The display name supplied by the embedding resource, if any.
        identifier: The normalized identifier, or None if unresolvable.
    """

    url: str
    name: str | None = None
    identifier: Identifier | None = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def normalize_url(cls, data: Any, info: ValidationInfo) -> Any:
        """Derive the identifier from the URL, degrading on failure."""
        if not isinstance(data, dict) or "identifier" in data:
            return data
        url = data.get("url")
        if not isinstance(url, str):
            return data  # Let field validation report the bad/missing url

        kinds = (info.context or {}).get("kinds", KINDS)
        try:
            identifier = Identifier.from_url(url, kinds=kinds)
        except (UnrecognizedEndpointError, UnknownResourceKindError) as e:
            logger.debug(f"Keeping unresolvable reference to {url!r}: {e}")
            identifier = None
        return {**data, "identifier": identifier}

    @property
    def resolvable(self) -> bool:
        return self.identifier is not None

    @property
    def kind(self) -> str | None:
        return self.identifier.kind if self.identifier else None

    def name_matches(self, resource: "Resource") -> bool:
        """Whether this reference's display name equals the resource's own name.

        PokéAPI does not guarantee the two agree; this only surfaces the
        comparison.
        """
        return self.name == getattr(resource, "name", None)

    async def load(self, client: "DexGraphClient") -> "Resource":
        """Resolve this reference through ``client`` (and its cache)."""
        return await client.resolve(self)

    def __str__(self) -> str:
        return self.name or self.url


class LanguageTagged(BaseModel):
    """Base for localized entries carrying a ``language`` reference."""

    language: Reference

    model_config = ConfigDict(frozen=True, extra="allow")

    @property
    def language_name(self) -> str | None:
        return self.language.name


class LocalizedName(LanguageTagged):
    name: str


class Description(LanguageTagged):
    description: str


class Genus(LanguageTagged):
    genus: str


class Effect(LanguageTagged):
    """Effect text in one language; ``short_effect`` is the abridged form."""

    effect: str
    short_effect: str | None = None


class FlavorText(LanguageTagged):
    """Flavor text, scoped to a version or to a version group."""

    flavor_text: str
    version: Reference | None = None
    version_group: Reference | None = None


class VersionGameIndex(BaseModel):
    game_index: int
    version: Reference

    model_config = ConfigDict(frozen=True)


class GenerationGameIndex(BaseModel):
    game_index: int
    generation: Reference

    model_config = ConfigDict(frozen=True)


def pick_language(
    entries: Iterable[EntryT], language: str = DEFAULT_LANGUAGE
) -> EntryT | None:
    """Returns the first entry written in ``language``, or None.

    Args:
        entries: Localized entries, e.g. ``species.flavor_text_entries``.
        language: The language API name, e.g. ``"en"`` or ``"ja-Hrkt"``.
    """
    for entry in entries:
        if entry.language.name == language:
            return entry
    return None


class Resource(BaseModel):
    """Base model for every resource kind.

    Concrete kinds set the ``kind`` class variable to their endpoint name and
    register themselves in :data:`dexgraph.kinds.KINDS`. Fields the models do
    not declare are kept as extras rather than rejected.

    Attributes:
        id: The numeric id of the resource.
    """

    kind: ClassVar[str]

    id: int

    model_config = ConfigDict(frozen=True, extra="allow")

    @property
    def identifier(self) -> Identifier:
        """The canonical (numeric) identifier of this resource."""
        return Identifier(self.kind, self.id)

    def localized_name(self, language: str = DEFAULT_LANGUAGE) -> str | None:
        """The resource's name in ``language``, falling back to its API name."""
        entry = pick_language(getattr(self, "names", ()), language)
        if entry is not None:
            return entry.name
        return getattr(self, "name", None)

    def references(self) -> list[Reference]:
        """All references embedded anywhere in this resource, in field order."""
        found: list[Reference] = []
        _collect_references(self, found)
        return found


def _collect_references(value: Any, found: list[Reference]) -> None:
    if isinstance(value, Reference):
        found.append(value)
    elif isinstance(value, BaseModel):
        for field_name in type(value).model_fields:
            _collect_references(getattr(value, field_name), found)
    elif isinstance(value, tuple | list):
        for item in value:
            _collect_references(item, found)
