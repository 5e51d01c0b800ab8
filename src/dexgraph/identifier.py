"""Normalized resource identity.

An :class:`Identifier` names one resource independently of how its URL was
spelled: ``https://pokeapi.co/api/v2/pokemon-species/25/``,
``/api/v2/pokemon-species/25`` and ``pokemon-species/25/`` all normalize to
``Identifier("pokemon-species", 25)``.
"""

import re
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .exceptions import UnknownResourceKindError, UnrecognizedEndpointError
from .kinds import KIND_NAME_PATTERN, KINDS, KindRegistry

SLUG_PATTERN = re.compile(r"^[a-z0-9][a-z0-9._-]*$")


class Identifier(BaseModel):
    """A ``(kind, key)`` pair naming exactly one resource.

    Keys made only of digits are stored as integers; any other key is a
    lowercase slug. Construction never checks the kind against a registry,
    :meth:`from_url` does.

    Attributes:
        kind: The endpoint name of the resource kind, e.g. ``"pokemon-species"``.
        key: The numeric id or slug of the resource.
    """

    kind: str
    key: int | str

    model_config = ConfigDict(frozen=True)

    def __init__(self, kind: str, key: int | str):
        try:
            super().__init__(kind=kind, key=key)
        except ValidationError as e:
            reason = e.errors()[0]["msg"]
            raise UnrecognizedEndpointError(f"{kind}/{key}", reason) from None

    @field_validator("kind", mode="before")
    @classmethod
    def normalize_kind(cls, v: Any) -> str:
        if not isinstance(v, str):
            raise ValueError(f"kind must be a string, got {type(v).__name__}")
        kind = str(v).strip().lower()
        if not KIND_NAME_PATTERN.match(kind):
            raise ValueError(f"malformed kind name {v!r}")
        return kind

    @field_validator("key", mode="before")
    @classmethod
    def normalize_key(cls, v: Any) -> int | str:
        if isinstance(v, bool):
            raise ValueError("key must be an integer or a slug, got a boolean")
        if isinstance(v, int):
            if v < 1:
                raise ValueError(f"numeric key must be positive, got {v}")
            return v
        if not isinstance(v, str):
            raise ValueError(f"key must be an integer or a slug, got {type(v).__name__}")
        key = v.strip().lower()
        if key.isdigit():
            return cls.normalize_key(int(key))
        if not SLUG_PATTERN.match(key):
            raise ValueError(f"malformed key {v!r}")
        return key

    @classmethod
    def from_url(
        cls,
        url: str,
        *,
        kinds: KindRegistry = KINDS,
        base_url: str | None = None,
    ) -> "Identifier":
        """Normalizes an absolute URL or a relative endpoint path.

        The query string and a trailing slash are ignored; the last two path
        segments are taken as ``(kind, key)``.

        Args:
            url: The URL or path to normalize.
            kinds: Registry the kind name must belong to.
            base_url: If given, absolute URLs must live under this base.

        Returns:
            Identifier: The normalized identifier.

        Raises:
            UnrecognizedEndpointError: If the path cannot be normalized.
            UnknownResourceKindError: If the kind is not in ``kinds``.
        """
        if not isinstance(url, str) or not url.strip():
            raise UnrecognizedEndpointError(repr(url), "empty endpoint")
        try:
            parsed = httpx.URL(url.strip())
        except (httpx.InvalidURL, TypeError, ValueError) as e:
            raise UnrecognizedEndpointError(url, str(e)) from None

        if base_url and parsed.is_absolute_url:
            if not str(parsed).startswith(base_url.rstrip("/") + "/"):
                raise UnrecognizedEndpointError(url, f"outside of {base_url}")

        segments = parsed.path.strip("/").split("/")
        if len(segments) < 2 or not all(segments[-2:]):
            raise UnrecognizedEndpointError(url, "expected '<kind>/<key>'")

        kind_name, raw_key = segments[-2].lower(), segments[-1]
        if not KIND_NAME_PATTERN.match(kind_name):
            raise UnrecognizedEndpointError(url, f"malformed kind {kind_name!r}")
        if kind_name not in kinds:
            raise UnknownResourceKindError(kind_name, url)

        try:
            return cls(kind_name, raw_key)
        except UnrecognizedEndpointError as e:
            raise UnrecognizedEndpointError(url, e.reason) from None

    @property
    def path(self) -> str:
        """Canonical endpoint path relative to the API base, e.g. ``"pokemon/25/"``."""
        return f"{self.kind}/{self.key}/"

    @property
    def is_numeric(self) -> bool:
        return isinstance(self.key, int)

    def url(self, base_url: str) -> str:
        """Absolute URL of this resource under ``base_url``."""
        return f"{base_url.rstrip('/')}/{self.path}"

    def __str__(self) -> str:
        return f"{self.kind}/{self.key}"

    def __repr__(self) -> str:
        return f"Identifier({self.kind!r}, {self.key!r})"
