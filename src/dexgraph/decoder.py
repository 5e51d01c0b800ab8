# dexgraph/decoder.py
"""Turns raw response bodies into typed resources.

Decoding is all-or-nothing: a body either validates completely into the
model registered for its kind or raises :class:`MalformedFieldError`. The one
local recovery is for cross-links: a ``{name, url}`` object whose URL cannot
be normalized still becomes a :class:`Reference`, just an unresolvable one.
"""

import json
from typing import Any

from pydantic import BaseModel, ValidationError

from .exceptions import MalformedFieldError
from .kinds import KINDS, KindRegistry
from .log_config import logger
from .models.common import Resource
from .models.listing import ResourceList

ROOT_FIELD = "<root>"
LISTING_KIND = "listing"


def _field_location(error: ValidationError) -> tuple[str, str]:
    """Returns the dotted location and message of the first validation error."""
    first = error.errors()[0]
    loc = ".".join(str(part) for part in first.get("loc", ()))
    return loc or ROOT_FIELD, first.get("msg", "")


class ResourceDecoder:
    """Decodes PokéAPI JSON documents using the models in a kind registry.

    Attributes:
        kinds: The registry used to look up models, and handed to the models
            as validation context so embedded references are normalized
            against the same set of kinds.
    """

    def __init__(self, kinds: KindRegistry = KINDS):
        self.kinds = kinds

    def _load_object(self, kind: str, raw: bytes | str) -> dict[str, Any]:
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedFieldError(kind, ROOT_FIELD, f"invalid JSON: {e}") from None
        if not isinstance(data, dict):
            raise MalformedFieldError(
                kind, ROOT_FIELD, f"expected a JSON object, got {type(data).__name__}"
            )
        return data

    def _validate(self, kind: str, model: type[BaseModel], data: dict[str, Any]):
        try:
            return model.model_validate(data, context={"kinds": self.kinds})
        except ValidationError as e:
            field_name, detail = _field_location(e)
            logger.debug(
                f"Decoding {kind!r} failed at {field_name!r} "
                f"({e.error_count()} error(s)): {detail}"
            )
            raise MalformedFieldError(kind, field_name, detail) from None

    def decode(self, kind: str, raw: bytes | str) -> Resource:
        """Decodes one resource document of the given kind.

        Args:
            kind: The kind name the document was fetched for.
            raw: The raw response body.

        Returns:
            Resource: An instance of the model registered for ``kind``.

        Raises:
            UnknownResourceKindError: If ``kind`` is not registered.
            MalformedFieldError: If the body is not a JSON object or a required
                field is missing or ill-typed.
        """
        model = self.kinds.model_for(kind)
        resource = self._validate(kind, model, self._load_object(kind, raw))
        unresolvable = sum(1 for ref in resource.references() if not ref.resolvable)
        if unresolvable:
            logger.debug(
                f"Decoded {kind}/{resource.id} with {unresolvable} unresolvable reference(s)"
            )
        return resource

    def decode_listing(self, raw: bytes | str, kind: str | None = None) -> ResourceList:
        """Decodes a listing page envelope ``{count, next, previous, results}``.

        Args:
            raw: The raw response body.
            kind: The listed kind, used only to label errors.

        Raises:
            MalformedFieldError: If the envelope is malformed.
        """
        label = kind or LISTING_KIND
        return self._validate(label, ResourceList, self._load_object(label, raw))
