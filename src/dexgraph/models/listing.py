"""The envelope PokéAPI wraps every listing page in."""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from ..log_config import logger
from .common import Reference


class ResourceList(BaseModel):
    """One page of a listing endpoint.

    Attributes:
        count: The upstream's declared total number of entries; may be stale.
        next: Opaque URL of the next page, or None on the last page.
        previous: URL of the previous page, or None on the first page.
        results: The references on this page, in upstream order.
    """

    count: int | None = None
    next: str | None = None
    previous: str | None = None
    results: tuple[Reference, ...] = ()

    model_config = ConfigDict(frozen=True, extra="allow")

    @field_validator("results", mode="before")
    @classmethod
    def handle_null_results(cls, v: Any) -> Any:
        """Treat a null ``results`` field as an empty page."""
        if v is None:
            logger.warning("Listing page has null 'results'; treating as empty.")
            return ()
        return v

    @field_validator("next", mode="before")
    @classmethod
    def blank_cursor_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v
