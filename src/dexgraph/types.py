# dexgraph/types.py
"""Request data structures and hook type aliases used by the HTTP transport."""

from collections.abc import Callable, Mapping
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field


class RequestData(BaseModel):
    """Encapsulates data for a single HTTP request attempt."""

    method: str
    url: str
    params: Mapping[str, Any] | None = None
    headers: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(extra="allow")

    def build_request(self) -> httpx.Request:
        """Builds an httpx.Request object from the stored data."""
        return httpx.Request(
            method=self.method,
            url=self.url,
            params=self.params,
            headers=self.headers,
        )


PreRequestHook = Callable[[str, str, dict[str, Any] | None, httpx.Headers], None]
"""Type alias for a pre-request hook.

Called before every request attempt with the method, the full URL, a mutable
copy of the query parameters and a mutable ``httpx.Headers``. Hooks modify
their arguments in place.
"""

PostRequestHook = Callable[[httpx.Response, int], None]
"""Type alias for a post-request hook.

Called with the successful ``httpx.Response`` and the number of attempts it
took to obtain it.
"""
