# dexgraph/pager.py
"""Lazy iteration over a paginated listing endpoint."""

import asyncio
from collections import deque
from collections.abc import Awaitable, Callable
from typing import Self

from .constants import DEFAULT_PAGE_SIZE
from .exceptions import ConfigurationError
from .log_config import logger
from .models.common import Reference
from .models.listing import ResourceList

PageLoader = Callable[[str], Awaitable[ResourceList]]


class Pager:
    """Yields the references of one listing endpoint, a page at a time.

    The first page is requested as ``<kind>/?limit=<page_size>&offset=0``;
    after that the pager follows the upstream ``next`` URL verbatim and stops
    when it is null or a page comes back empty. A pager cannot be rewound:
    ask the client for a new one to start over.

    If the upstream's declared ``count`` disagrees with what was actually
    observed, the pager logs a warning and sets :attr:`count_mismatch`; it
    never raises for it. A failure while loading a page propagates to the
    caller and leaves the pager exhausted.

    Attributes:
        kind: The kind being listed.
        page_size: Entries requested per page.
        total_count: The count declared by the first page, once fetched.
        observed: References handed out so far.
        pages_fetched: Pages loaded so far.
        exhausted: Whether the pager will yield nothing more.
        count_mismatch: Whether the declared and observed counts disagreed.
    """

    def __init__(
        self, kind: str, load_page: PageLoader, *, page_size: int = DEFAULT_PAGE_SIZE
    ):
        if page_size < 1:
            raise ConfigurationError(f"page_size must be at least 1, got {page_size}")
        self.kind = str(kind)
        self.page_size = page_size
        self._load_page = load_page
        self._next_path: str | None = f"{self.kind}/?limit={page_size}&offset=0"
        self._buffer: deque[Reference] = deque()
        self._lock = asyncio.Lock()

        self.total_count: int | None = None
        self.observed = 0
        self.pages_fetched = 0
        self.exhausted = False
        self.count_mismatch = False

    async def _fetch_page(self) -> None:
        path = self._next_path
        assert path is not None
        logger.debug(f"Fetching {self.kind} listing page {self.pages_fetched + 1}: {path}")
        try:
            page = await self._load_page(path)
        except Exception:
            self._finish(check_count=False)
            raise
        self.pages_fetched += 1

        if page.count is not None:
            if self.total_count is None:
                self.total_count = page.count
            elif page.count != self.total_count:
                logger.warning(
                    f"{self.kind} listing count changed from {self.total_count} "
                    f"to {page.count} while paging"
                )
                self.count_mismatch = True

        self._buffer.extend(page.results)
        self._next_path = page.next if page.results else None

    def _finish(self, *, check_count: bool = True) -> None:
        if self.exhausted:
            return
        self.exhausted = True
        self._next_path = None
        self._buffer.clear()
        if (
            check_count
            and self.total_count is not None
            and self.total_count != self.observed
        ):
            self.count_mismatch = True
            logger.warning(
                f"{self.kind} listing declared {self.total_count} entries "
                f"but yielded {self.observed}"
            )
        logger.debug(
            f"{self.kind} listing exhausted after {self.pages_fetched} page(s), "
            f"{self.observed} reference(s)"
        )

    async def next(self) -> Reference | None:
        """Returns the next reference, or None once the listing is exhausted."""
        async with self._lock:
            while not self._buffer:
                if self.exhausted or self._next_path is None:
                    self._finish()
                    return None
                await self._fetch_page()
            self.observed += 1
            return self._buffer.popleft()

    async def collect(self) -> list[Reference]:
        """Drains the pager and returns the remaining references in order."""
        return [ref async for ref in self]

    def __aiter__(self) -> Self:
        return self

    async def __anext__(self) -> Reference:
        ref = await self.next()
        if ref is None:
            raise StopAsyncIteration
        return ref

    def __repr__(self) -> str:
        return (
            f"Pager(kind={self.kind!r}, observed={self.observed}, "
            f"total_count={self.total_count}, exhausted={self.exhausted})"
        )
