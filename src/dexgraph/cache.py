# dexgraph/cache.py
"""Per-client memoisation of resources with request coalescing.

Each identifier is in one of three states: a fetch is in flight
(:class:`Pending`), the resource is known (:class:`Ready`), or the last fetch
failed (:class:`Failed`). Concurrent lookups of a Pending identifier await
the same task, so a burst of lookups costs one fetch. Failures stay recorded
until the identifier is invalidated.

Checking for an entry and registering a new Pending task happen with no
``await`` in between, which makes that step atomic on the event loop; no lock
is involved. Waiters await the task through :func:`asyncio.shield`, so a
waiter that gives up never cancels the fetch other waiters depend on.
"""

import asyncio
from collections.abc import Awaitable, Callable, MutableMapping
from dataclasses import dataclass, replace

from cachetools import LRUCache  # type: ignore[import-untyped]

from .exceptions import (
    DexGraphError,
    TimeoutError,
    TransportError,
    UnrecognizedEndpointError,
)
from .identifier import Identifier
from .log_config import logger
from .models.common import Resource

FetchFn = Callable[[Identifier], Awaitable[Resource]]


@dataclass(frozen=True)
class Pending:
    task: "asyncio.Task[Resource]"


@dataclass(frozen=True)
class Ready:
    resource: Resource


@dataclass(frozen=True)
class Failed:
    error: DexGraphError


CacheEntry = Pending | Ready | Failed


@dataclass
class CacheStats:
    """Counters describing how lookups were served.

    Attributes:
        hits: Lookups answered from a Ready or Failed entry.
        misses: Lookups that started a fetch.
        coalesced: Lookups that joined a fetch already in flight.
        failures: Fetches that ended in a recorded failure.
        evictions: Settled entries dropped to respect the size bound.
        size: Settled entries currently held.
        pending: Fetches currently in flight.
    """

    hits: int = 0
    misses: int = 0
    coalesced: int = 0
    failures: int = 0
    evictions: int = 0
    size: int = 0
    pending: int = 0


class _SettledLRU(LRUCache):
    """LRUCache that reports the keys it evicts."""

    def __init__(self, maxsize: int, on_evict: Callable[[Identifier], None]):
        super().__init__(maxsize=maxsize)
        self._on_evict = on_evict

    def popitem(self):
        key, value = super().popitem()
        self._on_evict(key)
        return key, value


def _consume_exception(task: asyncio.Task) -> None:
    # Marks the exception as retrieved when every waiter has given up.
    if not task.cancelled():
        task.exception()


class ResourceCache:
    """Identifier-keyed store of settled resources and in-flight fetches.

    Slugs and numeric ids of the same resource converge: once a resource is
    fetched, the identifier it was requested by and ``(kind, name)`` become
    aliases of ``(kind, id)``.

    Args:
        max_size: Maximum number of settled entries to hold; ``0`` means
            unbounded. In-flight fetches are never evicted.
    """

    def __init__(self, max_size: int = 0):
        self._settled: MutableMapping[Identifier, Ready | Failed]
        if max_size > 0:
            self._settled = _SettledLRU(max_size, self._on_evict)
            logger.debug(f"Resource cache bounded to {max_size} entries (LRU)")
        else:
            self._settled = {}
        self._pending: dict[Identifier, asyncio.Task] = {}
        self._aliases: dict[Identifier, Identifier] = {}
        self._stats = CacheStats()

    def canonical(self, identifier: Identifier) -> Identifier:
        """The identifier ``identifier`` is known to be an alias of, or itself."""
        return self._aliases.get(identifier, identifier)

    def aliases_of(self, identifier: Identifier) -> set[Identifier]:
        """Every spelling known to stand for the same resource as ``identifier``.

        The canonical identifier itself is not included.
        """
        key = self.canonical(identifier)
        return {alias for alias, target in self._aliases.items() if target == key}

    async def get_or_fetch(
        self,
        identifier: Identifier,
        fetch_fn: FetchFn,
        *,
        timeout: float | None = None,
    ) -> Resource:
        """Returns the resource for ``identifier``, fetching it at most once.

        Args:
            identifier: The resource to look up.
            fetch_fn: Coroutine function producing the resource on a miss.
            timeout: Seconds this caller is willing to wait. Expiry only
                affects this caller; the fetch carries on and settles the
                entry for everyone else.

        Raises:
            DexGraphError: The recorded failure for this identifier, or the
                failure of the fetch this call started or joined.
            TimeoutError: If ``timeout`` expired first.
            TransportError: If the fetch was cancelled by :meth:`cancel_pending`
                while this caller was waiting on it.
        """
        key = self.canonical(identifier)

        entry = self._settled.get(key)
        if isinstance(entry, Ready):
            self._stats.hits += 1
            logger.trace(f"Cache hit for {key}")
            return entry.resource
        if isinstance(entry, Failed):
            self._stats.hits += 1
            logger.debug(f"Cache hit for {key} (recorded failure)")
            raise entry.error

        task = self._pending.get(key)
        if task is None:
            self._stats.misses += 1
            logger.debug(f"Cache miss for {key}; starting fetch")
            task = asyncio.create_task(
                self._run(key, fetch_fn), name=f"dexgraph-fetch:{key}"
            )
            task.add_done_callback(_consume_exception)
            self._pending[key] = task
        else:
            self._stats.coalesced += 1
            logger.debug(f"Joining in-flight fetch for {key}")

        try:
            if timeout is None:
                return await asyncio.shield(task)
            return await asyncio.wait_for(asyncio.shield(task), timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Gave up waiting for {key} after {timeout}s")
            raise TimeoutError(f"Timed out after {timeout}s waiting for {key}") from None
        except asyncio.CancelledError:
            # Only a cancelled fetch is translated; a cancelled caller stays cancelled.
            current = asyncio.current_task()
            if task.cancelled() and (current is None or not current.cancelling()):
                raise TransportError(
                    f"Fetch of {key} was cancelled before it finished (client closed)"
                ) from None
            raise

    async def _run(self, key: Identifier, fetch_fn: FetchFn) -> Resource:
        current = asyncio.current_task()
        try:
            resource = await fetch_fn(key)
        except DexGraphError as e:
            if self._release(key, current):
                self._settled[key] = Failed(e)
                self._stats.failures += 1
                logger.debug(f"Recorded failure for {key}: {type(e).__name__}")
            raise
        except BaseException:
            # Not part of the lookup error taxonomy; nothing is recorded.
            self._release(key, current)
            raise

        if not self._release(key, current):
            logger.debug(f"Fetch for {key} finished after invalidation; not stored")
            return resource
        return self._store(key, resource)

    def _release(self, key: Identifier, task: asyncio.Task | None) -> bool:
        """Unregisters ``task`` if it is still the fetch in flight for ``key``."""
        if self._pending.get(key) is task:
            del self._pending[key]
            return True
        return False

    def _store(self, key: Identifier, resource: Resource) -> Resource:
        canonical = Identifier(key.kind, resource.id)
        existing = self._settled.get(canonical)
        if isinstance(existing, Ready):
            # Fetched concurrently under another spelling; keep the first copy.
            resource = existing.resource
        else:
            self._settled[canonical] = Ready(resource)

        if key != canonical:
            self._settled.pop(key, None)
            self._aliases[key] = canonical
        name = getattr(resource, "name", None)
        if isinstance(name, str):
            try:
                by_name = Identifier(key.kind, name)
            except UnrecognizedEndpointError:
                by_name = None
            if by_name is not None and by_name != canonical:
                self._settled.pop(by_name, None)
                self._aliases[by_name] = canonical
        return resource

    def _on_evict(self, key: Identifier) -> None:
        self._stats.evictions += 1
        self._drop_aliases(key)
        logger.trace(f"Evicted {key} from the resource cache")

    def _drop_aliases(self, key: Identifier) -> None:
        for alias in self.aliases_of(key):
            del self._aliases[alias]

    def peek(self, identifier: Identifier) -> CacheEntry | None:
        """Returns the current entry for ``identifier`` without fetching."""
        key = self.canonical(identifier)
        task = self._pending.get(key)
        if task is not None:
            return Pending(task)
        return self._settled.get(key)

    def invalidate(self, identifier: Identifier) -> bool:
        """Drops the entry for ``identifier`` and its aliases.

        A fetch in flight is not cancelled; its waiters still receive its
        outcome, but the outcome is not stored.

        Returns:
            bool: Whether anything was dropped.
        """
        key = self.canonical(identifier)
        removed = False
        for candidate in {identifier, key}:
            if self._settled.pop(candidate, None) is not None:
                removed = True
            if self._pending.pop(candidate, None) is not None:
                removed = True
        self._aliases.pop(identifier, None)
        self._drop_aliases(key)
        if removed:
            logger.debug(f"Invalidated {key}")
        return removed

    def invalidate_all(self) -> None:
        """Drops every entry. Fetches in flight behave as for :meth:`invalidate`."""
        count = len(self._settled) + len(self._pending)
        self._settled.clear()
        self._pending.clear()
        self._aliases.clear()
        logger.debug(f"Invalidated all {count} cache entries")

    def cancel_pending(self) -> int:
        """Cancels every fetch in flight. Returns how many were cancelled.

        Callers waiting on a cancelled fetch receive a
        :class:`~dexgraph.exceptions.TransportError` rather than
        :class:`asyncio.CancelledError`. Nothing is recorded for the
        identifiers involved.
        """
        tasks = list(self._pending.values())
        self._pending.clear()
        for task in tasks:
            task.cancel()
        return len(tasks)

    @property
    def stats(self) -> CacheStats:
        """A snapshot of the cache counters."""
        return replace(
            self._stats, size=len(self._settled), pending=len(self._pending)
        )

    def __len__(self) -> int:
        return len(self._settled)

    def __contains__(self, identifier: object) -> bool:
        if not isinstance(identifier, Identifier):
            return False
        key = self.canonical(identifier)
        return key in self._settled or key in self._pending
