# dexgraph/client.py
"""Main client for PokéAPI.

:class:`DexGraphClient` is the single entry point callers use. It owns one
resource cache, one transport and one decoder, and exposes the hyperlinked
PokéAPI graph as typed, memoised resources:

```python
async with DexGraphClient() as dex:
    pikachu = await dex.get("pokemon-species", "pikachu")
    pokemon = await dex.resolve(pikachu.default_variety)
    assert await dex.resolve(pokemon.species) is pikachu
```
"""

import asyncio
from collections.abc import AsyncIterator, Iterable
from typing import Self

from cachetools import LRUCache  # type: ignore[import-untyped]

from .cache import CacheEntry, CacheStats, ResourceCache
from .config import DexGraphSettings, get_settings
from .decoder import ResourceDecoder
from .exceptions import (
    MalformedFieldError,
    UnknownResourceKindError,
    UnrecognizedEndpointError,
)
from .identifier import Identifier
from .kinds import KINDS, KindRegistry
from .log_config import logger
from .models.common import Reference, Resource
from .models.listing import ResourceList
from .pager import Pager
from .store import DiskStore
from .transport import HttpTransport, Transport


class DexGraphClient:
    """Asynchronous, caching client for the PokéAPI resource graph.

    Every lookup goes through the client's cache, so the same identifier
    always yields the same resource object until it is invalidated, and
    concurrent lookups of one identifier share a single fetch.

    Args:
        settings: Client settings. Defaults to :func:`get_settings`.
        transport: Transport to fetch raw bodies with. Defaults to an
            :class:`HttpTransport` built from ``settings``; a transport passed
            in is not closed by :meth:`aclose`.
        kinds: Registry of resource kinds the client can decode.
    """

    def __init__(
        self,
        settings: DexGraphSettings | None = None,
        *,
        transport: Transport | None = None,
        kinds: KindRegistry = KINDS,
    ):
        self._settings = (settings or get_settings()).check()
        self._kinds = kinds
        self._base_url = self._settings.base_url

        self._should_close_transport = transport is None
        self._transport: Transport = transport or HttpTransport(self._settings)
        self._decoder = ResourceDecoder(kinds)
        self._cache = ResourceCache(max_size=self._settings.cache_max_size)
        self._blobs = LRUCache(maxsize=self._settings.blob_cache_size)

        self._store: DiskStore | None = None
        if self._settings.cache_dir is not None:
            self._store = DiskStore(self._settings.cache_dir)
            logger.info(f"Disk cache enabled at {self._store.root}")

        logger.info(
            f"DexGraphClient initialized for {self._base_url} "
            f"({len(kinds)} resource kinds)"
        )

    @property
    def settings(self) -> DexGraphSettings:
        return self._settings

    @property
    def kinds(self) -> KindRegistry:
        return self._kinds

    def identifier(self, target: Identifier | str, key: int | str | None = None) -> Identifier:
        """Normalizes the arguments of :meth:`get` into an identifier.

        ``target`` is either an :class:`Identifier`, a kind name together
        with ``key``, or an endpoint path/URL such as ``"pokemon/25/"``.

        Raises:
            UnrecognizedEndpointError: If the input cannot be normalized.
            UnknownResourceKindError: If the kind is not registered.
        """
        if isinstance(target, Identifier):
            if key is not None:
                raise UnrecognizedEndpointError(
                    f"{target}/{key}", "key given alongside an identifier"
                )
            identifier = target
        elif key is None:
            identifier = Identifier.from_url(
                target, kinds=self._kinds, base_url=self._base_url
            )
        else:
            identifier = Identifier(str(target), key)

        if identifier.kind not in self._kinds:
            raise UnknownResourceKindError(identifier.kind)
        return identifier

    async def _fetch(self, identifier: Identifier) -> Resource:
        """Loads one resource from the disk store or the transport.

        Bodies are stored under the path of ``(kind, id)`` whatever spelling
        was requested, so one file backs every alias of a resource.
        """
        path = identifier.path
        if self._store is not None:
            body = await self._store.load(path)
            if body is not None:
                try:
                    return self._decoder.decode(identifier.kind, body)
                except MalformedFieldError as e:
                    logger.warning(f"Discarding unreadable disk cache entry for {path}: {e}")
                    await self._store.discard(path)

        logger.debug(f"Fetching {path} from upstream")
        body = await self._transport.fetch(path)
        resource = self._decoder.decode(identifier.kind, body)
        if self._store is not None:
            await self._store.save(Identifier(identifier.kind, resource.id).path, body)
        return resource

    async def get(
        self,
        target: Identifier | str,
        key: int | str | None = None,
        *,
        timeout: float | None = None,
    ) -> Resource:
        """Returns the resource named by the arguments, fetching it if needed.

        Args:
            target: An identifier, a kind name (with ``key``), or an endpoint
                path or URL.
            key: Numeric id or slug when ``target`` is a kind name.
            timeout: Seconds to wait for the resource. Expiry raises
                :class:`~dexgraph.exceptions.TimeoutError` for this call only.

        Returns:
            Resource: The typed resource; the same object for every lookup of
                the same resource until it is invalidated.

        Raises:
            DexGraphError: Any error from the taxonomy in
                :mod:`dexgraph.exceptions`.
        """
        identifier = self.identifier(target, key)
        return await self._cache.get_or_fetch(identifier, self._fetch, timeout=timeout)

    async def get_url(self, url: str, *, timeout: float | None = None) -> Resource:
        """Returns the resource at an upstream URL.

        Raises:
            UnrecognizedEndpointError: If the URL is outside the configured
                base URL or cannot be normalized.
        """
        return await self.get(url, timeout=timeout)

    async def resolve(self, reference: Reference, *, timeout: float | None = None) -> Resource:
        """Follows a reference through the cache.

        Raises:
            UnrecognizedEndpointError: If the reference is unresolvable.
        """
        if reference.identifier is None:
            raise UnrecognizedEndpointError(
                reference.url, "reference could not be normalized"
            )
        return await self.get(reference.identifier, timeout=timeout)

    async def resolve_many(
        self, references: Iterable[Reference], *, timeout: float | None = None
    ) -> list[Resource]:
        """Resolves references concurrently, preserving their order.

        The first failure is raised; lookups still running carry on and
        settle in the cache.
        """
        return list(
            await asyncio.gather(
                *(self.resolve(ref, timeout=timeout) for ref in references)
            )
        )

    async def _load_page(self, kind: str, path: str) -> ResourceList:
        body = await self._transport.fetch(path)
        return self._decoder.decode_listing(body, kind)

    def list(self, kind: str, page_size: int | None = None) -> Pager:
        """Returns a new pager over every resource of ``kind``.

        Raises:
            UnknownResourceKindError: If the kind is not registered.
        """
        kind = str(kind)
        if kind not in self._kinds:
            raise UnknownResourceKindError(kind)

        async def load_page(path: str) -> ResourceList:
            return await self._load_page(kind, path)

        return Pager(
            kind, load_page, page_size=page_size or self._settings.page_size
        )

    async def iterate(
        self, kind: str, page_size: int | None = None
    ) -> AsyncIterator[Resource]:
        """Yields every resource of ``kind``, resolving listing entries in order.

        Listing entries whose URL cannot be normalized are skipped with a
        warning.
        """
        async for ref in self.list(kind, page_size):
            if not ref.resolvable:
                logger.warning(f"Skipping unresolvable {kind} listing entry {ref.url!r}")
                continue
            yield await self.resolve(ref)

    async def fetch_blob(self, url: str) -> bytes:
        """Fetches a raw binary payload, such as a sprite image.

        Payloads are kept in a small LRU keyed by URL.
        """
        cached = self._blobs.get(url)
        if cached is not None:
            logger.trace(f"Blob cache hit for {url}")
            return cached
        body = await self._transport.fetch(url)
        self._blobs[url] = body
        return body

    def peek(self, target: Identifier | str, key: int | str | None = None) -> CacheEntry | None:
        """Returns the cache entry for a resource without fetching it."""
        return self._cache.peek(self.identifier(target, key))

    def invalidate(self, target: Identifier | str, key: int | str | None = None) -> bool:
        """Forgets a resource, including a recorded failure.

        The next lookup fetches it again, by id or by any slug it was known
        under. A fetch already in flight is not cancelled, but its result is
        not stored.

        Disk store entries are deleted synchronously on the calling thread
        before this returns; each is a single small unlink.

        Returns:
            bool: Whether the resource was cached.
        """
        identifier = self.identifier(target, key)
        canonical = self._cache.canonical(identifier)
        spellings = {identifier, canonical} | self._cache.aliases_of(canonical)
        removed = self._cache.invalidate(identifier)
        if self._store is not None:
            for candidate in spellings:
                self._store.remove(candidate.path)
        return removed

    def invalidate_all(self) -> None:
        """Forgets every cached resource and binary payload.

        The disk store, when enabled, is emptied synchronously on the calling
        thread. For a large store called from a busy event loop, run this via
        :func:`asyncio.to_thread`.
        """
        self._cache.invalidate_all()
        self._blobs.clear()
        if self._store is not None:
            self._store.clear()
        logger.info("All cached resources invalidated")

    @property
    def cache_stats(self) -> CacheStats:
        return self._cache.stats

    async def aclose(self) -> None:
        """Cancels fetches in flight and closes the transport if owned.

        Lookups still waiting on a cancelled fetch fail with
        :class:`~dexgraph.exceptions.TransportError`.
        """
        cancelled = self._cache.cancel_pending()
        if cancelled:
            logger.debug(f"Cancelled {cancelled} fetch(es) in flight")
        if self._should_close_transport:
            await self._transport.aclose()
        logger.info("DexGraphClient closed.")

    async def __aenter__(self) -> Self:
        """Enter the async context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit the async context manager and close the client."""
        await self.aclose()

