# dexgraph/store.py
"""Optional on-disk store of raw response bodies.

The store sits below the in-memory cache: on a miss the client looks here
before going to the network, and every body fetched from the network is
written through. Entries are files named after the URL-safe base64 encoding
of the resource's endpoint path, so they survive across processes.
"""

import asyncio
import base64
from pathlib import Path

from .log_config import logger


class DiskStore:
    """A directory of raw response bodies keyed by endpoint path.

    The store is best effort: a directory that cannot be created or a file
    that cannot be written is logged and treated as a miss, never as a
    lookup failure.

    Attributes:
        root: The directory holding the stored bodies.
    """

    def __init__(self, root: Path | str):
        self.root = Path(root).expanduser()

    @staticmethod
    def encode_key(key: str) -> str:
        """File name for ``key``: URL-safe base64 of its UTF-8 bytes."""
        return base64.urlsafe_b64encode(key.encode("utf-8")).decode("ascii")

    def path_for(self, key: str) -> Path:
        return self.root / self.encode_key(key)

    def _ensure_root(self) -> bool:
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Disk cache directory {self.root} is unusable: {e}")
            return False
        return True

    def _read(self, key: str) -> bytes | None:
        path = self.path_for(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning(f"Could not read disk cache entry for {key!r}: {e}")
            return None

    def _write(self, key: str, body: bytes) -> None:
        if not self._ensure_root():
            return
        path = self.path_for(key)
        tmp_path = path.with_suffix(".tmp")
        try:
            tmp_path.write_bytes(body)
            tmp_path.replace(path)
        except OSError as e:
            logger.warning(f"Could not write disk cache entry for {key!r}: {e}")
            tmp_path.unlink(missing_ok=True)

    def remove(self, key: str) -> None:
        """Deletes the stored body for ``key``, if any."""
        try:
            self.path_for(key).unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove disk cache entry for {key!r}: {e}")

    async def load(self, key: str) -> bytes | None:
        """Returns the stored body for ``key``, or None on a miss."""
        body = await asyncio.to_thread(self._read, key)
        if body is not None:
            logger.debug(f"Disk cache hit for {key!r}")
        return body

    async def save(self, key: str, body: bytes) -> None:
        await asyncio.to_thread(self._write, key, body)

    async def discard(self, key: str) -> None:
        await asyncio.to_thread(self.remove, key)

    def clear(self) -> int:
        """Removes every stored body. Returns the number of files removed."""
        if not self.root.is_dir():
            return 0
        removed = 0
        for path in self.root.iterdir():
            if path.is_file():
                path.unlink(missing_ok=True)
                removed += 1
        logger.info(f"Cleared {removed} disk cache entries from {self.root}")
        return removed
