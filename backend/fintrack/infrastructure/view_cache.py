"""View Cache — per-owner cache of dashboard read models with path invalidation.

Invariants:
    - Entries are keyed by (path, owner_key); revalidate_path drops every owner's entry
    - revalidate_path is fire-and-forget: returns None, never raises
    - A load that started before a revalidation is never stored after it
      (per-path generation counter)
    - Entries older than ttl_seconds are treated as misses

Design Decisions:
    - In-process dict, one instance per process (built in lifespan, injected via
      dependency); multi-instance deployments only lose cache hits, never correctness
    - Loader errors propagate to the caller and are not cached
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)

DASHBOARD_PATH = "/dashboard"


@dataclass
class _Entry:
    value: Any
    stored_at: float
    generation: int


class ViewCache:
    """Cached read models that a mutation can mark stale by view path."""

    def __init__(
        self,
        ttl_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[tuple[str, str], _Entry] = {}
        self._generations: dict[str, int] = {}

    async def get_or_load(
        self, path: str, owner_key: str,
        loader: Callable[[], Awaitable[Any]],
    ) -> Any:
        """Return the cached value for (path, owner) or run loader and cache it."""
        key = (path, owner_key)
        generation = self._generations.get(path, 0)
        entry = self._entries.get(key)
        if entry and entry.generation == generation and not self._expired(entry):
            return entry.value

        value = await loader()
        if self._generations.get(path, 0) == generation:
            self._entries[key] = _Entry(value, self._clock(), generation)
        return value

    def revalidate_path(self, path: str) -> None:
        """Mark every cached view under path as stale."""
        try:
            self._generations[path] = self._generations.get(path, 0) + 1
            for key in [k for k in self._entries if k[0] == path]:
                del self._entries[key]
            logger.info(f"Revalidated view path {path}", extra={"path": path})
        except Exception as e:
            logger.warning(
                f"View revalidation failed for {path}: {e}",
                extra={"path": path},
            )

    def clear(self) -> None:
        self._entries.clear()
        self._generations.clear()

    def _expired(self, entry: _Entry) -> bool:
        return self._clock() - entry.stored_at > self.ttl_seconds

    def __len__(self) -> int:
        return len(self._entries)
