from __future__ import annotations

from asyncio import Lock
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
import logging
import time
import uuid

from .exceptions import MatchNotFound
from .scoring import Match

logger = logging.getLogger(__name__)


@dataclass
class _Entry:
    match: Match
    touched_at: float
    lock: Lock = field(default_factory=Lock)


class MatchRegistry:
    """In-memory store of live matches with one writer at a time per match.

    ``ttl_seconds`` evicts matches nobody touched for that long; ``0`` keeps
    them until deleted.
    """

    def __init__(
        self,
        ttl_seconds: float = 0.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._lock = Lock()
        self._entries: dict[str, _Entry] = {}

    async def create(self) -> str:
        match_id = uuid.uuid4().hex
        async with self._lock:
            self._purge_expired(self._clock())
            self._entries[match_id] = _Entry(Match(), self._clock())
        logger.info("Created match %s", match_id)
        return match_id

    async def get(self, match_id: str) -> Match:
        async with self._lock:
            return self._lookup(match_id).match

    async def delete(self, match_id: str) -> None:
        async with self._lock:
            entry = self._lookup(match_id)
            self._entries.pop(match_id, None)
        # an in-flight mutation finishes first
        async with entry.lock:
            pass
        logger.info("Deleted match %s", match_id)

    async def items(self) -> list[tuple[str, Match]]:
        async with self._lock:
            self._purge_expired(self._clock())
            return [(mid, entry.match) for mid, entry in self._entries.items()]

    @asynccontextmanager
    async def locked(self, match_id: str) -> AsyncIterator[Match]:
        """Hold ``match_id``'s lock while the caller reads or mutates the match."""
        async with self._lock:
            entry = self._lookup(match_id)
        async with entry.lock:
            entry.touched_at = self._clock()
            yield entry.match

    def __len__(self) -> int:
        return len(self._entries)

    def _lookup(self, match_id: str) -> _Entry:
        now = self._clock()
        self._purge_expired(now)
        entry = self._entries.get(match_id)
        if entry is None:
            raise MatchNotFound(match_id)
        entry.touched_at = now
        return entry

    def _purge_expired(self, now: float) -> None:
        if self._ttl <= 0:
            return
        expired = [
            mid
            for mid, entry in self._entries.items()
            if now - entry.touched_at >= self._ttl and not entry.lock.locked()
        ]
        for mid in expired:
            self._entries.pop(mid, None)
            logger.info("Evicted idle match %s", mid)
