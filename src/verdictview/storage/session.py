"""
Session Store - Ephemeral key/value slots per browser session.

Mirrors the semantics of client-side session storage: a handful of
string slots per session, gone when the session expires. Nothing is
persisted; a restart empties the store.
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Callable


@dataclass
class _Entry:
    value: str
    expires_at: float


class SessionStore:
    """
    In-memory store for per-session string slots.

    Values are stored verbatim. Reading and interpreting them is the
    normalizer's job.
    """

    def __init__(
        self,
        ttl_seconds: float = 3600,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[tuple[str, str], _Entry] = {}
        self._lock = asyncio.Lock()

    async def get(self, session_id: str, key: str) -> str | None:
        """
        Read a slot.

        Args:
            session_id: Opaque session identifier
            key: Slot name (e.g., "lastAnalysis")

        Returns:
            The stored string, or None if absent or expired
        """
        entry = self._entries.get((session_id, key))
        if entry is None:
            return None
        if entry.expires_at <= self._clock():
            async with self._lock:
                self._entries.pop((session_id, key), None)
            return None
        return entry.value

    async def set(self, session_id: str, key: str, value: str) -> None:
        """
        Write a slot, replacing any previous value and resetting its TTL.

        Every write also sweeps expired slots, so abandoned sessions
        do not accumulate.
        """
        now = self._clock()
        async with self._lock:
            self._drop_expired(now)
            self._entries[(session_id, key)] = _Entry(
                value=value,
                expires_at=now + self.ttl_seconds,
            )

    async def delete(self, session_id: str, key: str) -> bool:
        """
        Remove a slot.

        Returns:
            True if a slot was removed, False if none existed
        """
        async with self._lock:
            return self._entries.pop((session_id, key), None) is not None

    async def clear(self, session_id: str) -> int:
        """Remove every slot of a session. Returns the number removed."""
        async with self._lock:
            keys = [k for k in self._entries if k[0] == session_id]
            for k in keys:
                del self._entries[k]
            return len(keys)

    async def count(self) -> int:
        """Count live (unexpired) slots across all sessions."""
        await self.purge_expired()
        return len(self._entries)

    async def purge_expired(self) -> int:
        """Drop expired slots. Returns the number dropped."""
        now = self._clock()
        async with self._lock:
            return self._drop_expired(now)

    def _drop_expired(self, now: float) -> int:
        """Drop slots expired at `now`. Caller holds the lock."""
        expired = [k for k, e in self._entries.items() if e.expires_at <= now]
        for k in expired:
            del self._entries[k]
        return len(expired)
