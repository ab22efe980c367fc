# lexia/ratelimit.py
"""
Fixed-window per-user rate limiting.

Two backends share the same semantics: the first hit (or the first hit at
or after reset_at) opens a window with count 1; further hits increment
the count until it reaches the limit, after which they are refused until
the window resets.

InMemoryRateLimiter is process-local. SQLiteRateLimiter keeps the counters
in the shared database so every process using it observes one limit.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

import aiosqlite

from lexia.config.schema import RateLimitConfig

logger = logging.getLogger(__name__)


@dataclass
class _Window:
    count: int
    reset_at: float


class InMemoryRateLimiter:
    """Process-local counters keyed by user."""

    def __init__(
        self,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, _Window] = {}

    async def hit(self, key: str) -> bool:
        """Count one request for key. Returns False when the limit is exceeded."""
        now = self._clock()
        window = self._windows.get(key)
        if window is None or now >= window.reset_at:
            self._windows[key] = _Window(count=1, reset_at=now + self.window_seconds)
            return True
        if window.count >= self.limit:
            return False
        window.count += 1
        return True

    def reset(self) -> None:
        self._windows.clear()


class SQLiteRateLimiter:
    """
    Counters stored in the rate_limits table, updated in IMMEDIATE
    transactions. Uses wall-clock time since processes share the table.
    """

    def __init__(
        self,
        db_path: str,
        scope: str,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._db_path = str(db_path)
        self.scope = scope
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock

    async def hit(self, key: str) -> bool:
        """Count one request for key. Returns False when the limit is exceeded."""
        now = self._clock()
        async with aiosqlite.connect(self._db_path) as db:
            await db.execute("PRAGMA busy_timeout=5000")
            await db.execute("BEGIN IMMEDIATE")
            try:
                cursor = await db.execute(
                    "SELECT count, reset_at FROM rate_limits WHERE scope = ? AND key = ?",
                    (self.scope, key),
                )
                row = await cursor.fetchone()

                if row is None or now >= row[1]:
                    await db.execute(
                        "INSERT OR REPLACE INTO rate_limits (scope, key, count, reset_at) VALUES (?, ?, 1, ?)",
                        (self.scope, key, now + self.window_seconds),
                    )
                    allowed = True
                elif row[0] >= self.limit:
                    allowed = False
                else:
                    await db.execute(
                        "UPDATE rate_limits SET count = count + 1 WHERE scope = ? AND key = ?",
                        (self.scope, key),
                    )
                    allowed = True

                await db.commit()
                return allowed
            except Exception:
                await db.rollback()
                raise


def create_rate_limiter(
    config: RateLimitConfig, scope: str, db_path: str | None = None
) -> InMemoryRateLimiter | SQLiteRateLimiter:
    """
    Build the limiter selected by config.backend.

    Args:
        config: Limit, window and backend
        scope: Counter namespace ("analyze", "draft")
        db_path: Required for the sqlite backend
    """
    if config.backend == "sqlite":
        if not db_path:
            raise ValueError("sqlite rate limit backend requires a database path")
        logger.info(f"Rate limiter '{scope}': sqlite, {config.max_requests}/{config.window_seconds}s")
        return SQLiteRateLimiter(db_path, scope, config.max_requests, config.window_seconds)
    logger.info(f"Rate limiter '{scope}': memory, {config.max_requests}/{config.window_seconds}s")
    return InMemoryRateLimiter(config.max_requests, config.window_seconds)
