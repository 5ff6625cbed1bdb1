"""Fixed-window per-client rate limiter with temporary blocking.

Each client (best-effort IP) gets a counter that resets once its window has
passed. Exceeding the threshold inside one window blocks the client for a
fixed cool-down. The block is lifted lazily: the next request seen after
``blocked_until`` clears it, so no timers are left running.
"""

import asyncio
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Dict, Optional

import structlog

from pricewatch.core.clock import Clock, utc_now
from pricewatch.core.exceptions import RateLimited

logger = structlog.get_logger(__name__)

BLOCKED_MESSAGE = "Too many requests. Your IP has been temporarily blocked."
EXCEEDED_MESSAGE = "Rate limit exceeded. Please try again later."


@dataclass
class ClientQuota:
    """Request counter for a single client."""

    client_id: str
    count: int
    window_reset_at: datetime
    blocked: bool = False
    blocked_until: Optional[datetime] = None


class ClientRateLimiter:
    """Per-client request limiter.

    All state changes for a client happen under one ``asyncio.Lock`` so
    concurrent requests from the same client never interleave their
    read-modify-write.
    """

    def __init__(
        self,
        window_seconds: int = 60,
        max_requests: int = 10,
        block_seconds: int = 600,
        clock: Clock = utc_now,
    ):
        """Initialize rate limiter.

        Args:
            window_seconds: Length of a counting window
            max_requests: Requests allowed per window
            block_seconds: How long a client stays blocked after exceeding the limit
            clock: Source of the current UTC time
        """
        self.window = timedelta(seconds=window_seconds)
        self.max_requests = max_requests
        self.block_duration = timedelta(seconds=block_seconds)
        self.clock = clock
        self._quotas: Dict[str, ClientQuota] = {}
        self._lock = asyncio.Lock()
        self.logger = logger.bind(service="rate_limiter")

    async def admit(self, client_id: str, now: Optional[datetime] = None) -> ClientQuota:
        """Count a request from ``client_id`` and decide whether to let it through.

        Args:
            client_id: Client identifier (usually the caller's IP)
            now: Current time, defaults to the limiter's clock

        Returns:
            Snapshot of the client's quota after the request was counted

        Raises:
            RateLimited: If the client is blocked or just exceeded the limit
        """
        now = now or self.clock()

        async with self._lock:
            quota = self._quotas.get(client_id)

            if quota is None:
                quota = ClientQuota(
                    client_id=client_id,
                    count=1,
                    window_reset_at=now + self.window,
                )
                self._quotas[client_id] = quota
                return replace(quota)

            if quota.blocked:
                if quota.blocked_until is not None and now >= quota.blocked_until:
                    self.logger.info("rate_limit_unblocked", client_id=client_id)
                    quota.blocked = False
                    quota.blocked_until = None
                    quota.count = 1
                    quota.window_reset_at = now + self.window
                    return replace(quota)

                self.logger.info("rate_limit_rejected_blocked", client_id=client_id)
                raise RateLimited(BLOCKED_MESSAGE)

            if now > quota.window_reset_at:
                quota.count = 1
                quota.window_reset_at = now + self.window
                return replace(quota)

            quota.count += 1
            if quota.count > self.max_requests:
                quota.blocked = True
                quota.blocked_until = now + self.block_duration
                self.logger.warning(
                    "rate_limit_blocked",
                    client_id=client_id,
                    count=quota.count,
                    blocked_until=quota.blocked_until.isoformat(),
                )
                raise RateLimited(EXCEEDED_MESSAGE)

            return replace(quota)

    def get_quota(self, client_id: str) -> Optional[ClientQuota]:
        """Return a copy of the stored quota for ``client_id``, if any."""
        quota = self._quotas.get(client_id)
        return replace(quota) if quota else None

    def __len__(self) -> int:
        return len(self._quotas)

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        """Drop all client state. Called on application shutdown."""
        async with self._lock:
            self._quotas.clear()
