"""Per-client quota for estimates that reach third-party APIs.

An address estimate can cost one OpenCage and one NREL call, and NREL's
DEMO_KEY is throttled hard, so each client gets a fixed number of address
estimates per rolling window.
"""

from __future__ import annotations

import math
import time
from collections import deque
from collections.abc import Callable

from fastapi import HTTPException, Request, status

from app.config import settings


def client_key(request: Request) -> str:
    """First ``X-Forwarded-For`` hop, else the socket peer."""
    first_hop = request.headers.get("x-forwarded-for", "").split(",")[0].strip()
    if first_hop:
        return first_hop
    return request.client.host if request.client else "unknown"


class EstimateQuota:
    """Rolling window of hit timestamps per client.

    Clients with no hits left in the window are dropped from the table, so
    it only ever holds callers seen in the last ``window_seconds``.
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: float = 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}

    @property
    def tracked_clients(self) -> int:
        return len(self._hits)

    def _expire(self, now: float) -> None:
        cutoff = now - self.window_seconds
        for key in list(self._hits):
            hits = self._hits[key]
            while hits and hits[0] <= cutoff:
                hits.popleft()
            if not hits:
                del self._hits[key]

    def check(self, request: Request) -> None:
        """Count a hit for the caller, or raise 429 once the quota is spent."""
        now = self._clock()
        self._expire(now)

        key = client_key(request)
        hits = self._hits.get(key)
        if hits is not None and len(hits) >= self.max_requests:
            retry_after = max(1, math.ceil(hits[0] + self.window_seconds - now))
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail=(
                    f"Estimate quota exceeded: {self.max_requests} address estimates "
                    f"per {self.window_seconds:g}s. Retry in {retry_after}s."
                ),
                headers={"Retry-After": str(retry_after)},
            )

        self._hits.setdefault(key, deque()).append(now)

    def reset(self) -> None:
        self._hits.clear()


estimate_limiter = EstimateQuota(max_requests=settings.estimate_rate_limit)
