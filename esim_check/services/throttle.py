"""S1 — Throttle gate protecting the catalog provider.

Two process-wide timestamps:
  - last_call: when the previous upstream-bound request was let through
  - blocked_until: end of the cooldown armed after a provider 429

Not safe across workers: the check-and-reserve is only atomic because
request handling runs on a single event loop.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from esim_check.errors import ErrorKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GateDecision:
    allowed: bool
    reason: ErrorKind | None = None


ALLOWED = GateDecision(allowed=True)


class ThrottleGate:
    """Minimum-interval throttle plus a cooldown circuit breaker."""

    def __init__(
        self,
        min_interval: float = 5.0,
        cooldown: float = 30.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.min_interval = min_interval
        self.cooldown = cooldown
        self.clock = clock
        self.last_call: float | None = None  # no upstream call yet
        self.blocked_until = 0.0

    def check_and_reserve(self, now: float | None = None) -> GateDecision:
        """Decide whether an upstream call may go out, reserving the slot if so."""
        now = self.clock() if now is None else now

        if self.last_call is not None and now - self.last_call < self.min_interval:
            logger.info("Throttle rejected | reason=local | %.1fs since last call", now - self.last_call)
            return GateDecision(allowed=False, reason=ErrorKind.LOCAL_THROTTLE)
        if self.is_blocked(now):
            logger.info("Throttle rejected | reason=upstream_blocked | %.1fs left", self.blocked_until - now)
            return GateDecision(allowed=False, reason=ErrorKind.UPSTREAM_BLOCKED)

        self.last_call = now
        return ALLOWED

    def block(self, now: float | None = None) -> None:
        """Arm the cooldown window after the provider signalled a rate limit."""
        now = self.clock() if now is None else now
        self.blocked_until = now + self.cooldown
        logger.warning("Upstream cooldown armed | %.0fs", self.cooldown)

    def is_blocked(self, now: float | None = None) -> bool:
        now = self.clock() if now is None else now
        return now < self.blocked_until

    def blocked_for(self, now: float | None = None) -> float:
        """Seconds remaining in the cooldown window (0 when open)."""
        now = self.clock() if now is None else now
        return max(0.0, self.blocked_until - now)
