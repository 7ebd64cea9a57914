"""Poll policy for transaction confirmation."""

import random
from dataclasses import dataclass

from ..constants import CONFIRMATION_INTERVAL_SECONDS, CONFIRMATION_MAX_ATTEMPTS


@dataclass(frozen=True)
class PollPolicy:
    """Fixed-interval polling with optional jitter.

    Attributes:
        max_attempts: Number of status checks before giving up.
        interval: Seconds to wait between checks.
        jitter: Maximum extra seconds added to each wait.
    """

    max_attempts: int = CONFIRMATION_MAX_ATTEMPTS
    interval: float = CONFIRMATION_INTERVAL_SECONDS
    jitter: float = 0.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.interval < 0 or self.jitter < 0:
            raise ValueError("interval and jitter must not be negative")

    def delay(self) -> float:
        """Seconds to wait before the next attempt."""
        if self.jitter:
            return self.interval + random.uniform(0, self.jitter)
        return self.interval
