"""Clock input and time-adaptive depth selection."""

import time
from dataclasses import dataclass
from typing import Optional

from minimax_bot.config import SearchConfig


def elapsed_ms_since(start: float, now: Optional[float] = None) -> float:
    """Milliseconds since a ``time.monotonic()`` timestamp."""
    now = time.monotonic() if now is None else now
    return (now - start) * 1000.0


@dataclass(frozen=True)
class Clock:
    """Elapsed and budgeted milliseconds for the current move."""

    elapsed_ms: float
    budget_ms: float

    @property
    def used_fraction(self) -> float:
        if self.budget_ms <= 0:
            return float("inf")
        return self.elapsed_ms / self.budget_ms


def choose_depth(elapsed_ms: float, budget_ms: float, config: Optional[SearchConfig] = None) -> int:
    """Pick the search depth for one move.

    Shallow while little time has elapsed, a conservative fallback once the
    budget is nearly spent, the default depth otherwise.
    """
    cfg = config or SearchConfig()
    if elapsed_ms < cfg.opening_ms:
        return cfg.opening_depth
    if Clock(elapsed_ms, budget_ms).used_fraction > cfg.pressure_ratio:
        return cfg.pressure_depth
    return cfg.default_depth
