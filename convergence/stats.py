"""Timing and result records produced by polls and convergence runs."""
from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class ConvergeMode(Enum):
    ONCE = auto()      # passes as soon as one attempt succeeds
    ALWAYS = auto()    # every attempt must succeed for the whole window


def monotonic_ms() -> float:
    """Current monotonic time in milliseconds."""
    return time.monotonic() * 1000


@dataclass
class Stats:
    """Record of a single poll, an effect, or a whole convergence run.

    ``queue`` is only set on convergence-level results and holds one entry
    per executed step, in order.
    """

    start: float
    end: float
    runs: int = 0
    mode: ConvergeMode | None = None
    timeout: int | float | None = None
    value: Any = None
    queue: list[Stats] | None = None

    @property
    def elapsed(self) -> float:
        return self.end - self.start

    @property
    def always(self) -> bool:
        return self.mode is ConvergeMode.ALWAYS
