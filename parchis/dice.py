from __future__ import annotations

import math
import random
from collections import deque
from typing import Callable, Iterable

RandomSource = Callable[[], float]

DIE_FACES = 6
_UPPER = 0.999999


def roll_die(rng: RandomSource) -> int:
    """Pull one value in [0, 1) from ``rng`` and map it to a face 1..6.

    Out-of-range draws are clamped; non-numeric or non-finite draws count as 1.
    """
    try:
        raw = float(rng())
    except (TypeError, ValueError):
        return 1
    if not math.isfinite(raw):
        return 1
    normalized = max(0.0, min(_UPPER, raw))
    return math.floor(normalized * DIE_FACES) + 1


def roll_pair(rng: RandomSource) -> tuple[int, int]:
    return roll_die(rng), roll_die(rng)


class QueuedRandom:
    """Pull-based random source that drains queued values before the fallback.

    Used to replay exact dice in tests and from input layers.
    """

    def __init__(
        self, values: Iterable[float] = (), fallback: RandomSource | None = None
    ) -> None:
        self._queue: deque[float] = deque(values)
        self._fallback = fallback or random.random

    def queue(self, values: Iterable[float]) -> None:
        """Replace pending values."""
        self._queue = deque(values)

    def __len__(self) -> int:
        return len(self._queue)

    def __call__(self) -> float:
        if self._queue:
            return self._queue.popleft()
        return self._fallback()
