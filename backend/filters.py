"""Fixed-size rolling windows over per-frame samples."""

from __future__ import annotations

from collections import deque
from typing import Deque, Generic, Iterator, TypeVar

import numpy as np

T = TypeVar("T")


class RollingWindow(Generic[T]):
    """Keeps the most recent ``capacity`` samples; oldest are evicted on push."""

    def __init__(self, capacity: int):
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._samples: Deque[T] = deque(maxlen=capacity)

    def push(self, sample: T) -> None:
        self._samples.append(sample)

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[T]:
        return iter(self._samples)

    @property
    def is_full(self) -> bool:
        return len(self._samples) == self.capacity

    def as_array(self) -> np.ndarray:
        return np.asarray(list(self._samples), dtype=float)
