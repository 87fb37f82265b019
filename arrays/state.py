"""
state.py — The Array Being Sorted
==================================
ArrayState is the canonical mutable sequence a run sorts, plus the derived
metadata a renderer needs to scale bars (length, max value).

Ownership:
  - One ArrayState per run, built from a COPY of the operator's list.
  - The run's worker thread is the only writer.
  - Renderers read concurrently; every write and every whole-array
    snapshot goes through one lock, so a reader never sees half a swap.
"""

import random
import threading
from typing import Iterable, List, Optional


class ArrayState:
    """
    Attributes:
        length    : Fixed number of elements for the lifetime of the run.
        max_value : Largest value at creation (0 when empty).  Sorting only
                    permutes values and merge overwrites only duplicate
                    existing ones, so this never grows.
    """

    __slots__ = ("_values", "_lock", "length", "max_value")

    def __init__(self, values: Iterable[int]):
        self._values: List[int]      = [int(v) for v in values]
        self._lock:   threading.Lock = threading.Lock()
        self.length:  int            = len(self._values)
        self.max_value: int          = max(self._values) if self._values else 0

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return self.length

    def __getitem__(self, index: int) -> int:
        self._check(index)
        return self._values[index]

    def snapshot(self) -> List[int]:
        """Coherent copy of every value."""
        with self._lock:
            return list(self._values)

    def is_sorted(self) -> bool:
        values = self.snapshot()
        return all(values[k] <= values[k + 1] for k in range(len(values) - 1))

    # ------------------------------------------------------------------
    # Writes (worker thread only)
    # ------------------------------------------------------------------
    def swap(self, i: int, j: int) -> None:
        self._check(i)
        self._check(j)
        with self._lock:
            self._values[i], self._values[j] = self._values[j], self._values[i]

    def assign(self, i: int, value: int) -> None:
        self._check(i)
        with self._lock:
            self._values[i] = int(value)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _check(self, index: int) -> None:
        # negative indices would silently wrap on a list
        if not 0 <= index < self.length:
            raise IndexError(f"index {index} out of range for array of length {self.length}")

    def __repr__(self) -> str:
        return f"ArrayState(length={self.length}, max_value={self.max_value})"


# ---------------------------------------------------------------------------
# Random arrays
# ---------------------------------------------------------------------------
def generate_random_array(
    size: int,
    low: int = 5,
    high: int = 504,
    seed: Optional[int] = None,
) -> List[int]:
    """
    Uniform random integers in [low, high] inclusive.
    A seed gives a reproducible array without touching the global RNG.
    """
    if size < 0:
        raise ValueError(f"size must be >= 0, got {size}")
    rng = random.Random(seed)
    return [rng.randint(low, high) for _ in range(size)]
