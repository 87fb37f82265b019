"""
instruments.py — Instrumentation Primitives
============================================
Algorithms never touch the array or the event stream directly.  They are
written against an Instruments object passed in (and passed down through
every recursive call):

    ops.compare(i, j)          -> bool   emits Compare(i,j), paced
    ops.swap(i, j)                       emits Swap(i,j),    paced
    ops.overwrite(i, value)              emits Overwrite,    paced
    ops.mark_sorted(i)                   emits MarkSorted,   not paced
    ops.mark_all_sorted()                emits MarkAllSorted, not paced

Order inside a paced primitive:
    checkpoint → emit → apply mutation → pace (checkpoint/pause/delay/checkpoint)

Which events are paced is read off StepEvent.is_gated; markers still check
for cancellation but never wait.

The mutation is applied right after the event is handed over, before any
cancellation check, so the array always equals the fold of the events the
consumer has received.  Cancellation surfaces as RunCancelled, which the
engine catches; algorithms never catch it.
"""

import operator
from typing import Callable, List, Optional

from arrays import ArrayState
from algorithms.step import StepEvent, StepKind


class RunCancelled(Exception):
    """Raised at an instrumentation point once the run's stop signal is set."""


def _noop() -> None:
    return None


class Instruments:
    """
    Attributes:
        state        : The ArrayState being sorted.
        comparisons  : Compare events emitted so far.
        swaps        : Swap events emitted so far.
        overwrites   : Overwrite events emitted so far.
    """

    def __init__(
        self,
        state: ArrayState,
        emit: Callable[[StepEvent], None],
        pace: Optional[Callable[[], None]] = None,
        checkpoint: Optional[Callable[[], None]] = None,
    ):
        self.state       = state
        self._emit       = emit
        self._pace       = pace or _noop
        self._checkpoint = checkpoint or _noop
        self.comparisons = 0
        self.swaps       = 0
        self.overwrites  = 0

    @classmethod
    def unpaced(cls, state: ArrayState, sink: List[StepEvent]) -> "Instruments":
        """Recording instruments: append every event to `sink`, never wait."""
        return cls(state, sink.append)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self.state)

    def __getitem__(self, index: int) -> int:
        return self.state[index]

    # ------------------------------------------------------------------
    # Paced primitives
    # ------------------------------------------------------------------
    def compare(self, i: int, j: int, op: Callable[[int, int], bool] = operator.gt) -> bool:
        """Inspect i and j; returns op(array[i], array[j])."""
        self._record(StepEvent.compare(i, j))
        return op(self.state[i], self.state[j])

    def swap(self, i: int, j: int) -> None:
        self._record(StepEvent.swap(i, j))

    def overwrite(self, i: int, value: int) -> None:
        self._record(StepEvent.overwrite(i, value))

    # ------------------------------------------------------------------
    # Unpaced markers
    # ------------------------------------------------------------------
    def mark_sorted(self, i: int) -> None:
        self._record(StepEvent.mark_sorted(i))

    def mark_all_sorted(self) -> None:
        self._record(StepEvent.mark_all_sorted())

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _record(self, event: StepEvent) -> None:
        self._checkpoint()
        self._emit(event)
        if event.kind == StepKind.COMPARE:
            self.comparisons += 1
        elif event.kind == StepKind.SWAP:
            self.state.swap(event.i, event.j)
            self.swaps += 1
        elif event.kind == StepKind.OVERWRITE:
            self.state.assign(event.i, event.value)
            self.overwrites += 1
        if event.is_gated:
            self._pace()
