"""
recorder.py — Run Recorder & Analytics
========================================
Records a complete, unpaced algorithm run (every StepEvent), then computes
the counts the Analytics panel and Comparison Mode show.

Usage:
    rec = Recorder()
    metrics = rec.record("quick", [5, 3, 8, 1])   # runs synchronously, no delay
    rec.events                                    # full event list
    rec.export()                                  # serialisable snapshot

Comparison Mode:
    Record two algorithms over the SAME input, then compare(rec1, rec2).

The recording uses the same instrumented algorithm functions as a live run,
so the event list is exactly what a paced run of the same input emits.
"""

import time
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Sequence, Union

from arrays import ArrayState
from algorithms import AlgoInfo, resolve_algorithm
from algorithms.instruments import Instruments
from algorithms.step import StepEvent


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:     str   = ""
    algo_label:   str   = ""
    size:         int   = 0
    comparisons:  int   = 0
    swaps:        int   = 0
    overwrites:   int   = 0
    total_steps:  int   = 0          # every event, markers included
    wall_time_ms: float = 0.0        # unpaced wall-clock time
    sorted:       bool  = False


# ---------------------------------------------------------------------------
# ComparisonResult — side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_comparisons: str = ""   # which algo compared less
    winner_swaps:       str = ""
    winner_writes:      str = ""   # swaps + overwrites
    winner_steps:       str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        events  : Full list of StepEvents from the run.
        metrics : Computed RunMetrics (available after record()).
        initial : The input the run started from.
        final   : The array after the run.
    """

    def __init__(self):
        self.events:  List[StepEvent]      = []
        self.metrics: Optional[RunMetrics] = None
        self.initial: List[int]            = []
        self.final:   List[int]            = []
        self._algo_info: Optional[AlgoInfo] = None

    def record(self, algorithm: Union[str, AlgoInfo], values: Sequence[int]) -> RunMetrics:
        """Run `algorithm` over a copy of `values` to completion."""
        info = algorithm if isinstance(algorithm, AlgoInfo) else resolve_algorithm(algorithm)
        if info is None:
            raise ValueError(f"Unknown algorithm: {algorithm}")

        self._algo_info = info
        self.initial    = [int(v) for v in values]
        self.events     = []

        state = ArrayState(self.initial)
        ops   = Instruments.unpaced(state, self.events)

        start = time.monotonic()
        if len(state) >= 2:
            info.fn(ops)
        wall_ms = (time.monotonic() - start) * 1000

        self.final   = state.snapshot()
        self.metrics = RunMetrics(
            algo_key=info.key,
            algo_label=info.label,
            size=len(state),
            comparisons=ops.comparisons,
            swaps=ops.swaps,
            overwrites=ops.overwrites,
            total_steps=len(self.events),
            wall_time_ms=round(wall_ms, 2),
            sorted=state.is_sorted(),
        )
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "algo_key": self._algo_info.key if self._algo_info else "",
            "initial":  list(self.initial),
            "final":    list(self.final),
            "metrics":  asdict(self.metrics) if self.metrics else {},
            "events":   [e.to_dict() for e in self.events],
        }


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val, r_val):
        if l_val == r_val:
            return "tie"
        return l.algo_label if l_val < r_val else r.algo_label

    return ComparisonResult(
        left=l,
        right=r,
        winner_comparisons=winner(l.comparisons, r.comparisons),
        winner_swaps=winner(l.swaps, r.swaps),
        winner_writes=winner(l.swaps + l.overwrites, r.swaps + r.overwrites),
        winner_steps=winner(l.total_steps, r.total_steps),
    )
