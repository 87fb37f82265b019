"""
step.py — Algorithm Step Events
================================
Every instrumented algorithm reports what it does as a stream of StepEvents.
A StepEvent is one atomic, externally observable operation:

    Compare(i, j)        – two indices inspected, nothing mutated
    Swap(i, j)           – values at i and j exchanged
    Overwrite(i, value)  – a computed value written at i (merge, insertion shifts)
    MarkSorted(i)        – index i has reached its final position
    MarkAllSorted()      – terminal sweep, every index is final

Design decisions:
  - StepEvent is a frozen dataclass, a tagged variant keyed on `kind`.
    Fields that don't apply to a kind stay None.
  - The renderer's picture is a pure fold over the event sequence, so
    events are never batched, reordered or coalesced.
  - str(event) renders the canonical form above ("Swap(0,1)"), which is
    what tests and logs compare against.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class StepKind(Enum):
    COMPARE         = "compare"
    SWAP            = "swap"
    OVERWRITE       = "overwrite"
    MARK_SORTED     = "mark_sorted"
    MARK_ALL_SORTED = "mark_all_sorted"


# kinds that wait on the rate limiter after being emitted
GATED_KINDS    = frozenset({StepKind.COMPARE, StepKind.SWAP, StepKind.OVERWRITE})
MUTATION_KINDS = frozenset({StepKind.SWAP, StepKind.OVERWRITE})

_NAMES = {
    StepKind.COMPARE:         "Compare",
    StepKind.SWAP:            "Swap",
    StepKind.OVERWRITE:       "Overwrite",
    StepKind.MARK_SORTED:     "MarkSorted",
    StepKind.MARK_ALL_SORTED: "MarkAllSorted",
}


@dataclass(frozen=True)
class StepEvent:
    """
    Attributes:
        kind  : Which operation this is.
        i     : First index (all kinds except MARK_ALL_SORTED).
        j     : Second index (COMPARE / SWAP only).
        value : Written value (OVERWRITE only).
    """

    kind:  StepKind
    i:     Optional[int] = None
    j:     Optional[int] = None
    value: Optional[int] = None

    # -- constructors --
    @classmethod
    def compare(cls, i: int, j: int) -> "StepEvent":
        return cls(StepKind.COMPARE, i, j)

    @classmethod
    def swap(cls, i: int, j: int) -> "StepEvent":
        return cls(StepKind.SWAP, i, j)

    @classmethod
    def overwrite(cls, i: int, value: int) -> "StepEvent":
        return cls(StepKind.OVERWRITE, i, value=value)

    @classmethod
    def mark_sorted(cls, i: int) -> "StepEvent":
        return cls(StepKind.MARK_SORTED, i)

    @classmethod
    def mark_all_sorted(cls) -> "StepEvent":
        return cls(StepKind.MARK_ALL_SORTED)

    # -- classification --
    @property
    def is_gated(self) -> bool:
        return self.kind in GATED_KINDS

    @property
    def is_mutation(self) -> bool:
        return self.kind in MUTATION_KINDS

    # -- serialisation --
    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"kind": self.kind.value}
        if self.i is not None:
            d["i"] = self.i
        if self.j is not None:
            d["j"] = self.j
        if self.value is not None:
            d["value"] = self.value
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StepEvent":
        return cls(
            kind=StepKind(data["kind"]),
            i=data.get("i"),
            j=data.get("j"),
            value=data.get("value"),
        )

    def __str__(self) -> str:
        name = _NAMES[self.kind]
        if self.kind in (StepKind.COMPARE, StepKind.SWAP):
            return f"{name}({self.i},{self.j})"
        if self.kind == StepKind.OVERWRITE:
            return f"{name}({self.i},{self.value})"
        if self.kind == StepKind.MARK_SORTED:
            return f"{name}({self.i})"
        return f"{name}()"


def apply_event(values: list, event: StepEvent) -> None:
    """Fold one event into a plain list (what a renderer does to its bars)."""
    if not event.is_mutation:
        return
    if event.kind == StepKind.SWAP:
        values[event.i], values[event.j] = values[event.j], values[event.i]
    else:
        values[event.i] = event.value
