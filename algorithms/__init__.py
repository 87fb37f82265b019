"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every sorting algorithm the visualizer knows about.

    from algorithms import REGISTRY, list_algorithms, resolve_algorithm

REGISTRY is a dict:
    {
        "bubble": AlgoInfo(key, label, short_label, fn, pseudocode, …),
        …
    }

Every fn has the same shape:  fn(ops: Instruments) -> None.
Adding an algorithm is: write the function against Instruments, add one
entry here.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Dict, Optional

from algorithms.instruments import Instruments, RunCancelled
from algorithms.step        import StepEvent, StepKind, apply_event

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.bubble    import bubble_sort    as _bubble,    PSEUDOCODE as _bubble_pc
from algorithms.selection import selection_sort as _selection, PSEUDOCODE as _selection_pc
from algorithms.insertion import insertion_sort as _insertion, PSEUDOCODE as _insertion_pc
from algorithms.merge     import merge_sort     as _merge,     PSEUDOCODE as _merge_pc
from algorithms.quick     import quick_sort     as _quick,     PSEUDOCODE as _quick_pc
from algorithms.heap      import heap_sort      as _heap,      PSEUDOCODE as _heap_pc


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                         # registry key, e.g. "bubble"
    label:            str                         # human label, e.g. "Bubble Sort"
    short_label:      str                         # e.g. "Bubble"
    fn:               Callable[[Instruments], None]
    pseudocode:       List[str]
    tags:             List[str] = field(default_factory=list)
    stable:           bool      = False
    in_place:         bool      = True
    complexity_time:  str       = ""              # worst case
    complexity_space: str       = ""
    description:      str       = ""

    def to_dict(self) -> Dict[str, object]:
        return {
            "key":              self.key,
            "label":            self.label,
            "short_label":      self.short_label,
            "tags":             list(self.tags),
            "stable":           self.stable,
            "in_place":         self.in_place,
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "description":      self.description,
            "pseudocode":       list(self.pseudocode),
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bubble": AlgoInfo(
        key="bubble", label="Bubble Sort", short_label="Bubble",
        fn=_bubble, pseudocode=_bubble_pc,
        tags=["quadratic", "exchange", "adaptive"], stable=True,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Adjacent swaps float the maximum to the end. Stops early once a pass makes no swaps.",
    ),

    "selection": AlgoInfo(
        key="selection", label="Selection Sort", short_label="Selection",
        fn=_selection, pseudocode=_selection_pc,
        tags=["quadratic", "selection"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Finds the minimum of the remainder and swaps it into place. At most n-1 swaps.",
    ),

    "insertion": AlgoInfo(
        key="insertion", label="Insertion Sort", short_label="Insertion",
        fn=_insertion, pseudocode=_insertion_pc,
        tags=["quadratic", "insertion", "adaptive"], stable=True,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Shifts greater elements right to open a slot for each key. Fast on nearly sorted input.",
    ),

    "merge": AlgoInfo(
        key="merge", label="Merge Sort", short_label="Merge",
        fn=_merge, pseudocode=_merge_pc,
        tags=["divide-and-conquer", "linearithmic"], stable=True, in_place=False,
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="Sorts both halves recursively, then merges them by repeated minimum extraction.",
    ),

    "quick": AlgoInfo(
        key="quick", label="Quick Sort", short_label="Quick",
        fn=_quick, pseudocode=_quick_pc,
        tags=["divide-and-conquer", "partition"],
        complexity_time="O(n²)", complexity_space="O(n)",
        description="Lomuto partition around the last element, then recurse on both sides.",
    ),

    "heap": AlgoInfo(
        key="heap", label="Heap Sort", short_label="Heap",
        fn=_heap, pseudocode=_heap_pc,
        tags=["selection", "linearithmic"],
        complexity_time="O(n log n)", complexity_space="O(1)",
        description="Builds a max-heap, then repeatedly moves the root behind the shrinking heap.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def resolve_algorithm(name: str) -> Optional[AlgoInfo]:
    """
    Case-insensitive lookup by key ("bubble"), label ("Bubble Sort")
    or short label ("Bubble").  Returns None when nothing matches.
    """
    wanted = " ".join(str(name).split()).lower()
    for info in REGISTRY.values():
        if wanted in (info.key, info.label.lower(), info.short_label.lower()):
            return info
    return None


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "resolve_algorithm",
    "list_algorithms",
    "Instruments",
    "RunCancelled",
    "StepEvent",
    "StepKind",
    "apply_event",
]
