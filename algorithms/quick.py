"""
quick.py — Quick Sort
======================
Lomuto partition around the last element of the range, then recurse on
both sides of the placed pivot.

Events per partition of [lo .. hi]:
  1. Compare(j, hi) for each scanned element against the pivot
  2. Swap(boundary, j) when the element is less than the pivot
     (a self-swap when boundary == j is still reported)
  3. a final Swap(boundary+1, hi) placing the pivot
"""

import operator
from typing import List

from algorithms.instruments import Instruments


PSEUDOCODE: List[str] = [
    "def quick_sort(a, lo, hi):",                 # 0
    "    if lo < hi:",                            # 1
    "        p ← partition(a, lo, hi)",           # 2
    "        quick_sort(a, lo, p-1)",             # 3
    "        quick_sort(a, p+1, hi)",             # 4
    "def partition(a, lo, hi):",                  # 5
    "    pivot ← a[hi], i ← lo - 1",              # 6
    "    for j in lo .. hi-1:",                   # 7
    "        if a[j] < pivot: i++, swap(a[i], a[j])",  # 8
    "    swap(a[i+1], a[hi]); return i+1",        # 9
]


def quick_sort(ops: Instruments) -> None:
    _sort(ops, 0, len(ops) - 1)
    ops.mark_all_sorted()


def _sort(ops: Instruments, lo: int, hi: int) -> None:
    if lo < hi:
        p = _partition(ops, lo, hi)
        _sort(ops, lo, p - 1)
        _sort(ops, p + 1, hi)


def _partition(ops: Instruments, lo: int, hi: int) -> int:
    # the pivot stays at hi until the final swap
    boundary = lo - 1
    for j in range(lo, hi):
        if ops.compare(j, hi, operator.lt):
            boundary += 1
            ops.swap(boundary, j)
    ops.swap(boundary + 1, hi)
    return boundary + 1
