"""
bubble.py — Bubble Sort
========================
Repeated adjacent passes; each pass floats the largest remaining value to
the end, so the pass length shrinks by one every outer iteration.

Events per pass:
  1. Compare(j, j+1) for every adjacent pair
  2. Swap(j, j+1) when the left value is greater
  3. MarkSorted(n-1-i) once the pass has placed its maximum

The MarkSorted marker sits between passes, so a run reads
"... Swap(2,3), MarkSorted(3), Compare(0,1) ..." rather than one pass
running straight into the next.

A pass that performs zero swaps proves the whole range is ordered: the
loop stops right there and the closing MarkAllSorted covers the rest.
"""

from typing import List

from algorithms.instruments import Instruments


PSEUDOCODE: List[str] = [
    "def bubble_sort(a):",                        # 0
    "    for i in 0 .. n-2:",                     # 1
    "        swapped ← false",                    # 2
    "        for j in 0 .. n-2-i:",               # 3
    "            if a[j] > a[j+1]:",              # 4
    "                swap(a[j], a[j+1])",         # 5
    "                swapped ← true",             # 6
    "        if not swapped: break",              # 7
    "        mark a[n-1-i] sorted",               # 8
]


def bubble_sort(ops: Instruments) -> None:
    n = len(ops)
    for i in range(n - 1):
        swapped = False
        for j in range(n - 1 - i):
            if ops.compare(j, j + 1):
                ops.swap(j, j + 1)
                swapped = True
        if not swapped:
            break
        ops.mark_sorted(n - 1 - i)
    ops.mark_all_sorted()
