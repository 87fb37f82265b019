"""
selection.py — Selection Sort
==============================
For each position i, scan the unsorted remainder for the minimum and swap
it into place.

Events per outer iteration:
  1. Compare(min, j) for every j > i against the running minimum candidate
  2. at most one Swap(i, min), skipped when the minimum is already at i
  3. MarkSorted(i)
"""

from typing import List

from algorithms.instruments import Instruments


PSEUDOCODE: List[str] = [
    "def selection_sort(a):",                     # 0
    "    for i in 0 .. n-2:",                     # 1
    "        min ← i",                            # 2
    "        for j in i+1 .. n-1:",               # 3
    "            if a[j] < a[min]: min ← j",      # 4
    "        if min ≠ i: swap(a[i], a[min])",     # 5
    "        mark a[i] sorted",                   # 6
]


def selection_sort(ops: Instruments) -> None:
    n = len(ops)
    for i in range(n - 1):
        smallest = i
        for j in range(i + 1, n):
            # a[smallest] > a[j]  ⇔  a[j] < a[smallest]
            if ops.compare(smallest, j):
                smallest = j
        if smallest != i:
            ops.swap(i, smallest)
        ops.mark_sorted(i)
    ops.mark_all_sorted()
