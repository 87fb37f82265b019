"""
insertion.py — Insertion Sort
==============================
Takes each element in turn as the key and shifts greater predecessors one
slot to the right until the key's slot is found.

Shifting mutates only one side at a time, so it is reported as
Overwrite(j+1, a[j]) rather than a Swap.  While shifting, the key lives
outside the array, which is why the decision reads the held key and not
the result of the Compare event.

Events per key:
  1. Compare(j, j+1) per shift check
  2. Overwrite(j+1, a[j]) per shift
  3. a final Overwrite(j+1, key), even when nothing moved
"""

from typing import List

from algorithms.instruments import Instruments


PSEUDOCODE: List[str] = [
    "def insertion_sort(a):",                     # 0
    "    for i in 1 .. n-1:",                     # 1
    "        key ← a[i]",                         # 2
    "        j ← i - 1",                          # 3
    "        while j ≥ 0 and a[j] > key:",        # 4
    "            a[j+1] ← a[j]",                  # 5
    "            j ← j - 1",                      # 6
    "        a[j+1] ← key",                       # 7
]


def insertion_sort(ops: Instruments) -> None:
    n = len(ops)
    for i in range(1, n):
        key = ops[i]
        j = i - 1
        while j >= 0:
            ops.compare(j, j + 1)
            if ops[j] > key:
                ops.overwrite(j + 1, ops[j])
                j -= 1
            else:
                break
        ops.overwrite(j + 1, key)
    ops.mark_all_sorted()
