"""
merge.py — Merge Sort
======================
Top-down recursive merge sort.  Each merge copies both sorted halves out
of the array, then writes the smaller head back one element at a time.

Events per merge of [lo .. mid] and [mid+1 .. hi]:
  1. Compare(lo+a, mid+1+b) per extraction while both halves are non-empty
  2. Overwrite(k, value) per placed element, including both drain phases

Ties take from the left half, keeping the sort stable.  The Compare
indices point at where the two heads started, since the array slots
themselves may already have been overwritten.
"""

from typing import List

from algorithms.instruments import Instruments


PSEUDOCODE: List[str] = [
    "def merge_sort(a, lo, hi):",                 # 0
    "    if lo ≥ hi: return",                     # 1
    "    mid ← (lo + hi) / 2",                    # 2
    "    merge_sort(a, lo, mid)",                 # 3
    "    merge_sort(a, mid+1, hi)",               # 4
    "    L ← a[lo..mid], R ← a[mid+1..hi]",       # 5
    "    while L and R not empty:",               # 6
    "        a[k++] ← L[0] ≤ R[0] ? pop(L) : pop(R)",  # 7
    "    drain L, then R, into a[k..]",           # 8
]


def merge_sort(ops: Instruments) -> None:
    _sort(ops, 0, len(ops) - 1)
    ops.mark_all_sorted()


def _sort(ops: Instruments, lo: int, hi: int) -> None:
    if lo >= hi:
        return
    mid = (lo + hi) // 2
    _sort(ops, lo, mid)
    _sort(ops, mid + 1, hi)
    _merge(ops, lo, mid, hi)


def _merge(ops: Instruments, lo: int, mid: int, hi: int) -> None:
    left  = [ops[k] for k in range(lo, mid + 1)]
    right = [ops[k] for k in range(mid + 1, hi + 1)]
    a, b, k = 0, 0, lo

    while a < len(left) and b < len(right):
        ops.compare(lo + a, mid + 1 + b)
        if left[a] <= right[b]:
            ops.overwrite(k, left[a])
            a += 1
        else:
            ops.overwrite(k, right[b])
            b += 1
        k += 1

    while a < len(left):
        ops.overwrite(k, left[a])
        a += 1
        k += 1

    while b < len(right):
        ops.overwrite(k, right[b])
        b += 1
        k += 1
