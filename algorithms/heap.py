"""
heap.py — Heap Sort
====================
Builds a max-heap by sifting down from the last parent towards the root,
then repeatedly swaps the root with the last unsorted slot and re-sifts
the shrunken heap.

Events:
  1. Compare(child, largest) for the left then the right child
  2. Swap(parent, largest) whenever a child wins, then sift further down
  3. per extraction: Swap(0, end), sift, MarkSorted(end)
  4. the last extraction is the root itself: Swap(0,0), MarkSorted(0)
  5. MarkAllSorted
"""

from typing import List

from algorithms.instruments import Instruments


PSEUDOCODE: List[str] = [
    "def heap_sort(a):",                          # 0
    "    for i in n/2-1 down to 0:",              # 1
    "        sift_down(a, n, i)",                 # 2
    "    for end in n-1 down to 0:",              # 3
    "        swap(a[0], a[end])",                 # 4
    "        sift_down(a, end, 0)",               # 5
    "        mark a[end] sorted",                 # 6
    "def sift_down(a, size, i):",                 # 7
    "    largest ← max(i, 2i+1, 2i+2)",           # 8
    "    if largest ≠ i:",                        # 9
    "        swap(a[i], a[largest])",             # 10
    "        sift_down(a, size, largest)",        # 11
]


def heap_sort(ops: Instruments) -> None:
    n = len(ops)
    for i in range(n // 2 - 1, -1, -1):
        _sift_down(ops, n, i)

    for end in range(n - 1, -1, -1):
        ops.swap(0, end)
        _sift_down(ops, end, 0)
        ops.mark_sorted(end)

    ops.mark_all_sorted()


def _sift_down(ops: Instruments, size: int, i: int) -> None:
    largest = i
    left    = 2 * i + 1
    right   = 2 * i + 2
    if left < size and ops.compare(left, largest):
        largest = left
    if right < size and ops.compare(right, largest):
        largest = right
    if largest != i:
        ops.swap(i, largest)
        _sift_down(ops, size, largest)
