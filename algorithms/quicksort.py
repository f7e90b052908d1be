"""
quicksort.py — Median-of-Three Quicksort
=========================================
Generator-based in-place quicksort (Lomuto partition).  Yields a Step at
every event a viewer should see:
  1. Pivot picked by median of three  →  PivotChosen
  2. Pivot moved to the end of the range  →  Swapped
  3. Each value that belongs left of the pivot  →  Swapped
  4. Pivot placed in its final slot  →  Swapped
  5. Whole sequence sorted  →  Done

A Swapped step is yielded BEFORE the exchange happens.  The consumer
draws the highlighted pair, and only when it resumes the generator are
the two values actually moved.  Closing the generator at a yield
therefore never leaves a swap half done.

Swaps of an index with itself are skipped entirely (no step, no swap).

Cancellation is cooperative: `should_stop` is polled at the top of every
recursive call.  Once it answers True nothing else is yielded, not even
Done.
"""

from typing import Callable, Generator, List

from sequence import NumberSequence
from algorithms.pivot import select_pivot_index
from algorithms.step import Step, PivotChosen, Compared, Swapped, Done, Direction


# ---------------------------------------------------------------------------
# Pseudocode: each string is one displayed line; index = pseudocode_line
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def quick_sort(seq, low, high):",                # 0
    "    if low >= high: return",                     # 1
    "    if cancelled: return",                       # 2
    "    p ← median_of_three(seq, low, high)",        # 3
    "    swap(seq[p], seq[high])",                    # 4
    "    pivot ← seq[high]",                          # 5
    "    boundary ← low - 1",                         # 6
    "    for j in low .. high - 1:",                  # 7
    "        if seq[j] goes before pivot:",           # 8
    "            boundary += 1; swap(seq[boundary], seq[j])",  # 9
    "    swap(seq[boundary + 1], seq[high])",         # 10
    "    quick_sort(seq, low, boundary)",             # 11
    "    quick_sort(seq, boundary + 2, high)",        # 12
    "done",                                           # 13
]


def _never() -> bool:
    return False


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def quick_sort(
    sequence: NumberSequence,
    direction: Direction,
    should_stop: Callable[[], bool] = _never,
    trace_compares: bool = False,
) -> Generator[Step, None, None]:
    """
    Sorts `sequence` in place, yielding Steps as it goes.

    Args:
        sequence       : mutated in place through swap(); never copied.
        direction      : ASCENDING or DESCENDING.
        should_stop    : cancellation check, polled before each recursive descent.
        trace_compares : also yield a Compared step for every comparison.

    Yields:
        PivotChosen / Compared / Swapped steps, then Done unless cancelled.
    """
    yield from _sort_range(sequence, 0, len(sequence) - 1, direction, should_stop, trace_compares)

    if should_stop():
        return
    yield Done(direction)


def _sort_range(
    seq: NumberSequence,
    low: int,
    high: int,
    direction: Direction,
    should_stop: Callable[[], bool],
    trace_compares: bool,
) -> Generator[Step, None, None]:
    if low >= high:
        return
    if should_stop():
        return

    pivot_index = select_pivot_index(seq, low, high)
    yield PivotChosen(pivot_index)
    if pivot_index != high:
        yield Swapped(pivot_index, high, line=4)
        seq.swap(pivot_index, high)

    pivot    = seq[high]
    boundary = low - 1
    for j in range(low, high):
        if trace_compares:
            yield Compared(j, high)
        if direction.precedes(seq[j], pivot):
            boundary += 1
            if boundary != j:
                yield Swapped(boundary, j)
                seq.swap(boundary, j)

    split = boundary + 1
    if split != high:
        yield Swapped(split, high, line=10)
        seq.swap(split, high)

    yield from _sort_range(seq, low, split - 1, direction, should_stop, trace_compares)
    yield from _sort_range(seq, split + 1, high, direction, should_stop, trace_compares)
