"""
pivot.py — Median-of-Three Pivot Selection
===========================================
Looks at the first, middle and last elements of a range and returns the
index holding the median value.

Ties are broken by which check fires first:  mid, then low, then high.
The animation replays identically for identical values, so this order
must not change.
"""

from sequence import NumberSequence


def select_pivot_index(sequence: NumberSequence, low: int, high: int) -> int:
    """
    Args:
        sequence : values to inspect (read only).
        low      : first index of the range.
        high     : last index of the range (inclusive).

    Returns:
        Whichever of low, mid or high holds the median value.
    """
    mid = low + (high - low) // 2

    a = sequence[low]
    b = sequence[mid]
    c = sequence[high]

    if a <= b <= c or c <= b <= a:
        return mid
    if b <= a <= c or c <= a <= b:
        return low
    return high
