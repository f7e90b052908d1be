"""
algorithms/__init__.py — Sorting Core
======================================
The step-producing side of the animation.

    from algorithms import quick_sort, select_pivot_index, Direction
    from algorithms import Step, PivotChosen, Compared, Swapped, Done
"""

from algorithms.step import Step, PivotChosen, Compared, Swapped, Done, Direction
from algorithms.pivot import select_pivot_index
from algorithms.quicksort import quick_sort, PSEUDOCODE

__all__ = [
    "Step",
    "PivotChosen",
    "Compared",
    "Swapped",
    "Done",
    "Direction",
    "select_pivot_index",
    "quick_sort",
    "PSEUDOCODE",
]
