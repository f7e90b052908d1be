"""
step.py — Sort Step Records
============================
The quicksort generator yields one of these for every event a viewer
should see:

    • PivotChosen  – median-of-three picked an index
    • Compared     – value vs pivot (only when tracing is switched on)
    • Swapped      – two indices are ABOUT to be exchanged
    • Done         – the range is sorted

Design decisions:
  - Steps are frozen dataclasses.  They carry indices only, never values;
    the renderer reads values from the sequence snapshot it is handed.
  - `highlighted` is what the canvas lights up.  A step with an empty
    highlight is a pure state refresh and is held on screen for half
    the normal delay.
  - `pseudocode_line` indexes algorithms.quicksort.PSEUDOCODE.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Tuple


# ---------------------------------------------------------------------------
# Direction: comparison polarity of one run
# ---------------------------------------------------------------------------
class Direction(Enum):
    ASCENDING  = "ascending"
    DESCENDING = "descending"

    def flipped(self) -> "Direction":
        if self is Direction.ASCENDING:
            return Direction.DESCENDING
        return Direction.ASCENDING

    def precedes(self, value: int, pivot: int) -> bool:
        """True when `value` belongs left of the pivot."""
        if self is Direction.ASCENDING:
            return value < pivot
        return value > pivot

    def is_ordered(self, values: Iterable[int]) -> bool:
        vals = list(values)
        if self is Direction.ASCENDING:
            return all(a <= b for a, b in zip(vals, vals[1:]))
        return all(a >= b for a, b in zip(vals, vals[1:]))


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------
class Step:
    """Base for every step record."""

    LINE: int = 0

    @property
    def pseudocode_line(self) -> int:
        return self.LINE

    @property
    def highlighted(self) -> Tuple[int, ...]:
        return ()

    @property
    def explanation(self) -> str:
        return ""


@dataclass(frozen=True)
class PivotChosen(Step):
    index: int

    LINE = 3

    @property
    def highlighted(self) -> Tuple[int, ...]:
        return (self.index,)

    @property
    def explanation(self) -> str:
        return (
            f"Median of three: index {self.index} holds the middle value of "
            f"the first, middle and last elements, so it becomes the pivot."
        )


@dataclass(frozen=True)
class Compared(Step):
    i: int
    j: int

    LINE = 8

    @property
    def highlighted(self) -> Tuple[int, ...]:
        return (self.i, self.j)

    @property
    def explanation(self) -> str:
        return f"Compare index {self.i} against the pivot at index {self.j}."


@dataclass(frozen=True)
class Swapped(Step):
    i: int
    j: int
    line: int = field(default=9, compare=False)

    def __post_init__(self):
        if self.i == self.j:
            raise ValueError(f"Swapped step needs two distinct indices, got {self.i}")

    @property
    def pseudocode_line(self) -> int:
        return self.line

    @property
    def highlighted(self) -> Tuple[int, ...]:
        return (self.i, self.j)

    @property
    def explanation(self) -> str:
        return f"Swap the values at indices {self.i} and {self.j}."


@dataclass(frozen=True)
class Done(Step):
    direction: Direction

    LINE = 13

    @property
    def explanation(self) -> str:
        return f"Sorted in {self.direction.value} order."
