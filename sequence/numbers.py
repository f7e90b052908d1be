"""
numbers.py — The Number Sequence
=================================
The list of integers the animation sorts.

Only two mutation paths exist:
  • swap(i, j)       – the one the sort uses, and the one the canvas draws
  • replace(values)  – bulk substitution at generation time

Every in-place reorder is therefore traceable to an explicit swap call.
Renderers never see the live list, only `snapshot()` tuples.
"""

import random
from typing import Iterable, Iterator, List, Optional, Tuple


# ---------------------------------------------------------------------------
# Generation bounds
# ---------------------------------------------------------------------------
MIN_VALUE   = 1
MAX_VALUE   = 1000
TRIGGER_MAX = 30      # values <= this regenerate the list when clicked


# ---------------------------------------------------------------------------
# NumberSequence
# ---------------------------------------------------------------------------
class NumberSequence:
    """
    Attributes:
        values : read-only view via snapshot(); the backing list is private.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Iterable[int] = ()):
        self._values: List[int] = [int(v) for v in values]

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def swap(self, i: int, j: int) -> None:
        """Exchange the elements at i and j.  i == j is a no-op."""
        self._check_index(i)
        self._check_index(j)
        if i == j:
            return
        self._values[i], self._values[j] = self._values[j], self._values[i]

    def replace(self, values: Iterable[int]) -> None:
        """Substitute the whole contents in one go."""
        self._values = [int(v) for v in values]

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    def snapshot(self) -> Tuple[int, ...]:
        return tuple(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, index: int) -> int:
        self._check_index(index)
        return self._values[index]

    def __iter__(self) -> Iterator[int]:
        return iter(list(self._values))

    def __eq__(self, other) -> bool:
        if isinstance(other, NumberSequence):
            return self._values == other._values
        return NotImplemented

    def __repr__(self) -> str:
        return f"NumberSequence({self._values!r})"

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _check_index(self, index: int) -> None:
        # bool is an int subclass but never a meaningful position
        if isinstance(index, bool) or not isinstance(index, int):
            raise IndexError(f"Sequence index must be an int, got {index!r}")
        if not 0 <= index < len(self._values):
            raise IndexError(
                f"Sequence index {index} out of range for length {len(self._values)}"
            )


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------
def _draw_values(count: int, rng: random.Random) -> List[int]:
    values = [rng.randint(TRIGGER_MAX + 1, MAX_VALUE) for _ in range(count - 1)]
    values.append(rng.randint(MIN_VALUE, TRIGGER_MAX))   # always one clickable
    rng.shuffle(values)
    return values


def generate(count: int, rng: Optional[random.Random] = None) -> NumberSequence:
    """
    Build a fresh sequence of `count` values in [1, 1000], at least one of
    which is <= 30.

    Raises:
        ValueError : count is not a positive integer.
    """
    if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
        raise ValueError(f"count must be a positive integer, got {count!r}")
    return NumberSequence(_draw_values(count, rng or random.Random()))


def regenerate(sequence: NumberSequence, rng: Optional[random.Random] = None) -> None:
    """Refill `sequence` in place with new values, keeping its length."""
    if len(sequence) == 0:
        raise ValueError("Cannot regenerate an empty sequence")
    sequence.replace(_draw_values(len(sequence), rng or random.Random()))
