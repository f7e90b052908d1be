"""
sequence/
---------
Core data layer.  Public API:

    from sequence import NumberSequence, generate, regenerate
"""

from sequence.numbers import (
    NumberSequence,
    generate,
    regenerate,
    MIN_VALUE,
    MAX_VALUE,
    TRIGGER_MAX,
)

__all__ = [
    "NumberSequence",
    "generate",
    "regenerate",
    "MIN_VALUE",
    "MAX_VALUE",
    "TRIGGER_MAX",
]
