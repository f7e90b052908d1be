"""
engine/
-------
Run orchestration & rendering hand-off.

    from engine import AnimationSession, Recorder, RunOutcome
"""

from engine.synchronizer import (
    StepSynchronizer,
    CancellationToken,
    Renderer,
    RenderInterrupted,
    SPEED_PRESETS,
    DEFAULT_DELAY,
)
from engine.recorder import Recorder, Frame, RunMetrics
from engine.session import AnimationSession, RunOutcome, OutcomeKind, SessionBusyError

__all__ = [
    "StepSynchronizer",
    "CancellationToken",
    "Renderer",
    "RenderInterrupted",
    "SPEED_PRESETS",
    "DEFAULT_DELAY",
    "Recorder",
    "Frame",
    "RunMetrics",
    "AnimationSession",
    "RunOutcome",
    "OutcomeKind",
    "SessionBusyError",
]
