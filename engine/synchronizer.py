"""
synchronizer.py — Step Rendezvous
==================================
The StepSynchronizer is the ONLY point where the sort thread and the
renderer meet.  For every Step:

    sort thread                     renderer
    -----------                     --------
    hand_off(step)  ──render()──▶   draw snapshot + highlight
        (blocked)   ◀──ack──────    (return, or resolve a Future)
    hold `delay`                    frame stays on screen
    return True  →  generator resumes and applies the swap

Nothing is queued: the sort thread is suspended from the render call
until the acknowledgment, so frames arrive one at a time and in order.

Both waits (acknowledgment and display delay) watch the run's
CancellationToken.  When it fires, hand_off() returns False and the
caller must stop pulling steps.
"""

import logging
import threading
from concurrent import futures
from typing import Optional, Protocol, Tuple

from algorithms.step import Step
from sequence import NumberSequence

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Speed presets (seconds a highlighted step stays on screen)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   0.4,     # teaching mode
    "medium": 0.15,
    "normal": 0.05,
    "turbo":  0.01,
}

DEFAULT_DELAY = SPEED_PRESETS["normal"]

# how often an outstanding acknowledgment re-checks the token
ACK_POLL_INTERVAL = 0.01


# ---------------------------------------------------------------------------
# Cancellation
# ---------------------------------------------------------------------------
class CancellationToken:
    """One-shot cancel flag for a single run.  Never reused."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float) -> bool:
        """Sleep up to `timeout` seconds.  Returns True if cancelled."""
        return self._event.wait(timeout)


# ---------------------------------------------------------------------------
# Renderer protocol
# ---------------------------------------------------------------------------
class Renderer(Protocol):
    def render(
        self,
        snapshot: Tuple[int, ...],
        highlighted: Tuple[int, ...],
        step: Optional[Step] = None,
    ) -> Optional["futures.Future"]:
        """
        Draw `snapshot` with `highlighted` indices lit.

        Return None once drawn, or a Future the renderer resolves when
        the frame is on screen.
        """
        ...


class RenderInterrupted(Exception):
    """The renderer raised, or its acknowledgment failed for a reason other than cancellation."""


# ---------------------------------------------------------------------------
# StepSynchronizer
# ---------------------------------------------------------------------------
class StepSynchronizer:
    """
    Attributes:
        renderer  : Where frames go.
        token     : The run's CancellationToken.
        delay     : Hold time after a highlighted step; refresh steps get half.
        last_step : Most recent step the renderer acknowledged.
    """

    def __init__(
        self,
        renderer: Renderer,
        token: CancellationToken,
        delay: float = DEFAULT_DELAY,
    ):
        self.renderer  = renderer
        self.token     = token
        self.delay     = max(0.0, delay)
        self.last_step: Optional[Step] = None

    def hand_off(self, step: Step, sequence: NumberSequence) -> bool:
        """
        Render one step and hold it.  Returns False if the run was
        cancelled (or interrupted) and the caller must unwind.
        """
        if self.token.is_cancelled():
            return False

        highlighted = step.highlighted
        try:
            self._render(sequence.snapshot(), highlighted, step)
        except RenderInterrupted as exc:
            logger.warning("Render acknowledgment interrupted: %s", exc, exc_info=True)
            self.token.cancel()
            return False

        if self.token.is_cancelled():
            return False
        self.last_step = step

        hold = self.delay if highlighted else self.delay / 2
        return not self.token.wait(hold)

    def refresh(self, sequence: NumberSequence) -> None:
        """Redraw the current state with nothing highlighted.  No hold."""
        try:
            self._render(sequence.snapshot(), (), None, watch_token=False)
        except RenderInterrupted as exc:
            logger.warning("Refresh acknowledgment interrupted: %s", exc)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _render(
        self,
        snapshot: Tuple[int, ...],
        highlighted: Tuple[int, ...],
        step: Optional[Step],
        watch_token: bool = True,
    ) -> None:
        try:
            ack = self.renderer.render(snapshot, highlighted, step=step)
        except Exception as exc:
            raise RenderInterrupted(f"renderer raised {type(exc).__name__}: {exc}") from exc
        if ack is None:
            return
        self._await(ack, watch_token)

    def _await(self, ack: "futures.Future", watch_token: bool) -> None:
        while not ack.done():
            if watch_token and self.token.is_cancelled():
                ack.cancel()
                return
            futures.wait([ack], timeout=ACK_POLL_INTERVAL)

        if ack.cancelled():
            raise RenderInterrupted("acknowledgment was cancelled")
        exc = ack.exception()
        if exc is not None:
            raise RenderInterrupted(str(exc) or type(exc).__name__) from exc
