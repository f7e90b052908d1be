"""
session.py — Animation Session
===============================
Runs one animated sort at a time.

State machine:
    IDLE     →  start(seq)   →  RUNNING
    RUNNING  →  Done shown   →  IDLE   (Completed, direction flips)
    RUNNING  →  cancel()     →  IDLE   (Cancelled, direction kept)
    RUNNING  →  start(seq)   →  SessionBusyError, run untouched

The sort runs on a worker thread so the render side stays responsive.
The worker drives the quicksort generator through a StepSynchronizer;
when hand_off() answers False it closes the generator, which unwinds
every recursive frame without applying the pending swap.

Start listeners fire inside start() once the run is claimed.  Outcome
listeners fire once per run, after highlights are cleared and
after the run lock is released, so a listener may start the next run.
"""

import enum
import logging
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional

from algorithms import quick_sort, Direction, Done
from engine.synchronizer import (
    CancellationToken,
    Renderer,
    StepSynchronizer,
    DEFAULT_DELAY,
)
from sequence import NumberSequence

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Outcome
# ---------------------------------------------------------------------------
class OutcomeKind(enum.Enum):
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class RunOutcome:
    kind:      OutcomeKind
    direction: Optional[Direction] = None   # set on COMPLETED only

    @classmethod
    def completed(cls, direction: Direction) -> "RunOutcome":
        return cls(OutcomeKind.COMPLETED, direction)

    @classmethod
    def cancelled(cls) -> "RunOutcome":
        return cls(OutcomeKind.CANCELLED)

    @property
    def is_completed(self) -> bool:
        return self.kind is OutcomeKind.COMPLETED


class SessionBusyError(RuntimeError):
    """start() was called while another run is still active."""


# ---------------------------------------------------------------------------
# AnimationSession
# ---------------------------------------------------------------------------
class AnimationSession:
    """
    Attributes:
        renderer       : Receives every frame.
        delay          : Seconds a highlighted step is held (applies to the next run).
        trace_compares : Also animate comparisons.
        direction      : Direction the NEXT run will use.
        last_outcome   : Outcome of the most recent finished run.
    """

    def __init__(
        self,
        renderer: Renderer,
        delay: float = DEFAULT_DELAY,
        trace_compares: bool = False,
    ):
        self.renderer       = renderer
        self.delay          = delay
        self.trace_compares = trace_compares
        self.direction:    Direction            = Direction.DESCENDING
        self.last_outcome: Optional[RunOutcome] = None

        self._run_lock  = threading.Lock()
        self._state_lock = threading.Lock()
        self._token:    Optional[CancellationToken] = None
        self._thread:   Optional[threading.Thread]  = None
        self._listeners: List[Callable[[RunOutcome], None]] = []
        self._start_listeners: List[Callable[[Direction], None]] = []

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, sequence: NumberSequence) -> Direction:
        """
        Begin sorting `sequence` in the current direction.

        Returns:
            The direction this run uses.

        Raises:
            SessionBusyError : a run is already active.
        """
        if not self._run_lock.acquire(blocking=False):
            raise SessionBusyError("A sort run is already in progress")

        direction = self.direction
        try:
            for callback in list(self._start_listeners):
                callback(direction)
        except Exception:
            self._run_lock.release()
            raise

        token     = CancellationToken()
        sync      = StepSynchronizer(self.renderer, token, self.delay)
        with self._state_lock:
            self._token  = token
            self._thread = threading.Thread(
                target=self._run,
                args=(sequence, direction, token, sync),
                name="sort-animation",
                daemon=True,
            )
            thread = self._thread

        logger.info("Starting %s sort of %d numbers", direction.value, len(sequence))
        thread.start()
        return direction

    def cancel(self) -> None:
        """Request cancellation of the active run.  No-op when idle."""
        with self._state_lock:
            token = self._token
        if token is None or token.is_cancelled():
            return
        logger.info("Cancellation requested")
        token.cancel()

    def on_outcome(self, callback: Callable[[RunOutcome], None]) -> None:
        """Register `callback(RunOutcome)`; called once at the end of every run."""
        self._listeners.append(callback)

    def on_start(self, callback: Callable[[Direction], None]) -> None:
        """
        Register `callback(Direction)`; called by start() once the run is
        claimed and before the worker draws anything.  A rejected start()
        never calls it.
        """
        self._start_listeners.append(callback)

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the active run.  Returns True if no run is left running."""
        with self._state_lock:
            thread = self._thread
        if thread is None:
            return True
        thread.join(timeout)
        return not thread.is_alive()

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def is_running(self) -> bool:
        return self._run_lock.locked()

    # ------------------------------------------------------------------
    # Worker
    # ------------------------------------------------------------------
    def _run(
        self,
        sequence: NumberSequence,
        direction: Direction,
        token: CancellationToken,
        sync: StepSynchronizer,
    ) -> None:
        outcome = RunOutcome.cancelled()
        try:
            if self._drive(sequence, direction, token, sync):
                outcome = RunOutcome.completed(direction)
            else:
                # leave no stale highlight behind
                sync.refresh(sequence)
        finally:
            # a failure in the sort core still propagates, but only after
            # the session is unlocked and the run reported
            with self._state_lock:
                if outcome.is_completed:
                    self.direction = direction.flipped()
                self.last_outcome = outcome
                self._token = None
            self._run_lock.release()

            logger.info("Sort run finished: %s", outcome.kind.value)
            self._notify(outcome)

    def _notify(self, outcome: RunOutcome) -> None:
        for callback in list(self._listeners):
            try:
                callback(outcome)
            except Exception:
                logger.exception("Outcome listener %r failed", callback)

    def _drive(
        self,
        sequence: NumberSequence,
        direction: Direction,
        token: CancellationToken,
        sync: StepSynchronizer,
    ) -> bool:
        """Pump the generator through the synchronizer.  True when Done was shown."""
        steps = quick_sort(sequence, direction, token.is_cancelled, self.trace_compares)
        try:
            for step in steps:
                delivered = sync.hand_off(step, sequence)
                if isinstance(step, Done):
                    # Done counts once drawn, even if cancelled during its hold
                    return sync.last_step is step
                if not delivered:
                    return False
            return False
        finally:
            steps.close()
