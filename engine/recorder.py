"""
recorder.py — Frame Recorder & Run Metrics
===========================================
A Renderer that keeps frames instead of drawing them.  The web UI
reads `latest` on every poll and turns it into SVG; tests switch on
`keep_history` and inspect every frame the sort produced.

Usage:
    rec = Recorder(keep_history=True)
    session = AnimationSession(rec)
    session.start(seq)
    session.join()
    rec.frames          # every Frame, in render order
    rec.metrics         # RunMetrics for the last run

Thread safety:
  render() is called from the sort thread while Flask request threads
  read `latest`.  Both go through one lock.
"""

import threading
import time
from dataclasses import dataclass
from typing import List, Optional, Tuple

from algorithms.step import Step, Swapped


# ---------------------------------------------------------------------------
# Frame: one rendered picture
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Frame:
    number:      int              = 0
    values:      Tuple[int, ...]  = ()
    highlighted: Tuple[int, ...]  = ()
    step:        Optional[Step]   = None


# ---------------------------------------------------------------------------
# Metrics dataclass: what the status panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    direction:     str   = ""
    outcome:       str   = ""        # "completed" / "cancelled", empty while running
    total_frames:  int   = 0
    swaps:         int   = 0
    wall_time_ms:  float = 0.0


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        keep_history : Keep every frame, not just the latest.
        frames       : Every frame rendered since the last begin_run() (if keep_history).
        metrics      : RunMetrics of the current / last run.
    """

    def __init__(self, keep_history: bool = False):
        self.keep_history = keep_history
        self.frames:  List[Frame] = []
        self.metrics: RunMetrics  = RunMetrics()

        self._lock        = threading.Lock()
        self._latest:     Optional[Frame] = None
        self._counter:    int   = 0
        self._start_time: float = 0.0

    # ------------------------------------------------------------------
    # Renderer protocol
    # ------------------------------------------------------------------
    def render(
        self,
        snapshot: Tuple[int, ...],
        highlighted: Tuple[int, ...],
        step: Optional[Step] = None,
    ) -> None:
        self._push(snapshot, highlighted, step, count=True)

    def _push(self, snapshot, highlighted, step, count: bool) -> None:
        with self._lock:
            frame = Frame(
                number=self._counter,
                values=tuple(snapshot),
                highlighted=tuple(highlighted),
                step=step,
            )
            self._counter += 1
            self._latest = frame
            if not count:
                return
            if self.keep_history:
                self.frames.append(frame)
            self.metrics.total_frames += 1
            if isinstance(step, Swapped):
                self.metrics.swaps += 1

    # ------------------------------------------------------------------
    # Run bookkeeping
    # ------------------------------------------------------------------
    def begin_run(self, direction: str) -> None:
        with self._lock:
            self.frames      = []
            self.metrics     = RunMetrics(direction=direction)
            self._start_time = time.monotonic()

    def end_run(self, outcome: str) -> None:
        with self._lock:
            self.metrics.outcome      = outcome
            self.metrics.wall_time_ms = round((time.monotonic() - self._start_time) * 1000, 2)

    def show(self, snapshot: Tuple[int, ...]) -> None:
        """Display a sequence outside any run (fresh list, regenerate)."""
        self._push(snapshot, (), None, count=False)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def latest(self) -> Optional[Frame]:
        with self._lock:
            return self._latest

    def swapped_pairs(self) -> List[Tuple[int, int]]:
        """(i, j) of every Swapped frame in history, in order."""
        with self._lock:
            return [(f.step.i, f.step.j) for f in self.frames if isinstance(f.step, Swapped)]
