"""
Tests for engine/synchronizer.py
Rendezvous contract: render, acknowledge, hold, and cancellation at each wait
"""

import threading
import time
from concurrent.futures import Future

import pytest

from algorithms import Direction, Done, PivotChosen, Swapped
from engine import CancellationToken, Recorder, StepSynchronizer
from sequence import NumberSequence


class FutureRenderer:
    """Acknowledges asynchronously through a Future it hands back."""

    def __init__(self, resolve_after=0.02, fail=None, cancel=False, never=False):
        self.resolve_after = resolve_after
        self.fail = fail
        self.cancel = cancel
        self.never = never
        self.calls = []

    def render(self, snapshot, highlighted, step=None):
        self.calls.append((snapshot, highlighted))
        fut = Future()
        if self.never:
            return fut
        if self.cancel:
            fut.cancel()
            return fut

        def finish():
            if self.fail is not None:
                fut.set_exception(self.fail)
            else:
                fut.set_result(None)

        threading.Timer(self.resolve_after, finish).start()
        return fut


@pytest.fixture
def token():
    return CancellationToken()


@pytest.fixture
def seq():
    return NumberSequence([4, 9, 1])


class TestSynchronousRenderer:

    def test_renders_snapshot_and_highlight(self, token, seq):
        rec = Recorder(keep_history=True)
        sync = StepSynchronizer(rec, token, delay=0.0)
        step = Swapped(0, 2)
        assert sync.hand_off(step, seq) is True
        frame = rec.latest
        assert frame.values == (4, 9, 1)
        assert frame.highlighted == (0, 2)
        assert frame.step is step
        assert sync.last_step is step

    def test_cancelled_token_skips_render(self, token, seq):
        rec = Recorder(keep_history=True)
        sync = StepSynchronizer(rec, token, delay=0.0)
        token.cancel()
        assert sync.hand_off(PivotChosen(1), seq) is False
        assert rec.latest is None
        assert sync.last_step is None

    def test_refresh_step_holds_half_delay(self, token, seq, monkeypatch):
        waits = []
        monkeypatch.setattr(token, "wait", lambda timeout: waits.append(timeout) or False)
        sync = StepSynchronizer(Recorder(), token, delay=0.08)
        sync.hand_off(PivotChosen(0), seq)
        sync.hand_off(Done(Direction.ASCENDING), seq)
        assert waits == [pytest.approx(0.08), pytest.approx(0.04)]

    def test_cancel_cuts_the_hold_short(self, token, seq):
        sync = StepSynchronizer(Recorder(), token, delay=10.0)
        threading.Timer(0.05, token.cancel).start()
        started = time.monotonic()
        assert sync.hand_off(Swapped(0, 1), seq) is False
        assert time.monotonic() - started < 5.0

    def test_negative_delay_is_clamped(self, token):
        assert StepSynchronizer(Recorder(), token, delay=-1).delay == 0.0

    def test_renderer_exception_cancels_run(self, token, seq):
        class Broken:
            def render(self, snapshot, highlighted, step=None):
                raise OSError("display gone")

        sync = StepSynchronizer(Broken(), token, delay=0.0)
        assert sync.hand_off(Swapped(0, 1), seq) is False
        assert token.is_cancelled()
        assert sync.last_step is None
        sync.refresh(seq)

    def test_refresh_clears_highlight(self, token, seq):
        rec = Recorder()
        sync = StepSynchronizer(rec, token, delay=0.0)
        sync.hand_off(Swapped(0, 1), seq)
        token.cancel()
        sync.refresh(seq)
        assert rec.latest.highlighted == ()
        assert rec.latest.values == (4, 9, 1)


class TestAsyncAcknowledgment:

    def test_waits_for_future(self, token, seq):
        renderer = FutureRenderer(resolve_after=0.05)
        sync = StepSynchronizer(renderer, token, delay=0.0)
        started = time.monotonic()
        assert sync.hand_off(Swapped(0, 1), seq) is True
        assert time.monotonic() - started >= 0.04
        assert renderer.calls == [((4, 9, 1), (0, 1))]

    def test_failed_ack_cancels_run(self, token, seq):
        sync = StepSynchronizer(FutureRenderer(fail=RuntimeError("window closed")), token, delay=0.0)
        assert sync.hand_off(Swapped(0, 1), seq) is False
        assert token.is_cancelled()

    def test_cancelled_ack_cancels_run(self, token, seq):
        sync = StepSynchronizer(FutureRenderer(cancel=True), token, delay=0.0)
        assert sync.hand_off(Swapped(0, 1), seq) is False
        assert token.is_cancelled()

    def test_cancel_while_awaiting_ack(self, token, seq):
        sync = StepSynchronizer(FutureRenderer(never=True), token, delay=0.0)
        threading.Timer(0.05, token.cancel).start()
        started = time.monotonic()
        assert sync.hand_off(Swapped(0, 1), seq) is False
        assert time.monotonic() - started < 5.0
        assert sync.last_step is None


class TestCancellationToken:

    def test_starts_clear(self, token):
        assert not token.is_cancelled()
        assert token.wait(0) is False

    def test_cancel_is_sticky(self, token):
        token.cancel()
        token.cancel()
        assert token.is_cancelled()
        assert token.wait(0) is True
