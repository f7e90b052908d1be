"""Shared fixtures: recorders, zero-delay sessions and a clean web state."""
import random

import pytest

import main
from engine import AnimationSession, Recorder
from sequence import NumberSequence


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def recorder():
    return Recorder(keep_history=True)


@pytest.fixture
def session(recorder):
    """Session with no display delay so runs finish immediately."""
    s = AnimationSession(recorder, delay=0.0)
    yield s
    s.cancel()
    s.join(timeout=5)


@pytest.fixture
def example_sequence():
    return NumberSequence([42, 7, 15, 500, 3])


@pytest.fixture
def client():
    main.app.config["TESTING"] = True
    main.STATE = main.SorterState("turbo")
    main.STATE.session.delay = 0.0
    with main.app.test_client() as c:
        yield c
    main.STATE.session.cancel()
    main.STATE.session.join(timeout=5)
    main.STATE = None
