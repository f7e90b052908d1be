"""
Tests for main.py
Flask routes: intro prompt validation, regenerate trigger, run control
"""

import threading
import time

import pytest

import main
from algorithms import Direction
from engine import RunOutcome, SPEED_PRESETS
from sequence import NumberSequence


def wait_idle(timeout=10):
    assert main.STATE.session.join(timeout)


class TestIndex:

    def test_intro_screen_first(self, client):
        res = client.get("/")
        assert res.status_code == 200
        body = res.get_data(as_text=True)
        assert "How many numbers to display?" in body
        assert 'id="intro-screen" class="screen active"' in body

    def test_sort_screen_after_generate(self, client):
        client.post("/api/numbers/generate", json={"count": 5})
        body = client.get("/").get_data(as_text=True)
        assert 'id="sort-screen" class="screen active"' in body
        assert 'id="num-4"' in body


class TestGenerate:

    @pytest.mark.parametrize("count", [1, "12", " 40 "])
    def test_valid_counts(self, client, count):
        res = client.post("/api/numbers/generate", json={"count": count})
        assert res.status_code == 200
        data = res.get_json()
        assert data["count"] == int(str(count).strip())
        assert len(main.STATE.sequence) == data["count"]
        assert "<svg" in data["svg"]

    @pytest.mark.parametrize("count", ["abc", "", None, "1.5"])
    def test_invalid_number(self, client, count):
        res = client.post("/api/numbers/generate", json={"count": count})
        assert res.status_code == 400
        assert res.get_json()["error"] == "Enter a valid number."

    @pytest.mark.parametrize("count", [0, -4, "-1"])
    def test_non_positive(self, client, count):
        res = client.post("/api/numbers/generate", json={"count": count})
        assert res.status_code == 400
        assert res.get_json()["error"] == "Enter a positive number."


class TestSelect:

    def test_small_value_regenerates(self, client):
        main.STATE.show(NumberSequence([500, 12, 700]))
        res = client.post("/api/numbers/select", json={"index": 1})
        assert res.status_code == 200
        assert len(main.STATE.sequence) == 3
        assert any(v <= 30 for v in main.STATE.sequence)

    def test_large_value_rejected(self, client):
        main.STATE.show(NumberSequence([500, 12, 700]))
        res = client.post("/api/numbers/select", json={"index": 0})
        assert res.status_code == 400
        assert res.get_json()["error"] == "Please select a value smaller or equal to 30."
        assert main.STATE.sequence.snapshot() == (500, 12, 700)

    @pytest.mark.parametrize("index", [-1, 3, "1", None, True])
    def test_bad_index(self, client, index):
        main.STATE.show(NumberSequence([500, 12, 700]))
        res = client.post("/api/numbers/select", json={"index": index})
        assert res.status_code == 400

    def test_needs_numbers(self, client):
        res = client.post("/api/numbers/select", json={"index": 0})
        assert res.status_code == 400


class TestSortRun:

    def test_start_requires_numbers(self, client):
        res = client.post("/api/sort/start")
        assert res.status_code == 400

    def test_runs_toggle_direction(self, client):
        main.STATE.show(NumberSequence([42, 7, 15, 500, 3]))

        res = client.post("/api/sort/start")
        assert res.status_code == 200
        assert res.get_json()["direction"] == "descending"
        wait_idle()
        assert main.STATE.sequence.snapshot() == (500, 42, 15, 7, 3)

        res = client.post("/api/sort/start")
        assert res.get_json()["direction"] == "ascending"
        wait_idle()
        assert main.STATE.sequence.snapshot() == (3, 7, 15, 42, 500)

        state = client.get("/api/state").get_json()
        assert state["running"] is False
        assert state["outcome"] == "completed"
        assert state["next_direction"] == "descending"
        assert "Completed" in state["status"]

    def test_second_start_while_running_is_409(self, client):
        main.STATE.session.delay = 5.0
        main.STATE.show(NumberSequence(list(range(1, 40))))
        assert client.post("/api/sort/start").status_code == 200
        assert client.post("/api/sort/start").status_code == 409
        assert client.post("/api/numbers/generate", json={"count": 3}).status_code == 409
        assert client.post("/api/numbers/select", json={"index": 0}).status_code == 409

        client.post("/api/sort/cancel")
        wait_idle()
        state = client.get("/api/state").get_json()
        assert state["outcome"] == "cancelled"
        assert state["next_direction"] == "descending"
        assert sorted(main.STATE.sequence.snapshot()) == list(range(1, 40))

    def test_rejected_start_leaves_active_run_frames(self, client):
        main.STATE.session.delay = 5.0
        main.STATE.show(NumberSequence(list(range(1, 40))))
        assert client.post("/api/sort/start").status_code == 200

        deadline = time.monotonic() + 5
        while main.STATE.recorder.metrics.total_frames == 0 and time.monotonic() < deadline:
            time.sleep(0.01)
        metrics = main.STATE.recorder.metrics
        frames_before = metrics.total_frames
        assert frames_before > 0

        assert client.post("/api/sort/start").status_code == 409
        assert main.STATE.recorder.metrics is metrics
        assert metrics.total_frames == frames_before
        assert metrics.direction == "descending"

        client.post("/api/sort/cancel")
        wait_idle()

    def test_start_waits_for_regenerate_to_finish(self, client, monkeypatch):
        main.STATE.show(NumberSequence([500, 12, 700, 64]))
        real_regenerate = main.regenerate
        seen = {}
        start_codes = []

        def post_start():
            with main.app.test_client() as other:
                start_codes.append(other.post("/api/sort/start").status_code)

        def regenerate_with_start_in_flight(sequence):
            racer = threading.Thread(target=post_start)
            racer.start()
            racer.join(0.2)
            seen["racer"] = racer
            seen["start_blocked"] = racer.is_alive()
            seen["running_during_replace"] = main.STATE.session.is_running
            real_regenerate(sequence)
            seen["regenerated"] = sorted(sequence.snapshot())

        monkeypatch.setattr(main, "regenerate", regenerate_with_start_in_flight)
        res = client.post("/api/numbers/select", json={"index": 1})
        assert res.status_code == 200

        seen["racer"].join(5)
        assert seen["start_blocked"]
        assert seen["running_during_replace"] is False
        assert start_codes == [200]

        wait_idle()
        assert main.STATE.session.last_outcome == RunOutcome.completed(Direction.DESCENDING)
        assert sorted(main.STATE.sequence.snapshot()) == seen["regenerated"]
        assert Direction.DESCENDING.is_ordered(main.STATE.sequence.snapshot())

    def test_cancel_when_idle(self, client):
        res = client.post("/api/sort/cancel")
        assert res.status_code == 200
        assert res.get_json()["running"] is False

    def test_reset_returns_to_intro(self, client):
        client.post("/api/numbers/generate", json={"count": 4})
        res = client.post("/api/reset")
        assert res.get_json()["screen"] == "intro"
        assert main.STATE.sequence is None


class TestState:

    def test_state_before_anything(self, client):
        data = client.get("/api/state").get_json()
        assert data["svg"] == ""
        assert data["frame"] is None
        assert data["next_direction"] == "descending"

    def test_state_shows_latest_frame(self, client):
        main.STATE.show(NumberSequence([3, 2, 1]))
        data = client.get("/api/state").get_json()
        assert 'id="num-2"' in data["svg"]
        assert data["running"] is False


class TestSpeed:

    @pytest.mark.parametrize("speed", list(SPEED_PRESETS))
    def test_known_preset(self, client, speed):
        res = client.post("/api/config/speed", json={"speed": speed})
        assert res.status_code == 200
        assert main.STATE.session.delay == SPEED_PRESETS[speed]

    def test_unknown_preset(self, client):
        res = client.post("/api/config/speed", json={"speed": "ludicrous"})
        assert res.status_code == 400

    @pytest.mark.parametrize("speed", [["turbo"], {"name": "turbo"}, 3, None])
    def test_non_string_preset(self, client, speed):
        res = client.post("/api/config/speed", json={"speed": speed})
        assert res.status_code == 400
        assert main.STATE.speed == "turbo"


class TestConfig:

    def test_defaults_are_valid(self):
        main.check_config({"SORTER_SPEED": "normal", "SORTER_DEFAULT_COUNT": 30})

    @pytest.mark.parametrize("speed", ["warp", ["turbo"], None])
    def test_unknown_speed_rejected(self, speed):
        with pytest.raises(ValueError, match="SORTER_SPEED"):
            main.check_config({"SORTER_SPEED": speed, "SORTER_DEFAULT_COUNT": 30})

    @pytest.mark.parametrize("count", [0, -3, "30", True])
    def test_bad_default_count_rejected(self, count):
        with pytest.raises(ValueError, match="SORTER_DEFAULT_COUNT"):
            main.check_config({"SORTER_SPEED": "normal", "SORTER_DEFAULT_COUNT": count})
