"""
main.py — Quicksort Animator Flask App
=======================================
The web server that powers the animation.

Routes:
  GET  /                       – main UI (intro screen or sort screen)
  POST /api/numbers/generate   – build a fresh list of N numbers
  POST /api/numbers/select     – click a number (<= 30 regenerates)
  POST /api/sort/start         – start an animated sort run
  POST /api/sort/cancel        – cancel the active run
  POST /api/reset              – back to the intro screen
  GET  /api/state              – latest frame + status (polled by the page)
  POST /api/config/speed       – step delay preset for the next run

State management:
  A sort run lives on a background thread, so its state cannot sit in
  the Flask cookie session.  One in-process SorterState holds:
    • sequence  – the NumberSequence on screen (None on the intro screen)
    • recorder  – Renderer the sort thread draws into; polled by /api/state
    • session   – AnimationSession (one run at a time, direction toggle)
    • speed     – selected speed preset
    • lock      – held by routes that check for a run and then act on it

Configuration (Flask config, overridable via FLASK_-prefixed env vars,
e.g. FLASK_SORTER_SPEED=turbo; checked once at import):
    SORTER_SPEED          – initial speed preset ("normal")
    SORTER_DEFAULT_COUNT  – value pre-filled in the intro prompt
"""

import logging
import os
import sys
import threading
from typing import Optional

from flask import Flask, render_template_string, request, jsonify

# add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from sequence import NumberSequence, generate, regenerate, TRIGGER_MAX
from algorithms import Direction, PSEUDOCODE
from engine import AnimationSession, Recorder, RunOutcome, SessionBusyError, SPEED_PRESETS
from ui import (
    render_numbers,
    intro_panel,
    sort_controls,
    status_panel,
    pseudocode_viewer,
    explanation_panel,
)

logger = logging.getLogger(__name__)


app = Flask(__name__)
app.config.from_mapping(
    SORTER_SPEED="normal",
    SORTER_DEFAULT_COUNT=30,
)
app.config.from_prefixed_env()


def check_config(config) -> None:
    """Reject bad SORTER_* settings at startup instead of on every request."""
    speed = config["SORTER_SPEED"]
    if not _is_preset(speed):
        raise ValueError(
            f"SORTER_SPEED must be one of {', '.join(SPEED_PRESETS)}, got {speed!r}"
        )
    count = config["SORTER_DEFAULT_COUNT"]
    if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
        raise ValueError(f"SORTER_DEFAULT_COUNT must be a positive integer, got {count!r}")


def _is_preset(speed) -> bool:
    return isinstance(speed, str) and speed in SPEED_PRESETS


check_config(app.config)


# ---------------------------------------------------------------------------
# Sorter State
# ---------------------------------------------------------------------------
class SorterState:
    def __init__(self, speed: str = "normal"):
        if not _is_preset(speed):
            raise ValueError(f"Unknown speed preset: {speed}")
        self.speed    = speed
        self.sequence: Optional[NumberSequence] = None
        self.lock     = threading.Lock()
        self.recorder = Recorder()
        self.session  = AnimationSession(self.recorder, delay=SPEED_PRESETS[speed])
        self.session.on_start(self._on_start)
        self.session.on_outcome(self._on_outcome)

    def _on_start(self, direction: Direction) -> None:
        self.recorder.begin_run(direction.value)

    def _on_outcome(self, outcome: RunOutcome) -> None:
        self.recorder.end_run(outcome.kind.value)

    def set_speed(self, speed: str) -> None:
        if not _is_preset(speed):
            raise ValueError(f"Unknown speed preset: {speed}")
        self.speed = speed
        self.session.delay = SPEED_PRESETS[speed]

    def show(self, sequence: NumberSequence) -> None:
        self.sequence = sequence
        self.recorder.show(sequence.snapshot())


STATE: Optional[SorterState] = None


def get_state() -> SorterState:
    global STATE
    if STATE is None:
        STATE = SorterState(app.config["SORTER_SPEED"])
    return STATE


def _parse_count(raw) -> int:
    """Parse the intro prompt.  Raises ValueError with the message to show."""
    try:
        count = int(str(raw).strip())
    except (TypeError, ValueError):
        raise ValueError("Enter a valid number.") from None
    if count <= 0:
        raise ValueError("Enter a positive number.")
    return count


def _canvas(state: SorterState) -> str:
    frame = state.recorder.latest
    if frame is not None:
        return render_numbers(frame.values, frame.highlighted)
    if state.sequence is not None:
        return render_numbers(state.sequence.snapshot())
    return ""


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@app.route("/")
def index():
    state = get_state()
    on_sort_screen = state.sequence is not None
    running = state.session.is_running

    html = render_template_string(INDEX_TEMPLATE,
        intro=intro_panel(count=app.config["SORTER_DEFAULT_COUNT"]),
        controls=sort_controls(is_running=running, speed=state.speed),
        status=status_panel(state.session.direction.value, state.recorder.metrics, running),
        pseudocode=pseudocode_viewer(PSEUDOCODE),
        explanation=explanation_panel(),
        svg=_canvas(state) if on_sort_screen else "",
        on_sort_screen=on_sort_screen,
    )
    return html


# ---------------------------------------------------------------------------
# API: Numbers
# ---------------------------------------------------------------------------
@app.route("/api/numbers/generate", methods=["POST"])
def api_numbers_generate():
    state = get_state()
    data = request.get_json(silent=True) or {}

    try:
        count = _parse_count(data.get("count"))
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    with state.lock:
        if state.session.is_running:
            return jsonify({"error": "Cancel the running sort first."}), 409
        state.show(generate(count))

    logger.info("Generated %d numbers", count)
    return jsonify({"svg": _canvas(state), "count": count})


@app.route("/api/numbers/select", methods=["POST"])
def api_numbers_select():
    state = get_state()
    data = request.get_json(silent=True) or {}

    with state.lock:
        if state.sequence is None:
            return jsonify({"error": "Generate numbers first."}), 400
        if state.session.is_running:
            return jsonify({"error": "Cancel the running sort first."}), 409

        index = data.get("index")
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(state.sequence):
            return jsonify({"error": "Invalid number index"}), 400

        if state.sequence[index] > TRIGGER_MAX:
            return jsonify({"error": f"Please select a value smaller or equal to {TRIGGER_MAX}."}), 400

        regenerate(state.sequence)
        state.show(state.sequence)

    logger.info("Regenerated %d numbers", len(state.sequence))
    return jsonify({"svg": _canvas(state)})


# ---------------------------------------------------------------------------
# API: Sort Run
# ---------------------------------------------------------------------------
@app.route("/api/sort/start", methods=["POST"])
def api_sort_start():
    state = get_state()
    with state.lock:
        if state.sequence is None:
            return jsonify({"error": "Generate numbers first."}), 400
        try:
            direction = state.session.start(state.sequence)
        except SessionBusyError as e:
            return jsonify({"error": str(e)}), 409

    return jsonify({"running": True, "direction": direction.value})


@app.route("/api/sort/cancel", methods=["POST"])
def api_sort_cancel():
    state = get_state()
    state.session.cancel()
    return jsonify({"running": state.session.is_running})


@app.route("/api/reset", methods=["POST"])
def api_reset():
    state = get_state()
    with state.lock:
        state.session.cancel()
        if not state.session.join(timeout=2.0):
            logger.warning("Sort thread still running after reset")
            return jsonify({"error": "Sort is still stopping, try again."}), 409
        state.sequence = None
    return jsonify({"screen": "intro"})


@app.route("/api/state", methods=["GET"])
def api_state():
    state = get_state()
    running = state.session.is_running
    frame   = state.recorder.latest
    step    = frame.step if frame else None

    last = state.session.last_outcome
    return jsonify({
        "svg":            _canvas(state),
        "running":        running,
        "frame":          frame.number if frame else None,
        "next_direction": state.session.direction.value,
        "outcome":        last.kind.value if last else None,
        "pseudocode":     pseudocode_viewer(PSEUDOCODE, step.pseudocode_line if step else -1),
        "explanation":    explanation_panel(step.explanation if step else ""),
        "status":         status_panel(state.session.direction.value, state.recorder.metrics, running),
    })


# ---------------------------------------------------------------------------
# API: Config Changes
# ---------------------------------------------------------------------------
@app.route("/api/config/speed", methods=["POST"])
def api_config_speed():
    data = request.get_json(silent=True) or {}
    speed = data.get("speed", "normal")
    try:
        get_state().set_speed(speed)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify({"speed": speed})


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Quicksort Animator</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }
    :root {
      --bg-dark: #0d1117;
      --bg-darker: #010409;
      --bg-panel: #161b22;
      --border: #30363d;
      --text-primary: #e6edf3;
      --text-secondary: #7d8590;
      --accent-blue: #3b59b6;
      --accent-green: #10b981;
      --accent-amber: #f59e0b;
      --accent-rose: #f43f5e;
    }
    body {
      font-family: Arial, -apple-system, BlinkMacSystemFont, sans-serif;
      background: var(--bg-darker);
      color: var(--text-primary);
      height: 100vh;
    }
    .screen { display: none; height: 100vh; }
    .screen.active { display: flex; }

    /* Intro */
    #intro-screen { align-items: center; justify-content: center; }
    .intro-panel { text-align: center; padding: 32px; }
    .intro-panel h3 { font-size: 16px; margin-bottom: 16px; }
    .intro-panel input {
      display: block; margin: 0 auto 12px; padding: 6px 10px;
      background: var(--bg-dark); color: var(--text-primary);
      border: 1px solid var(--border); border-radius: 6px; font-size: 14px;
    }
    .error { color: var(--accent-rose); margin-top: 12px; min-height: 18px; }

    /* Sort screen */
    #canvas-container { flex: 1; overflow: auto; padding: 16px; }
    #sidebar {
      width: 340px; padding: 20px 16px; overflow-y: auto;
      background: var(--bg-dark); border-left: 1px solid var(--border);
    }
    .panel {
      background: var(--bg-panel); border: 1px solid var(--border);
      border-radius: 12px; padding: 18px; margin-bottom: 16px;
    }
    .panel h3 { font-size: 13px; text-transform: uppercase; margin-bottom: 12px; }
    button {
      width: 120px; height: 30px; margin: 4px 0;
      font-weight: bold; font-size: 14px; color: #fff;
      border: none; border-radius: 6px; cursor: pointer;
    }
    button.primary { background: var(--accent-blue); }
    button.action { background: var(--accent-green); display: block; }
    button:disabled { opacity: 0.4; cursor: not-allowed; }
    .speed-control { margin-top: 10px; }
    select {
      background: var(--bg-dark); color: var(--text-primary);
      border: 1px solid var(--border); border-radius: 6px; padding: 4px;
    }
    table td { padding: 3px 8px 3px 0; color: var(--text-secondary); }
    table td strong { color: var(--text-primary); }
    .code-block {
      font-family: 'Courier New', monospace; font-size: 12px; line-height: 1.5;
      background: var(--bg-darker); border: 1px solid var(--border);
      border-radius: 8px; padding: 10px;
    }
    .code-line { padding: 2px 8px; border-radius: 4px; white-space: pre; }
    .code-line.highlight {
      background: rgba(245, 158, 11, 0.15);
      border-left: 3px solid var(--accent-amber);
    }
    .explanation-text { color: var(--text-secondary); line-height: 1.6; font-size: 13px; }
    g.number { cursor: pointer; }
  </style>
</head>
<body>
  <div id="intro-screen" class="screen {{ '' if on_sort_screen else 'active' }}">
    {{ intro|safe }}
  </div>

  <div id="sort-screen" class="screen {{ 'active' if on_sort_screen else '' }}">
    <div id="canvas-container">{{ svg|safe }}</div>
    <div id="sidebar">
      <div id="controls">{{ controls|safe }}</div>
      <div id="status">{{ status|safe }}</div>
      <div class="panel"><h3>Pseudocode</h3><div id="pseudocode">{{ pseudocode|safe }}</div></div>
      <div class="panel"><h3>What is happening</h3><div id="explanation">{{ explanation|safe }}</div></div>
    </div>
  </div>

  <script>
    const POLL_MS = 40;
    let polling = null;

    async function post(url, data) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(data),
      });
      return await res.json();
    }

    function showScreen(name) {
      document.getElementById('intro-screen').classList.toggle('active', name === 'intro');
      document.getElementById('sort-screen').classList.toggle('active', name === 'sort');
    }

    function applyState(data) {
      if (data.svg) document.getElementById('canvas-container').innerHTML = data.svg;
      if (data.pseudocode) document.getElementById('pseudocode').innerHTML = data.pseudocode;
      if (data.explanation) document.getElementById('explanation').innerHTML = data.explanation;
      if (data.status) document.getElementById('status').innerHTML = data.status;
      document.getElementById('btn-sort').disabled = data.running;
    }

    async function poll() {
      const res = await fetch('/api/state');
      const data = await res.json();
      applyState(data);
      if (!data.running && polling) {
        clearInterval(polling);
        polling = null;
      }
    }

    // Intro
    document.getElementById('btn-enter').addEventListener('click', async () => {
      const data = await post('/api/numbers/generate', {
        count: document.getElementById('count-input').value,
      });
      if (data.error) {
        document.getElementById('intro-error').textContent = data.error;
        return;
      }
      document.getElementById('intro-error').textContent = '';
      document.getElementById('canvas-container').innerHTML = data.svg;
      showScreen('sort');
    });

    // Sort controls
    document.getElementById('btn-sort').addEventListener('click', async () => {
      const data = await post('/api/sort/start', {});
      if (data.error) { alert(data.error); return; }
      document.getElementById('btn-sort').disabled = true;
      if (!polling) polling = setInterval(poll, POLL_MS);
    });

    document.getElementById('btn-cancel').addEventListener('click', async () => {
      await post('/api/sort/cancel', {});
      poll();
    });

    document.getElementById('btn-reset').addEventListener('click', async () => {
      const data = await post('/api/reset', {});
      if (data.error) { alert(data.error); return; }
      if (polling) { clearInterval(polling); polling = null; }
      showScreen('intro');
    });

    document.getElementById('speed-selector').addEventListener('change', async (e) => {
      await post('/api/config/speed', {speed: e.target.value});
    });

    // Click a number: small values regenerate the list
    document.getElementById('canvas-container').addEventListener('click', async (e) => {
      const button = e.target.closest('[data-index]');
      if (!button) return;
      const data = await post('/api/numbers/select', {index: +button.dataset.index});
      if (data.error) { alert(data.error); return; }
      document.getElementById('canvas-container').innerHTML = data.svg;
    });
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    print("=" * 60)
    print("  Quicksort Animator")
    print("  Starting Flask server...")
    print("  Open http://localhost:5000")
    print("=" * 60)
    app.run(debug=True, host="0.0.0.0", port=5000, threaded=True)
