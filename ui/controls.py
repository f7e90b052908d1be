"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • intro_panel          – "How many numbers?" prompt
  • sort_controls        – Sort / Cancel / Reset buttons + speed picker
  • status_panel         – next direction, last outcome, run metrics
  • pseudocode_viewer    – with live line highlighting
  • explanation_panel    – what the current step is doing

Design:
  - All panels are stateless render functions.
  - State is passed in as kwargs.
  - Output is raw HTML strings (no templating engine).
  - The main app stitches them together.
"""

from html import escape
from typing import List, Optional

from engine import RunMetrics, SPEED_PRESETS


# ---------------------------------------------------------------------------
# Intro Screen
# ---------------------------------------------------------------------------
def intro_panel(count: Optional[int] = None) -> str:
    value = "" if count is None else str(count)

    return f"""
    <div class="panel intro-panel">
      <h3>How many numbers to display?</h3>
      <input id="count-input" type="text" size="10" value="{escape(value)}">
      <button id="btn-enter" class="primary">Enter</button>
      <div class="error" id="intro-error"></div>
    </div>
    """


# ---------------------------------------------------------------------------
# Sort Controls
# ---------------------------------------------------------------------------
def sort_controls(is_running: bool = False, speed: str = "normal") -> str:
    disabled = "disabled" if is_running else ""
    options = []
    for name in SPEED_PRESETS:
        sel = "selected" if name == speed else ""
        options.append(f'<option value="{name}" {sel}>{name.capitalize()}</option>')

    return f"""
    <div class="panel sort-controls">
      <button id="btn-sort" class="action" {disabled}>Sort</button>
      <button id="btn-cancel" class="action">Cancel</button>
      <button id="btn-reset" class="action">Reset</button>
      <div class="speed-control">
        <label>Speed:</label>
        <select id="speed-selector">
          {''.join(options)}
        </select>
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Status Panel
# ---------------------------------------------------------------------------
def status_panel(
    next_direction: str,
    metrics: Optional[RunMetrics] = None,
    is_running: bool = False,
) -> str:
    if is_running:
        state = "⏳ Sorting…"
    elif metrics and metrics.outcome == "completed":
        state = "✅ Completed"
    elif metrics and metrics.outcome == "cancelled":
        state = "⛔ Cancelled"
    else:
        state = "Ready"

    rows = [
        f'<tr><td>Status:</td><td><strong>{state}</strong></td></tr>',
        f'<tr><td>Next run:</td><td><strong>{next_direction}</strong></td></tr>',
    ]
    if metrics and metrics.direction:
        rows.append(f'<tr><td>Last run:</td><td><strong>{metrics.direction}</strong></td></tr>')
        rows.append(f'<tr><td>Swaps:</td><td><strong>{metrics.swaps}</strong></td></tr>')
        rows.append(f'<tr><td>Frames:</td><td><strong>{metrics.total_frames}</strong></td></tr>')
        if metrics.outcome:
            rows.append(f'<tr><td>Wall Time:</td><td><strong>{metrics.wall_time_ms:.0f} ms</strong></td></tr>')

    return f"""
    <div class="panel status-panel">
      <h3>📊 Status</h3>
      <table>
        {''.join(rows)}
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Pseudocode Viewer
# ---------------------------------------------------------------------------
def pseudocode_viewer(pseudocode_lines: List[str], current_line: int = -1) -> str:
    lines_html = []
    for i, line in enumerate(pseudocode_lines):
        highlight = 'highlight' if i == current_line else ''
        lines_html.append(f'<div class="code-line {highlight}" data-line="{i}">{escape(line)}</div>')

    return f"""
    <div class="code-block">
      {''.join(lines_html)}
    </div>
    """


# ---------------------------------------------------------------------------
# Explanation Panel
# ---------------------------------------------------------------------------
def explanation_panel(explanation: str = "") -> str:
    if not explanation:
        explanation = "▶ Click <strong>Sort</strong> to watch the quicksort step by step."
    else:
        explanation = escape(explanation)
    return f"""<div class="explanation-text">{explanation}</div>"""
