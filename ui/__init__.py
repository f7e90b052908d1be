"""
ui/
---
Presentation layer.

    from ui import render_numbers
    from ui import intro_panel, sort_controls, status_panel, …
"""

from ui.canvas import render_numbers, button_position, canvas_size, CanvasConfig

from ui.controls import (
    intro_panel,
    sort_controls,
    status_panel,
    pseudocode_viewer,
    explanation_panel,
)

__all__ = [
    "render_numbers",
    "button_position",
    "canvas_size",
    "CanvasConfig",
    "intro_panel",
    "sort_controls",
    "status_panel",
    "pseudocode_viewer",
    "explanation_panel",
]
