"""
canvas.py — SVG Number-Button Renderer
=======================================
Pure rendering function: Frame → SVG string.

The renderer consumes:
  • values       – the sequence snapshot of one frame
  • highlighted  – indices lit for this frame (0, 1 or 2 of them)
  • config       – visual config (button size, colors, fonts, …)

Layout matches the classic desktop version: numbers are drawn as
buttons in columns of at most ten, filled top to bottom, left to right.

Design decisions:
  - NO mutation.  The caller passes in everything it needs and gets
    back a string.
  - Each button carries `id="num-<index>"` and `data-index`, so the
    page maps a click back to a sequence index without reading labels.
  - Buttons whose value can regenerate the list (<= 30) get a dashed
    outline so the user can find them.
"""

import math
from typing import Dict, Iterable, Sequence, Tuple

from sequence import TRIGGER_MAX


# ---------------------------------------------------------------------------
# Visual Config: color palette, dimensions, fonts
# ---------------------------------------------------------------------------
class CanvasConfig:
    # layout
    rows_per_column: int = 10
    button_width:    int = 120
    button_height:   int = 30
    column_gap:      int = 20
    row_gap:         int = 5
    padding:         int = 20
    bg:              str = "#0d1117"

    # button colors (state → fill)
    button_colors: Dict[str, str] = {
        "idle":        "#3b59b6",   # classic blue
        "highlighted": "#f59e0b",   # amber: involved in the current step
    }

    button_stroke:        str = "#3b59b6"
    trigger_stroke:       str = "#10b981"   # emerald: clickable to regenerate
    highlight_stroke:     str = "#fde68a"
    label_color:          str = "#ffffff"
    label_size:           int = 14
    label_weight:         str = "700"
    corner_radius:        int = 4


CONFIG = CanvasConfig()


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
def button_position(index: int, config: CanvasConfig = CONFIG) -> Tuple[int, int]:
    """Top-left corner of the button for `index`."""
    col, row = divmod(index, config.rows_per_column)
    x = config.padding + col * (config.button_width + config.column_gap)
    y = config.padding + row * (config.button_height + config.row_gap)
    return x, y


def canvas_size(count: int, config: CanvasConfig = CONFIG) -> Tuple[int, int]:
    columns = max(1, math.ceil(count / config.rows_per_column))
    rows    = min(max(count, 1), config.rows_per_column)
    width  = 2 * config.padding + columns * config.button_width + (columns - 1) * config.column_gap
    height = 2 * config.padding + rows * config.button_height + (rows - 1) * config.row_gap
    return width, height


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_numbers(
    values: Sequence[int],
    highlighted: Iterable[int] = (),
    config: CanvasConfig = CONFIG,
) -> str:
    """
    Returns an SVG string.

    Args:
        values      : Snapshot of the sequence.
        highlighted : Indices to draw in the highlight color.
        config      : Visual config.
    """
    lit = set(highlighted)
    width, height = canvas_size(len(values), config)

    svg_parts = [
        f'<svg id="canvas-svg" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">'
    ]
    svg_parts.append(f'<rect width="{width}" height="{height}" fill="{config.bg}"/>')

    for index, value in enumerate(values):
        svg_parts.append(_render_button(index, value, index in lit, config))

    svg_parts.append("</svg>")
    return "\n".join(svg_parts)


# ---------------------------------------------------------------------------
# Button Rendering
# ---------------------------------------------------------------------------
def _render_button(index: int, value: int, lit: bool, config: CanvasConfig) -> str:
    x, y = button_position(index, config)
    w, h = config.button_width, config.button_height

    fill   = config.button_colors["highlighted" if lit else "idle"]
    stroke = config.highlight_stroke if lit else config.button_stroke
    dash   = ""
    if value <= TRIGGER_MAX and not lit:
        stroke = config.trigger_stroke
        dash   = ' stroke-dasharray="4 2"'

    parts = [
        f'<g class="number{" highlighted" if lit else ""}" id="num-{index}" data-index="{index}">',
        f'  <rect x="{x}" y="{y}" width="{w}" height="{h}" rx="{config.corner_radius}" '
        f'fill="{fill}" stroke="{stroke}" stroke-width="2"{dash}/>',
        f'  <text x="{x + w / 2}" y="{y + h / 2 + 5}" text-anchor="middle" '
        f'font-size="{config.label_size}" font-family="Arial, sans-serif" '
        f'fill="{config.label_color}" font-weight="{config.label_weight}">{value}</text>',
        '</g>',
    ]
    return "\n".join(parts)
