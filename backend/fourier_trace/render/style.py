"""Colours and stroke weights used when drawing a frame."""

from __future__ import annotations

from dataclasses import dataclass

# (r, g, b, a), each 0-255
Color = tuple[int, int, int, int]

WHITE: Color = (255, 255, 255, 255)
BLACK: Color = (0, 0, 0, 255)


@dataclass
class TraceStyle:
    background: Color = BLACK

    # Trace ribbon
    trace_color: Color = WHITE
    trace_stroke_weight: float = 90.0
    fill_color: Color = WHITE
    # Gradient offset at which the fill has faded out completely
    fill_zero_pos: float = 0.5

    # Epicycle chain
    circle_stroke: Color = WHITE
    circle_stroke_weight: float = 2.0
    vector_stroke: Color = WHITE
    vector_stroke_weight: float = 1.2
    tip_color: Color = WHITE
    tip_diameter: float = 4.0
    # Circles smaller than this radius (px) are not drawn, only their arm
    min_circle_radius: float = 0.5

    # Status line shown while loading or after a failure
    status_color: Color = WHITE
    status_min_text_size: float = 14.0
    status_text_ratio: float = 0.025


def with_alpha(color: Color, opacity: float) -> Color:
    """Scale the alpha channel of ``color`` by ``opacity`` ∈ [0, 1]."""
    opacity = min(1.0, max(0.0, opacity))
    return (color[0], color[1], color[2], int(round(color[3] * opacity)))
