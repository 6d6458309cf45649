"""Trace Renderer — the sail-shaped gradient fill and the fading stroke.

Pass 1 fills the closed trace polygon with a gradient that starts at the tip
and runs perpendicular to the tip's direction of travel, so the filled
region trails sideways like a sail instead of along the path.

Pass 2 strokes the trace segment by segment. The oldest part of the trace is
covered by a linear opacity ramp and fades to nothing; the newest segments
stay fully opaque. Samples leave the trace through FIFO eviction, so the ramp
only softens their exit.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from fourier_trace.engine.trace import Trace
from fourier_trace.render.style import Color, TraceStyle, with_alpha
from fourier_trace.render.surface import LinearGradient, Surface
from fourier_trace.utils.geometry import perpendicular_extent, unit_perpendicular

# The gradient never gets shorter than this, in pixels.
_MIN_SPAN = 1.0
# A trace needs this many samples to enclose an area.
_MIN_FILL_POINTS = 3


def perpendicular_gradient(
    points: NDArray[np.float64],
    color: Color,
    zero_pos: float = 0.5,
) -> LinearGradient:
    """Gradient anchored at the tip (last point), perpendicular to its motion."""
    tip = points[-1]
    prev = points[-2] if len(points) >= 2 else points[0]
    axis = unit_perpendicular(prev, tip)
    span = max(_MIN_SPAN, perpendicular_extent(points, tip, axis))
    end = tip + axis * span

    zero_pos = min(1.0, max(0.0, zero_pos))
    transparent = with_alpha(color, 0.0)
    return LinearGradient(
        start=(float(tip[0]), float(tip[1])),
        end=(float(end[0]), float(end[1])),
        stops=((0.0, color), (zero_pos, transparent), (1.0, transparent)),
    )


def fade_window(length: int, ratio: float) -> int:
    return max(2, math.floor(length * ratio))


def fade_opacity(index: int, window: int) -> float:
    """Opacity of segment ``index`` (1-based from the oldest)."""
    if index <= window:
        return index / window
    return 1.0


def render_trace(surface: Surface, trace: Trace, style: TraceStyle, fade_ratio: float) -> None:
    points = np.array(trace.points)
    if len(points) >= _MIN_FILL_POINTS:
        surface.fill_gradient_polygon(points, perpendicular_gradient(points, style.fill_color, style.fill_zero_pos))
    if len(points) >= 2:
        window = fade_window(len(points), fade_ratio)
        surface.stroke_faded_polyline(
            points,
            lambda i: fade_opacity(i, window),
            style.trace_color,
            style.trace_stroke_weight,
        )


def render_traces(surface: Surface, traces: list[Trace], style: TraceStyle, fade_ratio: float) -> None:
    for trace in traces:
        if len(trace):
            render_trace(surface, trace, style, fade_ratio)
