"""Epicycle chain and status-line drawing."""

from __future__ import annotations

from fourier_trace.engine.epicycles import EpicycleChain
from fourier_trace.render.style import TraceStyle
from fourier_trace.render.surface import Surface


def draw_epicycles(surface: Surface, chain: EpicycleChain, style: TraceStyle) -> None:
    """One circle + arm per moving coefficient, then a dot on the tip."""
    for i, radius in enumerate(chain.radii):
        start = (float(chain.joints[i, 0]), float(chain.joints[i, 1]))
        end = (float(chain.joints[i + 1, 0]), float(chain.joints[i + 1, 1]))
        if radius > style.min_circle_radius:
            surface.stroke_circle(start, float(radius), style.circle_stroke, style.circle_stroke_weight)
        surface.line(start, end, style.vector_stroke, style.vector_stroke_weight)
    surface.fill_circle(chain.tip, style.tip_diameter / 2, style.tip_color)


def status_text_size(width: int, height: int, style: TraceStyle) -> float:
    return max(style.status_min_text_size, min(width, height) * style.status_text_ratio)


def draw_status(surface: Surface, message: str, style: TraceStyle) -> None:
    """Centred status line (loading notice or error message)."""
    surface.text(
        message,
        (surface.width * 0.5, surface.height * 0.5),
        status_text_size(surface.width, surface.height, style),
        style.status_color,
    )
