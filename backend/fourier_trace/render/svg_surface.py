"""SVG surface — records drawing calls as SVG elements.

Produces a standalone SVG document per frame, with no dependency beyond
string formatting. Gradients are emitted as userSpaceOnUse linear gradients
so their coordinates match the canvas.
"""

from __future__ import annotations

from html import escape

import numpy as np
from numpy.typing import NDArray

from fourier_trace.render.style import BLACK, Color, with_alpha
from fourier_trace.render.surface import LinearGradient, OpacityFn


def _rgb(color: Color) -> str:
    return f"#{color[0]:02x}{color[1]:02x}{color[2]:02x}"


def _opacity(color: Color) -> str:
    return f"{color[3] / 255:.3f}"


def _path_d(points: NDArray[np.float64]) -> str:
    d = f"M {points[0][0]:.1f},{points[0][1]:.1f}"
    for x, y in points[1:]:
        d += f" L {x:.1f},{y:.1f}"
    return d + " Z"


class SvgSurface:
    """Drawing surface that accumulates SVG markup."""

    def __init__(self, width: int, height: int, background: Color = BLACK) -> None:
        self.width = int(width)
        self.height = int(height)
        self.background = background
        self._defs: list[str] = []
        self._parts: list[str] = []

    def snapshot(self) -> str:
        """Wrap the recorded elements in a standalone SVG document."""
        defs = f"<defs>\n{chr(10).join(self._defs)}\n</defs>\n" if self._defs else ""
        content = "\n".join(self._parts)
        return (
            f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {self.width} {self.height}"'
            f' width="{self.width}" height="{self.height}">'
            f'\n<rect width="100%" height="100%" fill="{_rgb(self.background)}"/>'
            f"\n{defs}{content}\n</svg>"
        )

    def clear(self, color: Color) -> None:
        self.background = color
        self._defs.clear()
        self._parts.clear()

    def fill_gradient_polygon(self, points: NDArray[np.float64], gradient: LinearGradient) -> None:
        if len(points) < 3:
            return
        gid = f"g{len(self._defs)}"
        stops = "".join(
            f'<stop offset="{offset:.3f}" stop-color="{_rgb(color)}" stop-opacity="{_opacity(color)}"/>'
            for offset, color in gradient.stops
        )
        self._defs.append(
            f'<linearGradient id="{gid}" gradientUnits="userSpaceOnUse"'
            f' x1="{gradient.start[0]:.1f}" y1="{gradient.start[1]:.1f}"'
            f' x2="{gradient.end[0]:.1f}" y2="{gradient.end[1]:.1f}">{stops}</linearGradient>'
        )
        self._parts.append(f'<path d="{_path_d(points)}" fill="url(#{gid})" stroke="none"/>')

    def stroke_faded_polyline(
        self,
        points: NDArray[np.float64],
        opacity_fn: OpacityFn,
        color: Color,
        width: float,
    ) -> None:
        for i in range(1, len(points)):
            stroke = with_alpha(color, opacity_fn(i))
            if stroke[3] == 0:
                continue
            (x1, y1), (x2, y2) = points[i - 1], points[i]
            self._parts.append(
                f'<line x1="{x1:.1f}" y1="{y1:.1f}" x2="{x2:.1f}" y2="{y2:.1f}"'
                f' stroke="{_rgb(stroke)}" stroke-opacity="{_opacity(stroke)}"'
                f' stroke-width="{width:.1f}" stroke-linecap="round"/>'
            )

    def line(self, start: tuple[float, float], end: tuple[float, float], color: Color, width: float) -> None:
        self._parts.append(
            f'<line x1="{start[0]:.1f}" y1="{start[1]:.1f}" x2="{end[0]:.1f}" y2="{end[1]:.1f}"'
            f' stroke="{_rgb(color)}" stroke-opacity="{_opacity(color)}" stroke-width="{width:.1f}"/>'
        )

    def stroke_circle(self, center: tuple[float, float], radius: float, color: Color, width: float) -> None:
        self._parts.append(
            f'<circle cx="{center[0]:.1f}" cy="{center[1]:.1f}" r="{radius:.1f}" fill="none"'
            f' stroke="{_rgb(color)}" stroke-opacity="{_opacity(color)}" stroke-width="{width:.1f}"/>'
        )

    def fill_circle(self, center: tuple[float, float], radius: float, color: Color) -> None:
        self._parts.append(
            f'<circle cx="{center[0]:.1f}" cy="{center[1]:.1f}" r="{radius:.1f}"'
            f' fill="{_rgb(color)}" fill-opacity="{_opacity(color)}"/>'
        )

    def text(self, message: str, center: tuple[float, float], size: float, color: Color) -> None:
        self._parts.append(
            f'<text x="{center[0]:.1f}" y="{center[1]:.1f}" font-size="{size:.1f}"'
            f' text-anchor="middle" dominant-baseline="middle" fill="{_rgb(color)}">{escape(message)}</text>'
        )
