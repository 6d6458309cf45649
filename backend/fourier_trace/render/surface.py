"""Drawing capability set shared by every rendering backend.

The trace needs exactly two capabilities beyond plain primitives: filling a
polygon with a linear gradient, and stroking a polyline whose segments each
carry their own opacity. Anything that can do both (plus the chain's circles,
lines and the status text) can host the animation.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

import numpy as np
from numpy.typing import NDArray

from fourier_trace.render.style import Color

# Opacity of segment i (1-based from the oldest), in [0, 1]
OpacityFn = Callable[[int], float]


@dataclass(frozen=True)
class LinearGradient:
    """Gradient along start→end; stops are (offset ∈ [0, 1], colour), ascending."""

    start: tuple[float, float]
    end: tuple[float, float]
    stops: tuple[tuple[float, Color], ...]

    def project(self, xs: NDArray[np.float64], ys: NDArray[np.float64]) -> NDArray[np.float64]:
        """Gradient offset of each (x, y), clamped to [0, 1]."""
        sx, sy = self.start
        dx = self.end[0] - sx
        dy = self.end[1] - sy
        denom = dx * dx + dy * dy
        if denom <= 0:
            return np.zeros_like(np.asarray(xs, dtype=np.float64))
        t = ((np.asarray(xs) - sx) * dx + (np.asarray(ys) - sy) * dy) / denom
        return np.clip(t, 0.0, 1.0)

    def sample(self, offsets: NDArray[np.float64]) -> NDArray[np.float64]:
        """RGBA (0-255 floats) at each offset, linear between stops."""
        offsets = np.asarray(offsets, dtype=np.float64)
        positions = np.array([offset for offset, _ in self.stops], dtype=np.float64)
        colors = np.array([color for _, color in self.stops], dtype=np.float64)
        channels = [np.interp(offsets, positions, colors[:, c]) for c in range(4)]
        return np.stack(channels, axis=-1)


class Surface(Protocol):
    width: int
    height: int

    def snapshot(self) -> Any: ...

    def clear(self, color: Color) -> None: ...

    def fill_gradient_polygon(self, points: NDArray[np.float64], gradient: LinearGradient) -> None: ...

    def stroke_faded_polyline(
        self,
        points: NDArray[np.float64],
        opacity_fn: OpacityFn,
        color: Color,
        width: float,
    ) -> None: ...

    def line(self, start: tuple[float, float], end: tuple[float, float], color: Color, width: float) -> None: ...

    def stroke_circle(self, center: tuple[float, float], radius: float, color: Color, width: float) -> None: ...

    def fill_circle(self, center: tuple[float, float], radius: float, color: Color) -> None: ...

    def text(self, message: str, center: tuple[float, float], size: float, color: Color) -> None: ...
