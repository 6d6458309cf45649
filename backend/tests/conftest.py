"""Shared test fixtures."""

from __future__ import annotations

import asyncio

import numpy as np
import pytest

from fourier_trace.engine.config import AnimationConfig
from fourier_trace.host.context import HostContext
from fourier_trace.host.events import EventBus


# Sample SVGs

SQUARE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="10" height="10" viewBox="0 0 10 10">
  <path d="M 0 0 L 10 0 L 10 10 L 0 10 Z" fill="none" stroke="#fff"/>
</svg>'''

HEART_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">
  <path fill="none" d="M 50,30 C 50,27 45,15 25,15 C 0,15 0,42.5 0,42.5 C 0,60 20,77 50,95 C 80,77 100,60 100,42.5 C 100,42.5 100,15 75,15 C 60,15 50,27 50,30 Z"/>
</svg>'''

# Perimeters 40 and 8: the budget splits 5:1
TWO_SQUARES_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 20 20">
  <path d="M 0 0 L 10 0 L 10 10 L 0 10 Z"/>
  <path d='M 15 15 L 17 15 L 17 17 L 15 17 Z'/>
</svg>'''

NO_PATH_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">
  <circle cx="12" cy="12" r="10"/>
</svg>'''

ZERO_LENGTH_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">
  <path d="M 5 5 L 5 5"/>
</svg>'''

SQUARE_POINTS = np.array([(-0.5, -0.5), (0.5, -0.5), (0.5, 0.5), (-0.5, 0.5)])


def star_points(count: int) -> np.ndarray:
    """Five-lobed closed outline, ``count`` samples, in pixel-like units."""
    t = np.linspace(0, 2 * np.pi, count, endpoint=False)
    r = 1 + 0.3 * np.cos(5 * t)
    return np.column_stack([r * np.cos(t), r * np.sin(t)]) * 50


class FunctionSampler:
    """Point sampler producing ``fn(target_count)`` and recording calls."""

    def __init__(self, fn=star_points) -> None:
        self.fn = fn
        self.calls: list[tuple[str, int]] = []

    async def sample(self, source: str, target_count: int) -> np.ndarray:
        self.calls.append((source, target_count))
        return np.asarray(self.fn(target_count), dtype=np.float64)


class GatedSampler(FunctionSampler):
    """Blocks until ``release`` is set, to hold preparation in flight."""

    def __init__(self, fn=star_points) -> None:
        super().__init__(fn)
        self.release = asyncio.Event()

    async def sample(self, source: str, target_count: int) -> np.ndarray:
        await self.release.wait()
        return await super().sample(source, target_count)


class ScriptedRng:
    """Stand-in for numpy Generator returning scripted ``random()`` values."""

    def __init__(self, values: list[float]) -> None:
        self.values = list(values)

    def random(self) -> float:
        return self.values.pop(0)


class RecordingSurface:
    """Surface that records every call as (method, args)."""

    def __init__(self, width: int = 200, height: int = 200) -> None:
        self.width = width
        self.height = height
        self.calls: list[tuple[str, tuple]] = []

    def snapshot(self) -> list[tuple[str, tuple]]:
        return list(self.calls)

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def clear(self, color) -> None:
        self.calls.clear()
        self.calls.append(("clear", (color,)))

    def fill_gradient_polygon(self, points, gradient) -> None:
        self.calls.append(("fill_gradient_polygon", (np.array(points), gradient)))

    def stroke_faded_polyline(self, points, opacity_fn, color, width) -> None:
        opacities = [opacity_fn(i) for i in range(1, len(points))]
        self.calls.append(("stroke_faded_polyline", (np.array(points), opacities, color, width)))

    def line(self, start, end, color, width) -> None:
        self.calls.append(("line", (start, end, color, width)))

    def stroke_circle(self, center, radius, color, width) -> None:
        self.calls.append(("stroke_circle", (center, radius, color, width)))

    def fill_circle(self, center, radius, color) -> None:
        self.calls.append(("fill_circle", (center, radius, color)))

    def text(self, message, center, size, color) -> None:
        self.calls.append(("text", (message, center, size, color)))


def small_config(**overrides) -> AnimationConfig:
    """Fast configuration: coarse sampling, short loop."""
    values = dict(
        sample_count_low=32,
        sample_count_high=64,
        coefficient_budget=20,
        loop_frames=12,
        trace_lifetime_frames=5,
        sub_steps_per_frame=4,
        warmup_frames=2,
    )
    values.update(overrides)
    return AnimationConfig(**values)


def make_context(surface=None) -> HostContext:
    surface = surface or RecordingSurface()
    return HostContext(surface=surface, width=surface.width, height=surface.height, events=EventBus())


@pytest.fixture
def square_svg() -> str:
    return SQUARE_SVG


@pytest.fixture
def heart_svg() -> str:
    return HEART_SVG


@pytest.fixture
def recording_surface() -> RecordingSurface:
    return RecordingSurface()
