"""Trace Buffer and Morph Engine.

A trace is the bounded history of the chain's tip. Each sample is stored
twice: where the low-resolution chain put it (mutable, drifts every frame)
and where the high-resolution chain would have put it at the same phase
(fixed). Morphing nudges the first toward the second, so the ribbon slowly
sharpens into the detailed outline while the chain keeps drawing the coarse
one.
"""

from __future__ import annotations

from collections.abc import Iterator

import numpy as np
from numpy.typing import NDArray

from fourier_trace.engine.config import AnimationConfig
from fourier_trace.engine.context import PreparedShape, TraceSample
from fourier_trace.engine.epicycles import evaluate_endpoint


class Trace:
    """FIFO of tip samples, oldest first, never longer than ``bound``."""

    def __init__(self, bound: int) -> None:
        self.bound = max(2, bound)
        self._points = np.empty((0, 2))
        self._targets = np.empty((0, 2))

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[TraceSample]:
        for (x, y), (tx, ty) in zip(self._points, self._targets):
            yield TraceSample(x=float(x), y=float(y), target_x=float(tx), target_y=float(ty))

    def __getitem__(self, index: int) -> TraceSample:
        x, y = self._points[index]
        tx, ty = self._targets[index]
        return TraceSample(x=float(x), y=float(y), target_x=float(tx), target_y=float(ty))

    @property
    def points(self) -> NDArray[np.float64]:
        """Current positions, oldest first (read-only view)."""
        view = self._points.view()
        view.flags.writeable = False
        return view

    @property
    def targets(self) -> NDArray[np.float64]:
        view = self._targets.view()
        view.flags.writeable = False
        return view

    def append(self, point: tuple[float, float], target: tuple[float, float]) -> None:
        self.extend(np.array([point], dtype=np.float64), np.array([target], dtype=np.float64))

    def extend(self, points: NDArray[np.float64], targets: NDArray[np.float64]) -> None:
        """Append samples, then evict from the front until within bound."""
        points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        targets = np.asarray(targets, dtype=np.float64).reshape(-1, 2)
        if len(points) != len(targets):
            raise ValueError(f"{len(points)} points but {len(targets)} targets")
        self._points = np.vstack([self._points, points])
        self._targets = np.vstack([self._targets, targets])
        self.prune()

    def prune(self) -> None:
        excess = len(self._points) - self.bound
        if excess > 0:
            self._points = self._points[excess:]
            self._targets = self._targets[excess:]

    def morph(self, rate: float) -> None:
        """Exponential smoothing of every sample toward its target."""
        if len(self._points):
            self._points = self._points + (self._targets - self._points) * rate

    def clear(self) -> None:
        self._points = np.empty((0, 2))
        self._targets = np.empty((0, 2))


def new_traces(config: AnimationConfig) -> list[Trace]:
    return [Trace(config.trace_bound) for _ in range(max(1, config.trace_count))]


def wrap01(value: float) -> float:
    """Wrap into [0, 1), also for negative input."""
    wrapped = value % 1.0
    # -1e-18 % 1.0 == 1.0 in floating point
    return 0.0 if wrapped >= 1.0 else wrapped


def sub_phases(phase: float, config: AnimationConfig) -> list[float]:
    """Phases of this frame's sub-steps, excluding the current phase itself."""
    step = config.phase_step
    count = config.sub_steps
    return [wrap01(phase + step * s / count) for s in range(1, count + 1)]


def sample_tips(
    shape: PreparedShape,
    origin: tuple[float, float],
    draw_scale: float,
    phases: list[float],
    reverse_index: int | None,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Chain tips and their morph targets at each phase."""
    target_set = shape.target
    points = [evaluate_endpoint(origin, draw_scale, p, shape.low, reverse_index) for p in phases]
    targets = [evaluate_endpoint(origin, draw_scale, p, target_set, reverse_index) for p in phases]
    return np.array(points, dtype=np.float64).reshape(-1, 2), np.array(targets, dtype=np.float64).reshape(-1, 2)


def populate_traces(
    traces: list[Trace],
    shape: PreparedShape,
    origin: tuple[float, float],
    draw_scale: float,
    phase: float,
    reverse_index: int | None,
    config: AnimationConfig,
) -> None:
    """Append this frame's sub-step samples to every trace."""
    points, targets = sample_tips(shape, origin, draw_scale, sub_phases(phase, config), reverse_index)
    for trace in traces:
        trace.extend(points, targets)


def morph_traces(traces: list[Trace], rate: float) -> None:
    for trace in traces:
        trace.morph(rate)
