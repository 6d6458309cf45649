"""Epicycle Evaluator — rebuild a point of the shape by chaining rotating arms.

Each coefficient is an arm of length amp·draw_scale turning at ``freq``
revolutions per loop. Summing the arms in set order from the origin gives the
chain's tip. The freq == 0 arm is the shape's centroid offset and is always
skipped, which keeps the drawing centred on the origin.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import lru_cache

import numpy as np
from numpy.typing import NDArray

from fourier_trace.engine.context import CoefficientSet


@dataclass(frozen=True)
class EpicycleChain:
    """Joints of the chain (origin first, tip last) and the radius of each arm."""

    joints: NDArray[np.float64]
    radii: NDArray[np.float64]

    @property
    def tip(self) -> tuple[float, float]:
        return (float(self.joints[-1, 0]), float(self.joints[-1, 1]))


@lru_cache(maxsize=8)
def _arm_arrays(coeffs: CoefficientSet) -> tuple[NDArray[np.int64], NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]]:
    """(set positions, freqs, amps, phases) of the arms that move."""
    positions = np.array([i for i, c in enumerate(coeffs) if c.freq != 0], dtype=np.int64)
    freqs = np.array([coeffs[i].freq for i in positions], dtype=np.float64)
    amps = np.array([coeffs[i].amp for i in positions], dtype=np.float64)
    phases = np.array([coeffs[i].phase for i in positions], dtype=np.float64)
    return positions, freqs, amps, phases


def clear_arm_cache() -> None:
    """Drop the cached arm arrays of every coefficient set."""
    _arm_arrays.cache_clear()


def _arm_vectors(
    draw_scale: float,
    phase: float,
    coeffs: CoefficientSet,
    reverse_index: int | None,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    positions, freqs, amps, phases = _arm_arrays(coeffs)
    t = 2 * math.pi * phase
    angles = t * freqs + phases
    if reverse_index is not None:
        reversed_arm = positions == reverse_index
        angles = np.where(reversed_arm, phases - t * freqs, angles)
    radii = amps * draw_scale
    vectors = np.column_stack([radii * np.cos(angles), radii * np.sin(angles)])
    return vectors, radii


def evaluate_endpoint(
    origin: tuple[float, float],
    draw_scale: float,
    phase: float,
    coeffs: CoefficientSet,
    reverse_index: int | None = None,
) -> tuple[float, float]:
    """Tip of the chain at ``phase`` ∈ [0, 1).

    ``reverse_index`` is a position in ``coeffs``; that arm turns backward.
    """
    if not coeffs:
        return (float(origin[0]), float(origin[1]))
    vectors, _ = _arm_vectors(draw_scale, phase, coeffs, reverse_index)
    total = vectors.sum(axis=0) if len(vectors) else np.zeros(2)
    return (float(origin[0] + total[0]), float(origin[1] + total[1]))


def epicycle_chain(
    origin: tuple[float, float],
    draw_scale: float,
    phase: float,
    coeffs: CoefficientSet,
    reverse_index: int | None = None,
) -> EpicycleChain:
    """Every joint of the chain, for drawing circles and arms."""
    start = np.array([[float(origin[0]), float(origin[1])]])
    if not coeffs:
        return EpicycleChain(joints=start, radii=np.zeros(0))
    vectors, radii = _arm_vectors(draw_scale, phase, coeffs, reverse_index)
    joints = np.vstack([start, start + np.cumsum(vectors, axis=0)]) if len(vectors) else start
    return EpicycleChain(joints=joints, radii=radii)
