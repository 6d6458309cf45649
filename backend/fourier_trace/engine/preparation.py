"""Preparation pipeline — sample → normalize → transform → select, run once.

The fetch is awaited on the event loop; the numeric stages run in a worker
thread so the frame loop keeps drawing the status message meanwhile. The
result is a single immutable PreparedShape the visualizer commits atomically.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Protocol

import numpy as np
from numpy.typing import NDArray

from fourier_trace.engine.config import AnimationConfig
from fourier_trace.engine.context import CoefficientSet, PreparedShape
from fourier_trace.engine.errors import EmptyCoefficientError, GeometryError
from fourier_trace.engine.normalizer import normalize_points
from fourier_trace.engine.selector import select_coefficients
from fourier_trace.engine.transform import compute_dft

logger = logging.getLogger(__name__)

# Floor for the normalized extents used as draw-scale divisors.
_MIN_NORM_EXTENT = 1e-6


class PointSampler(Protocol):
    """Turns a path source into ordered points at near-uniform arc-length spacing."""

    async def sample(self, source: str, target_count: int) -> NDArray[np.float64]: ...


@dataclass
class PreparationToken:
    """Completion token: a result is only installed while the token is live."""

    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


def _has_moving_arm(coeffs: CoefficientSet) -> bool:
    return any(c.freq != 0 and c.amp > 0 for c in coeffs)


def _require_points(points: NDArray[np.float64]) -> NDArray[np.float64]:
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    if len(pts) < 2:
        raise GeometryError("Insufficient sampled points.")
    return pts


def build_shape(
    low_points: NDArray[np.float64],
    high_points: NDArray[np.float64],
    config: AnimationConfig,
) -> PreparedShape:
    """CPU-bound part of preparation. Raises GeometryError, EmptyCoefficientError."""
    t0 = time.perf_counter()
    low_norm = normalize_points(_require_points(low_points))
    high_norm = normalize_points(_require_points(high_points))

    low = select_coefficients(compute_dft(low_norm.points), config.coefficient_budget)
    high = select_coefficients(compute_dft(high_norm.points), config.coefficient_budget)
    logger.debug(
        "  transform: %d/%d coefficients kept from %d/%d samples in %.1fms",
        len(low),
        len(high),
        len(low_norm.points),
        len(high_norm.points),
        (time.perf_counter() - t0) * 1000,
    )

    if not _has_moving_arm(low):
        raise EmptyCoefficientError("No coefficient generated.")

    return PreparedShape(
        low=low,
        high=high,
        norm_width=max(_MIN_NORM_EXTENT, low_norm.width),
        norm_height=max(_MIN_NORM_EXTENT, low_norm.height),
    )


async def prepare_shape(
    source: str,
    sampler: PointSampler,
    config: AnimationConfig,
) -> PreparedShape:
    """Run the whole pipeline. Raises PreparationError subclasses."""
    start = time.perf_counter()

    low_points = await sampler.sample(source, config.sample_count_low)
    high_points = await sampler.sample(source, config.sample_count_high)
    logger.debug(
        "  sampling: %d + %d points in %.1fms",
        len(low_points),
        len(high_points),
        (time.perf_counter() - start) * 1000,
    )

    shape = await asyncio.to_thread(build_shape, low_points, high_points, config)

    logger.info(
        "Preparation complete: %d arms (%d target arms) in %.0fms",
        len(shape.low),
        len(shape.high),
        (time.perf_counter() - start) * 1000,
    )
    return shape
