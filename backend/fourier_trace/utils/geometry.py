"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

# Direction vectors shorter than this are treated as zero length.
_MIN_DIRECTION_LENGTH = 1e-6


def bbox(points: NDArray[np.float64]) -> tuple[float, float, float, float]:
    """Compute (xmin, ymin, xmax, ymax) bounding box."""
    if len(points) == 0:
        return (0.0, 0.0, 0.0, 0.0)
    return (
        float(np.min(points[:, 0])),
        float(np.min(points[:, 1])),
        float(np.max(points[:, 0])),
        float(np.max(points[:, 1])),
    )


def unit_perpendicular(start: NDArray[np.float64], end: NDArray[np.float64]) -> NDArray[np.float64]:
    """Unit vector perpendicular to start→end, rotated +90° ((-dy, dx) / len)."""
    dx, dy = np.asarray(end, dtype=np.float64) - np.asarray(start, dtype=np.float64)
    length = max(_MIN_DIRECTION_LENGTH, float(np.hypot(dx, dy)))
    return np.array([-dy / length, dx / length])


def perpendicular_extent(
    points: NDArray[np.float64],
    anchor: NDArray[np.float64],
    axis: NDArray[np.float64],
) -> float:
    """Largest |projection| of points onto axis, measured from anchor."""
    if len(points) == 0:
        return 0.0
    projections = (points - anchor) @ axis
    return float(np.max(np.abs(projections)))
