"""Move a sampled outline into a unit-sized, shape-local frame."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from fourier_trace.engine.context import NormalizedShape
from fourier_trace.utils.geometry import bbox

# Floor for the scale divisor so a single repeated point cannot divide by zero.
_MIN_SIZE = 1e-6


def normalize_points(points: NDArray[np.float64]) -> NormalizedShape:
    """Centre on the bounding box and divide by its larger side."""
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    if len(pts) == 0:
        return NormalizedShape()

    xmin, ymin, xmax, ymax = bbox(pts)
    cx = (xmin + xmax) * 0.5
    cy = (ymin + ymax) * 0.5
    size = max(_MIN_SIZE, xmax - xmin, ymax - ymin)

    normalized = (pts - np.array([cx, cy])) / size
    return NormalizedShape(
        points=normalized,
        width=(xmax - xmin) / size,
        height=(ymax - ymin) / size,
    )
