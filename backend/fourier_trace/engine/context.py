"""Shared value types flowing from preparation into the frame loop.

Point sequences are Nx2 float64 arrays of (x, y).
Coefficient sets are tuples so they cannot be mutated once prepared.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class Coefficient:
    """One term of the discrete Fourier series."""

    freq: int
    re: float
    im: float
    amp: float
    phase: float

    @classmethod
    def from_parts(cls, freq: int, re: float, im: float) -> Coefficient:
        return cls(
            freq=int(freq),
            re=float(re),
            im=float(im),
            amp=math.hypot(re, im),
            phase=math.atan2(im, re),
        )


CoefficientSet = tuple[Coefficient, ...]


@dataclass(frozen=True)
class NormalizedShape:
    """Points re-centred on their bounding box and scaled so the larger side is 1."""

    points: NDArray[np.float64] = field(default_factory=lambda: np.empty((0, 2)))
    # Bounding-box extents in normalized units (the larger one is 1)
    width: float = 0.0
    height: float = 0.0


@dataclass(frozen=True)
class PreparedShape:
    """Everything preparation commits in one step."""

    # Drives the drawn epicycle chain
    low: CoefficientSet = ()
    # Morph target only, never drawn directly
    high: CoefficientSet = ()
    norm_width: float = 1.0
    norm_height: float = 1.0

    @property
    def target(self) -> CoefficientSet:
        return self.high if self.high else self.low


@dataclass
class TraceSample:
    """One historical chain tip and its high-resolution counterpart."""

    x: float
    y: float
    target_x: float
    target_y: float
