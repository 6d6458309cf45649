"""Transform Engine — discrete Fourier series of a closed point sequence.

The sequence (x_t, y_t) is read as the complex signal z_t = x_t + i·y_t and
decomposed into N rotating vectors:

    c_k = (1/N) Σ_t z_t · e^(-2πi·k·t/N)

Index k is reported as a signed frequency (k for k ≤ N/2, else k − N) so the
chain reconstructs the shape with the shortest arms first spinning in either
direction. Cost is O(N²); N is capped by the sampler, so this runs once per
preparation and never per frame.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from fourier_trace.engine.context import Coefficient


def signed_frequency(k: int, n: int) -> int:
    """Map DFT index k ∈ [0, n) to its wrapped signed frequency."""
    return k if k <= n / 2 else k - n


def compute_dft(points: NDArray[np.float64]) -> list[Coefficient]:
    """Return one Coefficient per index k, in index order."""
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    n = len(pts)
    if n == 0:
        return []

    x = pts[:, 0]
    y = pts[:, 1]
    k = np.arange(n)
    # phi[k, t] = 2πkt/N
    phi = 2 * np.pi * np.outer(k, k) / n
    cos_phi = np.cos(phi)
    sin_phi = np.sin(phi)

    re = (cos_phi @ x + sin_phi @ y) / n
    im = (cos_phi @ y - sin_phi @ x) / n
    amp = np.hypot(re, im)
    phase = np.arctan2(im, re)

    return [
        Coefficient(
            freq=signed_frequency(int(i), n),
            re=float(re[i]),
            im=float(im[i]),
            amp=float(amp[i]),
            phase=float(phase[i]),
        )
        for i in range(n)
    ]
