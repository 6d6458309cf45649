"""Keep the largest arms of a coefficient set."""

from __future__ import annotations

from collections.abc import Iterable

from fourier_trace.engine.context import Coefficient, CoefficientSet


def select_coefficients(coeffs: Iterable[Coefficient], budget: int) -> CoefficientSet:
    """Sort by descending amplitude (stable) and keep the first ``budget``."""
    if budget <= 0:
        return ()
    ranked = sorted(coeffs, key=lambda c: c.amp, reverse=True)
    return tuple(ranked[:budget])
