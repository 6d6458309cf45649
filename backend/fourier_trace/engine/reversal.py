"""Choose at most one arm to counter-rotate for the next loop."""

from __future__ import annotations

import numpy as np

from fourier_trace.engine.context import CoefficientSet

# Arms weaker than this cannot be seen turning, so they are never picked.
_MIN_AMPLITUDE = 1e-9


def reversal_candidates(coeffs: CoefficientSet) -> list[int]:
    """Positions of arms that move (freq ≠ 0) and have visible length."""
    return [i for i, c in enumerate(coeffs) if c.freq != 0 and c.amp > _MIN_AMPLITUDE]


def pick_reverse_index(
    coeffs: CoefficientSet,
    probability: float,
    rng: np.random.Generator,
) -> int | None:
    """Roulette draw weighted by amplitude, or None.

    ``probability`` is the chance that any arm is reversed this loop.
    """
    if not coeffs:
        return None
    if rng.random() >= probability:
        return None

    candidates = reversal_candidates(coeffs)
    if not candidates:
        return None

    weights = [coeffs[i].amp for i in candidates]
    r = rng.random() * sum(weights)
    for index, weight in zip(candidates, weights):
        r -= weight
        if r <= 0:
            return index
    # Floating-point residue
    return candidates[-1]
