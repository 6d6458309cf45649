"""Animation state: frame counter, loop phase and pending reversal.

State is an immutable value; every update returns a new one.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

import numpy as np

from fourier_trace.engine.config import AnimationConfig
from fourier_trace.engine.context import CoefficientSet
from fourier_trace.engine.reversal import pick_reverse_index


@dataclass(frozen=True)
class AnimationState:
    phase: float = 0.0
    reverse_index: int | None = None
    frames_since_ready: int = 0


def initial_state(
    coeffs: CoefficientSet,
    config: AnimationConfig,
    rng: np.random.Generator,
) -> AnimationState:
    """State right after preparation: first loop may already carry a reversal."""
    return AnimationState(reverse_index=pick_reverse_index(coeffs, config.reversal_probability, rng))


def begin_frame(state: AnimationState) -> AnimationState:
    return replace(state, frames_since_ready=state.frames_since_ready + 1)


def morph_enabled(state: AnimationState, config: AnimationConfig) -> bool:
    """Morphing waits out the warm-up window so the chain settles first."""
    return state.frames_since_ready > config.warmup_frames


def advance_phase(
    state: AnimationState,
    coeffs: CoefficientSet,
    config: AnimationConfig,
    rng: np.random.Generator,
) -> AnimationState:
    """Step the phase; on wrap, start a new loop with a fresh reversal pick."""
    phase = state.phase + config.phase_step
    if phase < 1.0:
        return replace(state, phase=phase)

    # phase < 1 and phase_step <= 1, so one subtraction always lands in [0, 1)
    return replace(
        state,
        phase=phase - 1.0,
        reverse_index=pick_reverse_index(coeffs, config.reversal_probability, rng),
    )
