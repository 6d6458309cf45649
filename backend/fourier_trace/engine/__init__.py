"""Fourier epicycle engine."""

from fourier_trace.engine.animation import AnimationState, advance_phase, begin_frame
from fourier_trace.engine.config import AnimationConfig
from fourier_trace.engine.context import Coefficient, PreparedShape, TraceSample
from fourier_trace.engine.epicycles import epicycle_chain, evaluate_endpoint
from fourier_trace.engine.preparation import prepare_shape
from fourier_trace.engine.trace import Trace

__all__ = [
    "AnimationConfig",
    "AnimationState",
    "Coefficient",
    "PreparedShape",
    "Trace",
    "TraceSample",
    "advance_phase",
    "begin_frame",
    "epicycle_chain",
    "evaluate_endpoint",
    "prepare_shape",
]
