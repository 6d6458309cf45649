"""Fixed constants of the epicycle animation."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class AnimationConfig:
    """Controls sampling resolution, loop timing and trace behaviour."""

    # Point sampling
    sample_count_low: int = 100  # drives the drawn epicycle chain
    sample_count_high: int = 720  # morph target only, never drawn

    # Coefficient budget (highest-amplitude terms kept per set)
    coefficient_budget: int = 120

    # One full revolution of the chain
    loop_frames: int = 300

    # Trace buffer
    trace_lifetime_frames: int = 100
    sub_steps_per_frame: int = 4
    trace_count: int = 1

    # Morphing toward the high-resolution shape
    morph_rate: float = 0.005
    warmup_frames: int = 20

    # Stroke fade: fraction of the trace covered by the opacity ramp
    fade_window_ratio: float = 0.8

    # Chance per cycle that one epicycle counter-rotates
    reversal_probability: float = 0.5

    # Shape width relative to canvas width
    target_width_ratio: float = 1.0

    @property
    def phase_step(self) -> float:
        return 1.0 / max(1, self.loop_frames)

    @property
    def sub_steps(self) -> int:
        return max(1, self.sub_steps_per_frame)

    @property
    def trace_bound(self) -> int:
        """Maximum samples per trace (lifetime × sub-steps, at least 2)."""
        return max(2, self.trace_lifetime_frames * self.sub_steps)
