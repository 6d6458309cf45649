"""Tests for the trace buffer and morphing."""

import numpy as np
import pytest

from fourier_trace.engine.config import AnimationConfig
from fourier_trace.engine.context import Coefficient, PreparedShape
from fourier_trace.engine.epicycles import evaluate_endpoint
from fourier_trace.engine.trace import (
    Trace,
    morph_traces,
    new_traces,
    populate_traces,
    sub_phases,
    wrap01,
)


def test_bound_from_config():
    config = AnimationConfig(trace_lifetime_frames=100, sub_steps_per_frame=4)
    assert config.trace_bound == 400
    assert [t.bound for t in new_traces(config)] == [400]
    assert AnimationConfig(trace_lifetime_frames=0).trace_bound == 2


def test_trace_count():
    assert len(new_traces(AnimationConfig(trace_count=3))) == 3


def test_fifo_eviction_keeps_newest():
    trace = Trace(bound=3)
    for i in range(5):
        trace.append((float(i), 0.0), (float(i), 1.0))
    assert len(trace) == 3
    assert [s.x for s in trace] == [2.0, 3.0, 4.0]
    assert trace[0].target_y == 1.0


def test_extend_never_exceeds_bound():
    trace = Trace(bound=10)
    for _ in range(20):
        pts = np.random.default_rng(0).normal(size=(4, 2))
        trace.extend(pts, pts)
        assert len(trace) <= 10
    assert len(trace) == 10


def test_extend_rejects_mismatched_lengths():
    with pytest.raises(ValueError):
        Trace(bound=5).extend(np.zeros((2, 2)), np.zeros((3, 2)))


def test_points_view_is_read_only():
    trace = Trace(bound=5)
    trace.append((1.0, 2.0), (3.0, 4.0))
    with pytest.raises(ValueError):
        trace.points[0, 0] = 9.0


def test_single_morph_step():
    trace = Trace(bound=5)
    trace.append((0.0, 10.0), (10.0, 0.0))
    trace.morph(0.1)
    assert (trace[0].x, trace[0].y) == pytest.approx((1.0, 9.0))
    assert (trace[0].target_x, trace[0].target_y) == (10.0, 0.0)


def test_morph_converges_within_one_percent():
    trace = Trace(bound=5)
    trace.append((0.0, 0.0), (1.0, -2.0))
    for _ in range(1000):
        morph_traces([trace], 0.005)
    assert trace[0].x == pytest.approx(1.0, abs=0.01)
    assert trace[0].y == pytest.approx(-2.0, abs=0.02)


def test_morph_empty_trace_is_noop():
    trace = Trace(bound=5)
    trace.morph(0.5)
    assert len(trace) == 0


def test_clear():
    trace = Trace(bound=5)
    trace.append((0.0, 0.0), (1.0, 1.0))
    trace.clear()
    assert len(trace) == 0
    assert trace.points.shape == (0, 2)


def test_wrap01():
    assert wrap01(0.25) == 0.25
    assert wrap01(1.0) == 0.0
    assert wrap01(1.5) == pytest.approx(0.5)
    assert wrap01(-0.25) == pytest.approx(0.75)
    assert 0.0 <= wrap01(-1e-18) < 1.0


def test_sub_phases_span_one_step():
    config = AnimationConfig(loop_frames=10, sub_steps_per_frame=4)
    assert sub_phases(0.5, config) == pytest.approx([0.525, 0.55, 0.575, 0.6])


def test_sub_phases_wrap():
    config = AnimationConfig(loop_frames=4, sub_steps_per_frame=2)
    assert sub_phases(0.75, config) == [0.875, 0.0]


def test_populate_records_low_tip_and_high_target():
    low = (Coefficient.from_parts(1, 1.0, 0.0),)
    high = (Coefficient.from_parts(1, 1.0, 0.0), Coefficient.from_parts(-3, 0.2, 0.0))
    shape = PreparedShape(low=low, high=high)
    config = AnimationConfig(loop_frames=8, sub_steps_per_frame=2, trace_lifetime_frames=10)
    traces = new_traces(config)

    populate_traces(traces, shape, (5.0, 5.0), 10.0, 0.0, None, config)

    trace = traces[0]
    assert len(trace) == 2
    for i, phase in enumerate([1 / 16, 2 / 16]):
        assert (trace[i].x, trace[i].y) == pytest.approx(evaluate_endpoint((5.0, 5.0), 10.0, phase, low))
        assert (trace[i].target_x, trace[i].target_y) == pytest.approx(
            evaluate_endpoint((5.0, 5.0), 10.0, phase, high)
        )


def test_populate_falls_back_to_low_without_high_set():
    low = (Coefficient.from_parts(2, 1.0, 0.0),)
    shape = PreparedShape(low=low, high=())
    config = AnimationConfig(loop_frames=8, sub_steps_per_frame=1)
    traces = new_traces(config)
    populate_traces(traces, shape, (0.0, 0.0), 1.0, 0.0, None, config)
    np.testing.assert_allclose(traces[0].points, traces[0].targets)
