"""Tests for chain and status drawing."""

import math

from fourier_trace.engine.context import Coefficient
from fourier_trace.engine.epicycles import epicycle_chain
from fourier_trace.render.epicycle_renderer import draw_epicycles, draw_status, status_text_size
from fourier_trace.render.style import TraceStyle
from tests.conftest import RecordingSurface


def test_circle_per_visible_arm_then_tip():
    coeffs = (
        Coefficient.from_parts(0, 5.0, 0.0),
        Coefficient.from_parts(1, 1.0, 0.0),
        Coefficient.from_parts(-2, 0.01, 0.0),
    )
    chain = epicycle_chain((100.0, 100.0), 40.0, 0.0, coeffs)
    surface = RecordingSurface()
    draw_epicycles(surface, chain, TraceStyle())

    # 0.4px arm is below the circle threshold: arm only
    assert surface.names() == ["stroke_circle", "line", "line", "fill_circle"]
    center, radius, _, _ = surface.calls[0][1]
    assert center == (100.0, 100.0)
    assert math.isclose(radius, 40.0)
    tip, tip_radius, _ = surface.calls[-1][1]
    assert tip == chain.tip
    assert tip_radius == 2.0


def test_status_text_size():
    style = TraceStyle()
    assert status_text_size(200, 200, style) == 14.0
    assert status_text_size(2000, 1000, style) == 25.0


def test_status_is_centred():
    surface = RecordingSurface(width=300, height=100)
    draw_status(surface, "Loading Fourier coefficients...", TraceStyle())
    message, center, size, _ = surface.calls[0][1]
    assert message == "Loading Fourier coefficients..."
    assert center == (150.0, 50.0)
    assert size == 14.0
