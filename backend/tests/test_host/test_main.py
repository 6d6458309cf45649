"""Tests for settings and the GIF entry point."""

import asyncio

import pytest
from PIL import Image

from fourier_trace.config import Settings
from fourier_trace.host.context import Status
from fourier_trace.main import create_host, render_animation
from tests.conftest import HEART_SVG


def test_settings_defaults():
    s = Settings(_env_file=None)
    assert s.visualizer_id == "fourier-transform"
    assert s.asset_source == "samples/fourier_transform.svg"
    assert s.frame_count == 300


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("CANVAS_WIDTH", "640")
    monkeypatch.setenv("FOURIER_TRACE_LOG_LEVEL", "debug")
    s = Settings(_env_file=None)
    assert s.canvas_width == 640
    assert s.fourier_trace_log_level == "debug"


def test_create_host_uses_settings():
    host = create_host(Settings(_env_file=None, canvas_width=200, canvas_height=100, trace_stroke_weight=8.0))
    assert host.context.surface.width == 200
    assert host.context.surface.height == 100
    assert host.visualizer.style.trace_stroke_weight == 8.0
    assert host.visualizer.status is Status.PREPARING


def test_render_animation_writes_gif(tmp_path):
    output = tmp_path / "heart.gif"
    settings = Settings(
        _env_file=None,
        asset_source=HEART_SVG,
        canvas_width=64,
        canvas_height=64,
        frame_count=3,
        output_path=str(output),
    )
    assert asyncio.run(render_animation(settings)) == output
    with Image.open(output) as gif:
        assert gif.size == (64, 64)
        assert gif.n_frames >= 2


def test_render_animation_rejects_empty_run():
    with pytest.raises(ValueError):
        asyncio.run(render_animation(Settings(_env_file=None, frame_count=0)))
