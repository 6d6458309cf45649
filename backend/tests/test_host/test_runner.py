"""Tests for the headless host."""

import asyncio

import numpy as np
from PIL import Image

from fourier_trace.host.context import Status
from fourier_trace.host.runner import HeadlessHost
from fourier_trace.render.raster import RasterSurface
from fourier_trace.render.svg_surface import SvgSurface
from fourier_trace.svg.sampler import SvgPathSampler
import fourier_trace.visualizers.fourier  # noqa: F401
from tests.conftest import HEART_SVG, NO_PATH_SVG, FunctionSampler, small_config


def _host(source="shape.svg", sampler=None, surface_factory=SvgSurface, **config):
    return HeadlessHost(
        "fourier-transform",
        120,
        90,
        surface_factory=surface_factory,
        source=source,
        sampler=sampler or FunctionSampler(),
        config=small_config(**config),
        rng=np.random.default_rng(1),
    )


def test_open_settle_run_close():
    host = _host()

    async def run():
        await host.open()
        await host.open()
        status = await host.wait_until_settled(timeout=5)
        frames = await host.run(5, fps=0)
        await host.close()
        return status, frames

    status, frames = asyncio.run(run())
    assert status is Status.READY
    assert len(frames) == 5
    assert all(frame.startswith("<svg") and "<circle" in frame for frame in frames)
    assert host.visualizer.torn_down
    assert host.events.listener_count("resize") == 0


def test_resize_swaps_surface_and_notifies():
    host = _host()

    async def run():
        await host.open()
        await host.wait_until_settled(timeout=5)
        await host.run(3, fps=0)
        host.resize(320, 160)
        frames = await host.run(1, fps=0)
        trace_length = len(host.visualizer.traces[0])
        await host.close()
        return frames, trace_length

    frames, trace_length = asyncio.run(run())
    assert host.context.surface.width == 320
    assert 'viewBox="0 0 320 160"' in frames[0]
    assert trace_length == host.visualizer.config.sub_steps


def test_inline_svg_to_raster_frames():
    host = _host(HEART_SVG, SvgPathSampler(), surface_factory=RasterSurface)

    async def run():
        await host.open()
        await host.wait_until_settled(timeout=10)
        frames = await host.run(3, fps=0)
        await host.close()
        return frames

    frames = asyncio.run(run())
    assert host.visualizer.status is Status.READY
    assert all(isinstance(frame, Image.Image) and frame.size == (120, 90) for frame in frames)
    assert frames[-1].getbbox() is not None


def test_error_is_shown_on_every_frame():
    host = _host(NO_PATH_SVG, SvgPathSampler())

    async def run():
        await host.open()
        status = await host.wait_until_settled(timeout=5)
        frames = await host.run(2, fps=0)
        await host.close()
        return status, frames

    status, frames = asyncio.run(run())
    assert status is Status.ERROR
    assert all("Load failed: No &lt;path&gt; element found in SVG." in frame for frame in frames)


def test_run_without_capture():
    host = _host()

    async def run():
        await host.open()
        await host.wait_until_settled(timeout=5)
        frames = await host.run(2, fps=0, capture=False)
        await host.close()
        return frames

    assert asyncio.run(run()) == []
