"""Headless host — drives a visualizer's frame loop and captures each frame.

Frames are drawn from the event loop one at a time; between frames the loop
yields, so the visualizer's preparation task makes progress without ever
blocking a frame.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from typing import Any

from fourier_trace.host.context import HostContext, Size, Status
from fourier_trace.host.events import EventBus
from fourier_trace.host.registry import VisualizerRegistry, get_registry
from fourier_trace.render.raster import RasterSurface
from fourier_trace.render.surface import Surface

logger = logging.getLogger(__name__)

SurfaceFactory = Callable[[int, int], Surface]


class HeadlessHost:
    """Hosts one visualizer on an off-screen surface."""

    def __init__(
        self,
        visualizer_id: str,
        width: int,
        height: int,
        *,
        surface_factory: SurfaceFactory = RasterSurface,
        registry: VisualizerRegistry | None = None,
        **options: Any,
    ) -> None:
        self.surface_factory = surface_factory
        self.events = EventBus()
        self.context = HostContext(
            surface=surface_factory(width, height),
            width=width,
            height=height,
            events=self.events,
        )
        self.visualizer = (registry or get_registry()).create(visualizer_id, **options)
        self._opened = False

    async def open(self) -> None:
        if self._opened:
            return
        await self.visualizer.initialize(self.context)
        self.visualizer.start()
        self._opened = True

    async def wait_until_settled(self, interval: float = 0.01, timeout: float | None = None) -> Status:
        """Yield to the loop until preparation has succeeded or failed."""

        async def _poll() -> Status:
            while self.visualizer.status is Status.PREPARING:
                await asyncio.sleep(interval)
            return self.visualizer.status

        return await asyncio.wait_for(_poll(), timeout)

    async def run(self, frames: int, fps: float = 60.0, capture: bool = True) -> list[Any]:
        """Draw ``frames`` frames paced at ``fps`` (0 = as fast as possible)."""
        interval = 1.0 / fps if fps > 0 else 0.0
        captured: list[Any] = []
        start = time.perf_counter()
        for _ in range(frames):
            self.visualizer.draw_frame()
            if capture:
                captured.append(self.context.surface.snapshot())
            await asyncio.sleep(interval)
        logger.info("Drew %d frames in %.0fms", frames, (time.perf_counter() - start) * 1000)
        return captured

    def resize(self, width: int, height: int) -> None:
        self.context.surface = self.surface_factory(width, height)
        self.context.width = width
        self.context.height = height
        self.events.emit("resize", Size(width, height))

    async def close(self) -> None:
        self.visualizer.teardown()
        self._opened = False
