"""Headless host factory + GIF renderer."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from dotenv import load_dotenv

from fourier_trace.config import Settings, settings
from fourier_trace.engine.config import AnimationConfig
from fourier_trace.host.context import Status
from fourier_trace.host.runner import HeadlessHost
from fourier_trace.render.style import TraceStyle
from fourier_trace.svg.sampler import SvgPathSampler

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.fourier_trace_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)


def _register_visualizers() -> None:
    """Import all visualizer modules so @visualizer decorators fire."""
    import importlib
    import pkgutil

    package = importlib.import_module("fourier_trace.visualizers")
    for _, module_name, _ in pkgutil.iter_modules(package.__path__):
        importlib.import_module(f"fourier_trace.visualizers.{module_name}")


def create_host(config: Settings | None = None) -> HeadlessHost:
    config = config or settings
    _register_visualizers()
    return HeadlessHost(
        config.visualizer_id,
        config.canvas_width,
        config.canvas_height,
        source=config.asset_source,
        sampler=SvgPathSampler(timeout=config.fetch_timeout),
        config=AnimationConfig(),
        style=TraceStyle(trace_stroke_weight=config.trace_stroke_weight),
    )


async def render_animation(config: Settings | None = None) -> Path:
    """Render one loop of the animation to an animated GIF."""
    config = config or settings
    if config.frame_count < 1:
        raise ValueError(f"frame_count must be positive, got {config.frame_count}")
    host = create_host(config)
    await host.open()
    try:
        status = await host.wait_until_settled()
        if status is Status.ERROR:
            logger.error("%s", host.visualizer.status_message)
        frames = await host.run(config.frame_count, fps=0)
    finally:
        await host.close()

    output = Path(config.output_path)
    duration = int(round(1000 / config.fps)) if config.fps > 0 else 33
    frames[0].save(output, save_all=True, append_images=frames[1:], duration=duration, loop=0)
    logger.info("Wrote %d frames to %s", len(frames), output)
    return output


if __name__ == "__main__":
    asyncio.run(render_animation())
