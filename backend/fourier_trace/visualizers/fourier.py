"""Fourier Transform visualizer — epicycles drawing a morphing, fading trace.

Lifecycle:
    PREPARING ──success──▶ READY (frames draw chain + trace)
        └──────failure──▶ ERROR (frames draw the error message)

``initialize`` subscribes to resize and starts one preparation task. The task
commits its result in a single step, guarded by a PreparationToken that
``teardown`` cancels; a late result after teardown is dropped.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import ExitStack

import numpy as np

from fourier_trace.engine.animation import (
    AnimationState,
    advance_phase,
    begin_frame,
    initial_state,
    morph_enabled,
)
from fourier_trace.engine.config import AnimationConfig
from fourier_trace.engine.context import PreparedShape
from fourier_trace.engine.epicycles import clear_arm_cache, epicycle_chain
from fourier_trace.engine.errors import EmptyCoefficientError, PreparationError
from fourier_trace.engine.preparation import PointSampler, PreparationToken, prepare_shape
from fourier_trace.engine.trace import Trace, morph_traces, new_traces, populate_traces, wrap01
from fourier_trace.host.context import HostContext, Size, Status
from fourier_trace.host.registry import visualizer
from fourier_trace.render.epicycle_renderer import draw_epicycles, draw_status
from fourier_trace.render.style import TraceStyle
from fourier_trace.render.surface import Surface
from fourier_trace.render.trace_renderer import render_traces
from fourier_trace.svg.sampler import SvgPathSampler

logger = logging.getLogger(__name__)

DEFAULT_SOURCE = "samples/fourier_transform.svg"
LOADING_MESSAGE = "Loading Fourier coefficients..."

# Floor for the normalized shape width used as the draw-scale divisor.
_MIN_NORM_WIDTH = 1e-6


@visualizer(
    id="fourier-transform",
    name="Fourier Transform",
    version="1.0.0",
    description="Epicycle chain tracing an SVG outline with a morphing gradient trace",
)
class FourierTraceVisualizer:
    def __init__(
        self,
        source: str = DEFAULT_SOURCE,
        *,
        sampler: PointSampler | None = None,
        config: AnimationConfig | None = None,
        style: TraceStyle | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.source = source
        self.sampler = sampler or SvgPathSampler()
        self.config = config or AnimationConfig()
        self.style = style or TraceStyle()
        self.rng = rng or np.random.default_rng()

        self.status = Status.PREPARING
        self.error_message = ""
        self.shape: PreparedShape | None = None
        self.state = AnimationState()
        self.traces: list[Trace] = new_traces(self.config)
        self.looping = False

        self._context: HostContext | None = None
        self._size = Size(0, 0)
        self._resources = ExitStack()
        self._token: PreparationToken | None = None
        self._task: asyncio.Task | None = None
        self._torn_down = False

    # ── Lifecycle ──

    async def initialize(self, context: HostContext) -> None:
        if self._torn_down or self._context is not None:
            return
        # Anything acquired here is released again if a later step raises.
        with ExitStack() as stack:
            stack.callback(context.events.on("resize", self.resize))
            token = PreparationToken()
            stack.callback(token.cancel)
            self._token = token
            task = asyncio.create_task(self._prepare(token))
            self._resources = stack.pop_all()
        self._context = context
        self._size = Size(context.width, context.height)
        self._task = task
        self.looping = True
        logger.info("Initialized %dx%d, preparing %s", context.width, context.height, self.source)

    def start(self) -> None:
        if not self._torn_down:
            self.looping = True

    def stop(self) -> None:
        self.looping = False

    def resize(self, size: Size) -> None:
        """New canvas extent: restart the animation, keep the coefficients."""
        if self._torn_down or self._context is None:
            return
        self._size = Size(int(size.width), int(size.height))
        self.traces = new_traces(self.config)
        # A resize restarts the loop with no reversal pending; the next wrap picks again.
        self.state = AnimationState()
        logger.debug("Resized to %dx%d", self._size.width, self._size.height)

    def teardown(self) -> None:
        if self._torn_down:
            return
        self._torn_down = True
        self.looping = False
        self._resources.close()
        self.shape = None
        clear_arm_cache()
        self.traces = new_traces(self.config)
        self.state = AnimationState()
        self._context = None
        logger.debug("Torn down")

    @property
    def torn_down(self) -> bool:
        return self._torn_down

    @property
    def preparation(self) -> asyncio.Task | None:
        return self._task

    @property
    def status_message(self) -> str:
        if self.status is Status.ERROR:
            return self.error_message
        return LOADING_MESSAGE

    # ── Preparation ──

    async def _prepare(self, token: PreparationToken) -> None:
        try:
            shape = await prepare_shape(self.source, self.sampler, self.config)
        except EmptyCoefficientError as e:
            self._fail(token, str(e))
        except PreparationError as e:
            self._fail(token, f"Load failed: {e}")
        except Exception as e:
            logger.exception("Unexpected preparation failure")
            self._fail(token, f"Load failed: {e}")
        else:
            self._commit(token, shape)

    def _is_live(self, token: PreparationToken) -> bool:
        return token is self._token and not token.cancelled

    def _commit(self, token: PreparationToken, shape: PreparedShape) -> None:
        if not self._is_live(token):
            logger.debug("Discarding preparation result after teardown")
            return
        self.shape = shape
        self.traces = new_traces(self.config)
        self.state = initial_state(shape.low, self.config, self.rng)
        self.error_message = ""
        self.status = Status.READY
        logger.info("Ready: %d arms, reverse index %s", len(shape.low), self.state.reverse_index)

    def _fail(self, token: PreparationToken, message: str) -> None:
        if not self._is_live(token):
            logger.debug("Discarding preparation failure after teardown: %s", message)
            return
        self.error_message = message
        self.status = Status.ERROR
        logger.warning("Preparation failed: %s", message)

    # ── Frame ──

    def viewport(self) -> tuple[tuple[float, float], float]:
        """(origin, draw scale): chain centred, shape width fit to the canvas."""
        origin = (self._size.width * 0.5, self._size.height * 0.5)
        norm_width = self.shape.norm_width if self.shape is not None else 1.0
        draw_scale = self._size.width * self.config.target_width_ratio / max(_MIN_NORM_WIDTH, norm_width)
        return origin, draw_scale

    def draw_frame(self) -> None:
        if self._torn_down or self._context is None or not self.looping:
            return
        surface = self._context.surface
        surface.clear(self.style.background)

        if self.status is not Status.READY or self.shape is None:
            draw_status(surface, self.status_message, self.style)
            return

        self._update_traces()
        self._render(surface)
        self.state = advance_phase(self.state, self.shape.low, self.config, self.rng)

    def _update_traces(self) -> None:
        self.state = begin_frame(self.state)
        if morph_enabled(self.state, self.config):
            morph_traces(self.traces, self.config.morph_rate)
        origin, draw_scale = self.viewport()
        populate_traces(
            self.traces,
            self.shape,
            origin,
            draw_scale,
            self.state.phase,
            self.state.reverse_index,
            self.config,
        )

    def _render(self, surface: Surface) -> None:
        origin, draw_scale = self.viewport()
        chain = epicycle_chain(
            origin,
            draw_scale,
            wrap01(self.state.phase + self.config.phase_step),
            self.shape.low,
            self.state.reverse_index,
        )
        draw_epicycles(surface, chain, self.style)
        render_traces(surface, self.traces, self.style, self.config.fade_window_ratio)
