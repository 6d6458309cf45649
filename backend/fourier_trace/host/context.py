"""Lifecycle contract between the host shell and a visualizer."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Protocol

from fourier_trace.host.events import EventBus
from fourier_trace.render.surface import Surface


class Status(enum.Enum):
    PREPARING = "preparing"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class Size:
    width: int
    height: int


@dataclass
class HostContext:
    """What the host hands a visualizer at initialization.

    The host swaps ``surface`` and the size fields before emitting ``resize``.
    """

    surface: Surface
    width: int
    height: int
    events: EventBus


class Visualizer(Protocol):
    status: Status

    async def initialize(self, context: HostContext) -> None: ...

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def resize(self, size: Size) -> None: ...

    def draw_frame(self) -> None: ...

    def teardown(self) -> None: ...
