"""Visualizer registry — every visualizer is a class registered via decorator.

Usage:
    @visualizer(id="fourier-transform", name="Fourier Transform", version="1.0.0")
    class FourierTraceVisualizer:
        ...

Adding a new visualizer = creating one module with the decorator. Nothing else changes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class VisualizerSpec:
    id: str
    name: str
    factory: Callable[..., Any]
    version: str = "1.0.0"
    description: str = ""


class VisualizerRegistry:
    """Registry of all visualizers, keyed by id."""

    def __init__(self) -> None:
        self._visualizers: dict[str, VisualizerSpec] = {}

    def register(self, spec: VisualizerSpec) -> None:
        if spec.id in self._visualizers:
            raise ValueError(f"Duplicate visualizer ID: {spec.id}")
        self._visualizers[spec.id] = spec
        logger.debug("Registered visualizer %s (%s %s)", spec.id, spec.name, spec.version)

    def get(self, visualizer_id: str) -> VisualizerSpec:
        try:
            return self._visualizers[visualizer_id]
        except KeyError:
            known = ", ".join(sorted(self._visualizers)) or "none"
            raise KeyError(f"Unknown visualizer {visualizer_id!r} (registered: {known})") from None

    def all(self) -> list[VisualizerSpec]:
        return sorted(self._visualizers.values(), key=lambda s: s.id)

    def create(self, visualizer_id: str, **options: Any) -> Any:
        """Instantiate the visualizer registered under ``visualizer_id``."""
        return self.get(visualizer_id).factory(**options)

    @property
    def count(self) -> int:
        return len(self._visualizers)


# Module-level singleton
_registry = VisualizerRegistry()


def get_registry() -> VisualizerRegistry:
    return _registry


def visualizer(
    *,
    id: str,
    name: str,
    version: str = "1.0.0",
    description: str = "",
):
    """Class decorator registering a visualizer."""

    def decorator(cls):
        _registry.register(
            VisualizerSpec(id=id, name=name, factory=cls, version=version, description=description)
        )
        return cls

    return decorator
