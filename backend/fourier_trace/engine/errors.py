"""Preparation failures.

Every error raised between fetching the asset and selecting coefficients
derives from PreparationError, so the visualizer can recover them at a
single boundary.
"""

from __future__ import annotations


class PreparationError(Exception):
    """Base class for failures of the one-shot preparation pipeline."""


class AssetFetchError(PreparationError):
    """The SVG source is unreachable or answered with an error status."""


class GeometryError(PreparationError):
    """No sampleable path, zero path length, or too few sampled points."""


class EmptyCoefficientError(PreparationError):
    """The transform produced no usable coefficient."""
