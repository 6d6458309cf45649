"""Rendering of the epicycle chain and its trace onto a drawing surface."""

from fourier_trace.render.raster import RasterSurface
from fourier_trace.render.style import TraceStyle
from fourier_trace.render.surface import LinearGradient, Surface
from fourier_trace.render.svg_surface import SvgSurface

__all__ = [
    "LinearGradient",
    "RasterSurface",
    "Surface",
    "SvgSurface",
    "TraceStyle",
]
