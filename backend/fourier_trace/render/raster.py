"""Raster surface — Pillow canvas with alpha-blended drawing.

Primitives draw through ``ImageDraw.Draw(image, "RGBA")``, which blends each
shape onto the RGB canvas. The gradient fill is computed per pixel with numpy
inside the polygon's bounding box and pasted through a coverage mask built
with the nonzero winding rule, so self-intersecting traces fill solid.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from PIL import Image, ImageDraw, ImageFont

from fourier_trace.render.style import BLACK, Color, with_alpha
from fourier_trace.render.surface import LinearGradient, OpacityFn

# Stroke widths at or below this many pixels get no round caps.
_MIN_CAP_WIDTH = 2


def _xy(point) -> tuple[float, float]:
    return (float(point[0]), float(point[1]))


def _nonzero_coverage(coords: NDArray[np.float64], box: tuple[int, int, int, int]) -> NDArray[np.bool_]:
    """Pixel-centre coverage of the closed polygon by the nonzero winding rule."""
    x0, y0, x1, y1 = box
    start = coords
    end = np.roll(coords, -1, axis=0)
    centres_x = np.arange(x0, x1) + 0.5
    coverage = np.zeros((y1 - y0, x1 - x0), dtype=bool)
    for row, y in enumerate(np.arange(y0, y1) + 0.5):
        upward = (start[:, 1] <= y) & (end[:, 1] > y)
        downward = (start[:, 1] > y) & (end[:, 1] <= y)
        crossing = upward | downward
        if not crossing.any():
            continue
        s = start[crossing]
        e = end[crossing]
        x_hit = s[:, 0] + (y - s[:, 1]) / (e[:, 1] - s[:, 1]) * (e[:, 0] - s[:, 0])
        direction = np.where(upward[crossing], 1, -1)
        # Signed crossings of the ray from each pixel centre toward +x
        winding = ((x_hit[None, :] > centres_x[:, None]) * direction[None, :]).sum(axis=1)
        coverage[row] = winding != 0
    return coverage


class RasterSurface:
    """Drawing surface backed by a PIL RGB image."""

    def __init__(self, width: int, height: int, background: Color = BLACK) -> None:
        self.width = int(width)
        self.height = int(height)
        self.image = Image.new("RGB", (self.width, self.height), background[:3])
        self._draw = ImageDraw.Draw(self.image, "RGBA")
        self._fonts: dict[int, ImageFont.ImageFont | ImageFont.FreeTypeFont] = {}

    def snapshot(self) -> Image.Image:
        """Copy of the current canvas."""
        return self.image.copy()

    def clear(self, color: Color) -> None:
        self.image.paste(color[:3], (0, 0, self.width, self.height))

    def fill_gradient_polygon(self, points: NDArray[np.float64], gradient: LinearGradient) -> None:
        coords = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        if len(coords) < 3:
            return

        x0 = max(0, int(np.floor(coords[:, 0].min())))
        y0 = max(0, int(np.floor(coords[:, 1].min())))
        x1 = min(self.width, int(np.ceil(coords[:, 0].max())) + 1)
        y1 = min(self.height, int(np.ceil(coords[:, 1].max())) + 1)
        if x0 >= x1 or y0 >= y1:
            return
        coverage = _nonzero_coverage(coords, (x0, y0, x1, y1))
        if not coverage.any():
            return

        # Pixel centres inside the polygon's bounding box
        ys, xs = np.mgrid[y0:y1, x0:x1].astype(np.float64) + 0.5
        rgba = gradient.sample(gradient.project(xs, ys))
        alpha = np.where(coverage, np.clip(rgba[..., 3], 0, 255), 0.0)
        if not alpha.any():
            return

        layer = Image.fromarray(np.clip(rgba[..., :3], 0, 255).round().astype(np.uint8), "RGB")
        alpha_mask = Image.fromarray(alpha.round().astype(np.uint8), "L")
        self.image.paste(layer, (x0, y0), alpha_mask)

    def stroke_faded_polyline(
        self,
        points: NDArray[np.float64],
        opacity_fn: OpacityFn,
        color: Color,
        width: float,
    ) -> None:
        line_width = max(1, int(round(width)))
        cap = line_width / 2
        for i in range(1, len(points)):
            fill = with_alpha(color, opacity_fn(i))
            if fill[3] == 0:
                continue
            start = _xy(points[i - 1])
            end = _xy(points[i])
            self._draw.line([start, end], fill=fill, width=line_width)
            if line_width > _MIN_CAP_WIDTH:
                self._dot(end, cap, fill)

    def line(self, start: tuple[float, float], end: tuple[float, float], color: Color, width: float) -> None:
        self._draw.line([_xy(start), _xy(end)], fill=color, width=max(1, int(round(width))))

    def stroke_circle(self, center: tuple[float, float], radius: float, color: Color, width: float) -> None:
        cx, cy = _xy(center)
        self._draw.ellipse(
            [cx - radius, cy - radius, cx + radius, cy + radius],
            outline=color,
            width=max(1, int(round(width))),
        )

    def fill_circle(self, center: tuple[float, float], radius: float, color: Color) -> None:
        self._dot(_xy(center), radius, color)

    def text(self, message: str, center: tuple[float, float], size: float, color: Color) -> None:
        font = self._font(size)
        left, top, right, bottom = self._draw.textbbox((0, 0), message, font=font)
        cx, cy = _xy(center)
        origin = (cx - (right - left) / 2 - left, cy - (bottom - top) / 2 - top)
        self._draw.text(origin, message, fill=color, font=font)

    def _dot(self, center: tuple[float, float], radius: float, color: Color) -> None:
        cx, cy = center
        self._draw.ellipse([cx - radius, cy - radius, cx + radius, cy + radius], fill=color)

    def _font(self, size: float) -> ImageFont.ImageFont | ImageFont.FreeTypeFont:
        key = max(1, int(round(size)))
        if key not in self._fonts:
            self._fonts[key] = ImageFont.load_default(size=key)
        return self._fonts[key]
