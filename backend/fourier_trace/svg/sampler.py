"""Point sampler — facade over svgpathtools + shapely.

Extracts every <path d="..."> of a document and resamples the outlines at
near-uniform arc-length spacing. Paths share the sample budget in proportion
to their length, so a long outline is not starved by a short detail.
"""

from __future__ import annotations

import asyncio
import logging
import re
from bisect import bisect_right

import httpx
import numpy as np
from numpy.typing import NDArray
from shapely.geometry import LineString
from svgpathtools import Line, Path, parse_path

from fourier_trace.engine.errors import GeometryError
from fourier_trace.svg.loader import load_svg_text

logger = logging.getLogger(__name__)

_PATH_TAG_RE = re.compile(r"<path\b[^>]*>", re.IGNORECASE)
_ATTR_RE = re.compile(r"""([\w:-]+)\s*=\s*(?:"([^"]*)"|'([^']*)')""")

# Segments shorter than this carry no measurable length.
_MIN_LENGTH = 1e-10
# Every path contributes at least this many samples, however short.
_MIN_SAMPLES_PER_PATH = 8
# Dense polyline resolution per curved segment (lines need only their ends).
_CURVE_RESOLUTION = 48


def _extract_attrs(tag_text: str) -> dict[str, str]:
    """Extract attributes from an SVG tag string (either quote style)."""
    attrs: dict[str, str] = {}
    for m in _ATTR_RE.finditer(tag_text):
        attrs[m.group(1)] = m.group(2) if m.group(2) is not None else m.group(3)
    return attrs


def extract_path_data(svg_text: str) -> list[str]:
    """Non-empty ``d`` attributes of every <path>, in document order."""
    data: list[str] = []
    for match in _PATH_TAG_RE.finditer(svg_text):
        d = _extract_attrs(match.group(0)).get("d", "").strip()
        if d:
            data.append(d)
    if not data:
        raise GeometryError("No <path> element found in SVG.")
    return data


def _segment_line(segment) -> LineString:
    """Dense polyline approximation of one path segment."""
    if isinstance(segment, Line):
        ts = (0.0, 1.0)
    else:
        ts = np.linspace(0.0, 1.0, _CURVE_RESOLUTION)
    pts = [segment.point(float(t)) for t in ts]
    return LineString([(p.real, p.imag) for p in pts])


class _ArcLengthPath:
    """A parsed path indexed by arc length (move-to jumps excluded)."""

    def __init__(self, path: Path) -> None:
        self.pieces: list[tuple[float, LineString]] = []
        for segment in path:
            length = float(segment.length())
            if length > _MIN_LENGTH:
                self.pieces.append((length, _segment_line(segment)))
        lengths = [length for length, _ in self.pieces]
        self.starts = list(np.concatenate([[0.0], np.cumsum(lengths)[:-1]])) if lengths else []
        self.length = float(sum(lengths))

    def point_at(self, distance: float) -> tuple[float, float]:
        i = max(0, min(len(self.pieces) - 1, bisect_right(self.starts, distance) - 1))
        length, line = self.pieces[i]
        fraction = min(1.0, max(0.0, (distance - self.starts[i]) / length))
        pt = line.interpolate(fraction, normalized=True)
        return (pt.x, pt.y)

    def sample(self, count: int) -> list[tuple[float, float]]:
        return [self.point_at(self.length * s / count) for s in range(count)]


def _parse_paths(path_data: list[str]) -> list[_ArcLengthPath]:
    paths: list[_ArcLengthPath] = []
    for d in path_data:
        try:
            parsed = parse_path(d)
        except Exception as e:
            logger.warning("Failed to parse path: %s", e)
            continue
        paths.append(_ArcLengthPath(parsed))
    if not paths:
        raise GeometryError("No sampleable path found in SVG.")
    return paths


def sample_path_data(
    path_data: list[str],
    target_count: int,
    min_samples_per_path: int = _MIN_SAMPLES_PER_PATH,
) -> NDArray[np.float64]:
    """Resample all paths to roughly ``target_count`` points in total."""
    paths = _parse_paths(path_data)
    total = sum(p.length for p in paths)
    if not total > 0:
        raise GeometryError("Path length is zero.")

    points: list[tuple[float, float]] = []
    for path in paths:
        if path.length <= 0:
            logger.debug("Skipping zero-length path")
            continue
        count = max(min_samples_per_path, round(target_count * path.length / total))
        points.extend(path.sample(count))

    if len(points) < 2:
        raise GeometryError("Insufficient sampled points.")
    return np.array(points, dtype=np.float64)


def sample_svg_text(
    svg_text: str,
    target_count: int,
    min_samples_per_path: int = _MIN_SAMPLES_PER_PATH,
) -> NDArray[np.float64]:
    return sample_path_data(extract_path_data(svg_text), target_count, min_samples_per_path)


class SvgPathSampler:
    """Point sampler over SVG assets; each source is fetched at most once."""

    def __init__(
        self,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
        min_samples_per_path: int = _MIN_SAMPLES_PER_PATH,
    ) -> None:
        self.timeout = timeout
        self.transport = transport
        self.min_samples_per_path = min_samples_per_path
        self._texts: dict[str, str] = {}

    async def _load(self, source: str) -> str:
        if source not in self._texts:
            self._texts[source] = await load_svg_text(source, timeout=self.timeout, transport=self.transport)
        return self._texts[source]

    async def sample(self, source: str, target_count: int) -> NDArray[np.float64]:
        text = await self._load(source)
        points = await asyncio.to_thread(sample_svg_text, text, target_count, self.min_samples_per_path)
        logger.debug("Sampled %d points (target %d)", len(points), target_count)
        return points
