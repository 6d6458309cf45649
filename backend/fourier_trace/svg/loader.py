"""Load SVG text from a URL, a local file or inline markup."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import httpx

from fourier_trace.engine.errors import AssetFetchError

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT = 10.0


def _is_inline_markup(source: str) -> bool:
    head = source.lstrip()[:256].lower()
    return head.startswith("<svg") or head.startswith("<?xml")


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


async def load_svg_text(
    source: str,
    *,
    timeout: float = _DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Return the SVG document text for ``source``. Raises AssetFetchError."""
    if _is_inline_markup(source):
        return source

    if _is_url(source):
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=transport, follow_redirects=True) as client:
                response = await client.get(source)
        except httpx.HTTPError as e:
            raise AssetFetchError(f"SVG request failed: {e}") from e
        if not response.is_success:
            raise AssetFetchError(f"SVG request failed ({response.status_code})")
        logger.debug("Fetched %s (%d bytes)", source, len(response.content))
        return response.text

    path = Path(source)
    try:
        text = await asyncio.to_thread(path.read_text, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise AssetFetchError(f"Cannot read SVG file {path}: {e}") from e
    logger.debug("Read %s (%d chars)", path, len(text))
    return text
