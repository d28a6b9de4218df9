"""Asynchronous loading of a TSV price file from disk or over HTTP."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional, Union

import httpx

from models.records import Series
from services.errors import LoadError, SourceNotFoundError
from services.parser import parse_series

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

Source = Union[str, Path]


def is_remote(source: Source) -> bool:
    return isinstance(source, str) and source.lower().startswith(("http://", "https://"))


def _read_file(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SourceNotFoundError(
            f"Data file {str(path)!r} does not exist.", source=str(path)
        ) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise LoadError(f"Could not read {str(path)!r}: {exc}", source=str(path)) from exc


async def _fetch(url: str, client: Optional[httpx.AsyncClient]) -> str:
    owns_client = client is None
    http = client or httpx.AsyncClient(timeout=DEFAULT_TIMEOUT, follow_redirects=True)
    try:
        response = await http.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise LoadError(
            f"Fetching {url!r} failed with status {exc.response.status_code}.", source=url
        ) from exc
    except httpx.HTTPError as exc:
        raise LoadError(f"Fetching {url!r} failed: {exc}", source=url) from exc
    finally:
        if owns_client:
            await http.aclose()
    return response.text


async def load_text(source: Source, client: Optional[httpx.AsyncClient] = None) -> str:
    if is_remote(source):
        return await _fetch(str(source), client)
    return await asyncio.to_thread(_read_file, Path(source))


async def load_series(source: Source, client: Optional[httpx.AsyncClient] = None) -> Series:
    """Load and parse ``source`` into a series.

    Raises ``LoadError`` when the resource cannot be read and ``ParseError``
    when a row is malformed. Nothing is rendered from a partial load.
    """
    logger.debug("Loading series", extra={"source": str(source)})
    text = await load_text(source, client=client)
    return parse_series(text)
