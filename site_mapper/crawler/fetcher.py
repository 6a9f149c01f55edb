# site_mapper/crawler/fetcher.py
"""
Fetcher module: downloads a single page over HTTP.

Every failure (connection error, timeout, invalid URL, non-2xx status)
surfaces as :class:`FetchError`. Nothing is retried.
"""
from __future__ import annotations

import asyncio

from aiohttp import ClientError, ClientSession
from site_mapper.config import MapperConfig
from site_mapper.crawler.models import PageData


class FetchError(Exception):
    """The page at ``url`` could not be fetched."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class Fetcher:
    """Handles HTTP fetching through a shared aiohttp session."""

    def __init__(self, session: ClientSession, config: MapperConfig) -> None:
        self.session = session
        self.config = config

    async def fetch(self, url: str) -> PageData:
        """
        Fetch *url* and return its decoded body.

        Raises FetchError on any failure.
        """
        try:
            async with self.session.get(url, raise_for_status=False) as resp:
                if not 200 <= resp.status < 300:
                    raise FetchError(url, f"HTTP {resp.status}")
                text = await resp.text(errors="replace")
                return PageData(url, text)
        except asyncio.TimeoutError as exc:
            raise FetchError(url, "timed out") from exc
        except ClientError as exc:
            raise FetchError(url, str(exc) or type(exc).__name__) from exc


__all__ = ["Fetcher", "FetchError"]
