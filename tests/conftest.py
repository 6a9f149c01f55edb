# File: tests/conftest.py
import asyncio
import logging
from collections import Counter
from collections.abc import AsyncIterator
from typing import Dict, Iterable, List, Optional

import pytest
import pytest_asyncio
from aiohttp import web

from site_mapper.config import MapperConfig
from site_mapper.crawler.fetcher import FetchError
from site_mapper.crawler.models import PageData
from site_mapper.logger import LOGGER_NAME

BASE = "http://site.test"


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


class FakeLinkSource:
    """
    In-memory replacement for the HTTP fetch + extract step.

    ``graph`` maps full URLs to the links found on them; URLs missing from it
    (or listed in ``failing``) raise FetchError. ``delays`` adds per-URL latency.
    """

    def __init__(
        self,
        graph: Dict[str, List[str]],
        delays: Optional[Dict[str, float]] = None,
        failing: Iterable[str] = (),
    ) -> None:
        self.graph = graph
        self.delays = delays or {}
        self.failing = set(failing)
        self.calls: List[str] = []

    @property
    def call_counts(self) -> Counter:
        return Counter(self.calls)

    async def __call__(self, url: str) -> List[str]:
        self.calls.append(url)
        delay = self.delays.get(url)
        if delay:
            await asyncio.sleep(delay)
        if url in self.failing or url not in self.graph:
            raise FetchError(url, "HTTP 404")
        return list(self.graph[url])


@pytest.fixture()
def fake_site():
    """Factory for FakeLinkSource keyed by paths relative to BASE."""

    def _build(pages: Dict[str, List[str]], **kwargs) -> FakeLinkSource:
        graph = {BASE + path: links for path, links in pages.items()}
        delays = {BASE + path: d for path, d in kwargs.pop("delays", {}).items()}
        failing = [BASE + path for path in kwargs.pop("failing", ())]
        return FakeLinkSource(graph, delays=delays, failing=failing)

    return _build


@pytest.fixture()
def basic_config() -> MapperConfig:
    """Small, fast config pointing at the fake site."""
    return MapperConfig(base_url=BASE, idle_timeout=0.2, workers=4)


@pytest.fixture()
def mapper_logs(caplog):
    """Capture records of the project logger (it does not propagate to root)."""
    lg = logging.getLogger(LOGGER_NAME)
    lg.addHandler(caplog.handler)
    caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
    yield caplog
    lg.removeHandler(caplog.handler)


@pytest.fixture()
def mock_page_data() -> PageData:
    """A PageData with a mix of link shapes."""
    html = (
        '<html><body>'
        '<a href="/link1">L1</a>'
        '<a href="http://external.com/x">X</a>'
        '<a href="/link-2/sub">L2</a>'
        '<a href="/search?q=1">Q</a>'
        '<a href="#top">Top</a>'
        '<a href="relative">R</a>'
        '<a href="/link1">L1 again</a>'
        '</body></html>'
    )
    return PageData(url=BASE + "/", content=html)


async def _serve_app(app: web.Application) -> AsyncIterator[str]:
    """Start *app* on a free local port, yield its base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", 0)
    await site.start()
    host, port = runner.addresses[0][:2]
    try:
        yield f"http://{host}:{port}"
    finally:
        await runner.cleanup()


@pytest_asyncio.fixture
async def site_server() -> AsyncIterator[str]:
    """
    A small site::

        /        -> /a, /b
        /a       -> /b, /
        /b       -> (no links)
        /broken  -> HTTP 500
        /missing -> HTTP 404 (no route)
    """
    app = web.Application()

    async def handle_root(_):
        return web.Response(text='<a href="/a">A</a> <a href="/b">B</a>', content_type="text/html")

    async def handle_a(_):
        return web.Response(text='<a href="/b">B</a> <a href="/">Home</a>', content_type="text/html")

    async def handle_b(_):
        return web.Response(text="<h1>Leaf</h1>", content_type="text/html")

    async def handle_broken(_):
        return web.Response(status=500, text="boom")

    app.router.add_get("/", handle_root)
    app.router.add_get("/a", handle_a)
    app.router.add_get("/b", handle_b)
    app.router.add_get("/broken", handle_broken)

    async for url in _serve_app(app):
        yield url


@pytest.fixture()
def serve_app():
    """Expose the app-serving helper to test modules."""
    return _serve_app
