# File: site_mapper/engine.py
"""site_mapper.engine: wires the coordinator, the worker pool and the HTTP session for one crawl."""

from __future__ import annotations

import asyncio
from typing import Callable, List, Optional

from aiohttp import ClientSession

from site_mapper.config import MapperConfig
from site_mapper.crawler.coordinator import CrawlCoordinator
from site_mapper.crawler.fetcher import Fetcher
from site_mapper.crawler.link_extractor import EXTRACTORS, PageLinkSource
from site_mapper.crawler.models import Edge, LinkSource
from site_mapper.crawler.worker import fetch_worker
from site_mapper.logger import logger

__all__ = ["map_site", "run_crawl"]


async def run_crawl(
    config: MapperConfig,
    link_source: LinkSource,
    progress: Optional[Callable[[int], None]] = None,
) -> List[Edge]:
    """Start ``config.workers`` workers on *link_source* and run the coordinator to completion."""
    coordinator = CrawlCoordinator(
        config.base_url,
        config.idle_timeout,
        completion=config.completion,
        queue_size=config.queue_size,
        progress=progress,
    )
    workers = [
        asyncio.create_task(fetch_worker(coordinator.work_queue, coordinator.edge_queue, link_source))
        for _ in range(config.workers)
    ]
    try:
        return await coordinator.run(workers)
    finally:
        for w in workers:
            if not w.done():
                w.cancel()


async def map_site(
    config: MapperConfig,
    link_source: Optional[LinkSource] = None,
    progress: Optional[Callable[[int], None]] = None,
) -> List[Edge]:
    """
    Map the site at ``config.base_url`` and return its edge list.

    Parameters
    ----------
    config : MapperConfig
        Crawl settings.
    link_source : LinkSource, optional
        Replacement for the HTTP fetch + extract step (used by tests).
    progress : callable, optional
        Called with the number of known pages whenever a new page is found.
    """
    if link_source is not None:
        return await run_crawl(config, link_source, progress)

    logger.debug("Using %s extractor with %d workers", config.extractor, config.workers)
    async with ClientSession(headers={"User-Agent": config.user_agent}) as session:
        source = PageLinkSource(Fetcher(session, config), EXTRACTORS[config.extractor])
        return await run_crawl(config, source, progress)
