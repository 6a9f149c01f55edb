# site_mapper/crawler/worker.py
"""Fetch worker: turns work items into edge reports."""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

from site_mapper.crawler.fetcher import FetchError
from site_mapper.crawler.models import Edge, LinkSource, PageDone, Report

logger = logging.getLogger("SiteMapper")


async def fetch_worker(
    work_queue: asyncio.Queue[Optional[str]],
    edge_queue: asyncio.Queue[Report],
    link_source: LinkSource,
) -> int:
    """
    Consume URLs from *work_queue* until the ``None`` sentinel arrives.

    Each discovered link is reported as ``Edge(url, link)``, followed by
    ``PageDone(url)``. A page that fails to load reports no edges.
    Returns the number of pages processed.
    """
    processed = 0
    while True:
        url = await work_queue.get()
        if url is None:
            break
        try:
            links = await link_source(url)
        except FetchError as exc:
            logger.warning("Failed to get links from %s: %s", url, exc.reason)
            links = []
        for link in links:
            await edge_queue.put(Edge(url, link))
        await edge_queue.put(PageDone(url))
        processed += 1
    logger.debug("Worker finished after %d pages", processed)
    return processed


__all__ = ["fetch_worker"]
