# site_mapper/crawler/coordinator.py
"""
Crawl coordinator: the single owner of the visited set and the edge list.

Workers talk to it only through two queues. The bounded work queue carries
URLs to fetch (``None`` closes it for one worker); the unbounded edge queue
carries :class:`Edge` reports and :class:`PageDone` markers back.

The crawl ends when no edge arrives for ``idle_timeout`` seconds. With
``completion="tracked"`` it also ends as soon as every enqueued work item has
been reported done, keeping the idle timeout as a fallback. A single fetch
slower than the idle timeout can therefore end the crawl early with a
truncated graph.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, List, Optional, Sequence, Set

from site_mapper.crawler.models import Edge, PageDone, Report

__all__ = ("CrawlCoordinator", "ROOT_PAGE")

ROOT_PAGE = "/"

logger = logging.getLogger("SiteMapper")


class CrawlCoordinator:
    """Feeds work to the workers, records their edges and decides when to stop."""

    def __init__(
        self,
        base_url: str,
        idle_timeout: float,
        *,
        completion: str = "idle",
        queue_size: int = 1000,
        progress: Optional[Callable[[int], None]] = None,
    ) -> None:
        if idle_timeout <= 0:
            raise ValueError("idle_timeout must be > 0")
        if completion not in ("idle", "tracked"):
            raise ValueError(f"unknown completion mode {completion!r}")
        self.base_url = base_url.rstrip("/")
        self.idle_timeout = idle_timeout
        self.completion = completion
        self.progress = progress
        self.work_queue: asyncio.Queue[Optional[str]] = asyncio.Queue(maxsize=queue_size)
        self.edge_queue: asyncio.Queue[Report] = asyncio.Queue()
        self.visited: Set[str] = set()
        self.edges: List[Edge] = []
        self.pending = 0
        self.late_edges = 0
        self._workers: Sequence[asyncio.Task] = ()

    async def run(self, workers: Sequence[asyncio.Task] = ()) -> List[Edge]:
        """
        Crawl until quiescence and return the edge list.

        *workers* are the tasks consuming :attr:`work_queue`; they are closed
        and awaited before the result is returned so no reported edge is lost.
        """
        logger.info("Mapping %s", self.base_url)
        start = time.monotonic()
        self._workers = workers
        self.visited.add(ROOT_PAGE)
        await self._enqueue(self.base_url + ROOT_PAGE)

        await self._consume_until_quiet()
        await self._close(workers)

        duration = time.monotonic() - start
        logger.info(
            "Finished: %d pages, %d edges in %.2f s",
            len(self.visited), len(self.edges), duration,
        )
        if self.late_edges:
            logger.info("%d edges arrived after the crawl stopped and were not followed", self.late_edges)
        return self.edges

    async def _consume_until_quiet(self) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.idle_timeout
        while True:
            if self.completion == "tracked" and self.pending == 0:
                logger.debug("All work items reported done")
                return
            remaining = deadline - loop.time()
            if remaining <= 0:
                break
            try:
                message = await asyncio.wait_for(self.edge_queue.get(), timeout=remaining)
            except asyncio.TimeoutError:
                break
            if isinstance(message, PageDone):
                self.pending -= 1
                continue
            self._record(message)
            await self._discover(message.destination)
            deadline = loop.time() + self.idle_timeout
        logger.debug("No new edge for %.2f s, stopping (%d work items pending)", self.idle_timeout, self.pending)

    async def _close(self, workers: Sequence[asyncio.Task]) -> None:
        self._raise_worker_failure()
        # workers drain whatever is still queued before they see their sentinel
        for _ in workers:
            await self._put(None)
        await asyncio.gather(*workers)
        while not self.edge_queue.empty():
            message = self.edge_queue.get_nowait()
            if isinstance(message, Edge):
                self._record(message)
                self.late_edges += 1

    def _record(self, edge: Edge) -> None:
        self.edges.append(Edge(edge.source.removeprefix(self.base_url), edge.destination))

    async def _discover(self, page: str) -> None:
        if page in self.visited:
            return
        self.visited.add(page)
        await self._enqueue(self.base_url + page)
        logger.debug("New page %s", page)
        if self.progress is not None:
            self.progress(len(self.visited))

    async def _enqueue(self, url: str) -> None:
        self.pending += 1
        await self._put(url)

    async def _put(self, item: Optional[str]) -> None:
        """Put *item* on the work queue, failing fast if the workers died while it is full."""
        if not self._workers or not self.work_queue.full():
            await self.work_queue.put(item)
            return
        put = asyncio.ensure_future(self.work_queue.put(item))
        try:
            while not put.done():
                alive = {w for w in self._workers if not w.done()}
                if not alive:
                    self._raise_worker_failure()
                    raise RuntimeError("all workers exited while work was still queued")
                await asyncio.wait({put, *alive}, return_when=asyncio.FIRST_COMPLETED)
                self._raise_worker_failure()
        finally:
            if not put.done():
                put.cancel()
        put.result()

    def _raise_worker_failure(self) -> None:
        for w in self._workers:
            if w.done() and not w.cancelled() and w.exception() is not None:
                raise w.exception()
