# site_mapper/crawler/models.py
"""
Data models shared by the crawl coordinator and its workers.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable, List, Union


@dataclass(frozen=True, slots=True)
class Edge:
    """``destination`` is linked from ``source``."""

    source: str
    destination: str


@dataclass(frozen=True, slots=True)
class PageDone:
    """Reported by a worker after all edges of one work item were sent."""

    url: str


@dataclass(slots=True)
class PageData:
    """URL and text content of a fetched page."""

    url: str
    content: str


#: Message travelling on the edge channel from workers to the coordinator.
Report = Union[Edge, PageDone]

#: Fetch + extract collaborator: URL in, discovered link targets out.
#: Raises :class:`site_mapper.crawler.fetcher.FetchError` on failure.
LinkSource = Callable[[str], Awaitable[List[str]]]

__all__ = ["Edge", "PageDone", "PageData", "Report", "LinkSource"]
