"""site_mapper.crawler: coordinator, workers and the fetch/extract collaborator."""

from .coordinator import CrawlCoordinator
from .fetcher import Fetcher, FetchError
from .link_extractor import EXTRACTORS, PageLinkSource, extract_anchor_links, extract_links
from .models import Edge, PageData, PageDone
from .worker import fetch_worker

__all__ = [
    "CrawlCoordinator",
    "Edge",
    "EXTRACTORS",
    "Fetcher",
    "FetchError",
    "PageData",
    "PageDone",
    "PageLinkSource",
    "extract_anchor_links",
    "extract_links",
    "fetch_worker",
]
