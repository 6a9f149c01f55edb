# site_mapper/crawler/link_extractor.py
"""
Link extraction strategies and the fetch + extract collaborator used by workers.

Extractors are plain functions ``PageData -> List[str]`` so a more complete
parser can be dropped in without touching the coordinator or the workers.
"""
from __future__ import annotations

import re
from typing import Callable, Dict, List
from urllib.parse import urlparse

from bs4 import BeautifulSoup
from bs4.element import Tag
from site_mapper.crawler.fetcher import Fetcher
from site_mapper.crawler.models import PageData

Extractor = Callable[[PageData], List[str]]

LINK_RE = re.compile(r'href="([\w/-]+)"')


def extract_links(page: PageData) -> List[str]:
    """
    Return every ``href="..."`` target made of word characters, ``/`` and ``-``.

    Order follows the markup and duplicates are kept. Absolute URLs, query
    strings and anchors do not match.
    """
    return LINK_RE.findall(page.content)


def extract_anchor_links(page: PageData) -> List[str]:
    """
    Return site-relative ``<a href>`` paths (starting with ``/``) in document order.

    Query strings are kept as part of the page identifier; fragments are dropped.
    """
    soup = BeautifulSoup(page.content, "html.parser")
    links: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        parsed = urlparse(href_val.strip())
        if parsed.scheme or parsed.netloc or not parsed.path.startswith("/"):
            continue
        links.append(parsed.path + (f"?{parsed.query}" if parsed.query else ""))
    return links


EXTRACTORS: Dict[str, Extractor] = {
    "regex": extract_links,
    "soup": extract_anchor_links,
}


class PageLinkSource:
    """Awaitable ``url -> links`` callable: fetch the page, then extract its links."""

    def __init__(self, fetcher: Fetcher, extractor: Extractor = extract_links) -> None:
        self.fetcher = fetcher
        self.extractor = extractor

    async def __call__(self, url: str) -> List[str]:
        page = await self.fetcher.fetch(url)
        return self.extractor(page)


__all__ = ["extract_links", "extract_anchor_links", "EXTRACTORS", "PageLinkSource", "Extractor"]
