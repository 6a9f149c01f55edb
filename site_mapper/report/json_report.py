# site_mapper/report/json_report.py

"""
JSON report of a SiteMapper run.

Serializes the edge list plus the distinct page identifiers it mentions.
"""
import json
from pathlib import Path
from typing import Sequence

from site_mapper.crawler.models import Edge


def render_json(edges: Sequence[Edge], output_path: Path | str) -> Path:
    """
    Save *edges* as JSON at the given path.

    :param edges: edge list returned by the crawl
    :param output_path: path of the JSON file
    :return: Path of the saved file

    Example:
    ```python
    from site_mapper.report.json_report import render_json
    report_path = render_json(edges, 'reports/sitemap.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    pages = sorted({e.source for e in edges} | {e.destination for e in edges})
    data = {
        'edges': [{'source': e.source, 'destination': e.destination} for e in edges],
        'pages': pages,
    }

    with output.open('w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return output
