# File: site_mapper/report/dot_report.py
"""site_mapper.report.dot_report: Graphviz DOT rendering of the edge list."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence, Union

from site_mapper.crawler.models import Edge
from site_mapper.logger import logger


def render_dot(edges: Sequence[Edge]) -> str:
    """Return the ``digraph Sitemap`` definition, one line per edge in list order.

    Page identifiers are quoted but not escaped: a ``"`` inside a path
    produces malformed output.
    """
    lines = ["digraph Sitemap {\n"]
    for edge in edges:
        lines.append(f'\t"{edge.source}" -> "{edge.destination}";\n')
    lines.append("}")
    return "".join(lines)


def write_dot(edges: Sequence[Edge], output_path: Union[str, Path]) -> Path:
    """Write :func:`render_dot` output to *output_path*.

    The parent directory must exist; OSError propagates to the caller.
    """
    output = Path(output_path)
    with output.open("w", encoding="utf-8") as f:
        f.write(render_dot(edges))
    logger.debug("Wrote %d edges to %s", len(edges), output)
    return output
