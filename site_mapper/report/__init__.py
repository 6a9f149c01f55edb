"""site_mapper.report: serializers for the crawl result (Graphviz DOT and JSON)."""

from __future__ import annotations

from .dot_report import render_dot, write_dot
from .json_report import render_json

__all__ = ["render_dot", "write_dot", "render_json"]
