"""
spanview - Datadog trace inspection from the command line.

This package loads a Datadog trace JSON export, indexes its spans by id
and by resource name, and renders the subtrees of every span whose
resource matches a regular expression.

Example:
    >>> from spanview import DatadogParser, SpanRenderer
    >>> from spanview import build_span_indexes, find_matching_span_ids
    >>> trace_data = DatadogParser().parse_file("trace.json")
    >>> index = build_span_indexes(trace_data)
    >>> renderer = SpanRenderer()
    >>> for span_id in find_matching_span_ids(index, "GET /users"):
    ...     print("\\n".join(renderer.render_tree(index, span_id)))
"""

__version__ = "0.1.0"
__author__ = "KR"
__email__ = "Karthickrajam18@gmail.com"

from spanview.core.parser import Span, Trace, TraceData, DatadogParser
from spanview.core.index import SpanIndex, build_span_indexes
from spanview.core.search import find_matching_span_ids, find_matching_spans
from spanview.core.renderer import SpanRenderer, RenderStyle

__all__ = [
    "Span",
    "Trace",
    "TraceData",
    "DatadogParser",
    "SpanIndex",
    "build_span_indexes",
    "find_matching_span_ids",
    "find_matching_spans",
    "SpanRenderer",
    "RenderStyle",
]
