"""
spanview.core - Core modules for trace loading, indexing, search and rendering.

This subpackage contains the main functionality:
- parser: Span, Trace and TraceData models, DatadogParser for trace JSON
- index: SpanIndex lookup maps by span id and resource name
- search: regex filtering over resource names
- renderer: SpanRenderer for indented, depth-bounded output
"""

from spanview.core.parser import Span, Trace, TraceData, DatadogParser
from spanview.core.index import SpanIndex, build_span_indexes
from spanview.core.search import (
    compile_pattern,
    find_matching_span_ids,
    find_matching_spans,
)
from spanview.core.renderer import SpanRenderer, RenderStyle

__all__ = [
    "Span",
    "Trace",
    "TraceData",
    "DatadogParser",
    "SpanIndex",
    "build_span_indexes",
    "compile_pattern",
    "find_matching_span_ids",
    "find_matching_spans",
    "SpanRenderer",
    "RenderStyle",
]
