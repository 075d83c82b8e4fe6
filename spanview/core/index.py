"""
spanview.core.index - Span lookup indexes.

Datadog exports link spans through ids rather than nested objects, so
every lookup during rendering goes through the maps built here.

Classes:
    SpanIndex: Spans by id and span ids by resource name

Functions:
    build_span_indexes: Build a SpanIndex in one pass over a TraceData
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List

from spanview.core.parser import Span, TraceData

logger = logging.getLogger(__name__)


@dataclass
class SpanIndex:
    """Lookup maps over every span in a trace export.

    Attributes:
        spans_by_id: Mapping of span id to Span
        span_ids_by_resource: Mapping of resource name to the ids of the
            spans carrying it, in document order
    """
    spans_by_id: Dict[str, Span] = field(default_factory=dict)
    span_ids_by_resource: Dict[str, List[str]] = field(default_factory=dict)

    def add(self, span_id: str, span: Span) -> None:
        """Register a span under its id and its resource."""
        self.spans_by_id[span_id] = span
        self.span_ids_by_resource.setdefault(span.resource, []).append(span_id)

    def get_span(self, span_id: str) -> Span:
        """Get a span by id.

        Args:
            span_id: The span id to look up

        Returns:
            The indexed span, or a zero-valued Span if the id is unknown
        """
        span = self.spans_by_id.get(span_id)
        if span is None:
            logger.debug("Span %s not found in trace, using empty span", span_id)
            return Span()
        return span

    def __contains__(self, span_id: object) -> bool:
        return span_id in self.spans_by_id

    @property
    def span_count(self) -> int:
        """Get the number of distinct span ids."""
        return len(self.spans_by_id)

    @property
    def resources(self) -> List[str]:
        """Get every indexed resource name in first-seen order."""
        return list(self.span_ids_by_resource)


def build_span_indexes(trace_data: TraceData) -> SpanIndex:
    """Build span indexes for a trace export.

    The primary trace is indexed first, then each orphaned trace. Keys
    of the ``spans`` map are the ids used for lookups, and a repeated id
    replaces the span indexed before it.

    Args:
        trace_data: The parsed export

    Returns:
        SpanIndex covering every span in the document
    """
    index = SpanIndex()

    for trace in trace_data.all_traces:
        for span_id, span in trace.spans.items():
            index.add(span_id, span)

    logger.debug(
        "Indexed %d spans across %d resources",
        index.span_count,
        len(index.span_ids_by_resource),
    )
    return index
