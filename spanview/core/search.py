"""
spanview.core.search - Resource name filtering.

Matches span resources against a regular expression. Matching is an
unanchored search, so ``users`` matches ``GET /api/users/{id}``.
"""

from __future__ import annotations

import logging
import re
from typing import List, Pattern, Union

from spanview.core.index import SpanIndex
from spanview.core.parser import Span

logger = logging.getLogger(__name__)


def compile_pattern(pattern: Union[str, Pattern[str]]) -> Pattern[str]:
    """Compile a resource pattern.

    Args:
        pattern: Regular expression source or an already compiled pattern

    Returns:
        Compiled pattern

    Raises:
        re.error: If the expression is invalid
    """
    if isinstance(pattern, re.Pattern):
        return pattern
    return re.compile(pattern)


def find_matching_span_ids(
    index: SpanIndex, pattern: Union[str, Pattern[str]]
) -> List[str]:
    """Find ids of spans whose resource matches a pattern.

    Resources are visited in index order and the ids of each matching
    resource are returned in the order they were indexed.

    Args:
        index: The span index to search
        pattern: Regular expression matched against resource names

    Returns:
        List of matching span ids

    Raises:
        re.error: If the expression is invalid
    """
    regex = compile_pattern(pattern)
    matched: List[str] = []

    for resource, span_ids in index.span_ids_by_resource.items():
        if regex.search(resource):
            logger.debug("Resource %r matched %d spans", resource, len(span_ids))
            matched.extend(span_ids)

    return matched


def find_matching_spans(
    index: SpanIndex, pattern: Union[str, Pattern[str]]
) -> List[Span]:
    """Find spans whose resource matches a pattern.

    Args:
        index: The span index to search
        pattern: Regular expression matched against resource names

    Returns:
        List of matching spans, in the same order as find_matching_span_ids
    """
    return [index.get_span(span_id) for span_id in find_matching_span_ids(index, pattern)]
