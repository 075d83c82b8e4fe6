"""
spanview.utils.tree - Traversal utilities for id-linked span trees.

Datadog spans reference their children by id, so these helpers walk a
subtree through a SpanIndex instead of following object pointers.

Functions:
    walk_subtree: Depth-first pre-order walk bounded by depth
    count_subtree_spans: Count the spans visited by a bounded walk
    get_subtree_max_depth: Deepest level reached by a bounded walk
"""

from __future__ import annotations

import logging
from typing import FrozenSet, Iterator, List, Tuple, TYPE_CHECKING

from spanview.config import DEFAULT_DEPTH_LIMIT

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from spanview.core.index import SpanIndex
    from spanview.core.parser import Span


def walk_subtree(
    index: "SpanIndex",
    root_id: str,
    max_depth: int = DEFAULT_DEPTH_LIMIT,
) -> Iterator[Tuple[int, str, "Span"]]:
    """Walk a span subtree in depth-first pre-order.

    The root is yielded at depth 0 and children follow in the order of
    their parent's ``children_ids``. Nodes deeper than ``max_depth`` are
    never visited. Ids missing from the index yield a zero-valued span.

    A child id that already appears on the path from the root is
    skipped, so cyclic ``children_ids`` never revisit an ancestor. The
    walk uses an explicit stack and is not limited by the interpreter
    recursion limit.

    Args:
        index: Index used to resolve span ids
        root_id: ID of the span to start from
        max_depth: Deepest level to visit (0 visits the root only)

    Yields:
        Tuples of (depth, span_id, span)

    Example:
        >>> for depth, span_id, span in walk_subtree(index, "123", max_depth=2):
        ...     print("  " * depth + span.name)
    """
    stack: List[Tuple[int, str, FrozenSet[str]]] = [(0, root_id, frozenset())]

    while stack:
        depth, span_id, ancestors = stack.pop()
        if depth > max_depth:
            continue

        span = index.get_span(span_id)
        yield depth, span_id, span

        if depth < max_depth:
            path = ancestors | {span_id}
            for child_id in reversed(span.children_ids):
                if child_id in path:
                    logger.debug("Skipping cyclic child %s of span %s", child_id, span_id)
                    continue
                stack.append((depth + 1, child_id, path))


def count_subtree_spans(
    index: "SpanIndex",
    root_id: str,
    max_depth: int = DEFAULT_DEPTH_LIMIT,
) -> int:
    """Count the spans visited by a bounded walk.

    Args:
        index: Index used to resolve span ids
        root_id: ID of the span to start from
        max_depth: Deepest level to visit

    Returns:
        Number of visited spans, including the root
    """
    return sum(1 for _ in walk_subtree(index, root_id, max_depth))


def get_subtree_max_depth(
    index: "SpanIndex",
    root_id: str,
    max_depth: int = DEFAULT_DEPTH_LIMIT,
) -> int:
    """Get the deepest level reached by a bounded walk.

    Returns:
        Maximum depth visited; 0 for a span with no children
    """
    return max(depth for depth, _, _ in walk_subtree(index, root_id, max_depth))
