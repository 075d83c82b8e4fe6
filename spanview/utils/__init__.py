"""
spanview.utils - Utility functions for walking span trees.

This subpackage contains utility functions:
- tree: Depth-bounded traversal over id-linked span trees
"""

from spanview.utils.tree import (
    walk_subtree,
    count_subtree_spans,
    get_subtree_max_depth,
)

__all__ = [
    "walk_subtree",
    "count_subtree_spans",
    "get_subtree_max_depth",
]
