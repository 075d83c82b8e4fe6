"""
spanview.core.renderer - Indented span tree rendering.

This module turns the subtree below a matched span into indented,
optionally colored text lines, or into a nested JSON document.

Classes:
    RenderStyle: Color and indentation settings
    SpanRenderer: Renders span subtrees from a SpanIndex
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from spanview.config import ViewerConfig
from spanview.core.index import SpanIndex
from spanview.core.parser import Span
from spanview.utils.tree import walk_subtree

logger = logging.getLogger(__name__)


@dataclass
class RenderStyle:
    """Style configuration for rendered lines.

    Attributes:
        name_color: Escape sequence wrapping the span name (default: magenta)
        resource_color: Escape sequence wrapping the resource (default: cyan)
        reset: Escape sequence closing a colored segment
        indent: Text repeated once per depth level
    """
    name_color: str = "\033[35m"
    resource_color: str = "\033[36m"
    reset: str = "\033[0m"
    indent: str = " "

    @classmethod
    def plain(cls) -> "RenderStyle":
        """Get a style without color codes."""
        return cls(name_color="", resource_color="", reset="")

    def paint(self, text: str, color: str) -> str:
        """Wrap text in a color sequence, if any."""
        if not color:
            return text
        return f"{color}{text}{self.reset}"


class SpanRenderer:
    """Renders span subtrees as indented text.

    Each span produces one timing line. Verbosity 1 adds the resource
    line and verbosity 2 adds the pretty-printed tag map, so raising the
    verbosity only ever adds lines.

    Example:
        >>> renderer = SpanRenderer()
        >>> for line in renderer.render_tree(index, "1234"):
        ...     print(line)
        [rack.request]: 12.500000ms
         [postgres.query]: 3.100000ms
    """

    def __init__(self, style: Optional[RenderStyle] = None) -> None:
        """Initialize the renderer.

        Args:
            style: Style to apply; defaults to the colored style
        """
        self.style = style or RenderStyle()

    def render_span(self, span: Span, depth: int = 0, verbosity: int = 0) -> List[str]:
        """Render the lines for a single span.

        Args:
            span: Span to render
            depth: Indentation level
            verbosity: 0 for timing only, 1 adds the resource, 2 adds tags

        Returns:
            List of output lines
        """
        prefix = self.style.indent * depth
        name = self.style.paint(f"[{span.name}]", self.style.name_color)
        lines = [f"{prefix}{name}: {span.duration_ms:.6f}ms"]

        if verbosity > 0:
            resource = self.style.paint(f"> {span.resource}", self.style.resource_color)
            lines.append(f"{prefix} {resource}")

        if verbosity > 1:
            meta = json.dumps(span.meta, indent=2, sort_keys=True, ensure_ascii=False)
            lines.append("\n".join(f"{prefix} {line}" for line in meta.splitlines()))

        return lines

    def render_tree(
        self,
        index: SpanIndex,
        root_id: str,
        config: Optional[ViewerConfig] = None,
    ) -> List[str]:
        """Render a span and its descendants down to the depth limit.

        Args:
            index: Index used to resolve span ids
            root_id: ID of the span to start from
            config: Viewer settings (verbosity and depth limit)

        Returns:
            List of output lines in depth-first pre-order
        """
        config = config or ViewerConfig()
        lines: List[str] = []

        for depth, _, span in walk_subtree(index, root_id, config.depth_limit):
            lines.extend(self.render_span(span, depth, config.verbosity))

        return lines

    def render_matches(
        self,
        index: SpanIndex,
        span_ids: Sequence[str],
        config: Optional[ViewerConfig] = None,
    ) -> List[str]:
        """Render every matched subtree under a numbered header.

        Args:
            index: Index used to resolve span ids
            span_ids: IDs of the matched spans
            config: Viewer settings

        Returns:
            List of output lines
        """
        lines: List[str] = []

        for position, span_id in enumerate(span_ids):
            lines.append(f"### Trace #{position} ###")
            lines.extend(self.render_tree(index, span_id, config))

        logger.debug("Rendered %d subtrees into %d lines", len(span_ids), len(lines))
        return lines

    def build_tree_dict(
        self,
        index: SpanIndex,
        root_id: str,
        config: Optional[ViewerConfig] = None,
    ) -> Dict[str, Any]:
        """Build a nested dictionary for a span subtree.

        Args:
            index: Index used to resolve span ids
            root_id: ID of the span to start from
            config: Viewer settings; tags are included at verbosity 2

        Returns:
            Dictionary for the root span with nested ``children``
        """
        config = config or ViewerConfig()
        ancestors: List[Dict[str, Any]] = []
        root: Dict[str, Any] = {}

        for depth, span_id, span in walk_subtree(index, root_id, config.depth_limit):
            node: Dict[str, Any] = {
                "span_id": span_id,
                "name": span.name,
                "service": span.service,
                "resource": span.resource,
                "duration_ms": span.duration_ms,
                "depth": depth,
            }
            if config.verbosity > 1:
                node["meta"] = dict(span.meta)
            node["children"] = []

            del ancestors[depth:]
            if ancestors:
                ancestors[-1]["children"].append(node)
            else:
                root = node
            ancestors.append(node)

        return root

    def render_json(
        self,
        index: SpanIndex,
        span_ids: Sequence[str],
        config: Optional[ViewerConfig] = None,
    ) -> str:
        """Render every matched subtree as a JSON document.

        Args:
            index: Index used to resolve span ids
            span_ids: IDs of the matched spans
            config: Viewer settings

        Returns:
            JSON string with the query, match count and subtrees
        """
        config = config or ViewerConfig()
        output = {
            "query": config.query,
            "matches": len(span_ids),
            "traces": [
                self.build_tree_dict(index, span_id, config) for span_id in span_ids
            ],
        }
        return json.dumps(output, indent=2, ensure_ascii=False)
