"""
spanview.config - Viewer configuration.

Holds the settings that drive a single spanview run. They are built from
the parsed command line by ``ViewerConfig.from_args``.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Optional

DEFAULT_DEPTH_LIMIT = 9999
MAX_VERBOSITY = 2


@dataclass
class ViewerConfig:
    """Settings for rendering matched spans.

    Attributes:
        trace_path: Path to the trace JSON file
        query: Regular expression matched against span resources
        verbosity: 0 prints timing only, 1 adds the resource, 2 adds tags
        depth_limit: Deepest level printed below a matched span (0 = span only)
        output_format: "text" or "json"
        color: Whether to emit ANSI color codes
        output: Output file path, or None for stdout
    """
    trace_path: str = ""
    query: str = ""
    verbosity: int = 0
    depth_limit: int = DEFAULT_DEPTH_LIMIT
    output_format: str = "text"
    color: bool = True
    output: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.depth_limit < 0:
            raise ValueError("depth_limit cannot be negative")
        if self.verbosity < 0:
            raise ValueError("verbosity cannot be negative")
        self.verbosity = min(self.verbosity, MAX_VERBOSITY)

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "ViewerConfig":
        """Build a configuration from parsed command-line arguments."""
        return cls(
            trace_path=args.trace_path,
            query=args.resource_pattern,
            verbosity=args.verbose,
            depth_limit=args.depth,
            output_format=args.format,
            color=not args.no_color and args.output is None,
            output=args.output,
        )
