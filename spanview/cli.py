"""
spanview.cli - Command-line interface for spanview.

This module provides a CLI for loading a Datadog trace export, finding
the spans whose resource matches a pattern, and printing their subtrees.

Usage:
    spanview <trace_path> <resource_pattern> [-v|-vv] [--depth=<N>]
             [--format <format>] [--output/-o <file>] [--no-color]

Examples:
    spanview trace.json "GET /api/users"
    spanview trace.json "postgres" -vv --depth=2
    spanview trace.json "^POST" --format json -o matches.json
"""

from __future__ import annotations

import argparse
import json
import logging
import re
import sys
from pathlib import Path
from typing import List

from spanview import __version__
from spanview.config import DEFAULT_DEPTH_LIMIT, ViewerConfig
from spanview.core.index import SpanIndex, build_span_indexes
from spanview.core.parser import DatadogParser, TraceData
from spanview.core.renderer import RenderStyle, SpanRenderer
from spanview.core.search import find_matching_span_ids

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid depth: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"depth cannot be negative: {number}")
    return number


def parse_args(args: List[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        args: List of arguments (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="spanview",
        description="Print the span subtrees of a Datadog trace whose resource matches a pattern",
        epilog='Example: spanview trace.json "GET /api/users" -vv --depth=3',
    )

    parser.add_argument(
        "trace_path",
        type=str,
        help="Path to the Datadog trace file (JSON format)",
    )

    parser.add_argument(
        "resource_pattern",
        type=str,
        help="Resource name or regular expression to search for",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Print the resource (-v) and the span tags (-vv)",
    )

    parser.add_argument(
        "--depth",
        type=_non_negative_int,
        default=DEFAULT_DEPTH_LIMIT,
        help="Deepest level printed below each match, 0 prints the match only "
             f"(default: {DEFAULT_DEPTH_LIMIT})",
    )

    parser.add_argument(
        "--format",
        type=str,
        choices=["text", "json"],
        default="text",
        help="Output format: indented text or json (default: text)",
    )

    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output file path (defaults to stdout)",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable ANSI colors in text output",
    )

    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Diagnostic logging level on stderr (default: INFO)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser.parse_args(args)


def configure_logging(level: str) -> None:
    """Send spanview diagnostics to stderr at the given level."""
    logging.basicConfig(stream=sys.stderr, format=LOG_FORMAT)
    logging.getLogger("spanview").setLevel(level)


def load_trace(trace_path: str) -> TraceData:
    """Load and parse a trace export from a JSON file.

    Args:
        trace_path: Path to the input JSON file

    Returns:
        Parsed TraceData object

    Raises:
        FileNotFoundError: If the input file doesn't exist
        json.JSONDecodeError: If the file contains invalid JSON
        ValueError: If the trace format is invalid
    """
    return DatadogParser().parse_file(trace_path)


def search_spans(index: SpanIndex, query: str) -> List[str]:
    """Find the ids of spans whose resource matches the query.

    Args:
        index: Index over the loaded trace
        query: Regular expression matched against resource names

    Returns:
        List of matched span ids
    """
    logger.info("Looking for spans matching resource_name pattern: %s", query)
    span_ids = find_matching_span_ids(index, query)
    logger.info("Found %d traces!", len(span_ids))
    return span_ids


def render_output(index: SpanIndex, span_ids: List[str], config: ViewerConfig) -> str:
    """Render matched subtrees in the configured format.

    Args:
        index: Index over the loaded trace
        span_ids: IDs of the matched spans
        config: Viewer settings

    Returns:
        Rendered output as a string
    """
    style = RenderStyle() if config.color else RenderStyle.plain()
    renderer = SpanRenderer(style)

    if config.output_format == "json":
        return renderer.render_json(index, span_ids, config)
    return "\n".join(renderer.render_matches(index, span_ids, config))


def write_output(content: str, output_path: str | None) -> None:
    """Write content to output file or stdout.

    Args:
        content: The content to write
        output_path: Path to output file, or None for stdout
    """
    if output_path:
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
            if content:
                f.write("\n")
    elif content:
        print(content)


def main(args: List[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parsed_args = parse_args(args)
    configure_logging(parsed_args.log_level)
    config = ViewerConfig.from_args(parsed_args)

    try:
        trace_data = load_trace(config.trace_path)

        if trace_data.is_truncated:
            logger.warning("Trace export is truncated, some spans may be missing")

        index = build_span_indexes(trace_data)
        logger.debug("Loaded %d spans from %s", index.span_count, config.trace_path)

        span_ids = search_spans(index, config.query)

        write_output(render_output(index, span_ids, config), config.output)

        if config.output:
            logger.info("Output written to: %s", config.output)

        return 0

    except FileNotFoundError as e:
        logger.error("Error: %s", e)
        return 1

    except json.JSONDecodeError as e:
        logger.error("Error: Invalid JSON in input file: %s", e)
        return 2

    except ValueError as e:
        logger.error("Error: Invalid trace format: %s", e)
        return 3

    except re.error as e:
        logger.error("Error: Invalid resource pattern %r: %s", config.query, e)
        return 5

    except Exception as e:
        logger.error("Error: %s", e)
        return 4


if __name__ == "__main__":
    sys.exit(main())
