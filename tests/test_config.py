"""
Tests for spanview.config module.
"""

import pytest

from spanview.cli import parse_args
from spanview.config import DEFAULT_DEPTH_LIMIT, MAX_VERBOSITY, ViewerConfig


class TestViewerConfig:
    """Tests for ViewerConfig defaults and validation."""

    def test_defaults(self) -> None:
        config = ViewerConfig()
        assert config.verbosity == 0
        assert config.depth_limit == DEFAULT_DEPTH_LIMIT == 9999
        assert config.output_format == "text"
        assert config.color is True
        assert config.output is None

    def test_verbosity_is_clamped(self) -> None:
        assert ViewerConfig(verbosity=5).verbosity == MAX_VERBOSITY

    def test_negative_depth_rejected(self) -> None:
        with pytest.raises(ValueError, match="depth_limit"):
            ViewerConfig(depth_limit=-1)

    def test_negative_verbosity_rejected(self) -> None:
        with pytest.raises(ValueError, match="verbosity"):
            ViewerConfig(verbosity=-1)


class TestFromArgs:
    """Tests for building a config from parsed arguments."""

    def test_from_args(self) -> None:
        args = parse_args(["trace.json", "GET /", "-vv", "--depth=4", "--format", "json"])
        config = ViewerConfig.from_args(args)
        assert config.trace_path == "trace.json"
        assert config.query == "GET /"
        assert config.verbosity == 2
        assert config.depth_limit == 4
        assert config.output_format == "json"
        assert config.color is True

    def test_extra_verbose_flags_are_clamped(self) -> None:
        config = ViewerConfig.from_args(parse_args(["trace.json", "GET", "-vvv"]))
        assert config.verbosity == 2

    def test_no_color(self) -> None:
        config = ViewerConfig.from_args(parse_args(["trace.json", "GET", "--no-color"]))
        assert config.color is False

    def test_file_output_is_plain(self) -> None:
        config = ViewerConfig.from_args(parse_args(["trace.json", "GET", "-o", "out.txt"]))
        assert config.output == "out.txt"
        assert config.color is False
