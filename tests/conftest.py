"""Shared fixtures for spanview tests."""

from pathlib import Path

import pytest

from spanview.core.index import SpanIndex, build_span_indexes
from spanview.core.parser import DatadogParser, TraceData


@pytest.fixture
def sample_trace_path() -> Path:
    """Return path to the sample trace fixture."""
    return Path(__file__).parent / "fixtures" / "sample_trace.json"


@pytest.fixture
def sample_trace_data(sample_trace_path: Path) -> TraceData:
    """Load and return the sample trace export."""
    return DatadogParser().parse_file(sample_trace_path)


@pytest.fixture
def sample_index(sample_trace_data: TraceData) -> SpanIndex:
    """Index built from the sample trace export."""
    return build_span_indexes(sample_trace_data)
