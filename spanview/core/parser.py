"""
spanview.core.parser - Datadog trace parsing module.

This module provides the models and parser for converting a Datadog
trace JSON export into internal representations for indexing and
rendering.

Classes:
    Span: Model representing a single trace span
    Trace: Model representing a span tree keyed by span id
    TraceData: Model representing the whole exported document
    DatadogParser: Parser for Datadog trace JSON files
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

logger = logging.getLogger(__name__)


def _coerce_id(value: Any) -> Any:
    """Render numeric identifiers as strings."""
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


class _DatadogModel(BaseModel):
    """Base model shared by every document section.

    Unknown keys are ignored and explicit nulls fall back to the field
    default, so a partially populated export still validates.
    """

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        """Remove null-valued keys so their fields take the default."""
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class Span(_DatadogModel):
    """Represents a single span in a Datadog trace.

    Every field defaults to its zero value, so ``Span()`` is the span
    rendered for an id that does not resolve within the document.

    Attributes:
        org_id: Datadog organization id
        trace_id: ID of the trace this span belongs to
        span_id: Unique identifier for this span
        parent_id: ID of the parent span (empty for root spans)
        start: Start time as epoch seconds
        end: End time as epoch seconds
        duration: Duration of the span in seconds
        type: Span type (web, db, cache, ...)
        service: Name of the service that generated this span
        name: Name of the operation being traced
        resource: Logical resource, used as the search key
        resource_hash: Hash of the resource string
        host_id: Datadog host id
        env: Deployment environment
        host_groups: Host group tags
        meta: Free-form string tags
        metrics: Numeric measurements
        ingestion_reason: Why the span was retained
        children_ids: IDs of the child spans
    """

    org_id: int = 0
    trace_id: str = ""
    span_id: str = ""
    parent_id: str = ""
    start: float = 0.0
    end: float = 0.0
    duration: float = 0.0
    type: str = ""
    service: str = ""
    name: str = ""
    resource: str = ""
    resource_hash: str = ""
    host_id: int = 0
    env: str = ""
    host_groups: List[str] = Field(default_factory=list)
    meta: Dict[str, str] = Field(default_factory=dict)
    metrics: Dict[str, float] = Field(default_factory=dict)
    ingestion_reason: str = ""
    children_ids: List[str] = Field(default_factory=list)

    @field_validator("trace_id", "span_id", "parent_id", mode="before")
    @classmethod
    def coerce_ids(cls, value: Any) -> Any:
        """Accept numeric span, trace and parent ids."""
        return _coerce_id(value)

    @field_validator("children_ids", mode="before")
    @classmethod
    def coerce_children_ids(cls, value: Any) -> Any:
        """Accept numeric child ids and read null entries as empty ids."""
        if isinstance(value, list):
            return ["" if item is None else _coerce_id(item) for item in value]
        return value

    @property
    def duration_ms(self) -> float:
        """Get the span duration in milliseconds."""
        return self.duration * 1000

    @property
    def is_root(self) -> bool:
        """Check whether the span has no parent."""
        return self.parent_id in ("", "0")


class Trace(_DatadogModel):
    """Represents one span tree of a Datadog trace.

    Attributes:
        root_id: ID of the root span
        spans: Mapping of span id to Span
    """

    root_id: str = ""
    spans: Dict[str, Span] = Field(default_factory=dict)

    @field_validator("root_id", mode="before")
    @classmethod
    def coerce_root_id(cls, value: Any) -> Any:
        """Accept a numeric root id."""
        return _coerce_id(value)

    @field_validator("spans", mode="before")
    @classmethod
    def null_spans_to_empty(cls, value: Any) -> Any:
        """Read a null span entry as a zero-valued span."""
        if isinstance(value, dict):
            return {key: {} if span is None else span for key, span in value.items()}
        return value

    @property
    def span_count(self) -> int:
        """Get the total number of spans in the trace."""
        return len(self.spans)


class TraceData(_DatadogModel):
    """Represents a complete Datadog trace export.

    Attributes:
        trace: The primary trace
        orphaned: Traces whose spans could not be attached to the primary tree
        is_truncated: Whether Datadog truncated the export
    """

    trace: Trace = Field(default_factory=Trace)
    orphaned: List[Trace] = Field(default_factory=list)
    is_truncated: bool = False

    @field_validator("orphaned", mode="before")
    @classmethod
    def null_orphans_to_empty(cls, value: Any) -> Any:
        """Read a null orphaned entry as an empty trace."""
        if isinstance(value, list):
            return [{} if trace is None else trace for trace in value]
        return value

    @property
    def all_traces(self) -> List[Trace]:
        """Get the primary trace followed by the orphaned ones."""
        return [self.trace, *self.orphaned]

    @property
    def span_count(self) -> int:
        """Get the number of spans across every trace in the document."""
        return sum(trace.span_count for trace in self.all_traces)


class DatadogParser:
    """Parser for Datadog trace JSON exports.

    Example:
        >>> parser = DatadogParser()
        >>> trace_data = parser.parse_file("trace.json")
        >>> print(trace_data.trace.root_id)
    """

    def parse_file(self, path: str | Path) -> TraceData:
        """Read and parse a trace export from disk.

        Args:
            path: Path to the JSON file

        Returns:
            TraceData parsed from the file

        Raises:
            FileNotFoundError: If the file doesn't exist
            json.JSONDecodeError: If the file contains invalid JSON
            ValueError: If the document doesn't fit the trace schema
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Input file not found: {path}")

        logger.debug("Reading trace file %s", path)
        with open(path, "r", encoding="utf-8") as f:
            json_str = f.read()

        return self.parse_json(json_str)

    def parse_json(self, json_str: str) -> TraceData:
        """Parse a trace export from a JSON string.

        Args:
            json_str: JSON string containing the export

        Returns:
            TraceData parsed from the string

        Raises:
            json.JSONDecodeError: If JSON is invalid
            ValueError: If the document doesn't fit the trace schema
        """
        data = json.loads(json_str)
        return self.parse_dict(data)

    def parse_dict(self, data: Dict[str, Any]) -> TraceData:
        """Validate an already decoded trace export.

        Args:
            data: Decoded JSON document

        Returns:
            TraceData built from the document

        Raises:
            ValueError: If the document is not an object or fails validation
        """
        if not isinstance(data, dict):
            raise ValueError(
                f"Trace document must be a JSON object, got {type(data).__name__}"
            )

        trace_data = TraceData.model_validate(data)

        logger.debug(
            "Parsed trace %s with %d spans and %d orphaned traces (truncated: %s)",
            trace_data.trace.root_id or "<none>",
            trace_data.trace.span_count,
            len(trace_data.orphaned),
            trace_data.is_truncated,
        )
        return trace_data
