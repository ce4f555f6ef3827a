"""Validated, immutable query requests for searching recorded traces.

A QueryRequest is assembled with a fluent QueryRequestBuilder:

    request = (
        QueryRequest.builder()
        .service_name("security-service")
        .parse_annotation_query("http.method=GET and error")
        .limit(20)
        .build()
    )

Every setter validates its argument immediately and raises
InvalidArgumentError with a stable, user-facing message. The built request
cannot be modified; storage backends receive it as-is.
"""

import logging
import time
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

from trace_query.annotation_query import split_annotation_query, to_annotation_query
from trace_query.config import get_query_defaults
from trace_query.validation import (
    check_annotation,
    check_argument,
    check_binary_annotation,
    check_positive,
    reject,
)

logger = logging.getLogger(__name__)

__all__ = ["QueryRequest", "QueryRequestBuilder"]


def _now_micros() -> int:
    """Returns the current time in epoch microseconds."""
    return time.time_ns() // 1000


def _default_limit() -> int:
    return get_query_defaults().limit


def _default_lookback() -> int | None:
    return get_query_defaults().lookback


def _check_service_name(name: str | None) -> None:
    check_argument(name is None or name != "", "serviceName was empty", "service_name")


def _check_span_name(name: str | None) -> None:
    check_argument(name is None or name != "", "spanName was empty", "span_name")


def _check_end_ts(end_ts: int) -> None:
    check_positive(
        end_ts,
        f"endTs should be positive, in epoch microseconds: was {end_ts}",
        "end_ts",
    )


def _check_limit(limit: int) -> None:
    check_positive(limit, f"limit should be positive: was {limit}", "limit")


def _check_lookback(lookback: int | None) -> None:
    if lookback is not None:
        check_positive(
            lookback, f"lookback should be positive: was {lookback}", "lookback"
        )


def _check_min_duration(min_duration: int | None) -> None:
    if min_duration is not None:
        check_positive(
            min_duration,
            "minDuration must be a positive number of microseconds",
            "min_duration",
        )


def _check_durations(min_duration: int | None, max_duration: int | None) -> None:
    if max_duration is None:
        return
    if min_duration is None:
        reject("maxDuration is only valid with minDuration", "max_duration")
    check_argument(
        max_duration >= min_duration,
        "maxDuration should be >= minDuration",
        "max_duration",
    )


class QueryRequest(BaseModel):
    """Criteria for a trace search. Immutable once built."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    service_name: str | None = Field(
        default=None, description="Only include traces with spans from this service"
    )
    span_name: str | None = Field(
        default=None, description="Only include traces with a span of this name"
    )
    annotations: tuple[str, ...] = Field(
        default=(), description="Bare annotation names, in insertion order"
    )
    binary_annotations: Mapping[str, str] = Field(
        default_factory=dict,
        description="Binary annotation key/value pairs, in insertion order",
    )
    min_duration: int | None = Field(
        default=None, description="Minimum span duration in microseconds"
    )
    max_duration: int | None = Field(
        default=None, description="Maximum span duration in microseconds"
    )
    end_ts: int = Field(
        default_factory=_now_micros,
        description="Upper bound of the search window, in epoch microseconds",
    )
    lookback: int | None = Field(
        default_factory=_default_lookback,
        description="How far before end_ts to search, in microseconds",
    )
    limit: int = Field(
        default_factory=_default_limit, description="Maximum number of traces to return"
    )

    @field_validator("annotations", mode="after")
    @classmethod
    def _dedupe_annotations(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(dict.fromkeys(value))

    @field_validator("binary_annotations", mode="after")
    @classmethod
    def _freeze_binary_annotations(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))

    @field_serializer("binary_annotations")
    def _serialize_binary_annotations(self, value: Mapping[str, str]) -> dict[str, str]:
        return dict(value)

    @model_validator(mode="after")
    def _check_invariants(self) -> "QueryRequest":
        _check_service_name(self.service_name)
        _check_span_name(self.span_name)
        for annotation in self.annotations:
            check_annotation(annotation)
        for key, value in self.binary_annotations.items():
            check_binary_annotation(key, value)
        _check_min_duration(self.min_duration)
        _check_durations(self.min_duration, self.max_duration)
        _check_end_ts(self.end_ts)
        _check_lookback(self.lookback)
        _check_limit(self.limit)
        return self

    def __hash__(self) -> int:
        return hash(
            (
                self.service_name,
                self.span_name,
                self.annotations,
                tuple(self.binary_annotations.items()),
                self.min_duration,
                self.max_duration,
                self.end_ts,
                self.lookback,
                self.limit,
            )
        )

    @classmethod
    def builder(cls) -> "QueryRequestBuilder":
        """Returns a new, empty builder."""
        return QueryRequestBuilder()

    def to_builder(self) -> "QueryRequestBuilder":
        """Returns a builder pre-populated with this request's criteria."""
        builder = QueryRequestBuilder()
        builder._service_name = self.service_name
        builder._span_name = self.span_name
        builder._annotations = dict.fromkeys(self.annotations)
        builder._binary_annotations = dict(self.binary_annotations)
        builder._min_duration = self.min_duration
        builder._max_duration = self.max_duration
        builder._end_ts = self.end_ts
        builder._lookback = self.lookback
        builder._limit = self.limit
        return builder

    def to_annotation_query(self) -> str | None:
        """Returns the canonical annotation query, or None if there is none.

        Binary annotations are written first, then bare annotations, each in
        insertion order. Parsing the result reproduces this request's
        annotations exactly; names and values that would not survive the
        round trip are rejected when added.
        """
        return to_annotation_query(self.annotations, self.binary_annotations)


class QueryRequestBuilder:
    """Accumulates and validates criteria for a QueryRequest.

    Not thread-safe; use one builder per request.
    """

    def __init__(self) -> None:
        """Initialize the builder with no criteria."""
        self._service_name: str | None = None
        self._span_name: str | None = None
        self._annotations: dict[str, None] = {}
        self._binary_annotations: dict[str, str] = {}
        self._min_duration: int | None = None
        self._max_duration: int | None = None
        self._end_ts: int | None = None
        self._lookback: int | None = None
        self._limit: int | None = None

    def service_name(self, name: str | None) -> "QueryRequestBuilder":
        """Filter by service name. None removes the filter."""
        _check_service_name(name)
        self._service_name = name
        return self

    def span_name(self, name: str | None) -> "QueryRequestBuilder":
        """Filter by span name. None removes the filter."""
        _check_span_name(name)
        self._span_name = name
        return self

    def add_annotation(self, value: str) -> "QueryRequestBuilder":
        """Require a bare annotation, such as "error".

        Adding the same annotation twice has no further effect.
        """
        check_annotation(value)
        self._annotations[value] = None
        return self

    def add_binary_annotation(self, key: str, value: str) -> "QueryRequestBuilder":
        """Require a binary annotation key=value.

        A repeated key replaces the earlier value but keeps its position.
        """
        check_binary_annotation(key, value)
        self._binary_annotations[key] = value
        return self

    def parse_annotation_query(self, query: str | None) -> "QueryRequestBuilder":
        """Add all annotations and binary annotations named in the query.

        Terms are applied in order; terms preceding an invalid one remain
        added when InvalidArgumentError is raised.
        """
        for key, value in split_annotation_query(query):
            if value is None:
                self.add_annotation(key)
            else:
                self.add_binary_annotation(key, value)
        return self

    def min_duration(self, value: int | None) -> "QueryRequestBuilder":
        """Only include spans lasting at least this many microseconds."""
        _check_min_duration(value)
        self._min_duration = value
        return self

    def max_duration(self, value: int | None) -> "QueryRequestBuilder":
        """Only include spans lasting at most this many microseconds.

        Requires min_duration; checked on build().
        """
        self._max_duration = value
        return self

    def end_ts(self, value: int) -> "QueryRequestBuilder":
        """Upper bound of the search window, in epoch microseconds."""
        _check_end_ts(value)
        self._end_ts = value
        return self

    def lookback(self, value: int | None) -> "QueryRequestBuilder":
        """How far before end_ts to search, in microseconds."""
        _check_lookback(value)
        self._lookback = value
        return self

    def limit(self, value: int) -> "QueryRequestBuilder":
        """Maximum number of traces to return."""
        _check_limit(value)
        self._limit = value
        return self

    def build(self) -> QueryRequest:
        """Returns an immutable QueryRequest with the accumulated criteria.

        Unset end_ts defaults to now; unset limit and lookback come from
        QueryDefaults.

        Raises:
            InvalidArgumentError: If max_duration conflicts with min_duration.
        """
        _check_durations(self._min_duration, self._max_duration)

        fields: dict[str, Any] = {
            "service_name": self._service_name,
            "span_name": self._span_name,
            "annotations": tuple(self._annotations),
            "binary_annotations": dict(self._binary_annotations),
            "min_duration": self._min_duration,
            "max_duration": self._max_duration,
        }
        if self._end_ts is not None:
            fields["end_ts"] = self._end_ts
        if self._lookback is not None:
            fields["lookback"] = self._lookback
        if self._limit is not None:
            fields["limit"] = self._limit

        request = QueryRequest(**fields)
        logger.debug(
            f"Built query request: service={request.service_name} "
            f"span={request.span_name} "
            f"annotation_query={request.to_annotation_query()} limit={request.limit}"
        )
        return request
