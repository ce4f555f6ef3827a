"""Validated query requests for searching recorded distributed traces."""

from .annotation_query import (
    parse_annotation_query,
    split_annotation_query,
    to_annotation_query,
)
from .config import QueryDefaults, get_query_defaults
from .constants import CORE_ANNOTATIONS, TraceKeys, is_core
from .exceptions import InvalidArgumentError, TraceQueryError
from .request import QueryRequest, QueryRequestBuilder

__all__ = [
    "CORE_ANNOTATIONS",
    "InvalidArgumentError",
    "QueryDefaults",
    "QueryRequest",
    "QueryRequestBuilder",
    "TraceKeys",
    "TraceQueryError",
    "get_query_defaults",
    "is_core",
    "parse_annotation_query",
    "split_annotation_query",
    "to_annotation_query",
]
