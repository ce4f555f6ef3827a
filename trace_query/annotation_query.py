"""Codec for annotation query strings.

An annotation query is a list of terms joined by " and ". Each term is
either a bare annotation name (e.g. ``error``) or a binary annotation written
``key=value``, split on the first ``=`` only:

    http.method=GET and http.path=/api/v1/users and error

Serialization is canonical: binary annotations first, in insertion order,
then bare annotations in insertion order.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping

from trace_query.constants import ANNOTATION_QUERY_SEPARATOR
from trace_query.validation import check_annotation, check_binary_annotation

logger = logging.getLogger(__name__)

SEPARATOR = ANNOTATION_QUERY_SEPARATOR

__all__ = [
    "SEPARATOR",
    "parse_annotation_query",
    "split_annotation_query",
    "to_annotation_query",
]


def split_annotation_query(query: str | None) -> Iterator[tuple[str, str | None]]:
    """Yields the terms of an annotation query in order.

    Binary annotations are yielded as ``(key, value)`` and bare annotations as
    ``(name, None)``. Terms are not validated.
    """
    if not query:
        return
    for term in query.split(SEPARATOR):
        key, sep, value = term.partition("=")
        if sep:
            yield key, value
        else:
            yield term, None


def parse_annotation_query(
    query: str | None,
) -> tuple[tuple[str, ...], dict[str, str]]:
    """Parses an annotation query into (annotations, binary annotations).

    Args:
        query: The annotation query. None or "" parse to empty collections.

    Returns:
        The bare annotation names in first-seen order without duplicates, and
        the binary annotations in first-seen key order. A repeated key keeps
        its position and takes the last value.

    Raises:
        InvalidArgumentError: If a term is empty, has an empty key or value,
            or names a core annotation.
    """
    annotations: dict[str, None] = {}
    binary_annotations: dict[str, str] = {}
    for key, value in split_annotation_query(query):
        if value is None:
            check_annotation(key)
            annotations[key] = None
        else:
            check_binary_annotation(key, value)
            binary_annotations[key] = value

    logger.debug(
        f"Parsed annotation query into {len(annotations)} annotations and "
        f"{len(binary_annotations)} binary annotations"
    )
    return tuple(annotations), binary_annotations


def to_annotation_query(
    annotations: Iterable[str], binary_annotations: Mapping[str, str]
) -> str | None:
    """Serializes annotations back to their canonical query string.

    Returns:
        The query string, or None when there is nothing to query on.
    """
    terms = [f"{key}={value}" for key, value in binary_annotations.items()]
    terms.extend(annotations)
    if not terms:
        return None
    return SEPARATOR.join(terms)
