"""Argument checks shared by the query builder and the annotation codec."""

import logging
from typing import NoReturn

from trace_query.constants import ANNOTATION_QUERY_SEPARATOR, is_core
from trace_query.exceptions import InvalidArgumentError
from trace_query.telemetry import get_meter

logger = logging.getLogger(__name__)
meter = get_meter(__name__)

_invalid_arguments = meter.create_counter(
    "trace_query.invalid_arguments",
    description="Query criteria rejected during validation",
)


def reject(message: str, field: str) -> NoReturn:
    """Counts the rejected field and raises InvalidArgumentError."""
    logger.debug(f"Rejected {field}: {message}")
    _invalid_arguments.add(1, {"field": field})
    raise InvalidArgumentError(message, field=field)


def check_argument(condition: bool, message: str, field: str) -> None:
    """Raises InvalidArgumentError with the message unless condition holds."""
    if not condition:
        reject(message, field)


def _splits_query(text: str) -> bool:
    """Returns True if the text would be split apart when re-parsed.

    A trailing " and" counts: joined with the next separator it reads as one.
    """
    return ANNOTATION_QUERY_SEPARATOR in f"{text} "


def check_annotation(value: str) -> None:
    check_argument(value != "", "annotation was empty", "annotations")
    check_argument(
        not _splits_query(value),
        f"annotation cannot contain the separator ' and ': {value}",
        "annotations",
    )
    check_argument(
        "=" not in value, f"annotation cannot contain '=': {value}", "annotations"
    )
    check_argument(
        not is_core(value),
        f"queries cannot be refined by core annotations: {value}",
        "annotations",
    )


def check_binary_annotation(key: str, value: str) -> None:
    check_argument(key != "", "binary annotation key was empty", "binary_annotations")
    check_argument(
        not _splits_query(key),
        f"binary annotation key cannot contain the separator ' and ': {key}",
        "binary_annotations",
    )
    check_argument(
        "=" not in key,
        f"binary annotation key cannot contain '=': {key}",
        "binary_annotations",
    )
    check_argument(
        value != "",
        f"binary annotation value for {key} was empty",
        "binary_annotations",
    )
    check_argument(
        not _splits_query(value),
        f"binary annotation value for {key} cannot contain the separator ' and '",
        "binary_annotations",
    )


def check_positive(value: int, message: str, field: str) -> None:
    check_argument(value > 0, message, field)
