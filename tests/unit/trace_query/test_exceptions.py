"""Tests for trace query exceptions."""

from fastapi import HTTPException

from trace_query.exceptions import InvalidArgumentError, TraceQueryError


def test_invalid_argument_is_user_facing_bad_request() -> None:
    error = InvalidArgumentError("limit should be positive: was 0", field="limit")

    assert isinstance(error, TraceQueryError)
    assert isinstance(error, HTTPException)
    assert error.status_code == 400
    assert error.user_facing is True
    assert error.detail == "limit should be positive: was 0"
    assert error.field == "limit"
    assert str(error) == "limit should be positive: was 0"


def test_base_error_is_internal_by_default() -> None:
    error = TraceQueryError("boom")

    assert error.status_code == 500
    assert error.user_facing is False
    assert error.message == "boom"
