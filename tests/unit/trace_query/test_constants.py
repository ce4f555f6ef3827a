"""Tests for the core annotation registry."""

import pytest

from trace_query.constants import (
    CLIENT_RECV,
    CLIENT_SEND,
    CORE_ANNOTATIONS,
    ERROR,
    LOCAL_COMPONENT,
    SERVER_RECV,
    SERVER_SEND,
    TraceKeys,
    is_core,
)


@pytest.mark.parametrize(
    "code", ["cs", "cr", "ss", "sr", "ws", "wr", "csf", "crf", "ssf", "srf"]
)
def test_core_codes(code: str) -> None:
    assert is_core(code)


@pytest.mark.parametrize("code", [ERROR, LOCAL_COMPONENT, "ca", "sa", "CS", "", "cs "])
def test_non_core_codes(code: str) -> None:
    assert not is_core(code)


def test_core_annotations_are_frozen() -> None:
    assert isinstance(CORE_ANNOTATIONS, frozenset)
    assert {CLIENT_SEND, CLIENT_RECV, SERVER_SEND, SERVER_RECV} <= CORE_ANNOTATIONS
    assert len(CORE_ANNOTATIONS) == 10


def test_trace_keys() -> None:
    assert TraceKeys.HTTP_METHOD == "http.method"
    assert TraceKeys.HTTP_STATUS_CODE == "http.status_code"
