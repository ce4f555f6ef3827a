"""Tests for query defaults loaded from the environment."""

import logging
import os
from unittest.mock import patch

import pytest

from trace_query.config import (
    ENV_VAR_DEFAULT_LIMIT,
    ENV_VAR_DEFAULT_LOOKBACK,
    QueryDefaults,
    get_query_defaults,
)


class TestQueryDefaults:
    def test_built_in_defaults(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            defaults = QueryDefaults.from_environment()
        assert defaults == QueryDefaults(limit=10, lookback=None)

    def test_reads_environment(self) -> None:
        env = {ENV_VAR_DEFAULT_LIMIT: "50", ENV_VAR_DEFAULT_LOOKBACK: " 3600000000 "}
        with patch.dict(os.environ, env, clear=True):
            defaults = get_query_defaults()
        assert defaults.limit == 50
        assert defaults.lookback == 3_600_000_000

    @pytest.mark.parametrize("raw", ["ten", "0", "-5", "1.5"])
    def test_malformed_values_fall_back(
        self, raw: str, caplog: pytest.LogCaptureFixture
    ) -> None:
        env = {ENV_VAR_DEFAULT_LIMIT: raw, ENV_VAR_DEFAULT_LOOKBACK: raw}
        with (
            patch.dict(os.environ, env, clear=True),
            caplog.at_level(logging.WARNING, logger="trace_query.config"),
        ):
            defaults = QueryDefaults.from_environment()

        assert defaults.limit == 10
        assert defaults.lookback is None
        assert f"Ignoring {ENV_VAR_DEFAULT_LIMIT}" in caplog.text
        assert f"Ignoring {ENV_VAR_DEFAULT_LOOKBACK}" in caplog.text

    def test_is_immutable(self) -> None:
        defaults = QueryDefaults(limit=10, lookback=None)
        with pytest.raises(AttributeError):
            defaults.limit = 20  # type: ignore[misc]

    def test_unset_limit_with_lookback_set(self) -> None:
        with patch.dict(os.environ, {ENV_VAR_DEFAULT_LOOKBACK: "1000"}, clear=True):
            defaults = QueryDefaults.from_environment()
        assert defaults == QueryDefaults(limit=10, lookback=1000)
