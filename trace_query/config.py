"""Defaults applied to query requests that leave criteria unset.

Defaults are read from environment variables so deployments can tune them
without code changes.
"""

import logging
import os
from dataclasses import dataclass
from typing import ClassVar

logger = logging.getLogger(__name__)

# Environment variable names
ENV_VAR_DEFAULT_LIMIT: str = "TRACE_QUERY_DEFAULT_LIMIT"
ENV_VAR_DEFAULT_LOOKBACK: str = "TRACE_QUERY_DEFAULT_LOOKBACK"


def _parse_positive_int(name: str) -> int | None:
    """Reads a positive integer from the environment.

    Returns None when the variable is unset or malformed.
    """
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Ignoring {name}={raw!r}: not an integer")
        return None
    if value <= 0:
        logger.warning(f"Ignoring {name}={raw!r}: must be positive")
        return None
    return value


@dataclass(frozen=True)
class QueryDefaults:
    """Immutable defaults for unset query criteria."""

    limit: int
    lookback: int | None

    DEFAULT_LIMIT: ClassVar[int] = 10
    DEFAULT_LOOKBACK: ClassVar[int | None] = None

    @classmethod
    def from_environment(cls) -> "QueryDefaults":
        """Load defaults from environment variables.

        Environment Variables:
            TRACE_QUERY_DEFAULT_LIMIT: Result limit (default 10)
            TRACE_QUERY_DEFAULT_LOOKBACK: Lookback in microseconds (default unset)
        """
        limit = _parse_positive_int(ENV_VAR_DEFAULT_LIMIT)
        if limit is None:
            limit = cls.DEFAULT_LIMIT
        lookback = _parse_positive_int(ENV_VAR_DEFAULT_LOOKBACK)
        if lookback is None:
            lookback = cls.DEFAULT_LOOKBACK
        return cls(limit=limit, lookback=lookback)


def get_query_defaults() -> QueryDefaults:
    """Returns defaults from the current environment."""
    return QueryDefaults.from_environment()
