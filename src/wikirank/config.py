"""Runtime configuration constants.

Values can be overridden through environment variables so that worker
processes pick them up without extra plumbing.
"""

from __future__ import annotations

import os

ENV_DEBUG = "WIKIRANK_DEBUG"
ENV_DEDUP_SCAN_LIMIT = "WIKIRANK_DEDUP_SCAN_LIMIT"
ENV_INITIAL_CAPACITY = "WIKIRANK_INITIAL_CAPACITY"


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


def debug_enabled() -> bool:
    """Whether verbose logging was requested via WIKIRANK_DEBUG."""
    return os.environ.get(ENV_DEBUG, "").lower() in ("1", "true", "yes")


# containers at or below this size dedup with a linear scan,
# larger ones switch to a hash set
DEDUP_SCAN_LIMIT = _env_int(ENV_DEDUP_SCAN_LIMIT, 64)

# default backing-buffer size for a fresh SortedLongList
DEFAULT_CAPACITY = _env_int(ENV_INITIAL_CAPACITY, 10)

# growth factor applied when the backing buffer is full
GROWTH_FACTOR = 1.5
