"""Configuration constants, pagination defaults, and .env loading.

WHY: Centralizes every tunable number of the pagination heuristics so it
is easy to find and override. The character caps, pause thresholds, and
conjunction list are plain data, not buried in logic.

HOW: Module-level constants hold the defaults. PaginationConfig is an
immutable value passed explicitly into paginate(); the engine never reads
the environment itself. load_config() is the only place that consults
os.environ, after python-dotenv has loaded the .env file. The CLI calls
it; library callers build a PaginationConfig directly.

RULES:
- DEFAULT_MAX_PAGE_CHARS is the soft cap applied by the long-page splitter
- PROTECTED_CONTENT_MAX_CHARS caps delimited content; longer spans are
  not protected
- DEFAULT_BREATHING_GAP_MS is used when thresholds carry no usable
  breakPauseSecond value
- The debug flag is a field of PaginationConfig, never a global
- Environment variables: PAGINATION_MAX_PAGE_CHARS,
  PAGINATION_BREATHING_GAP_MS, PAGINATION_DEBUG
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# ---------------------------------------------------------------------------
# Page size and protection limits
# ---------------------------------------------------------------------------

DEFAULT_MAX_PAGE_CHARS = 64
"""Pages longer than this (single-space joined) go through the splitter."""

PROTECTED_CONTENT_MAX_CHARS = 64
"""Delimited content longer than this is deliberately left unprotected."""

NUMBERED_ITEM_WORDS = 3
"""Words protected after a numbered-item marker."""

# ---------------------------------------------------------------------------
# Timing thresholds
# ---------------------------------------------------------------------------

DEFAULT_BREATHING_GAP_MS = 60.0
TRANSITION_GAP_THRESHOLD_S = 0.01
"""Gaps between pages at or below 10ms get no transition info."""

# ---------------------------------------------------------------------------
# Word lists
# ---------------------------------------------------------------------------

CONJUNCTIONS: frozenset[str] = frozenset({
    "and", "or", "but", "nor", "yet", "so", "however",
})
"""Coordinating conjunctions that may start a new page (lowercase)."""

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class PaginationConfig:
    """Explicit engine settings for one paginate() call.

    Attributes:
        max_page_chars: Soft character cap; longer pages are split at
            conjunctions, then at breathing gaps.
        breathing_gap_ms: Fallback breathing-gap threshold used when the
            thresholds object does not provide breakPauseSecond.
        debug: Emit per-pass diagnostics at INFO instead of DEBUG.
    """

    max_page_chars: int = DEFAULT_MAX_PAGE_CHARS
    breathing_gap_ms: float = DEFAULT_BREATHING_GAP_MS
    debug: bool = False


def _env_number(name: str, default: float, cast: type) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError:
        raise ValueError(
            "{} must be a number, got {!r}".format(name, raw)
        ) from None
    if value <= 0:
        raise ValueError("{} must be positive, got {!r}".format(name, raw))
    return value


def load_config() -> PaginationConfig:
    """Build a PaginationConfig from the environment.

    WHY: Command-line and service deployments tune pagination through
    .env files, but the engine itself must stay free of global state.

    HOW: Loads .env via python-dotenv (existing variables win), then
    reads the PAGINATION_* variables, falling back to the module defaults.

    RULES:
    - Raises ValueError if a numeric variable is malformed or not positive
    - PAGINATION_DEBUG accepts 1/true/yes/on (case-insensitive)
    """
    load_dotenv()
    return PaginationConfig(
        max_page_chars=int(_env_number(
            "PAGINATION_MAX_PAGE_CHARS", DEFAULT_MAX_PAGE_CHARS, int
        )),
        breathing_gap_ms=float(_env_number(
            "PAGINATION_BREATHING_GAP_MS", DEFAULT_BREATHING_GAP_MS, float
        )),
        debug=os.getenv("PAGINATION_DEBUG", "").strip().lower() in _TRUE_VALUES,
    )
