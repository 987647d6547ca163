"""Read-along pagination: split time-aligned words into screen-sized pages.

WHY: Speech synthesis returns a flat list of timed words. A read-along
reader shows a few words per screen and flips pages in sync with the
audio. Deciding where the pages break (on natural boundaries, never
inside a quotation or list item, never longer than a screen) is the
part that needs care.

HOW: Three-stage layout: adapters parse stored word-timestamp JSON into
the IR, the core paginates it, formatters render the result (pagination
JSON for the reading UI, plain text for inspection).

RULES:
- paginate() is the single entry point into the engine
- Output page indices and break positions are 0-based input positions
- The engine is pure; configuration is passed in, never read globally
"""

from readalong_pagination.config import PaginationConfig
from readalong_pagination.core.ir import (
    Page,
    PageBreaksResult,
    PaginationThresholds,
    ProtectedRange,
    TransitionInfo,
    WordTimestamp,
)
from readalong_pagination.core.paginator import create_page_breaks, paginate
from readalong_pagination.errors import (
    EmptyInputError,
    InvalidThresholdsError,
    InvalidWordTimestampsError,
    NoBreaksFoundError,
    PaginationError,
)

__version__ = "0.1.0"

__all__ = [
    "paginate",
    "create_page_breaks",
    "PaginationConfig",
    "PaginationThresholds",
    "WordTimestamp",
    "ProtectedRange",
    "TransitionInfo",
    "Page",
    "PageBreaksResult",
    "PaginationError",
    "EmptyInputError",
    "NoBreaksFoundError",
    "InvalidThresholdsError",
    "InvalidWordTimestampsError",
]
