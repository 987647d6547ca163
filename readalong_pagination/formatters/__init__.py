"""Output formatter registry.

WHY: The CLI needs a single lookup to find a formatter by name. Adding
an output format means writing the class and adding one line here.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["plain_text"]()``.

RULES:
- Keys are snake_case identifiers (used in CLI flags)
- Values are BaseFormatter subclasses
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from readalong_pagination.formatters.pagination_json import PaginationJSONFormatter
from readalong_pagination.formatters.plain_text import PlainTextFormatter

if TYPE_CHECKING:
    from readalong_pagination.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "pagination_json": PaginationJSONFormatter,
    "plain_text": PlainTextFormatter,
}
