"""Abstract base formatter and output container.

WHY: A pagination result is consumed in several shapes: the pagination
JSON the reading UI loads, a plain text listing for eyeballing page
breaks. A common base lets the CLI write any of them generically.

HOW: BaseFormatter is an ABC with a ``name`` property and a ``format()``
method. FormatterOutput bundles a file suffix with its content and MIME
type.

RULES:
- Subclasses MUST implement ``name`` and ``format()``
- ``format()`` returns a list; single-file formatters return one item
- ``suffix`` starts with a hyphen, e.g. ``"-pagination.json"``
- The caller prepends the source filename stem
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from readalong_pagination.core.ir import PageBreaksResult


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        suffix: File suffix appended to the source stem,
                e.g. ``"-pagination.json"`` -> ``"chunk-0-pagination.json"``.
        content: The file content.
        media_type: MIME type for the content.
    """

    suffix: str
    content: str
    media_type: str


class BaseFormatter(ABC):
    """Abstract base for all pagination output formatters.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement format() and name
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'Pagination JSON'."""

    @abstractmethod
    def format(self, result: PageBreaksResult) -> list[FormatterOutput]:
        """Render a pagination result into one or more output files."""
