"""Pagination JSON formatter: the document the reading UI loads.

WHY: The reader groups words per screen and flips pages on audio gaps
using this file. Its camelCase shape is a contract with the clients, so
it is validated against pagination_schema.json before it leaves.

HOW: Serializes PageBreaksResult.to_dict() and validates it with
jsonschema.

RULES:
- Keys are camelCase (pageIndex, startTime, transitionInfo, ...)
- transitionInfo is present only on pages followed by a gap > 10ms
- Output suffix: "-pagination.json"
- Validate output against the schema before returning; raise on failure
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema

from readalong_pagination.core.ir import PageBreaksResult
from readalong_pagination.formatters.base import BaseFormatter, FormatterOutput

_SCHEMA_PATH = Path(__file__).resolve().parent / "pagination_schema.json"

_CACHED_SCHEMA: Optional[Dict[str, Any]] = None


def _get_schema() -> Dict[str, Any]:
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


class PaginationJSONFormatter(BaseFormatter):
    """Formatter that writes the pagination JSON contract."""

    def __init__(self, indent: Optional[int] = 2) -> None:
        self.indent = indent

    @property
    def name(self) -> str:
        return "Pagination JSON"

    def format(self, result: PageBreaksResult) -> List[FormatterOutput]:
        """Serialize and validate the pagination result.

        Raises:
            jsonschema.ValidationError: If the output does not match the
                pagination schema.
        """
        output_dict = result.to_dict()
        jsonschema.validate(instance=output_dict, schema=_get_schema())

        return [
            FormatterOutput(
                suffix="-pagination.json",
                content=json.dumps(output_dict, indent=self.indent, ensure_ascii=False),
                media_type="application/json",
            )
        ]
