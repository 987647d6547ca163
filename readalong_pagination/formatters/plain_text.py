"""Plain text page listing.

WHY: Tuning pagination means reading where the pages broke. A JSON dump
of timed words is unreadable for that; one short block per page is not.

HOW: One block per page: a header with the page number, time range,
size and the type of break that ended it, then the page text. Blocks
are separated by a blank line.

RULES:
- Header: "Page N  [start-end]  W words, C chars  (break type)"
- Page numbers in the header are 1-based for humans
- Pages over the size cap are flagged with "OVER CAP"
- Output suffix: "-pages.txt"
- Media type: "text/plain"
"""

from __future__ import annotations

from typing import Dict, List

from readalong_pagination.core.ir import PageBreaksResult
from readalong_pagination.formatters.base import BaseFormatter, FormatterOutput


class PlainTextFormatter(BaseFormatter):
    """Formatter that lists pages as readable text blocks."""

    @property
    def name(self) -> str:
        return "Plain Text"

    def format(self, result: PageBreaksResult) -> List[FormatterOutput]:
        break_types: Dict[int, str] = {
            d.word_index: d.break_type for d in result.page_break_details
        }
        cap = result.summary.max_page_chars
        blocks: List[str] = []

        for page in result.pages:
            header = "Page {}  [{:.3f}-{:.3f}]  {} words, {} chars".format(
                page.page_index + 1,
                page.start_time,
                page.end_time,
                page.word_count,
                page.character_count,
            )
            break_type = break_types.get(page.end_index)
            if break_type:
                header += "  ({})".format(break_type)
            if page.character_count > cap:
                header += "  OVER CAP"
            blocks.append("{}\n{}".format(header, page.text))

        content = "\n\n".join(blocks)
        if content:
            content += "\n"

        return [
            FormatterOutput(
                suffix="-pages.txt",
                content=content,
                media_type="text/plain",
            )
        ]
