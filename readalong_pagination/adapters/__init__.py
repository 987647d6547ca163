"""Adapter modules for converting external JSON into the pagination IR.

WHY: The alignment step and the stored word-timestamp files use their
own JSON shapes. Adapters validate and convert them so the core only
ever sees WordTimestamp objects.

RULES:
- Adapters never paginate; they only parse and validate
- Each adapter lives in its own module under this package
"""

from readalong_pagination.adapters.word_timestamps import load_word_timestamps, parse_word_timestamps

__all__ = ["load_word_timestamps", "parse_word_timestamps"]
