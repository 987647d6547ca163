"""Punctuation break detection: sentence endings and mid-sentence marks.

WHY: Punctuation is where a reader naturally pauses, so it is where a
page may end. Sentence endings are the strongest signal; commas, dashes,
colons and ellipses are weaker but still natural.

HOW: Two linear scans over the word strings. Words inside a protected
range are skipped so quoted or listed content keeps its internal
punctuation from splitting it.

RULES:
- Sentence break: word ends with one or more of . ! ?
- Middle break: word ends with one or more of , ; : — – … -
  and is not already a sentence break
- Protected bounds are inclusive: a word at a range's end is skipped too
  (the range detector already emitted a break there)
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Sequence

from readalong_pagination.core.ir import ProtectedRange
from readalong_pagination.core.ranges import is_in_protected_range

logger = logging.getLogger(__name__)

SENTENCE_END_RE = re.compile(r"[.!?]+$")
MIDDLE_PUNCT_RE = re.compile(r"[,;:—–…-]+$")
TRAILING_PUNCT_RE = re.compile(r"[.!?,;:—–…-]+$")


def trailing_punctuation(word: str) -> str:
    """Return the word's trailing punctuation run, or "" if it has none."""
    match = TRAILING_PUNCT_RE.search(word)
    return match.group(0) if match else ""


def find_sentence_breaks(
    words: Sequence[str],
    protected_ranges: Sequence[ProtectedRange] = (),
) -> List[int]:
    """Return positions of unprotected words that end a sentence."""
    breaks = []
    for i, word in enumerate(words):
        if is_in_protected_range(i, protected_ranges):
            continue
        if SENTENCE_END_RE.search(word):
            breaks.append(i)

    logger.debug("Sentence breaks: %s", breaks)
    return breaks


def find_middle_punctuation_breaks(
    words: Sequence[str],
    sentence_breaks: Iterable[int],
    protected_ranges: Sequence[ProtectedRange] = (),
) -> List[int]:
    """Return positions of unprotected words ending in mid-sentence punctuation.

    Standalone dash tokens ("-") count: TTS alignment often emits the
    spoken dash as its own word, and it marks a clause boundary.
    """
    skip = set(sentence_breaks)
    breaks = []
    for i, word in enumerate(words):
        if i in skip or is_in_protected_range(i, protected_ranges):
            continue
        if MIDDLE_PUNCT_RE.search(word):
            breaks.append(i)

    logger.debug("Middle punctuation breaks: %s", breaks)
    return breaks
