"""Protected-range detection: numbered list items and delimited content.

WHY: Some word spans read as one unit and must never be split across
pages: the opening words of a numbered list item ("2. Preheat the oven"),
a short quotation, a parenthetical aside. Splitting them produces pages
that start with a dangling ')' or a lone list number.

HOW: Two independent sub-detectors, each returning a DetectionResult
(ranges + breaks at range ends):
  find_numbered_item_breaks     word-level scan for list markers
  find_protected_content_breaks character-level scan of the text for
                                delimiter pairs, mapped back to words
                                through a word-span table

RULES:
- Numbered marker: ^#?(\\d+)[.:)\\]]+ or a bare number followed by a
  standalone "-" word (the dash joins the range)
- Marker with trailing content ("1.Text") protects 3 words in total;
  a bare marker protects itself plus up to 3 more words
- Numbered ranges never overlap each other and have no length cap
- Delimiters: "" () [] {} and doubled << >>; quotes do not nest,
  brackets nest with depth tracking
- Delimited content longer than PROTECTED_CONTENT_MAX_CHARS is skipped
  and the scan resumes one character after the opener
- The word-span table locates each word in the text in order, so source
  text with irregular whitespace still maps correctly
"""

from __future__ import annotations

import logging
import re
from bisect import bisect_right
from typing import List, Optional, Sequence, Tuple

from readalong_pagination.config import NUMBERED_ITEM_WORDS, PROTECTED_CONTENT_MAX_CHARS
from readalong_pagination.core.ir import (
    BRACES,
    BRACKETS,
    GUILLEMETS,
    NUMBERED_ITEM,
    PARENTHESES,
    QUOTES,
    DetectionResult,
    ProtectedRange,
)

logger = logging.getLogger(__name__)

_NUMBER_MARKER_RE = re.compile(r"^#?(\d+)[.:)\]]+")
_BARE_NUMBER_RE = re.compile(r"^#?\d+$")

# (opener, closer, range type, nests)
_DELIMITERS: Tuple[Tuple[str, str, str, bool], ...] = (
    ('"', '"', QUOTES, False),
    ("(", ")", PARENTHESES, True),
    ("[", "]", BRACKETS, True),
    ("{", "}", BRACES, True),
    ("<<", ">>", GUILLEMETS, False),
)


# =============================================================================
# Numbered items
# =============================================================================

def _numbered_marker_length(words: Sequence[str], i: int) -> Tuple[int, int]:
    """Return (marker length, last marker word) for a marker at i, or (0, i).

    The "4 -" form spans two words, so its marker ends at i + 1.
    """
    word = words[i]
    match = _NUMBER_MARKER_RE.match(word)
    if match is not None:
        return match.end(), i
    if _BARE_NUMBER_RE.match(word) and i + 1 < len(words) and words[i + 1] == "-":
        return len(word), i + 1
    return 0, i


def find_numbered_item_breaks(words: Sequence[str]) -> DetectionResult:
    """Find numbered list items and protect their first words.

    WHY: A list item's number belongs with the words it introduces.
    "3." alone at the bottom of a page, with "Stir the sauce" on the
    next, reads as a broken list.

    HOW: Linear scan. At each marker, extend the range over the next
    words (see module RULES), record it, emit a break at its end, and
    resume after it.

    RULES:
    - Truncated at end of text: protect whatever words remain
    - No fallback: a word that does not match the patterns is ignored

    Args:
        words: Word strings in input order.

    Returns:
        DetectionResult with numbered-item ranges and their end breaks.
    """
    result = DetectionResult()
    last = len(words) - 1
    i = 0

    while i <= last:
        marker_len, marker_end = _numbered_marker_length(words, i)
        if not marker_len:
            i += 1
            continue

        if len(words[i]) > marker_len:
            # "1.Text": the marker word already holds the first content word
            end = min(i + NUMBERED_ITEM_WORDS - 1, last)
        else:
            end = min(marker_end + NUMBERED_ITEM_WORDS, last)

        protected_text = " ".join(words[i:end + 1])
        result.protected_ranges.append(ProtectedRange(
            start=i,
            end=end,
            type=NUMBERED_ITEM,
            char_count=len(protected_text),
        ))
        result.breaks.append(end)
        logger.debug("Numbered item at %d-%d: %r", i, end, protected_text)

        i = end + 1

    result.breaks = sorted(set(result.breaks))
    return result


# =============================================================================
# Delimited content
# =============================================================================

def build_word_spans(words: Sequence[str], text: str) -> List[Tuple[int, int]]:
    """Map each word to its [start, end) character span in text.

    WHY: The delimiter scan works on characters, breaks work on words.
    Rebuilding offsets by assuming single-space joins desynchronizes as
    soon as the source text has tabs, double spaces, or newlines.

    HOW: Locate each word with str.find starting at the end of the
    previous match. A word that cannot be found gets a zero-width span at
    the running offset, so it maps no characters and later words still
    line up.
    """
    spans: List[Tuple[int, int]] = []
    offset = 0
    for word in words:
        pos = text.find(word, offset) if word else -1
        if pos == -1:
            spans.append((offset, offset))
            continue
        spans.append((pos, pos + len(word)))
        offset = pos + len(word)
    return spans


def _word_at_char(starts: List[int], spans: List[Tuple[int, int]], pos: int) -> Optional[int]:
    idx = bisect_right(starts, pos) - 1
    if idx >= 0 and spans[idx][0] <= pos < spans[idx][1]:
        return idx
    return None


def _find_close(text: str, open_pos: int, opener: str, closer: str, nests: bool) -> Optional[int]:
    """Position of the closer matching the opener at open_pos, or None."""
    pos = open_pos + len(opener)
    if not nests:
        close = text.find(closer, pos)
        return close if close != -1 else None

    depth = 1
    for j in range(pos, len(text)):
        ch = text[j]
        if ch == opener:
            depth += 1
        elif ch == closer:
            depth -= 1
            if depth == 0:
                return j
    return None


def _find_delimited_spans(
    text: str,
    opener: str,
    closer: str,
    nests: bool,
    max_chars: int,
) -> List[Tuple[int, int, int]]:
    """Find (open position, last closer char, content length) triples.

    Only spans whose content fits in max_chars are returned.
    """
    spans = []
    width = len(opener)
    i = 0

    while i < len(text):
        if not text.startswith(opener, i):
            i += 1
            continue

        close = _find_close(text, i, opener, closer, nests)
        if close is None:
            i += 1
            continue

        content_len = close - (i + width)
        if content_len > max_chars:
            logger.debug(
                "Skipping %r content at char %d (%d chars > %d)",
                opener, i, content_len, max_chars,
            )
            i += 1
            continue

        spans.append((i, close + len(closer) - 1, content_len))
        i = close + len(closer)

    return spans


def find_protected_content_breaks(
    words: Sequence[str],
    text: Optional[str] = None,
    max_chars: int = PROTECTED_CONTENT_MAX_CHARS,
) -> DetectionResult:
    """Find short delimited spans (quotes, parens, ...) and protect them.

    WHY: A short quotation or aside is read as one breath. Breaking
    inside it strands an opening quote at the end of one page and the
    closing quote at the start of the next.

    HOW: For each delimiter pair, scan the text for matched spans,
    keep those with content <= max_chars, and map the opening and
    closing characters back to word positions. The range runs from the
    word holding the opener to the word holding the closer; a break is
    emitted at the latter.

    RULES:
    - text defaults to the words joined by single spaces; pass the
      original source text when available
    - Spans whose delimiters cannot be mapped to words are ignored
    - Ranges are sorted by start; breaks are sorted and unique

    Args:
        words: Word strings in input order.
        text: Text the words were taken from.
        max_chars: Longest delimited content that is still protected.

    Returns:
        DetectionResult with delimited-content ranges and end breaks.
    """
    if text is None:
        text = " ".join(words)

    spans = build_word_spans(words, text)
    starts = [s for s, _ in spans]
    result = DetectionResult()

    for opener, closer, range_type, nests in _DELIMITERS:
        for open_pos, close_pos, content_len in _find_delimited_spans(
            text, opener, closer, nests, max_chars
        ):
            start_word = _word_at_char(starts, spans, open_pos)
            end_word = _word_at_char(starts, spans, close_pos)
            if start_word is None or end_word is None:
                continue

            result.protected_ranges.append(ProtectedRange(
                start=start_word,
                end=end_word,
                type=range_type,
                char_count=content_len,
            ))
            result.breaks.append(end_word)
            logger.debug(
                "Protected %s at words %d-%d (%d chars)",
                range_type, start_word, end_word, content_len,
            )

    result.protected_ranges.sort(key=lambda r: r.start)
    result.breaks = sorted(set(result.breaks))
    return result
