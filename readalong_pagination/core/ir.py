"""Intermediate representation dataclasses for pagination.

WHY: The synthesis layer hands over a flat list of timed words. The
reading UI needs pages: contiguous word groups with timing, size, and
advance-on-gap metadata. The IR gives every stage of the pipeline the
same well-typed vocabulary, and gives the JSON output one place to be
built from.

HOW: The dataclasses form a small hierarchy:
  WordTimestamp        one synthesized word with timing (read-only input)
  ProtectedRange       a word span that must never be split
  BreakDetail          diagnostic label for one applied page boundary
  TransitionInfo       silent gap after a page, with its midpoint
  Page                 contiguous words shown on one screen
  PaginationThresholds caller-supplied timing thresholds
  PaginationSummary    counts per detector and per pass
  PageBreaksResult     everything paginate() returns

RULES:
- All times are float seconds
- Every index the engine computes is the 0-based POSITION of a word in
  the input list; WordTimestamp.index is carried through, never used
- Pages partition the input: every word in exactly one page, in order
- page_index is 0..N-1 after every structural change
- to_dict() methods produce the camelCase JSON contract
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from readalong_pagination.errors import InvalidThresholdsError

# Protected range types
NUMBERED_ITEM = "numbered-item"
QUOTES = "quotes"
PARENTHESES = "parentheses"
BRACKETS = "brackets"
BRACES = "braces"
GUILLEMETS = "guillemets"

# Break types, highest priority first
BREAK_NUMBERED_ITEM = "numbered-item"
BREAK_PROTECTED_CONTENT = "protected-content"
BREAK_SENTENCE_ENDING = "sentence-ending"
BREAK_MIDDLE_PUNCTUATION = "middle-punctuation"
BREAK_CONJUNCTION = "conjunction"
BREAK_BREATHING_GAP = "breathing-gap"

BREAK_PRIORITY = (
    BREAK_NUMBERED_ITEM,
    BREAK_PROTECTED_CONTENT,
    BREAK_SENTENCE_ENDING,
    BREAK_MIDDLE_PUNCTUATION,
    BREAK_CONJUNCTION,
    BREAK_BREATHING_GAP,
)


@dataclass(frozen=True)
class WordTimestamp:
    """A single synthesized word with its audio timing.

    RULES:
    - word: text as spoken/displayed, punctuation attached ("off,")
    - start / end: float seconds into the chunk's audio
    - index: position label from the alignment step; informational only
    """

    word: str
    start: float
    end: float
    index: int

    def to_dict(self) -> Dict[str, Any]:
        return {"word": self.word, "start": self.start, "end": self.end, "index": self.index}


@dataclass
class ProtectedRange:
    """A span of words that no page boundary may split.

    RULES:
    - start <= end, both inclusive word positions
    - type is one of the range type constants above
    - char_count: content length between delimiters, or for numbered
      items the length of the protected words joined by single spaces
    """

    start: int
    end: int
    type: str
    char_count: int

    def contains(self, word_index: int) -> bool:
        return self.start <= word_index <= self.end

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start": self.start,
            "end": self.end,
            "type": self.type,
            "charCount": self.char_count,
        }


@dataclass
class DetectionResult:
    """Output of one protected-range sub-detector."""

    protected_ranges: List[ProtectedRange] = field(default_factory=list)
    breaks: List[int] = field(default_factory=list)


@dataclass
class BreakDetail:
    """Diagnostic description of one applied page boundary.

    RULES:
    - break_number is 1-based
    - break_type is the highest-priority detector that produced the break
    - punctuation is the trailing punctuation of the word, or "" if none
    """

    break_number: int
    word_index: int
    word_text: str
    break_type: str
    punctuation: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "breakNumber": self.break_number,
            "wordIndex": self.word_index,
            "wordText": self.word_text,
            "breakType": self.break_type,
            "punctuation": self.punctuation,
        }


@dataclass
class TransitionInfo:
    """Silent gap between a page's last word and the next page's first.

    The reading UI advances to the next page at gap_midpoint_time rather
    than waiting for the next page's audio to begin.
    """

    gap_start_time: float
    gap_end_time: float
    gap_midpoint_time: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "gapStartTime": self.gap_start_time,
            "gapEndTime": self.gap_end_time,
            "gapMidpointTime": self.gap_midpoint_time,
        }


@dataclass(frozen=True)
class Page:
    """Contiguous words shown together on one screen.

    RULES:
    - words is non-empty and in input order
    - start_time == words[0].start, end_time == words[-1].end
    - character_count == len(" ".join(w.word for w in words))
    - start_index is the input position of words[0]; not serialized
    - transition_info is set only when the gap to the next page > 10ms
    - Frozen: passes build new pages, never edit one in place
    """

    page_index: int
    words: List[WordTimestamp]
    start_time: float
    end_time: float
    word_count: int
    character_count: int
    start_index: int = 0
    transition_info: Optional[TransitionInfo] = None

    @property
    def end_index(self) -> int:
        """Input position of the page's last word."""
        return self.start_index + len(self.words) - 1

    @property
    def text(self) -> str:
        return " ".join(w.word for w in self.words)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "pageIndex": self.page_index,
            "words": [w.to_dict() for w in self.words],
            "startTime": self.start_time,
            "endTime": self.end_time,
            "wordCount": self.word_count,
            "characterCount": self.character_count,
        }
        if self.transition_info is not None:
            data["transitionInfo"] = self.transition_info.to_dict()
        return data


@dataclass
class PaginationThresholds:
    """Caller-supplied thresholds object.

    WHY: The service passes a thresholds object through from the client.
    Only the breathing-gap threshold (breakPauseSecond, milliseconds) is
    consumed; the other fields are accepted for forward compatibility.
    """

    break_pause_first: Optional[float] = None
    break_pause_second: Optional[float] = None
    use_primary: Optional[bool] = None
    use_secondary: Optional[bool] = None

    _KEYS = {
        "breakPauseFirst": "break_pause_first",
        "break_pause_first": "break_pause_first",
        "breakPauseSecond": "break_pause_second",
        "break_pause_second": "break_pause_second",
        "usePrimary": "use_primary",
        "use_primary": "use_primary",
        "useSecondary": "use_secondary",
        "use_secondary": "use_secondary",
    }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "PaginationThresholds":
        """Build thresholds from a camelCase or snake_case dict.

        Unknown keys (e.g. legacy threshold1/threshold2) are ignored.

        Raises:
            InvalidThresholdsError: If data is neither None nor a mapping.
        """
        if data is not None and not isinstance(data, Mapping):
            raise InvalidThresholdsError(
                "thresholds must be a mapping, got {}".format(type(data).__name__)
            )
        kwargs = {}
        for key, value in (data or {}).items():
            name = cls._KEYS.get(key)
            if name is not None:
                kwargs[name] = value
        return cls(**kwargs)

    def breathing_gap_ms(self, default: float) -> float:
        """Breathing-gap threshold in ms; a missing or zero value means default.

        Raises:
            InvalidThresholdsError: If breakPauseSecond is not a finite,
                non-negative number.
        """
        value = self.break_pause_second
        if value is None or value is False:
            return float(default)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidThresholdsError(
                "breakPauseSecond must be a number of milliseconds, got {!r}".format(value)
            )
        if not math.isfinite(value) or value < 0:
            raise InvalidThresholdsError(
                "breakPauseSecond must be a non-negative number, got {!r}".format(value)
            )
        return float(value or default)


@dataclass
class PaginationSummary:
    """Counts describing one pagination run."""

    total_words: int
    total_pages: int
    average_page_size: int
    total_breaks: int
    numbered_item_breaks: int
    numbered_item_ranges: int
    protected_content_breaks: int
    protected_ranges: int
    sentence_breaks: int
    middle_breaks: int
    conjunction_breaks: int
    conjunction_splits: int
    breathing_gap_splits: int
    max_page_chars: int
    breathing_gap_threshold_ms: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalWords": self.total_words,
            "totalPages": self.total_pages,
            "averagePageSize": self.average_page_size,
            "totalBreaks": self.total_breaks,
            "numberedItemBreaks": self.numbered_item_breaks,
            "numberedItemRanges": self.numbered_item_ranges,
            "protectedContentBreaks": self.protected_content_breaks,
            "protectedRanges": self.protected_ranges,
            "sentenceBreaks": self.sentence_breaks,
            "middleBreaks": self.middle_breaks,
            "conjunctionBreaks": self.conjunction_breaks,
            "conjunctionSplits": self.conjunction_splits,
            "breathingGapSplits": self.breathing_gap_splits,
            "maxPageChars": self.max_page_chars,
            "breathingGapThresholdMs": self.breathing_gap_threshold_ms,
        }


@dataclass
class PageBreaksResult:
    """Everything paginate() returns.

    RULES:
    - page_breaks: sorted input positions after which a page ends
      (excluding the end of the text unless punctuation put one there)
    - page_break_details: one BreakDetail per entry in page_breaks
    - pages: the final, renumbered page list
    - protected_ranges: every detected range, sorted by start
    """

    page_breaks: List[int]
    page_break_details: List[BreakDetail]
    pages: List[Page]
    summary: PaginationSummary
    protected_ranges: List[ProtectedRange] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pageBreaks": list(self.page_breaks),
            "pageBreakDetails": [d.to_dict() for d in self.page_break_details],
            "pages": [p.to_dict() for p in self.pages],
            "summary": self.summary.to_dict(),
            "protectedRanges": [r.to_dict() for r in self.protected_ranges],
        }
