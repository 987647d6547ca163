"""Pagination orchestrator: word timestamps in, pages out.

WHY: Each detector and pass is simple on its own; the order they run
in, which breaks feed which pass, and how failures surface is the actual
pagination policy. Keeping that policy in one function makes it
readable end to end and leaves the passes independently testable.

HOW: paginate() runs, in order:
  1. validation (empty list, thresholds, blank text)
  2. numbered items -> delimited content -> sentence -> middle
     punctuation breaks; conjunction candidates are discovered here
  3. suppression of any primary break that would cut a protected range
     (ranges from different detectors may overlap)
  4. page assembly, transitions
  5. conjunction split of long pages, transitions
  6. breathing-gap split of long pages, transitions
  7. diagnostics: applied breaks with priority labels, summary counts

RULES:
- Fails fast: EmptyInputError, InvalidThresholdsError,
  NoBreaksFoundError; never a silent single-page fallback
- Pure: no I/O, no globals, inputs never mutated; safe to call
  concurrently on independent inputs
- Logging goes to the injected logger (or this module's); with
  config.debug the per-pass trace is logged at INFO, otherwise DEBUG
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Set, Union

from readalong_pagination.config import PaginationConfig
from readalong_pagination.core.ir import (
    BREAK_BREATHING_GAP,
    BREAK_CONJUNCTION,
    BREAK_MIDDLE_PUNCTUATION,
    BREAK_NUMBERED_ITEM,
    BREAK_PRIORITY,
    BREAK_PROTECTED_CONTENT,
    BREAK_SENTENCE_ENDING,
    BreakDetail,
    Page,
    PageBreaksResult,
    PaginationSummary,
    PaginationThresholds,
    WordTimestamp,
)
from readalong_pagination.core.pages import calculate_page_transitions, generate_pages_from_breaks
from readalong_pagination.core.protected import find_numbered_item_breaks, find_protected_content_breaks
from readalong_pagination.core.punctuation import (
    find_middle_punctuation_breaks,
    find_sentence_breaks,
    trailing_punctuation,
)
from readalong_pagination.core.ranges import splits_protected_range
from readalong_pagination.core.splitter import (
    apply_breathing_gaps_to_long_pages,
    apply_conjunction_breaks_to_long_pages,
    find_conjunction_breaks,
)
from readalong_pagination.errors import EmptyInputError, NoBreaksFoundError

_logger = logging.getLogger(__name__)

ThresholdsLike = Union[PaginationThresholds, Dict[str, Any], None]


def _page_ends(pages: Sequence[Page]) -> Set[int]:
    """Input positions after which one page ends and another begins."""
    return {page.end_index for page in pages[:-1]}


def paginate(
    word_timestamps: Sequence[WordTimestamp],
    thresholds: ThresholdsLike = None,
    config: Optional[PaginationConfig] = None,
    source_text: Optional[str] = None,
    logger: Optional[logging.Logger] = None,
) -> PageBreaksResult:
    """Split a chunk's timed words into screen-sized pages.

    Args:
        word_timestamps: Words in spoken order. Break positions in the
            result are 0-based positions in this list.
        thresholds: PaginationThresholds or the raw thresholds dict
            (breakPauseSecond = breathing-gap threshold in ms).
        config: Page size cap, fallback breathing gap, debug flag.
        source_text: The original text the words were synthesized from.
            Used to locate delimiters when its whitespace differs from
            single-space joins. Defaults to the joined words.
        logger: Logger for diagnostics; defaults to this module's.

    Returns:
        PageBreaksResult with the final pages, applied breaks and summary.

    Raises:
        EmptyInputError: If the word list is empty or all words are blank.
        NoBreaksFoundError: If no detector finds a single break.
        InvalidThresholdsError: If thresholds is not a mapping or its
            breakPauseSecond is not a non-negative number.
    """
    log = logger if logger is not None else _logger
    cfg = config if config is not None else PaginationConfig()
    trace = log.info if cfg.debug else log.debug

    if not word_timestamps:
        raise EmptyInputError("Pagination failed: word timestamps are empty")

    if not isinstance(thresholds, PaginationThresholds):
        thresholds = PaginationThresholds.from_dict(thresholds)
    gap_ms = thresholds.breathing_gap_ms(cfg.breathing_gap_ms)

    words: List[str] = [w.word for w in word_timestamps]
    text = " ".join(words)
    if not text.strip():
        raise EmptyInputError("Pagination failed: could not extract text from word timestamps")

    trace("Paginating %d words (%d chars): %.100r", len(words), len(text), text)

    # -- Protected ranges -------------------------------------------------
    numbered = find_numbered_item_breaks(words)
    delimited = find_protected_content_breaks(
        words, source_text if source_text and source_text.strip() else text
    )
    all_ranges = numbered.protected_ranges + delimited.protected_ranges
    trace(
        "Protected ranges: %d numbered, %d delimited",
        len(numbered.protected_ranges), len(delimited.protected_ranges),
    )

    # -- Punctuation and conjunction candidates ----------------------------
    sentence_breaks = find_sentence_breaks(words, all_ranges)
    middle_breaks = find_middle_punctuation_breaks(words, sentence_breaks, all_ranges)
    conjunction_breaks = find_conjunction_breaks(
        words, sentence_breaks + middle_breaks, all_ranges
    )

    discovered = sorted(set(
        numbered.breaks + delimited.breaks + sentence_breaks + middle_breaks
    ))
    if not discovered:
        log.error("No punctuation found in %d words; cannot paginate", len(words))
        raise NoBreaksFoundError("Pagination failed: no punctuation marks found in text")

    primary_breaks = [b for b in discovered if not splits_protected_range(b, all_ranges)]
    if len(primary_breaks) != len(discovered):
        trace(
            "Suppressed breaks inside overlapping ranges: %s",
            sorted(set(discovered) - set(primary_breaks)),
        )
    trace("Primary breaks: %s", primary_breaks)

    # -- Pages ------------------------------------------------------------
    pages = calculate_page_transitions(
        generate_pages_from_breaks(word_timestamps, primary_breaks)
    )

    conjunction_pages = calculate_page_transitions(
        apply_conjunction_breaks_to_long_pages(pages, conjunction_breaks, cfg.max_page_chars)
    )
    trace(
        "Conjunction pass (> %d chars): %d -> %d pages",
        cfg.max_page_chars, len(pages), len(conjunction_pages),
    )

    final_pages = calculate_page_transitions(
        apply_breathing_gaps_to_long_pages(
            conjunction_pages, cfg.max_page_chars, gap_ms, all_ranges
        )
    )
    trace(
        "Breathing-gap pass (>= %sms): %d -> %d pages",
        gap_ms, len(conjunction_pages), len(final_pages),
    )

    # -- Diagnostics ------------------------------------------------------
    primary_set = set(primary_breaks)
    conjunction_splits = _page_ends(conjunction_pages) - primary_set
    breath_splits = _page_ends(final_pages) - primary_set - conjunction_splits
    page_breaks = sorted(primary_set | conjunction_splits | breath_splits)

    sources = {
        BREAK_NUMBERED_ITEM: set(numbered.breaks),
        BREAK_PROTECTED_CONTENT: set(delimited.breaks),
        BREAK_SENTENCE_ENDING: set(sentence_breaks),
        BREAK_MIDDLE_PUNCTUATION: set(middle_breaks),
        BREAK_CONJUNCTION: conjunction_splits,
    }

    details = []
    for number, index in enumerate(page_breaks, 1):
        break_type = next(
            (name for name in BREAK_PRIORITY if index in sources.get(name, ())),
            BREAK_BREATHING_GAP,
        )
        details.append(BreakDetail(
            break_number=number,
            word_index=index,
            word_text=words[index],
            break_type=break_type,
            punctuation=trailing_punctuation(words[index]),
        ))

    summary = PaginationSummary(
        total_words=len(words),
        total_pages=len(final_pages),
        average_page_size=round(len(words) / len(final_pages)),
        total_breaks=len(page_breaks),
        numbered_item_breaks=len(numbered.breaks),
        numbered_item_ranges=len(numbered.protected_ranges),
        protected_content_breaks=len(delimited.breaks),
        protected_ranges=len(delimited.protected_ranges),
        sentence_breaks=len(sentence_breaks),
        middle_breaks=len(middle_breaks),
        conjunction_breaks=len(conjunction_breaks),
        conjunction_splits=len(conjunction_pages) - len(pages),
        breathing_gap_splits=len(final_pages) - len(conjunction_pages),
        max_page_chars=cfg.max_page_chars,
        breathing_gap_threshold_ms=gap_ms,
    )
    trace("Pagination complete: %d pages, %d breaks", summary.total_pages, summary.total_breaks)

    return PageBreaksResult(
        page_breaks=page_breaks,
        page_break_details=details,
        pages=final_pages,
        summary=summary,
        protected_ranges=sorted(all_ranges, key=lambda r: (r.start, r.end)),
    )


# Name used by the chunk-processing service
create_page_breaks = paginate
