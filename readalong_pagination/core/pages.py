"""Page assembly and page-transition calculation.

WHY: Break points are just word positions. The reading UI needs page
objects: the words to show, when the page's audio starts and ends, how
long its text is, and when to flip to the next page if silence follows.

HOW: Pure functions over lists of Page objects:
  build_page                  one Page from a contiguous word slice
  split_words_at              the shared "cut after these indices" loop
  generate_pages_from_breaks  first assembly from global break points
  split_page                  re-split one page at page-local indices
  renumber_pages              reassign page_index 0..N-1
  calculate_page_transitions  annotate silent gaps between pages

RULES:
- A break at position b means the page ends after word b
- Empty spans are dropped; page_index counts non-empty pages only
- character_count is the length of the words joined by single spaces
- Transitions only annotate: start_time/end_time are never changed
- Input lists and pages are never mutated; new objects are returned
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Iterable, List, Optional, Sequence

from readalong_pagination.config import TRANSITION_GAP_THRESHOLD_S
from readalong_pagination.core.ir import Page, TransitionInfo, WordTimestamp
from readalong_pagination.errors import EmptyInputError

logger = logging.getLogger(__name__)


def build_page(words: Sequence[WordTimestamp], page_index: int, start_index: int) -> Page:
    """Build a Page from a non-empty, contiguous slice of words."""
    words = list(words)
    return Page(
        page_index=page_index,
        words=words,
        start_time=words[0].start,
        end_time=words[-1].end,
        word_count=len(words),
        character_count=len(" ".join(w.word for w in words)),
        start_index=start_index,
    )


def split_words_at(
    words: Sequence[WordTimestamp],
    breaks: Iterable[int],
) -> List[tuple]:
    """Cut words after each break index; return (offset, slice) pairs.

    Breaks outside 0..len(words)-1 are ignored; duplicates collapse.
    Empty slices never appear in the output.
    """
    cut_points = sorted({b for b in breaks if 0 <= b < len(words)})
    slices = []
    current = 0
    for b in cut_points + [len(words) - 1]:
        end = b + 1
        if end > current:
            slices.append((current, words[current:end]))
        current = max(current, end)
    return slices


def generate_pages_from_breaks(
    word_timestamps: Sequence[WordTimestamp],
    page_breaks: Iterable[int],
) -> List[Page]:
    """Assemble pages from global break points.

    WHY: The detectors agree only on where a page MAY end. This turns
    the combined break list into the page list every later pass works on.

    HOW: Sort and deduplicate breaks, cut the word list after each one,
    and the final page runs to the end of the text.

    Raises:
        EmptyInputError: If word_timestamps is empty.
    """
    if not word_timestamps:
        raise EmptyInputError("Cannot generate pages: word timestamps are empty")

    pages = [
        build_page(chunk, page_index=i, start_index=offset)
        for i, (offset, chunk) in enumerate(split_words_at(word_timestamps, page_breaks))
    ]
    for page in pages:
        logger.debug(
            "Page %d: words %d-%d, %d chars, %.3fs-%.3fs",
            page.page_index, page.start_index, page.end_index,
            page.character_count, page.start_time, page.end_time,
        )
    return pages


def split_page(page: Page, local_breaks: Iterable[int]) -> List[Page]:
    """Split one page after each page-local word index.

    New pages keep the parent's page_index; callers renumber afterwards.
    A page with no usable breaks comes back as a single-element list.
    """
    return [
        build_page(chunk, page_index=page.page_index, start_index=page.start_index + offset)
        for offset, chunk in split_words_at(page.words, local_breaks)
    ]


def renumber_pages(pages: Sequence[Page]) -> List[Page]:
    """Return copies of pages with page_index reassigned to 0..N-1."""
    return [dataclasses.replace(page, page_index=i) for i, page in enumerate(pages)]


def calculate_page_transitions(
    pages: Sequence[Page],
    gap_threshold_s: float = TRANSITION_GAP_THRESHOLD_S,
) -> List[Page]:
    """Annotate each page followed by a silent gap with TransitionInfo.

    WHY: When the next page's audio starts after a pause, the UI should
    flip pages in the middle of the silence rather than at the instant
    the next word sounds, so the reader's eyes are already there.

    HOW: For each adjacent pair, gap = next.start_time - cur.end_time.
    If gap > gap_threshold_s the current page gets gap start/end and the
    midpoint rounded to milliseconds. Otherwise its transition_info is
    cleared, so stale info from before a split never survives.

    RULES:
    - The last page never has transition_info
    - Page timing fields are untouched
    """
    result: List[Page] = []
    for i, page in enumerate(pages):
        info: Optional[TransitionInfo] = None
        if i + 1 < len(pages):
            next_start = pages[i + 1].start_time
            gap = next_start - page.end_time
            if gap > gap_threshold_s:
                info = TransitionInfo(
                    gap_start_time=page.end_time,
                    gap_end_time=next_start,
                    gap_midpoint_time=round(page.end_time + gap / 2, 3),
                )
                logger.debug(
                    "Transition after page %d: gap %.3fs, midpoint %.3fs",
                    page.page_index, gap, info.gap_midpoint_time,
                )
        result.append(dataclasses.replace(page, transition_info=info))
    return result
