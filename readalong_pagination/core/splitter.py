"""Second-pass splitting of pages that are still too long.

WHY: Punctuation alone leaves run-on sentences as single pages far too
long for a phone screen. Such pages get a second chance: first split
where a conjunction starts a new clause, then where the narrator pauses
for breath.

HOW: Two passes, each over the full page list, each touching only
pages whose character_count exceeds max_page_chars:
  1. Conjunctions: find_conjunction_breaks() discovers candidate
     breaks over the whole text; apply_conjunction_breaks_to_long_pages()
     splits each long page at the candidates inside its span.
  2. Breathing gaps: apply_breathing_gaps_to_long_pages() splits each
     still-long page wherever the silence between two words reaches the
     threshold.
Both passes renumber pages 0..N-1.

RULES:
- Conjunctions: and, or, but, nor, yet, so, however (case-insensitive,
  trailing punctuation stripped)
- A conjunction at i breaks at i-1 so it opens the next page
- Words that are already breaks or are protected are not candidates
- Breathing gap: (next.start - cur.end) * 1000 >= threshold_ms
- Neither pass splits inside a protected range
- A long page with no candidate is returned oversized, not forced
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Sequence

from readalong_pagination.config import CONJUNCTIONS, DEFAULT_BREATHING_GAP_MS, DEFAULT_MAX_PAGE_CHARS
from readalong_pagination.core.ir import Page, ProtectedRange
from readalong_pagination.core.pages import renumber_pages, split_page
from readalong_pagination.core.ranges import is_in_protected_range, splits_protected_range

logger = logging.getLogger(__name__)

_TRAILING_PUNCT_RE = re.compile(r"[.,;:!?—–…-]+$")


def clean_conjunction(word: str) -> str:
    """Lowercase a word and strip trailing punctuation for conjunction lookup."""
    return _TRAILING_PUNCT_RE.sub("", word.lower())


# =============================================================================
# Conjunctions
# =============================================================================

def find_conjunction_breaks(
    words: Sequence[str],
    existing_breaks: Iterable[int],
    protected_ranges: Sequence[ProtectedRange] = (),
) -> List[int]:
    """Find break points just before each eligible conjunction.

    Args:
        words: Word strings in input order.
        existing_breaks: Punctuation breaks; a conjunction that already
            ends with punctuation ("so,") is not a candidate.
        protected_ranges: Ranges whose words are never candidates.

    Returns:
        Sorted input positions i-1 for each conjunction at position i.
    """
    skip = set(existing_breaks)
    breaks = []
    for i, word in enumerate(words):
        if i in skip or is_in_protected_range(i, protected_ranges):
            continue
        if clean_conjunction(word) not in CONJUNCTIONS:
            continue
        if i > 0 and not is_in_protected_range(i - 1, protected_ranges):
            breaks.append(i - 1)
            logger.debug("Conjunction break before %r at %d", word, i)

    return breaks


def apply_conjunction_breaks_to_long_pages(
    pages: Sequence[Page],
    conjunction_breaks: Iterable[int],
    max_page_chars: int = DEFAULT_MAX_PAGE_CHARS,
) -> List[Page]:
    """Split every page over max_page_chars at the conjunctions it contains.

    HOW: A break b belongs to a page when start_index <= b < end_index,
    so a split never produces an empty page. Breaks are converted to
    page-local indices and handed to split_page().

    Returns:
        New page list, renumbered 0..N-1.
    """
    candidates = sorted(set(conjunction_breaks))
    result: List[Page] = []

    for page in pages:
        if page.character_count <= max_page_chars:
            result.append(page)
            continue

        inside = [b for b in candidates if page.start_index <= b < page.end_index]
        if not inside:
            logger.debug(
                "Page %d has %d chars but no conjunctions",
                page.page_index, page.character_count,
            )
            result.append(page)
            continue

        split = split_page(page, [b - page.start_index for b in inside])
        logger.debug(
            "Page %d (%d chars) split at %d conjunction(s) into %d pages",
            page.page_index, page.character_count, len(inside), len(split),
        )
        result.extend(split)

    return renumber_pages(result)


# =============================================================================
# Breathing gaps
# =============================================================================

def find_breathing_gaps_in_page(
    page: Page,
    threshold_ms: float = DEFAULT_BREATHING_GAP_MS,
    protected_ranges: Sequence[ProtectedRange] = (),
) -> List[int]:
    """Return page-local indices of words followed by a breathing gap.

    A gap whose split would land strictly inside a protected range is
    not reported.
    """
    gaps = []
    for i in range(len(page.words) - 1):
        pause_ms = (page.words[i + 1].start - page.words[i].end) * 1000
        if pause_ms < threshold_ms:
            continue
        if splits_protected_range(page.start_index + i, protected_ranges):
            continue
        gaps.append(i)
    return gaps


def apply_breathing_gaps_to_long_pages(
    pages: Sequence[Page],
    max_page_chars: int = DEFAULT_MAX_PAGE_CHARS,
    threshold_ms: float = DEFAULT_BREATHING_GAP_MS,
    protected_ranges: Sequence[ProtectedRange] = (),
) -> List[Page]:
    """Split every page over max_page_chars at all of its breathing gaps.

    Returns:
        New page list, renumbered 0..N-1.
    """
    result: List[Page] = []

    for page in pages:
        if page.character_count <= max_page_chars:
            result.append(page)
            continue

        gaps = find_breathing_gaps_in_page(page, threshold_ms, protected_ranges)
        if not gaps:
            logger.debug(
                "Page %d has %d chars but no breathing gaps >= %sms; keeping it whole",
                page.page_index, page.character_count, threshold_ms,
            )
            result.append(page)
            continue

        split = split_page(page, gaps)
        logger.debug(
            "Page %d (%d chars) split at %d breathing gap(s) into %d pages",
            page.page_index, page.character_count, len(gaps), len(split),
        )
        result.extend(split)

    return renumber_pages(result)
