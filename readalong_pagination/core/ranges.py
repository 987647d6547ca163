"""Protected-range membership helpers shared by the detectors and splitter."""

from __future__ import annotations

from typing import Iterable

from readalong_pagination.core.ir import ProtectedRange


def is_in_protected_range(word_index: int, protected_ranges: Iterable[ProtectedRange]) -> bool:
    """True if word_index lies inside any range (bounds inclusive)."""
    return any(r.contains(word_index) for r in protected_ranges)


def splits_protected_range(break_index: int, protected_ranges: Iterable[ProtectedRange]) -> bool:
    """True if a page boundary after break_index would cut a range in two.

    A boundary after the range's last word is allowed; one after any
    earlier word of the range is not.
    """
    return any(r.start <= break_index < r.end for r in protected_ranges)
