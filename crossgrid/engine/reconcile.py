"""Reconciliation of placed words against the requested candidates."""

from __future__ import annotations

from collections import Counter
from typing import Iterable, List, Sequence

from ..core.models import PlacedWord
from ..data.normalization import normalize_word


def placement_counts(placed: Iterable[PlacedWord]) -> Counter:
    return Counter(normalize_word(word.word) for word in placed)


def find_dropped_words(candidates: Sequence[str], placed: Iterable[PlacedWord]) -> List[str]:
    """Candidates with no placement, in their original order."""

    placed_words = set(placement_counts(placed))
    return [word for word in candidates if normalize_word(word) not in placed_words]


__all__ = ["find_dropped_words", "placement_counts"]
