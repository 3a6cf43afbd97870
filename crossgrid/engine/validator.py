"""Deterministic integrity checks for a composed puzzle."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Set

from ..core.exceptions import ValidationError
from ..core.models import PlacedWord
from ..data.normalization import normalize_word
from .grid import ComposedGrid, grid_bounds
from .reconcile import placement_counts
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class PuzzleValidator:
    """Runs deterministic validation over one composition pass."""

    def validate(
        self,
        grid: ComposedGrid,
        placed: Sequence[PlacedWord],
        candidates: Sequence[str],
        dropped: Sequence[str],
    ) -> ValidationResult:
        messages: List[str] = []
        try:
            self._check_bounds(grid, placed)
            self._check_spans_filled(grid, placed)
            self._check_clue_numbers(grid, placed)
            self._check_no_duplicate_placements(placed)
            self._check_coverage(placed, candidates, dropped)
        except ValidationError as exc:
            messages.append(str(exc))
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=messages)
        return ValidationResult(ok=True, messages=[])

    def _check_bounds(self, grid: ComposedGrid, placed: Sequence[PlacedWord]) -> None:
        expected = grid_bounds(placed)
        if expected != grid.bounds:
            raise ValidationError(
                f"Grid is {grid.max_x}x{grid.max_y} but words span "
                f"{expected.cols}x{expected.rows}"
            )

    def _check_spans_filled(self, grid: ComposedGrid, placed: Sequence[PlacedWord]) -> None:
        for word in placed:
            for x, y in word.cells:
                if grid.cell(x, y) is None:
                    raise ValidationError(f"Cell ({x},{y}) of word {word.id} is empty")

    def _check_clue_numbers(self, grid: ComposedGrid, placed: Sequence[PlacedWord]) -> None:
        origins: Set[tuple] = {(word.x, word.y) for word in placed}
        for word in placed:
            origin = grid.cell(word.x, word.y)
            owners = {str(other.id) for other in placed if (other.x, other.y) == (word.x, word.y)}
            if origin is None or origin.clue_id not in owners:
                raise ValidationError(
                    f"Origin ({word.x},{word.y}) of word {word.id} lacks its clue number"
                )
            for x, y in word.cells[1:]:
                cell = grid.cell(x, y)
                if cell is not None and cell.clue_id is not None and (x, y) not in origins:
                    raise ValidationError(
                        f"Cell ({x},{y}) inside word {word.id} carries clue {cell.clue_id}"
                    )

    def _check_no_duplicate_placements(self, placed: Sequence[PlacedWord]) -> None:
        for word, count in placement_counts(placed).items():
            if count > 1:
                raise ValidationError(f"Word '{word}' placed {count} times")

    def _check_coverage(
        self,
        placed: Sequence[PlacedWord],
        candidates: Sequence[str],
        dropped: Sequence[str],
    ) -> None:
        placed_words = {normalize_word(word.word) for word in placed}
        dropped_words = set(dropped)
        overlap = placed_words & dropped_words
        if overlap:
            raise ValidationError(f"Words both placed and dropped: {sorted(overlap)}")
        unknown = placed_words - set(candidates)
        if unknown:
            raise ValidationError(f"Placed words not requested: {sorted(unknown)}")
        if placed_words | dropped_words != set(candidates):
            raise ValidationError("Placed and dropped words do not cover the candidates")
