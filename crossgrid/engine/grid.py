"""Grid composition: lays placed words onto an addressable cell arena."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from ..core.constants import Bounds, Orientation
from ..core.exceptions import InvalidPlacementError, OverlapConflictError
from ..core.models import ClueEntry, GridCell, PlacedWord
from ..data.normalization import definition_for
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class ComposerConfig:
    """Configuration values driving grid composition."""

    strict_crossings: bool = False


@dataclass(frozen=True)
class ComposedGrid:
    """Immutable grid produced by one composition pass.

    Cells live in a flat arena indexed by ``y * cols + x``; ``None`` marks a
    cell no word passes through.
    """

    bounds: Bounds
    cells: Tuple[Optional[GridCell], ...]

    @property
    def max_x(self) -> int:
        return self.bounds.cols

    @property
    def max_y(self) -> int:
        return self.bounds.rows

    def index(self, x: int, y: int) -> int:
        if not self.bounds.contains(y, x):
            raise IndexError(f"Cell ({x},{y}) outside {self.bounds.cols}x{self.bounds.rows} grid")
        return y * self.bounds.cols + x

    def cell(self, x: int, y: int) -> Optional[GridCell]:
        return self.cells[self.index(x, y)]

    def rows(self) -> Iterator[Tuple[Optional[GridCell], ...]]:
        width = self.bounds.cols
        for y in range(self.bounds.rows):
            yield self.cells[y * width:(y + 1) * width]

    def clue_cells(self) -> Dict[str, Tuple[int, int]]:
        """Map each clue id to the ``(x, y)`` cell displaying it."""
        located: Dict[str, Tuple[int, int]] = {}
        for y, row in enumerate(self.rows()):
            for x, cell in enumerate(row):
                if cell is not None and cell.clue_id is not None:
                    located[cell.clue_id] = (x, y)
        return located

    def to_jsonable(self) -> dict:
        return {
            "max_x": self.max_x,
            "max_y": self.max_y,
            "cells": [
                [
                    None if cell is None else {"char": cell.char, "clueId": cell.clue_id}
                    for cell in row
                ]
                for row in self.rows()
            ],
        }


EMPTY_GRID = ComposedGrid(bounds=Bounds(rows=0, cols=0), cells=())


def check_placed_word(word: PlacedWord) -> None:
    if word.x < 0 or word.y < 0:
        raise InvalidPlacementError(
            f"Word {word.id} ('{word.word}') starts at negative position ({word.x},{word.y})"
        )
    if not word.word:
        raise InvalidPlacementError(f"Word {word.id} is empty")


def grid_bounds(words: Iterable[PlacedWord]) -> Bounds:
    """Bounding box of ``words`` anchored at the origin."""

    max_x = max_y = 0
    for word in words:
        check_placed_word(word)
        if word.orientation == Orientation.HORIZONTAL:
            max_x = max(max_x, word.x + word.length)
            max_y = max(max_y, word.y + 1)
        else:
            max_x = max(max_x, word.x + 1)
            max_y = max(max_y, word.y + word.length)
    return Bounds(rows=max_y, cols=max_x)


def merge_cell(existing: Optional[GridCell], incoming: GridCell) -> GridCell:
    """Combine a write with the cell's current value.

    The first non-null clue id sticks; the letter always comes from the
    latest write.
    """

    if existing is None:
        return incoming
    clue_id = existing.clue_id if existing.clue_id is not None else incoming.clue_id
    return GridCell(char=incoming.char, clue_id=clue_id)


def compose_grid(
    words: Sequence[PlacedWord],
    config: Optional[ComposerConfig] = None,
) -> ComposedGrid:
    """Merge ``words`` into a fresh :class:`ComposedGrid`.

    Words are visited in ascending id order, so when two words start on the
    same cell the lower id keeps the clue number. Raises
    :class:`InvalidPlacementError` before any cell is written if a word is
    empty or starts at a negative position.
    """

    config = config or ComposerConfig()
    bounds = grid_bounds(words)
    if bounds.area == 0:
        return EMPTY_GRID

    arena: List[Optional[GridCell]] = [None] * bounds.area
    for word in sorted(words, key=lambda w: w.id):
        LOGGER.debug(
            "Writing word %s '%s' at (%s,%s) %s",
            word.id,
            word.word,
            word.x,
            word.y,
            word.orientation.value,
        )
        for offset, (x, y) in enumerate(word.cells):
            index = y * bounds.cols + x
            incoming = GridCell(
                char=word.word[offset],
                clue_id=str(word.id) if offset == 0 else None,
            )
            existing = arena[index]
            if existing is not None and existing.char != incoming.char:
                message = (
                    f"Crossing at ({x},{y}) holds '{existing.char}' but word {word.id} "
                    f"('{word.word}') writes '{incoming.char}'"
                )
                if config.strict_crossings:
                    raise OverlapConflictError(message)
                LOGGER.warning("%s; keeping the later letter", message)
            arena[index] = merge_cell(existing, incoming)

    return ComposedGrid(bounds=bounds, cells=tuple(arena))


def build_clues(
    words: Iterable[PlacedWord],
    definitions: Mapping[str, str],
) -> Tuple[ClueEntry, ...]:
    """Attach definitions to placed words, sorted by id ascending."""

    clues: List[ClueEntry] = []
    for word in sorted(words, key=lambda w: w.id):
        definition = definition_for(definitions, word.word)
        if definition is None:
            LOGGER.warning(
                "Placed word %s ('%s') has no definition in the input", word.id, word.word
            )
        clues.append(
            ClueEntry(
                id=word.id,
                word=word.word,
                definition=definition,
                orientation=word.orientation,
            )
        )
    return tuple(clues)
