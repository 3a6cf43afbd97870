"""Pretty-print helpers for composed puzzles."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Iterable, List, Optional

if TYPE_CHECKING:
    from ..core.models import ClueEntry, GridCell
    from ..engine.grid import ComposedGrid
    from ..engine.pipeline import PuzzleResult


EMPTY_SYMBOL = "."
HIDDEN_SYMBOL = "_"


def cell_symbol(cell: Optional[GridCell], hide_letters: bool = False) -> str:
    if cell is None:
        return EMPTY_SYMBOL
    letter = HIDDEN_SYMBOL if hide_letters else cell.char
    return f"{cell.clue_id or ''}{letter}"


def format_grid(grid: ComposedGrid, hide_letters: bool = False) -> str:
    """Render the grid one row per line; clue numbers prefix their letter.

    With ``hide_letters`` the letters are masked but clue numbers stay, which
    is what a printed puzzle needs.
    """

    width = max(
        (len(cell_symbol(cell, hide_letters)) for cell in grid.cells),
        default=1,
    )
    lines = []
    for row in grid.rows():
        lines.append(" ".join(f"{cell_symbol(cell, hide_letters):>{width}}" for cell in row))
    return "\n".join(lines)


def format_clue(clue: ClueEntry) -> str:
    return f"{clue.id}: {clue.definition or ''}".rstrip()


def _section(title: str, rows: Iterable[str]) -> List[str]:
    return [title, *(f"  {row}" for row in rows)]


def format_clues(result: PuzzleResult) -> str:
    lines: List[str] = []
    lines += _section("Horizontal", (format_clue(c) for c in result.horizontal_clues()))
    lines += _section("Vertical", (format_clue(c) for c in result.vertical_clues()))
    if result.dropped:
        lines += _section("Dropped words", result.dropped)
    return "\n".join(lines)


def pretty_print_puzzle(
    result: PuzzleResult,
    *,
    hide_letters: bool = False,
    stream=None,
) -> None:
    """Print the grid followed by the clue panels."""

    stream = stream or sys.stdout
    if result.grid.bounds.area:
        print(format_grid(result.grid, hide_letters=hide_letters), file=stream)
        print(file=stream)
    print(format_clues(result), file=stream)
    if result.validation_messages:
        print(file=stream)
        print("--- Validation ---", file=stream)
        for msg in result.validation_messages:
            print(f"  {msg}", file=stream)
