"""One-pass puzzle pipeline and the session holding the last good result.

A pass runs normalize -> place -> compose/reconcile -> validate and yields
an immutable :class:`PuzzleResult`. :class:`CrosswordSession` replays passes
on every submission or mode toggle and only swaps in results that compose
cleanly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..core.constants import Orientation, PlacementMode
from ..core.exceptions import CrosswordError, PlacementError
from ..core.models import ClueEntry, PlacedWord
from ..data.normalization import normalize_text
from ..io.placement import PlacementCollaborator
from .grid import ComposedGrid, ComposerConfig, build_clues, compose_grid
from .reconcile import find_dropped_words
from .validator import PuzzleValidator
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class PipelineConfig:
    strict_crossings: bool = False
    comment_prefix: Optional[str] = None
    validate: bool = True

    def to_composer_config(self) -> ComposerConfig:
        return ComposerConfig(strict_crossings=self.strict_crossings)


@dataclass(frozen=True)
class PuzzleResult:
    mode: PlacementMode
    candidates: Tuple[str, ...]
    definitions: Tuple[Tuple[str, str], ...]
    grid: ComposedGrid
    clues: Tuple[ClueEntry, ...]
    dropped: Tuple[str, ...]
    validation_messages: Tuple[str, ...] = field(default_factory=tuple)

    def definition_map(self) -> Dict[str, str]:
        return dict(self.definitions)

    def horizontal_clues(self) -> List[ClueEntry]:
        return [clue for clue in self.clues if clue.orientation == Orientation.HORIZONTAL]

    def vertical_clues(self) -> List[ClueEntry]:
        return [clue for clue in self.clues if clue.orientation == Orientation.VERTICAL]

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "mode": self.mode.value,
            "grid": self.grid.to_jsonable(),
            "clues": [
                {
                    "id": clue.id,
                    "word": clue.word,
                    "definition": clue.definition,
                    "orientation": clue.orientation.value,
                }
                for clue in self.clues
            ],
            "dropped": list(self.dropped),
            "validation": list(self.validation_messages),
        }


def place_words(
    collaborator: PlacementCollaborator,
    words: List[str],
    mode: PlacementMode,
) -> List[PlacedWord]:
    """Call the collaborator, treating its failures as an empty layout."""

    if not words:
        return []
    try:
        return list(collaborator.place(words, mode))
    except PlacementError as exc:
        LOGGER.warning("Placement collaborator failed, nothing placed: %s", exc)
        return []


def run_pass(
    text: str,
    mode: PlacementMode,
    collaborator: PlacementCollaborator,
    config: Optional[PipelineConfig] = None,
) -> PuzzleResult:
    """Compute the full puzzle for ``text`` from scratch."""

    config = config or PipelineConfig()
    normalized = normalize_text(text, comment_prefix=config.comment_prefix)
    placed = place_words(collaborator, normalized.words, mode)

    grid = compose_grid(placed, config.to_composer_config())
    clues = build_clues(placed, normalized.definitions)
    dropped = find_dropped_words(normalized.words, placed)

    messages: List[str] = []
    if config.validate:
        validation = PuzzleValidator().validate(grid, placed, normalized.words, dropped)
        messages = validation.messages

    LOGGER.info(
        "Composed %sx%s grid (%s mode): %s placed, %s dropped",
        grid.max_x,
        grid.max_y,
        mode.value,
        len(clues),
        len(dropped),
    )
    return PuzzleResult(
        mode=mode,
        candidates=tuple(normalized.words),
        definitions=tuple(normalized.definitions.items()),
        grid=grid,
        clues=clues,
        dropped=tuple(dropped),
        validation_messages=tuple(messages),
    )


class CrosswordSession:
    """Holds the latest successfully composed puzzle for one user session."""

    def __init__(
        self,
        collaborator: PlacementCollaborator,
        config: Optional[PipelineConfig] = None,
        mode: PlacementMode = PlacementMode.INPUT_ORDER,
    ) -> None:
        self.collaborator = collaborator
        self.config = config or PipelineConfig()
        self.mode = mode
        self.text = ""
        self.current: Optional[PuzzleResult] = None
        self._generation = 0

    def begin(self) -> int:
        """Start a pass and return its token; older tokens become stale."""
        self._generation += 1
        return self._generation

    def commit(self, token: int, result: PuzzleResult) -> bool:
        if token != self._generation:
            LOGGER.debug("Discarding stale pass %s (latest is %s)", token, self._generation)
            return False
        self.current = result
        return True

    def submit(self, text: str) -> PuzzleResult:
        self.text = text
        return self._recompute()

    def set_mode(self, mode: PlacementMode) -> PuzzleResult:
        self.mode = mode
        return self._recompute()

    def toggle_mode(self) -> PuzzleResult:
        return self.set_mode(self.mode.toggled())

    def _recompute(self) -> PuzzleResult:
        token = self.begin()
        try:
            result = run_pass(self.text, self.mode, self.collaborator, self.config)
        except CrosswordError as exc:
            LOGGER.error("Pass aborted, keeping previous puzzle: %s", exc)
            raise
        self.commit(token, result)
        return result
