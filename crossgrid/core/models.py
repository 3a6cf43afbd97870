"""Data models shared by the composer, the reconciler and the renderers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .constants import Orientation
from .exceptions import OrientationError


@dataclass(frozen=True)
class PlacedWord:
    """A word positioned by the placement collaborator."""

    id: int
    x: int
    y: int
    word: str
    orientation: Orientation

    def __post_init__(self) -> None:
        try:
            orientation = Orientation(self.orientation)
        except ValueError as exc:
            raise OrientationError(
                f"Word {self.id} ('{self.word}') has bad orientation {self.orientation!r}"
            ) from exc
        object.__setattr__(self, "orientation", orientation)

    @property
    def length(self) -> int:
        return len(self.word)

    @property
    def cells(self) -> List[Tuple[int, int]]:
        """``(x, y)`` coordinates covered by the word, in letter order."""
        if self.orientation == Orientation.HORIZONTAL:
            return [(self.x + i, self.y) for i in range(self.length)]
        return [(self.x, self.y + i) for i in range(self.length)]


@dataclass(frozen=True)
class GridCell:
    """A composed grid cell; ``clue_id`` is only set on word origins."""

    char: str
    clue_id: Optional[str] = None


@dataclass(frozen=True)
class ClueEntry:
    """A clue panel row keyed by the placed word id."""

    id: int
    word: str
    definition: Optional[str]
    orientation: Orientation
