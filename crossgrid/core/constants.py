"""Shared constants and enumerations for grid composition."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Orientation(str, Enum):
    """Word orientations reported by the placement collaborator."""

    HORIZONTAL = "hor"
    VERTICAL = "ver"


class PlacementMode(str, Enum):
    """Strategy hint forwarded to the placement collaborator."""

    INPUT_ORDER = "InputOrder"
    AUTOMATIC = "Automatic"

    def toggled(self) -> "PlacementMode":
        if self is PlacementMode.AUTOMATIC:
            return PlacementMode.INPUT_ORDER
        return PlacementMode.AUTOMATIC


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    @property
    def area(self) -> int:
        return self.rows * self.cols
