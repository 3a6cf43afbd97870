"""Placement collaborator interfaces.

The word-placement search runs outside this package. Implementations of
:class:`PlacementCollaborator` hand back the positioned words for a list of
candidates; everything downstream only consumes :class:`PlacedWord` records.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Protocol, Sequence

from ..core.constants import Orientation, PlacementMode
from ..core.exceptions import InvalidPlacementError, OrientationError, PlacementError
from ..core.models import PlacedWord
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

REQUIRED_FIELDS = ("id", "x", "y", "word", "orientation")


class PlacementCollaborator(Protocol):
    """Protocol implemented by all placement providers."""

    def place(self, words: Sequence[str], mode: PlacementMode) -> List[PlacedWord]:
        ...


def parse_mode(value: str | PlacementMode) -> PlacementMode:
    try:
        return PlacementMode(value)
    except ValueError as exc:
        raise ValueError(f"bad generator mode: {value!r}") from exc


def parse_orientation(value: Any) -> Orientation:
    try:
        return Orientation(value)
    except ValueError as exc:
        raise OrientationError(f"bad orientation: {value!r}") from exc


def _require_int(record: Mapping[str, Any], key: str) -> int:
    value = record[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidPlacementError(f"Field '{key}' must be an integer, got {value!r}")
    return value


def parse_placed_word(record: Mapping[str, Any]) -> PlacedWord:
    """Convert a wire record ``{id, x, y, word, orientation}`` into a model."""

    missing = [key for key in REQUIRED_FIELDS if key not in record]
    if missing:
        raise InvalidPlacementError(f"Placement record missing fields {missing}: {dict(record)}")

    word = record["word"]
    if not isinstance(word, str) or not word:
        raise InvalidPlacementError(f"Field 'word' must be a non-empty string, got {word!r}")

    x = _require_int(record, "x")
    y = _require_int(record, "y")
    if x < 0 or y < 0:
        raise InvalidPlacementError(f"Negative coordinates ({x},{y}) for '{word}'")

    return PlacedWord(
        id=_require_int(record, "id"),
        x=x,
        y=y,
        word=word,
        orientation=parse_orientation(record["orientation"]),
    )


def parse_placed_words(payload: Any) -> List[PlacedWord]:
    """Parse a list of records or an object holding them under ``"words"``."""

    if isinstance(payload, dict):
        payload = payload.get("words")
    if not isinstance(payload, list):
        raise InvalidPlacementError("Placement payload must be a list of word records")
    for record in payload:
        if not isinstance(record, dict):
            raise InvalidPlacementError(f"Placement record must be an object, got {record!r}")
    return [parse_placed_word(record) for record in payload]


class StaticPlacement:
    """Deterministic collaborator replaying a fixed layout.

    Only records whose word was requested are returned, so a candidate that
    is absent from the layout shows up as dropped.
    """

    def __init__(self, words: Iterable[PlacedWord]) -> None:
        self.words = list(words)

    @classmethod
    def from_records(cls, records: Any) -> "StaticPlacement":
        return cls(parse_placed_words(records))

    def place(self, words: Sequence[str], mode: PlacementMode) -> List[PlacedWord]:
        if not words:
            return []
        requested = set(words)
        placed = [word for word in self.words if word.word in requested]
        LOGGER.debug(
            "Static placement (%s) returned %s/%s words", mode.value, len(placed), len(words)
        )
        return placed


class JsonFilePlacement:
    """Collaborator backed by a JSON document written by an external generator.

    The document is read on every call, so regenerating it between passes is
    picked up without restarting.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def place(self, words: Sequence[str], mode: PlacementMode) -> List[PlacedWord]:
        if not words:
            return []
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise PlacementError(f"Cannot read placement document {self.path}: {exc}") from exc
        if isinstance(payload, dict) and mode.value in payload:
            payload = payload[mode.value]
        placed = parse_placed_words(payload)
        LOGGER.info("Loaded %s placed words from %s", len(placed), self.path)
        return placed


__all__ = [
    "JsonFilePlacement",
    "PlacementCollaborator",
    "StaticPlacement",
    "parse_mode",
    "parse_orientation",
    "parse_placed_word",
    "parse_placed_words",
]
