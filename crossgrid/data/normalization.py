"""Parsing of free-form ``word definition`` text into clue candidates."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class NormalizedInput:
    """Word -> definition mapping plus the distinct words in first-seen order."""

    definitions: Dict[str, str] = field(default_factory=dict)
    words: List[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.words)


def normalize_word(word: str) -> str:
    return word.lower()


def parse_line(line: str) -> tuple[str, str]:
    """Split a trimmed, non-empty line into ``(word, definition)``."""

    first, *rest = line.split()
    return normalize_word(first), " ".join(rest)


def normalize_text(text: str, comment_prefix: Optional[str] = None) -> NormalizedInput:
    """Parse ``text`` into lowercase words and their definitions.

    Lines are trimmed and blank ones discarded. The first whitespace-separated
    token is the word; the remaining tokens, joined by single spaces, are its
    definition. A word repeated on a later line (in any letter case) keeps its
    first position in :attr:`NormalizedInput.words` but takes the later
    definition.
    """

    result = NormalizedInput()
    for raw_line in text.split("\n"):
        line = raw_line.strip()
        if not line:
            continue
        if comment_prefix and line.startswith(comment_prefix):
            continue
        word, definition = parse_line(line)
        if word in result.definitions:
            LOGGER.debug("Duplicate word '%s'; keeping the later definition", word)
        else:
            result.words.append(word)
        result.definitions[word] = definition
    LOGGER.debug("Normalized %s distinct words", len(result.words))
    return result


def definition_for(definitions: Mapping[str, str], word: str) -> Optional[str]:
    """Look up ``word`` with the same normalization used by the parser."""

    return definitions.get(normalize_word(word))


__all__ = [
    "NormalizedInput",
    "definition_for",
    "normalize_text",
    "normalize_word",
    "parse_line",
]
