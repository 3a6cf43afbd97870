"""Logging setup shared by the pipeline, the collaborators and the CLI."""

from __future__ import annotations

import logging
from typing import Optional, TextIO, Union

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
ROOT_LOGGER_NAME = "crossgrid"

# Third-party loggers that flood DEBUG output during placement-service calls.
NOISY_LOGGERS = ("urllib3",)


def resolve_level(level: Union[int, str]) -> int:
    """Accept ``logging.INFO`` or a name such as ``"debug"``; unknown names fall back to INFO."""

    if isinstance(level, int):
        return level
    return getattr(logging, level.upper(), logging.INFO)


def configure_logging(level: Union[int, str] = logging.INFO, stream: Optional[TextIO] = None) -> None:
    """Install a single stream handler on the root logger.

    Passes log a one-line summary at INFO and per-word writes at DEBUG.
    HTTP transport chatter stays at WARNING even when DEBUG is requested.
    """

    resolved = resolve_level(level)
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(resolved)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(resolved, logging.WARNING))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a namespaced logger, configuring defaults if needed."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or ROOT_LOGGER_NAME)
