"""Grid composition and clue reconciliation for user-defined crosswords.

This package exposes the public API surface via:

- ``crossgrid.engine.pipeline.run_pass``: one full text -> puzzle pass.
- ``crossgrid.engine.pipeline.CrosswordSession``: keeps the last good puzzle.
- ``crossgrid.io.placement``: placement collaborator protocol and adapters.

Word placement itself is delegated to an external collaborator.
"""

from .core.constants import Orientation, PlacementMode
from .engine.pipeline import CrosswordSession, PipelineConfig, PuzzleResult, run_pass
from .io.placement import JsonFilePlacement, PlacementCollaborator, StaticPlacement

__all__ = [
    "CrosswordSession",
    "JsonFilePlacement",
    "Orientation",
    "PipelineConfig",
    "PlacementCollaborator",
    "PlacementMode",
    "PuzzleResult",
    "StaticPlacement",
    "run_pass",
]

__version__ = "0.1.0"
