"""Custom exception hierarchy for grid composition."""


class CrosswordError(Exception):
    """Base exception for composition failures."""


class OrientationError(CrosswordError):
    """Raised when a placed word carries an orientation outside hor/ver."""


class InvalidPlacementError(CrosswordError):
    """Raised when a placement record is malformed."""


class OverlapConflictError(CrosswordError):
    """Raised when crossing words disagree on a shared letter in strict mode."""


class PlacementError(CrosswordError):
    """Raised when the placement collaborator cannot produce a layout."""


class ValidationError(CrosswordError):
    """Raised when the composed puzzle integrity checks fail."""
