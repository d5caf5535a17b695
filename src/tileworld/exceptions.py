"""Custom exceptions for tile world generation."""


class TileWorldError(Exception):
    """Base exception for generation errors."""

    pass


class PlacementError(TileWorldError):
    """Raised when placement constraints cannot be satisfied."""

    def __init__(
        self,
        message: str,
        requested: int = 0,
        accepted: int = 0,
        attempts: int = 0,
    ) -> None:
        super().__init__(message)
        self.requested = requested
        self.accepted = accepted
        self.attempts = attempts


class MapFormatError(TileWorldError, ValueError):
    """Raised when a saved map file is malformed."""

    pass
