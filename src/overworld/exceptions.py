"""Custom exceptions for overworld generation and navigation."""


class OverworldError(Exception):
    """Base exception for overworld errors."""

    pass


class TileOutOfBoundsError(OverworldError, IndexError):
    """Raised when a grid lookup falls outside the map."""

    pass


class MissingAtlasVariantError(OverworldError):
    """Raised when a terrain kind has no registered texture variants."""

    pass


class UnknownAtlasHandleError(OverworldError, KeyError):
    """Raised when looking up a texture for an unregistered handle."""

    pass


class InvalidVariantError(OverworldError, ValueError):
    """Raised when registering a negative or duplicate variant index."""

    pass


class SessionNotInitializedError(OverworldError):
    """Raised when using a session before initialize()."""

    pass
