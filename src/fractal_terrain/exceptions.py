"""Custom exceptions for terrain generation and export."""


class TerrainError(Exception):
    """Base exception for terrain errors."""

    pass


class InvalidSizeError(TerrainError, ValueError):
    """Raised when a grid size is not of the form 2^n + 1."""

    pass


class IndexOutOfBoundsError(TerrainError, IndexError):
    """Raised when a grid cell outside [0, size) is accessed."""

    pass


class FrozenGridError(TerrainError):
    """Raised when writing to a grid after generation finished."""

    pass


class ExportError(TerrainError):
    """Raised when writing mesh records fails."""

    pass


class HeightmapLoadError(TerrainError):
    """Raised when a saved heightmap cannot be read."""

    pass
