"""Square heightmap grid storage."""

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .exceptions import FrozenGridError, IndexOutOfBoundsError, InvalidSizeError


def is_valid_size(size: int) -> bool:
    """Check that size has the form 2^n + 1 with n >= 1."""
    if size < 3:
        return False
    n = size - 1
    return (n & (n - 1)) == 0


class Grid:
    """Square buffer of float32 heights with bounds-checked access.

    Rows index the y axis and columns the x axis, matching the row-major
    order vertices are exported in.
    """

    def __init__(self, size: int):
        """Initialize a zero-filled grid.

        Args:
            size: Cells per side, must be 2^n + 1.

        Raises:
            InvalidSizeError: If size is not 2^n + 1.
        """
        if not is_valid_size(size):
            raise InvalidSizeError(
                f"Grid size must be 2^n + 1 (3, 5, 9, 17, ...), got {size}"
            )
        self._size = size
        self._heights = np.zeros((size, size), dtype=np.float32)
        self._frozen = False

    @classmethod
    def from_array(cls, heights: ArrayLike) -> "Grid":
        """Create a grid holding a copy of a square 2D array.

        Raises:
            InvalidSizeError: If the array is not square or its side
                is not 2^n + 1.
        """
        array = np.asarray(heights, dtype=np.float32)
        if array.ndim != 2 or array.shape[0] != array.shape[1]:
            raise InvalidSizeError(
                f"Heightmap must be a square 2D array, got shape {array.shape}"
            )
        grid = cls(array.shape[0])
        grid._heights[:] = array
        return grid

    @property
    def size(self) -> int:
        return self._size

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def heights(self) -> NDArray[np.float32]:
        """Read-only view of the height buffer, shape (size, size)."""
        view = self._heights.view()
        view.flags.writeable = False
        return view

    def in_bounds(self, row: int, col: int) -> bool:
        """Check whether (row, col) lies inside the grid."""
        return 0 <= row < self._size and 0 <= col < self._size

    def get(self, row: int, col: int) -> float:
        """Get the height at (row, col).

        Raises:
            IndexOutOfBoundsError: If the cell is outside the grid.
        """
        self._check_bounds(row, col)
        return float(self._heights[row, col])

    def set(self, row: int, col: int, value: float) -> None:
        """Set the height at (row, col).

        Raises:
            IndexOutOfBoundsError: If the cell is outside the grid.
            FrozenGridError: If the grid has been frozen.
        """
        if self._frozen:
            raise FrozenGridError("Grid is frozen and can no longer be modified")
        self._check_bounds(row, col)
        self._heights[row, col] = value

    def freeze(self) -> None:
        """Make the grid immutable."""
        self._frozen = True
        self._heights.flags.writeable = False

    def _check_bounds(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise IndexOutOfBoundsError(
                f"Cell ({row}, {col}) outside grid of size {self._size}"
            )

    def __repr__(self) -> str:
        return f"Grid(size={self._size}, frozen={self._frozen})"
