"""Per-vertex surface normals from central differences."""

import numpy as np
from numpy.typing import NDArray

from .grid import Grid

UP = (0.0, 0.0, 1.0)


class NormalEstimator:
    """Estimates unit vertex normals of a heightmap.

    Slopes use central differences inside the grid and one-sided
    differences on the boundary. They are stretched by the ratio of
    height scale to vertex spacing so the normals stay correct after the
    mesh is scaled on export.
    """

    def __init__(
        self,
        grid: Grid,
        x_scale: float = 1.0,
        y_scale: float = 1.0,
        height_scale: float = 1.0,
    ):
        """Initialize estimator.

        Args:
            grid: Finished heightmap.
            x_scale: Export stretch along x (columns). Must be non-zero.
            y_scale: Export stretch along y (rows). Must be non-zero.
            height_scale: Export stretch of heights.
        """
        self.grid = grid
        half_span = (grid.size - 1) / 2.0
        # Vertex spacing after export is 2 * scale / (size - 1)
        self.slope_scale_x = height_scale / x_scale * half_span
        self.slope_scale_y = height_scale / y_scale * half_span

    def normal_at(self, row: int, col: int) -> tuple[float, float, float]:
        """Compute the unit normal of one vertex.

        Raises:
            IndexOutOfBoundsError: If the vertex is outside the grid.
        """
        grid = self.grid
        dx = _difference(grid, row, col, 0, 1)
        dy = _difference(grid, row, col, 1, 0)
        return _normalize(-dx * self.slope_scale_x, -dy * self.slope_scale_y, 1.0)

    def normals(self) -> NDArray[np.float64]:
        """Compute unit normals of every vertex.

        Returns:
            Array of shape (size, size, 3), indexed [row, col].
        """
        heights = self.grid.heights.astype(np.float64)
        dy, dx = np.gradient(heights)

        normals = np.empty(heights.shape + (3,), dtype=np.float64)
        normals[..., 0] = -dx * self.slope_scale_x
        normals[..., 1] = -dy * self.slope_scale_y
        normals[..., 2] = 1.0

        length = np.linalg.norm(normals, axis=-1, keepdims=True)
        degenerate = length[..., 0] == 0.0
        normals /= np.where(length == 0.0, 1.0, length)
        normals[degenerate] = UP
        return normals


def _difference(grid: Grid, row: int, col: int, d_row: int, d_col: int) -> float:
    """Central difference along one axis, one-sided at the boundary."""
    center = grid.get(row, col)
    has_before = grid.in_bounds(row - d_row, col - d_col)
    has_after = grid.in_bounds(row + d_row, col + d_col)

    before = grid.get(row - d_row, col - d_col) if has_before else center
    after = grid.get(row + d_row, col + d_col) if has_after else center
    divisor = 2.0 if has_before and has_after else 1.0
    return (after - before) / divisor


def _normalize(x: float, y: float, z: float) -> tuple[float, float, float]:
    length = float(np.sqrt(x * x + y * y + z * z))
    if length == 0.0:
        return UP
    return (x / length, y / length, z / length)
