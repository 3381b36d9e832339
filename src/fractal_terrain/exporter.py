"""Wavefront OBJ export of heightmap meshes."""

from pathlib import Path
from typing import Iterator, TextIO

import numpy as np
import structlog
from numpy.typing import NDArray

from .config import ExportConfig
from .exceptions import ExportError
from .grid import Grid
from .normals import NormalEstimator

logger = structlog.get_logger()


class MeshExporter:
    """Converts a finished grid into OBJ vertex, attribute and face records.

    The mesh is centred on the origin: grid columns map to x and rows to y,
    both spanning [-scale, scale]. Every cell is split along the same
    diagonal into two triangles wound counter-clockwise seen from +z.
    """

    def __init__(self, grid: Grid, config: ExportConfig | None = None):
        self.grid = grid
        self.config = config or ExportConfig()

    @property
    def vertex_count(self) -> int:
        return self.grid.size * self.grid.size

    @property
    def face_count(self) -> int:
        return 2 * (self.grid.size - 1) ** 2

    def positions(self) -> NDArray[np.float64]:
        """Vertex positions in row-major order, shape (size * size, 3)."""
        size = self.grid.size
        cols, rows = self._normalized_coords()
        heights = self.grid.heights.astype(np.float64)

        positions = np.empty((size, size, 3), dtype=np.float64)
        positions[..., 0] = self.config.x_scale * (cols * 2.0 - 1.0)
        positions[..., 1] = self.config.y_scale * (rows * 2.0 - 1.0)
        positions[..., 2] = self.config.height_scale * heights
        return positions.reshape(-1, 3)

    def texcoords(self) -> NDArray[np.float64]:
        """Texture coordinates in [0, 1], shape (size * size, 2)."""
        cols, rows = self._normalized_coords()
        return np.stack((cols, rows), axis=-1).reshape(-1, 2)

    def normals(self) -> NDArray[np.float64]:
        """Unit vertex normals in row-major order, shape (size * size, 3)."""
        estimator = NormalEstimator(
            self.grid,
            x_scale=self.config.x_scale,
            y_scale=self.config.y_scale,
            height_scale=self.config.height_scale,
        )
        return estimator.normals().reshape(-1, 3)

    def faces(self) -> NDArray[np.int64]:
        """Triangles as 0-based vertex indices, two per cell.

        For a cell with corners a=(r, c), b=(r, c+1), c=(r+1, c+1) and
        d=(r+1, c) the triangles are (a, b, c) and (a, c, d).
        """
        size = self.grid.size
        rows, cols = np.meshgrid(
            np.arange(size - 1), np.arange(size - 1), indexing="ij"
        )
        a = rows * size + cols
        b = a + 1
        c = a + size + 1
        d = a + size

        first = np.stack((a, b, c), axis=-1).reshape(-1, 3)
        second = np.stack((a, c, d), axis=-1).reshape(-1, 3)
        return np.stack((first, second), axis=1).reshape(-1, 3).astype(np.int64)

    def records(self) -> Iterator[str]:
        """Yield OBJ lines: v, then vn and vt when enabled, then f."""
        fmt = self._format_float

        for x, y, z in self.positions():
            yield f"v {fmt(x)} {fmt(y)} {fmt(z)}"

        if self.config.normals:
            for nx, ny, nz in self.normals():
                yield f"vn {fmt(nx)} {fmt(ny)} {fmt(nz)}"

        if self.config.texcoords:
            for u, v in self.texcoords():
                yield f"vt {fmt(u)} {fmt(v)}"

        for face in self.faces():
            yield "f " + " ".join(self._face_vertex(int(i)) for i in face)

    def write(self, sink: str | Path | TextIO) -> int:
        """Write all records to a path or text stream.

        Args:
            sink: Output path (parent directories are created) or an open
                text stream.

        Returns:
            Number of records written.

        Raises:
            ExportError: If opening or writing the destination fails.
        """
        if isinstance(sink, (str, Path)):
            path = Path(sink)
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                with open(path, "w", encoding="ascii") as f:
                    count = self._write_records(f, str(path))
            except OSError as e:
                raise ExportError(f"Failed to write mesh to {path}: {e}") from e
            destination = str(path)
        else:
            destination = getattr(sink, "name", repr(sink))
            count = self._write_records(sink, destination)

        logger.info(
            "mesh_exported",
            destination=destination,
            vertices=self.vertex_count,
            faces=self.face_count,
            records=count,
        )
        return count

    def _write_records(self, stream: TextIO, destination: str) -> int:
        count = 0
        for record in self.records():
            try:
                stream.write(record + "\n")
            except OSError as e:
                kind = record.split(" ", 1)[0]
                raise ExportError(
                    f"Failed to write record {count + 1} ({kind}) to {destination}: {e}"
                ) from e
            count += 1
        return count

    def _normalized_coords(self) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Column and row coordinates divided by (size - 1), indexed [row, col]."""
        size = self.grid.size
        axis = np.arange(size, dtype=np.float64) / (size - 1)
        rows, cols = np.meshgrid(axis, axis, indexing="ij")
        return cols, rows

    def _face_vertex(self, index: int) -> str:
        i = index + 1  # OBJ indices start at 1
        if self.config.normals and self.config.texcoords:
            return f"{i}/{i}/{i}"
        if self.config.normals:
            return f"{i}//{i}"
        if self.config.texcoords:
            return f"{i}/{i}"
        return str(i)

    def _format_float(self, value: float) -> str:
        # Adding 0.0 turns -0.0 into 0.0
        return f"{value + 0.0:.{self.config.precision}f}"
