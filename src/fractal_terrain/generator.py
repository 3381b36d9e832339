"""Diamond-square heightmap generation."""

import structlog

from .config import GenerationConfig
from .exceptions import InvalidSizeError
from .grid import Grid, is_valid_size
from .random_source import RandomSource

logger = structlog.get_logger()


# (row, col) offsets in units of half a step
DIAMOND_OFFSETS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
SQUARE_OFFSETS: tuple[tuple[int, int], ...] = ((0, -1), (0, 1), (-1, 0), (1, 0))


def gather_neighbors(
    grid: Grid,
    row: int,
    col: int,
    offsets: tuple[tuple[int, int], ...],
    distance: int,
) -> list[float]:
    """Collect the heights of the neighbors that fall inside the grid.

    Args:
        grid: Grid to read from.
        row: Row of the cell being filled.
        col: Column of the cell being filled.
        offsets: Unit (row, col) directions to probe.
        distance: Cells between the cell and each neighbor.

    Returns:
        Heights of the in-bounds neighbors, in offset order.
    """
    values: list[float] = []
    for dr, dc in offsets:
        r = row + dr * distance
        c = col + dc * distance
        if grid.in_bounds(r, c):
            values.append(grid.get(r, c))
    return values


def scale_schedule(
    size: int, roughness: float = 1.0, initial_scale: float = 1.0
) -> list[tuple[int, float]]:
    """Compute the (step, displacement scale) pair of every iteration.

    Raises:
        InvalidSizeError: If size is not 2^n + 1.
    """
    if not is_valid_size(size):
        raise InvalidSizeError(f"Grid size must be 2^n + 1, got {size}")
    decay = 2.0 ** -roughness
    schedule = []
    step = size - 1
    scale = initial_scale
    while step > 1:
        schedule.append((step, scale))
        step //= 2
        scale *= decay
    return schedule


class DiamondSquareGenerator:
    """Fills a grid with fractal heights by diamond-square subdivision.

    Every pass only reads values settled by coarser steps, so the output
    depends solely on the config and the sequence of random draws.
    """

    def __init__(self, config: GenerationConfig, source: RandomSource):
        self.config = config
        self.source = source
        self.scales: list[float] = []

    def generate(self) -> Grid:
        """Create a new grid and fill it.

        Raises:
            InvalidSizeError: If the configured size is not 2^n + 1.
        """
        grid = Grid(self.config.size)
        self.fill(grid)
        return grid

    def fill(self, grid: Grid) -> Grid:
        """Fill a zero-initialized grid in place, then freeze it."""
        size = grid.size
        self.scales = []

        self._initialize_corners(grid)

        for step, scale in scale_schedule(
            size, self.config.roughness, self.config.initial_scale
        ):
            half = step // 2
            logger.debug("diamond_square_iteration", step=step, scale=scale)

            for row in range(half, size, step):
                for col in range(half, size, step):
                    self._displace(grid, row, col, DIAMOND_OFFSETS, half, scale)

            # Diamond centres alternate parity, so the square pass runs twice
            for row in range(0, size, step):
                for col in range(half, size, step):
                    self._displace(grid, row, col, SQUARE_OFFSETS, half, scale)
            for row in range(half, size, step):
                for col in range(0, size, step):
                    self._displace(grid, row, col, SQUARE_OFFSETS, half, scale)

            self.scales.append(scale)

        grid.freeze()
        logger.info(
            "heightmap_generated",
            size=size,
            iterations=len(self.scales),
            roughness=self.config.roughness,
        )
        return grid

    def _initialize_corners(self, grid: Grid) -> None:
        last = grid.size - 1
        for row, col in ((0, 0), (0, last), (last, 0), (last, last)):
            grid.set(row, col, self.source.uniform() * self.config.corner_height)

    def _displace(
        self,
        grid: Grid,
        row: int,
        col: int,
        offsets: tuple[tuple[int, int], ...],
        half: int,
        scale: float,
    ) -> None:
        neighbors = gather_neighbors(grid, row, col, offsets, half)
        average = sum(neighbors) / len(neighbors)
        displacement = self.config.displacement_mean + self.source.gaussian() * scale
        grid.set(row, col, average + displacement)
