"""Double-buffered world state for Conway's Game of Life."""

from typing import Callable, Iterator, List, Optional, Tuple
import numpy as np
import torch
import torch.nn.functional as F

ALIVE = 1
DEAD = 0

RandomSource = Callable[[], bool]

# Moore neighborhood, every offset except the cell itself
NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = tuple(
    (dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if (dr, dc) != (0, 0)
)

# Single-threaded torch, set once for the process
torch.set_num_threads(1)

_KERNEL = torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)


def make_random_source(seed: Optional[int] = None) -> RandomSource:
    """Create an unbiased random-boolean source.

    Args:
        seed: Optional seed for reproducible draws

    Returns:
        Zero-argument callable returning True or False with equal probability
    """
    rng = np.random.default_rng(seed)

    def draw() -> bool:
        return bool(rng.integers(2))

    return draw


def _convolve_neighbors(cells: np.ndarray) -> np.ndarray:
    rows, cols = cells.shape
    if rows == 0 or cols == 0:
        return np.zeros((rows, cols), dtype=np.int8)

    source = torch.from_numpy((cells > 0).astype(np.float32)).reshape(1, 1, rows, cols)
    # Zero padding treats everything past the edge as dead
    counts = F.conv2d(source, _KERNEL, padding=1)
    return counts[0, 0].numpy().astype(np.int8)


def next_generation(cells: np.ndarray) -> np.ndarray:
    """Compute the generation following ``cells`` without touching any world.

    Args:
        cells: 2D array of 0/1 cell states

    Returns:
        New 2D int8 array holding the next generation
    """
    counts = _convolve_neighbors(cells)
    alive = cells > 0
    survive = alive & ((counts == 2) | (counts == 3))
    birth = ~alive & (counts == 3)
    return (survive | birth).astype(np.int8)


class World:
    """A fixed-size grid of cells with hard (non-wrapping) edges.

    Two equally shaped buffers are kept: ``present`` holds the current
    generation and ``future`` receives the next one during ``step()``.
    The buffers swap roles after every step.
    """

    def __init__(self, rows: int, cols: int, random_source: Optional[RandomSource] = None) -> None:
        """Initialize a world with every cell dead.

        Args:
            rows: Number of rows
            cols: Number of columns
            random_source: Callable returning a bool per draw, used by randomize_seed()

        Raises:
            ValueError: If either dimension is negative
        """
        if rows < 0 or cols < 0:
            raise ValueError(f"World dimensions must be non-negative, got {rows}x{cols}")

        self.rows = rows
        self.cols = cols
        self._present = np.zeros((rows, cols), dtype=np.int8)
        self._future = np.zeros((rows, cols), dtype=np.int8)
        self._random_source = random_source or make_random_source()

    @property
    def present(self) -> np.ndarray:
        """Read-only view of the current generation."""
        view = self._present.view()
        view.flags.writeable = False
        return view

    @property
    def shape(self) -> Tuple[int, int]:
        """Get world dimensions as (rows, cols)."""
        return (self.rows, self.cols)

    @property
    def population(self) -> int:
        """Get the number of living cells."""
        return int(np.count_nonzero(self._present))

    def within_world(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def _check_bounds(self, row: int, col: int) -> None:
        if not self.within_world(row, col):
            raise IndexError(f"Coordinates ({row}, {col}) out of bounds for {self.rows}x{self.cols} world")

    def get_cell(self, row: int, col: int) -> bool:
        """Get the state of a cell.

        Args:
            row: Row coordinate
            col: Column coordinate

        Returns:
            True if cell is alive, False if dead

        Raises:
            IndexError: If coordinates are out of bounds
        """
        self._check_bounds(row, col)
        return bool(self._present[row, col] == ALIVE)

    def set_cell(self, row: int, col: int, alive: bool) -> None:
        """Set the state of a cell in the current generation.

        Args:
            row: Row coordinate
            col: Column coordinate
            alive: Whether the cell should be alive

        Raises:
            IndexError: If coordinates are out of bounds
        """
        self._check_bounds(row, col)
        self._present[row, col] = ALIVE if alive else DEAD

    def clear(self) -> None:
        """Clear all cells (set all to dead)."""
        self._present.fill(DEAD)

    def randomize_seed(self) -> None:
        """Overwrite the current generation with one random draw per cell.

        Cells are visited in row-major order. ``future`` is left untouched.
        """
        for r in range(self.rows):
            for c in range(self.cols):
                self._present[r, c] = ALIVE if self._random_source() else DEAD

    def count_alive_neighbors(self, row: int, col: int) -> int:
        """Count living neighbors of a cell.

        Neighbors that fall outside the world are skipped.

        Args:
            row: Row coordinate
            col: Column coordinate

        Returns:
            Number of living neighbors (0-8)

        Raises:
            IndexError: If the cell itself is out of bounds
        """
        self._check_bounds(row, col)
        count = 0
        for dr, dc in NEIGHBOR_OFFSETS:
            nr, nc = row + dr, col + dc
            if self.within_world(nr, nc) and self._present[nr, nc] == ALIVE:
                count += 1
        return count

    def step(self) -> None:
        """Advance the world by one generation.

        Every cell is computed from the same snapshot of ``present`` and
        written to ``future``; the two buffers then swap roles.
        """
        for r in range(self.rows):
            for c in range(self.cols):
                neighbors = self.count_alive_neighbors(r, c)
                if self._present[r, c] == ALIVE:
                    self._future[r, c] = ALIVE if neighbors in (2, 3) else DEAD
                else:
                    self._future[r, c] = ALIVE if neighbors == 3 else DEAD

        self._present, self._future = self._future, self._present

    def neighbor_counts(self) -> np.ndarray:
        """Count neighbors for all cells using a zero-padded convolution.

        Returns:
            2D int8 array where entry (r, c) equals count_alive_neighbors(r, c)
        """
        return _convolve_neighbors(self._present)

    def iter_rows(self) -> Iterator[Tuple[int, ...]]:
        """Yield each row of the current generation as a tuple of cell states."""
        for r in range(self.rows):
            yield tuple(int(v) for v in self._present[r])

    def render(self, alive: str = "1", dead: str = "0") -> str:
        """Render the current generation as text.

        One line per row followed by a blank line separating generations.

        Args:
            alive: Character used for living cells
            dead: Character used for dead cells

        Returns:
            Rendered generation
        """
        lines = ["".join(alive if v else dead for v in row) + "\n" for row in self.iter_rows()]
        return "".join(lines) + "\n"

    def to_list(self) -> List[List[int]]:
        """Convert the current generation to a nested list.

        Returns:
            2D list indexed [row][col]
        """
        return self._present.tolist()

    def from_list(self, data: List[List[int]]) -> None:
        """Load the current generation from a nested list.

        Args:
            data: 2D list with cell states indexed [row][col]

        Raises:
            ValueError: If data dimensions don't match or values aren't integer 0/1
        """
        arr = np.asarray(data)
        if arr.size == 0 and self.rows * self.cols == 0:
            arr = arr.reshape(self.shape)
        if arr.shape != self.shape:
            raise ValueError(f"Data shape {arr.shape} doesn't match world {self.shape}")
        if arr.size and not (np.issubdtype(arr.dtype, np.integer) or arr.dtype == np.bool_):
            raise ValueError(f"Cell states must be integers, got {arr.dtype}")
        if not np.isin(arr, (DEAD, ALIVE)).all():
            raise ValueError("Cell states must be 0 or 1")

        self._present[:] = arr.astype(np.int8)

    def get_bounding_box(self) -> Optional[Tuple[int, int, int, int]]:
        """Get bounding box of living cells.

        Returns:
            Tuple of (min_row, min_col, max_row, max_col) or None if no living cells
        """
        living = np.nonzero(self._present)
        if len(living[0]) == 0:
            return None

        return (
            int(living[0].min()),
            int(living[1].min()),
            int(living[0].max()),
            int(living[1].max()),
        )

    def __eq__(self, other: object) -> bool:
        """Check if two worlds hold the same generation."""
        if not isinstance(other, World):
            return False
        return self.shape == other.shape and np.array_equal(self._present, other._present)

    def __str__(self) -> str:
        """String representation using '1' for living and '0' for dead cells."""
        return "\n".join("".join(str(v) for v in row) for row in self.iter_rows())
