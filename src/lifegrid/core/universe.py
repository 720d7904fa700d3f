"""The universe: a bounded rectangular board of cells."""

from typing import Iterable, List, Optional, Set, Tuple
import numpy as np
import torch
import torch.nn.functional as F

from .cell import Cell

LIVE_GLYPH = "*"
DEAD_GLYPH = " "


def _is_integer(value) -> bool:
    """Whether value is an int or numpy integer (bools excluded)."""
    return not isinstance(value, bool) and isinstance(value, (int, np.integer))


class Universe:
    """Two dimensional rectangular board of cells, sized at construction.

    The board is indexed columns first so coordinates read as ``(x, y)``.
    Edges do not wrap: cells on the boundary simply have fewer neighbours.
    """

    def __init__(self, width: int, height: int) -> None:
        """Create the board and wire every cell to its neighbours.

        Args:
            width: Number of columns (x axis size)
            height: Number of rows (y axis size)

        Raises:
            TypeError: If either size is not an integer
            ValueError: If either size is not positive
        """
        for label, size in (("width", width), ("height", height)):
            if not _is_integer(size):
                raise TypeError(f"Universe {label} must be an integer, got {type(size).__name__}")
            if size <= 0:
                raise ValueError(f"Universe {label} must be positive, got {size}")

        self._width = int(width)
        self._height = int(height)

        # Cells must all exist before any of them can be wired.
        self._board: List[List[Cell]] = [[Cell() for _ in range(self._height)] for _ in range(self._width)]
        self._connect_cells()

        # Scratch buffer holding the next generation while it is computed
        self._next_state = np.zeros((self._width, self._height), dtype=bool)

        torch.set_num_threads(1)
        self._torch_input = torch.zeros(1, 1, self._height, self._width, dtype=torch.float32)
        self._torch_kernel = (
            torch.tensor([[0, 1, 0], [1, 0, 1], [0, 1, 0]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)
        )

    def _connect_cells(self) -> None:
        for x in range(self._width):
            for y in range(self._height):
                west = self._board[x - 1][y] if x > 0 else None
                east = self._board[x + 1][y] if x < self._width - 1 else None
                north = self._board[x][y - 1] if y > 0 else None
                south = self._board[x][y + 1] if y < self._height - 1 else None
                self._board[x][y].connect([west, east, north, south])

    @property
    def width(self) -> int:
        """Number of columns."""
        return self._width

    @property
    def height(self) -> int:
        """Number of rows."""
        return self._height

    @property
    def shape(self) -> Tuple[int, int]:
        """Get board dimensions as (width, height)."""
        return (self._width, self._height)

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"Coordinates ({x}, {y}) out of bounds for {self._width}x{self._height} universe")

    def cell(self, x: int, y: int) -> Cell:
        """Get the cell at a coordinate.

        Raises:
            IndexError: If coordinates are out of bounds
        """
        self._check_bounds(x, y)
        return self._board[x][y]

    def populate(self, coordinates: Iterable[Tuple[int, int]]) -> None:
        """Set the initial state of the universe.

        Args:
            coordinates: (x, y) pairs of cells to make live. If empty, every
                cell is made live.

        Raises:
            TypeError: If any coordinate is not an integer
            IndexError: If any coordinate lies outside the board

            In either case no cell is changed.
        """
        targets = []
        for x, y in coordinates:
            if not (_is_integer(x) and _is_integer(y)):
                raise TypeError(f"Coordinates ({x!r}, {y!r}) must be integers")
            targets.append((int(x), int(y)))

        if not targets:
            for column in self._board:
                for cell in column:
                    cell.alive = True
            return

        for x, y in targets:
            self._check_bounds(x, y)
        for x, y in targets:
            self._board[x][y].alive = True

    def tick(self) -> None:
        """Advance every cell by one generation.

        All next states are gathered from the current generation first and
        only then committed, so no cell sees a neighbour's new state.
        """
        next_state = self._next_state
        for x, column in enumerate(self._board):
            for y, cell in enumerate(column):
                next_state[x, y] = cell.next_state()

        for x, column in enumerate(self._board):
            for y, cell in enumerate(column):
                cell.alive = bool(next_state[x, y])

    def render(self) -> str:
        """Create a string representation of the universe.

        Returns:
            One line per row, ``*`` for live cells and a space for dead ones,
            each line terminated by a newline
        """
        lines = []
        for y in range(self._height):
            row = "".join(LIVE_GLYPH if self._board[x][y].alive else DEAD_GLYPH for x in range(self._width))
            lines.append(row + "\n")
        return "".join(lines)

    @property
    def population(self) -> int:
        """Get the number of living cells."""
        return sum(cell.alive for column in self._board for cell in column)

    def alive_cells(self) -> Set[Tuple[int, int]]:
        """Coordinates of every living cell."""
        return {
            (x, y)
            for x, column in enumerate(self._board)
            for y, cell in enumerate(column)
            if cell.alive
        }

    def to_array(self) -> np.ndarray:
        """Snapshot of the board as a boolean array indexed [x, y]."""
        return np.array([[cell.alive for cell in column] for column in self._board], dtype=bool)

    def neighbour_counts(self) -> np.ndarray:
        """Count live orthogonal neighbours for every cell with a convolution.

        Returns:
            int8 array indexed [x, y] with counts in 0-4
        """
        # Board is (width, height) but PyTorch expects (height, width)
        self._torch_input[0, 0] = torch.from_numpy(self.to_array().T.astype(np.float32))
        counts = F.conv2d(self._torch_input, self._torch_kernel, padding=1)
        return counts[0, 0].numpy().astype(np.int8).T

    def get_bounding_box(self) -> Optional[Tuple[int, int, int, int]]:
        """Get bounding box of living cells.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y) or None if no living cells
        """
        living_coords = np.where(self.to_array())
        if len(living_coords[0]) == 0:
            return None

        min_x, max_x = int(living_coords[0].min()), int(living_coords[0].max())
        min_y, max_y = int(living_coords[1].min()), int(living_coords[1].max())

        return (min_x, min_y, max_x, max_y)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Universe({self._width}, {self._height})"
