"""Single cell of the universe."""

import weakref
from typing import Optional, Sequence, Tuple

# Order of the neighbour slots passed to Cell.connect.
WEST, EAST, NORTH, SOUTH = range(4)
NEIGHBOUR_SLOTS = 4

# Live-neighbour counts that leave a cell alive after a tick.
ALIVE_COUNTS = frozenset({2, 3})


class Cell:
    """One position of the board.

    A cell is created dead and unwired. The universe that owns it wires it to
    its four orthogonal neighbours (West, East, North, South) once every cell
    exists. Neighbours are held through weak references so the universe stays
    the only owner of its cells.
    """

    __slots__ = ("alive", "_neighbours", "__weakref__")

    def __init__(self) -> None:
        self.alive = False
        self._neighbours: Optional[Tuple[Optional[weakref.ref], ...]] = None

    def connect(self, neighbours: Sequence[Optional["Cell"]]) -> None:
        """Give this cell knowledge of its four nearest neighbours.

        Args:
            neighbours: West, East, North and South cells, ``None`` where the
                board ends

        Raises:
            ValueError: If the sequence does not have exactly four entries
            RuntimeError: If the cell has already been connected
        """
        if self._neighbours is not None:
            raise RuntimeError("Cell is already connected")
        if len(neighbours) != NEIGHBOUR_SLOTS:
            raise ValueError(f"Expected {NEIGHBOUR_SLOTS} neighbour slots, got {len(neighbours)}")

        self._neighbours = tuple(None if n is None else weakref.ref(n) for n in neighbours)

    @property
    def connected(self) -> bool:
        """Whether the neighbour wiring has been set."""
        return self._neighbours is not None

    @property
    def neighbours(self) -> Tuple[Optional["Cell"], ...]:
        """The West, East, North and South neighbours (``None`` at the edge)."""
        return tuple(None if ref is None else ref() for ref in self._wiring())

    def live_neighbours(self) -> int:
        """Count neighbours that are currently alive.

        Returns:
            Number of live neighbours (0-4)
        """
        count = 0
        for ref in self._wiring():
            if ref is None:
                continue
            neighbour = ref()
            if neighbour is not None and neighbour.alive:
                count += 1
        return count

    def next_state(self) -> bool:
        """State this cell takes in the next generation.

        The cell is alive next generation iff exactly two or three of its
        neighbours are alive now, whatever its own current state.
        """
        return self.live_neighbours() in ALIVE_COUNTS

    def tick(self) -> bool:
        """Respond to the march of time on its own.

        Returns:
            The newly committed state
        """
        self.alive = self.next_state()
        return self.alive

    def _wiring(self) -> Tuple[Optional[weakref.ref], ...]:
        if self._neighbours is None:
            raise RuntimeError("Cell has not been connected to its neighbours")
        return self._neighbours

    def __repr__(self) -> str:
        state = "alive" if self.alive else "dead"
        wiring = "connected" if self.connected else "unconnected"
        return f"<Cell {state} {wiring}>"
