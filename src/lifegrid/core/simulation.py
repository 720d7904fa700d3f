"""Generation bookkeeping around a universe."""

from typing import Deque, Dict, Tuple
from collections import deque
import numpy as np

from .universe import Universe


class Simulation:
    """Drives a universe generation by generation.

    Keeps the generation counter, a short population history and detects
    when the universe revisits a state it has been in before.
    """

    def __init__(self, universe: Universe) -> None:
        """Initialize the simulation.

        Args:
            universe: The seeded universe to advance
        """
        self.universe = universe
        self._generation = 0
        self._population_history: Deque[int] = deque(maxlen=100)
        self._state_history: Deque[bytes] = deque(maxlen=1000)
        self._seen_states: Dict[bytes, int] = {}
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0

        self._update_population_history()

    @property
    def generation(self) -> int:
        """Current generation number."""
        return self._generation

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self.universe.population

    @property
    def population_history(self) -> list:
        """History of population counts."""
        return list(self._population_history)

    @property
    def cycle_detected(self) -> bool:
        return self._cycle_detected

    @property
    def cycle_length(self) -> int:
        """Length of detected cycle (0 if no cycle)."""
        return self._cycle_length

    @property
    def cycle_start_generation(self) -> int:
        """Generation where cycle started (0 if no cycle)."""
        return self._cycle_start_generation

    def step(self) -> None:
        """Advance the simulation by one generation."""
        # Fingerprint the seed lazily, it may be populated after construction
        if not self._seen_states and not self._cycle_detected:
            self._check_for_cycles()

        self.universe.tick()

        self._generation += 1
        self._update_population_history()
        self._check_for_cycles()

    def _update_population_history(self) -> None:
        self._population_history.append(self.population)

    def _check_for_cycles(self) -> None:
        """Record the current state, flagging a cycle if it was seen before."""
        if self._cycle_detected:
            return

        current_state = np.packbits(self.universe.to_array()).tobytes()

        if current_state in self._seen_states:
            first_occurrence = self._seen_states[current_state]
            self._cycle_detected = True
            self._cycle_length = self._generation - first_occurrence
            self._cycle_start_generation = first_occurrence
            return

        self._seen_states[current_state] = self._generation
        self._state_history.append(current_state)

        # Forget the oldest state once the history window is nearly full
        if len(self._state_history) > 900:
            old_state = self._state_history[0]
            if self._seen_states.get(old_state) == self._generation - len(self._state_history) + 1:
                del self._seen_states[old_state]

    def reset(self) -> None:
        """Reset counters and history.

        The universe itself is left as it is; cells cannot be un-seeded.
        """
        self._generation = 0
        self._population_history.clear()
        self._state_history.clear()
        self._seen_states.clear()
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0

        self._update_population_history()

    def run_until_stable(self, max_generations: int = 10000) -> Tuple[int, str]:
        """Run simulation until it becomes stable or cycles.

        Args:
            max_generations: Maximum generations to run

        Returns:
            Tuple of (final_generation, reason) where reason is one of:
            'cycle', 'extinction', 'max_generations'

        Raises:
            ValueError: If max_generations is not positive
        """
        if max_generations <= 0:
            raise ValueError(f"max_generations must be positive, got {max_generations}")

        for _ in range(max_generations):
            self.step()

            if self.population == 0:
                return self._generation, "extinction"

            if self._cycle_detected:
                return self._generation, "cycle"

        return self._generation, "max_generations"

    def get_population_change_rate(self, window_size: int = 10) -> float:
        """Calculate recent population change rate.

        Args:
            window_size: Number of recent generations to consider

        Returns:
            Average population change per generation
        """
        recent_history = list(self._population_history)[-window_size:]
        if len(recent_history) < 2:
            return 0.0

        return float(np.mean(np.diff(recent_history)))

    def get_statistics(self) -> Dict:
        """Get simulation statistics.

        Returns:
            Dictionary with various statistics
        """
        bbox = self.universe.get_bounding_box()
        width, height = self.universe.shape

        stats = {
            "generation": self._generation,
            "population": self.population,
            "population_change_rate": self.get_population_change_rate(),
            "population_history": list(self._population_history),
            "cycle_detected": self._cycle_detected,
            "cycle_length": self._cycle_length,
            "cycle_start_generation": self._cycle_start_generation,
            "grid_size": (width, height),
            "population_density": self.population / (width * height),
        }

        if bbox:
            stats["bounding_box"] = bbox
            box_width = bbox[2] - bbox[0] + 1
            box_height = bbox[3] - bbox[1] + 1
            stats["bounding_box_size"] = (box_width, box_height)
            stats["bounding_box_area"] = box_width * box_height
        else:
            stats["bounding_box"] = None
            stats["bounding_box_size"] = (0, 0)
            stats["bounding_box_area"] = 0

        return stats
