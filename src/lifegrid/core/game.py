"""Simulation driver for a Game of Life world."""

from typing import Callable, Deque, Dict, Optional
from collections import deque
import time
import numpy as np

from .world import World


class GameOfLife:
    """Conway's Game of Life simulation engine.

    Implements the classic rules:
    - Live cell with 2-3 neighbors survives
    - Dead cell with exactly 3 neighbors becomes alive
    - All other cells die or stay dead

    The rules themselves live in ``World.step``; this class counts
    generations, tracks population and runs the fixed-cadence loop.
    """

    def __init__(self, world: World) -> None:
        """Initialize the game with a world.

        Args:
            world: The world to simulate
        """
        self.world = world
        self._generation = 0
        self._population_history: Deque[int] = deque(maxlen=100)

        # Track initial population
        self._update_population_history()

    @property
    def generation(self) -> int:
        """Current generation number."""
        return self._generation

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self.world.population

    @property
    def population_history(self) -> list:
        """History of population counts."""
        return list(self._population_history)

    def step(self) -> None:
        """Advance the simulation by one generation."""
        self.world.step()
        self._generation += 1
        self._update_population_history()

    def run(
        self,
        iterations: int,
        delay: float = 0.0,
        on_generation: Optional[Callable[["GameOfLife"], None]] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ) -> int:
        """Run a fixed number of generations.

        Each iteration steps the world, hands the game to ``on_generation``
        and then pauses for ``delay`` seconds.

        Args:
            iterations: Number of generations to run
            delay: Pause after each generation, in seconds
            on_generation: Optional callback invoked after every step
            sleep: Function used to pause between generations (defaults to time.sleep)

        Returns:
            Generation number after the run

        Raises:
            ValueError: If iterations or delay is negative
        """
        if iterations < 0:
            raise ValueError(f"Iterations must be non-negative, got {iterations}")
        if delay < 0:
            raise ValueError(f"Delay must be non-negative, got {delay}")

        sleep = sleep or time.sleep

        for _ in range(iterations):
            self.step()
            if on_generation is not None:
                on_generation(self)
            if delay > 0:
                sleep(delay)

        return self._generation

    def _update_population_history(self) -> None:
        """Update the population history."""
        self._population_history.append(self.population)

    def reset(self, clear_world: bool = True) -> None:
        """Reset the simulation.

        Args:
            clear_world: Whether to clear the world as well
        """
        if clear_world:
            self.world.clear()

        self._generation = 0
        self._population_history.clear()
        self._update_population_history()

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

        changes = np.diff(recent_history)
        return float(np.mean(changes))

    def get_statistics(self) -> Dict:
        """Get simulation statistics.

        Returns:
            Dictionary with various statistics
        """
        bbox = self.world.get_bounding_box()
        area = self.world.rows * self.world.cols

        stats = {
            "generation": self._generation,
            "population": self.population,
            "population_change_rate": self.get_population_change_rate(),
            "population_history": list(self._population_history),
            "grid_size": self.world.shape,
            "population_density": self.population / area if area else 0.0,
        }

        if bbox:
            stats["bounding_box"] = bbox
            box_rows = bbox[2] - bbox[0] + 1
            box_cols = bbox[3] - bbox[1] + 1
            stats["bounding_box_size"] = (box_rows, box_cols)
            stats["bounding_box_area"] = box_rows * box_cols
        else:
            stats["bounding_box"] = None
            stats["bounding_box_size"] = (0, 0)
            stats["bounding_box_area"] = 0

        return stats
