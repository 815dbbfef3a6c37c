from abc import ABC, abstractmethod
from typing import Iterator
from bridge_engine.core.grid import Orthotope

class Generator(ABC):
    def __init__(self, grid: Orthotope):
        self.grid = grid
        self.step_count = 0
        self.completed = False

    @abstractmethod
    def run(self) -> Iterator[str]:
        """
        Yields one status string per step.
        Bridges are placed in-place on self.grid.
        """
        pass

    def run_all(self):
        """Helper to run the generator to completion."""
        for _ in self.run():
            pass
