import logging
import random
import time
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from bridge_engine.algo.base import Generator
from bridge_engine.core.errors import Exhausted
from bridge_engine.core.grid import Orthotope

logger = logging.getLogger(__name__)


class RandomBridgeBuilder(Generator):
    """
    Builds a bridge piece on a random empty cell per step until the
    occupied cells span the first axis.

    completed is True once spanning. exhausted is set when the grid ran
    out of empty cells first; max_steps stops the run early otherwise.
    """

    def __init__(self, grid: Orthotope, delay: float = 0.0, max_steps: Optional[int] = None):
        super().__init__(grid)
        self.delay = delay
        self.max_steps = max_steps
        self.exhausted = False
        self.last_cell: Optional[Tuple[int, ...]] = None

    def _finish(self):
        self.completed = True
        logger.info(f"Bridge completed after {self.step_count} steps "
                    f"(occupancy {self.grid.occupancy:.3f})")
        if self.grid.event_writer:
            self.grid.event_writer.log_spanning()

    def run(self) -> Iterator[str]:
        # A grid may span before anything is built here (e.g. pre-occupied cells).
        if self.grid.is_spanning():
            self._finish()
            yield "Done"
            return

        while self.max_steps is None or self.step_count < self.max_steps:
            try:
                self.last_cell = self.grid.occupy_random()
            except Exhausted:
                self.exhausted = True
                logger.warning(f"No empty cells left after {self.step_count} steps, bridge not completed")
                yield "Exhausted"
                return

            self.step_count += 1
            if logger.isEnabledFor(logging.DEBUG):
                self.grid.check_invariant()
                logger.debug(f"Step {self.step_count}: built {list(self.last_cell)}\n{self.grid}")

            if self.grid.is_spanning():
                self._finish()
                yield "Done"
                return

            yield f"Built {list(self.last_cell)} ({self.grid.empty_count} empty)"

            if self.delay > 0:
                time.sleep(self.delay)

        logger.info(f"Stopped after {self.step_count} steps without a spanning path")
        yield "Stopped"


def run_trials(lengths: Sequence[int], trials: int, seed: int = None) -> List[Dict[str, float]]:
    """
    Runs independent simulations to completion.
    Trial seeds are drawn from one master Random so a seed reproduces the batch.
    """
    master = random.Random(seed)
    results = []
    for trial in range(trials):
        grid = Orthotope(lengths, seed=master.randrange(2 ** 32))
        builder = RandomBridgeBuilder(grid)

        t0 = time.perf_counter()
        builder.run_all()
        duration = time.perf_counter() - t0

        results.append({
            "trial": trial,
            "steps": builder.step_count,
            "occupancy": grid.occupancy,
            "completed": builder.completed,
            "seconds": duration,
        })
        logger.debug(f"Trial {trial}: {builder.step_count} steps, occupancy {grid.occupancy:.3f}")
    return results
