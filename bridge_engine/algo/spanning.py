from collections import deque
from typing import Iterator, Optional, Set

from bridge_engine.core import keys
from bridge_engine.core.errors import CorruptState, InvalidKeyFormat
from bridge_engine.core.grid import Orthotope


class SpanningSearch:
    """
    Connected-components sweep over the occupied cells of an Orthotope.

    Each occupied key not yet visited seeds a breadth-first traversal that
    only walks occupied cells. A component spans once it has touched both
    coordinate 0 and coordinate lengths[0]-1 of the first axis, not
    necessarily in the same cell. The visited set is shared by all seeds,
    so every component is explored at most once.
    """

    def __init__(self, grid: Orthotope):
        self.grid = grid
        self.visited: Set[str] = set()
        self.visited_count = 0
        self.components = 0
        self.spanning = False
        self.spanning_seed: Optional[str] = None

    def _location(self, key: str):
        try:
            coords = keys.decode(key)
        except InvalidKeyFormat as e:
            raise CorruptState(f"failed to turn key {key!r} into a location") from e
        if not self.grid.in_bounds(*coords):
            raise CorruptState(f"bridge {list(coords)} outside bounds limits {list(self.grid.lengths)}")
        return coords

    def run(self) -> Iterator[str]:
        grid = self.grid
        if not grid.lengths:
            yield "Done"
            return

        right_edge = grid.lengths[0] - 1

        for seed in grid.occupied:
            if seed in self.visited:
                continue
            self.components += 1

            left = right = False
            queue = deque([seed])
            while queue:
                key = queue.popleft()
                if key in self.visited:
                    continue
                self.visited.add(key)
                self.visited_count += 1

                coords = self._location(key)
                if coords[0] == 0:
                    left = True
                if coords[0] == right_edge:
                    right = True
                if left and right:
                    self.spanning = True
                    self.spanning_seed = seed
                    yield "Spanning"
                    return

                for n in grid.neighbors(*coords):
                    nkey = keys.encode(n)
                    if nkey in grid.occupied and nkey not in self.visited:
                        queue.append(nkey)

                if self.visited_count % 100 == 0:
                    yield f"Visited: {self.visited_count}"

        yield "Done"

    def search(self) -> bool:
        """Runs the sweep to completion."""
        for _ in self.run():
            pass
        return self.spanning
