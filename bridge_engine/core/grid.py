import itertools
import math
import numbers
import random
from typing import Dict, List, Sequence, Tuple

from bridge_engine.core import keys
from bridge_engine.core.errors import (
    CorruptState,
    Exhausted,
    InvalidDimensions,
    InvalidKeyFormat,
    OutOfBounds,
)

Coords = Tuple[int, ...]


def _is_whole(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


class Orthotope:
    """
    N-dimensional grid with side lengths lengths[0], ..., lengths[N-1].
    Every unit cell is either a bridge (occupied) or empty.

    Invariant:
    - occupied | empty == every integer location inside the orthotope
    - occupied & empty == set()
    """

    __slots__ = ('lengths', 'occupied', '_empty_pos', '_empty_list', 'rng', 'event_writer')

    def __init__(self, lengths: Sequence[int], seed: int = None, event_writer=None):
        lengths = tuple(lengths)
        for length in lengths:
            if not _is_whole(length) or length <= 0:
                raise InvalidDimensions(f"axis lengths must be positive integers, got {list(lengths)}")

        self.lengths: Coords = lengths
        self.rng = random.Random(seed)
        self.event_writer = event_writer
        self.occupied = set()

        # Empty keys live in a list for O(1) uniform picks (swap-remove)
        # and in a key -> list position map for membership.
        # The 0-D grid has no addressable cell.
        if self.lengths:
            ranges = [range(n) for n in self.lengths]
            self._empty_list: List[str] = [keys.encode(c) for c in itertools.product(*ranges)]
        else:
            self._empty_list = []
        self._empty_pos: Dict[str, int] = {k: i for i, k in enumerate(self._empty_list)}

        if self.event_writer:
            self.event_writer.write_header(self.lengths)

    @property
    def empty(self):
        """Set-like view of the empty keys."""
        return self._empty_pos.keys()

    @property
    def dimensions(self) -> int:
        return len(self.lengths)

    @property
    def cell_count(self) -> int:
        return math.prod(self.lengths) if self.lengths else 0

    @property
    def occupied_count(self) -> int:
        return len(self.occupied)

    @property
    def empty_count(self) -> int:
        return len(self._empty_pos)

    @property
    def occupancy(self) -> float:
        total = self.cell_count
        return self.occupied_count / total if total else 0.0

    def in_bounds(self, *coords: int) -> bool:
        if not self.lengths or len(coords) != len(self.lengths):
            return False
        return all(_is_whole(c) and 0 <= c < n for c, n in zip(coords, self.lengths))

    def _require_in_bounds(self, coords: Coords):
        if not self.in_bounds(*coords):
            raise OutOfBounds(f"location {list(coords)} outside bounds limits {list(self.lengths)}")

    def _is_built(self, key: str) -> bool:
        """Membership of an in-bounds key; exactly one set must hold it."""
        built = key in self.occupied
        if built == (key in self._empty_pos):
            where = "both bridge and non-bridge sets" if built else "neither bridge nor non-bridge set"
            raise CorruptState(f"location {key!r} found in {where}")
        return built

    def _remove_empty(self, key: str):
        idx = self._empty_pos.pop(key, None)
        if idx is None:
            return
        last = self._empty_list.pop()
        if idx < len(self._empty_list):
            self._empty_list[idx] = last
            self._empty_pos[last] = idx

    def occupy(self, *coords: int):
        """Places a bridge at coords even if one already exists."""
        self._require_in_bounds(coords)

        key = keys.encode(coords)
        self.occupied.add(key)
        self._remove_empty(key)

        if self.event_writer:
            self.event_writer.log_occupy(coords)

    def occupy_random(self) -> Coords:
        """Places a bridge at a uniformly random empty cell and returns its location."""
        if not self._empty_list:
            raise Exhausted(f"no more unoccupied space to build in {list(self.lengths)}")

        key = self._empty_list[self.rng.randrange(len(self._empty_list))]
        if key in self.occupied:
            raise CorruptState(f"location {key!r} in built locations")
        try:
            coords = keys.decode(key)
        except InvalidKeyFormat as e:
            raise CorruptState(f"failed to build bridge in {key!r}") from e

        self._remove_empty(key)
        self.occupied.add(key)

        if self.event_writer:
            self.event_writer.log_occupy(coords)
        return coords

    def is_occupied(self, *coords: int) -> bool:
        self._require_in_bounds(coords)
        return self._is_built(keys.encode(coords))

    def neighbors(self, *coords: int) -> List[Coords]:
        """
        Orthogonal neighbors of the cell at coords that lie inside the grid:
        for each axis in order, the cell one step below, then one step above.
        """
        self._require_in_bounds(coords)

        result = []
        for axis in range(len(coords)):
            for step in (-1, 1):
                candidate = coords[:axis] + (coords[axis] + step,) + coords[axis + 1:]
                key = keys.encode(candidate)
                if not self.in_bounds(*candidate):
                    if key in self.occupied or key in self._empty_pos:
                        raise CorruptState(f"out of bound piece {list(candidate)} in bridge or non-bridge set")
                    continue
                self._is_built(key)
                result.append(candidate)
        return result

    def occupied_neighbors(self, *coords: int) -> List[Coords]:
        return [n for n in self.neighbors(*coords) if keys.encode(n) in self.occupied]

    def is_spanning(self) -> bool:
        """True if occupied cells connect coordinate 0 to lengths[0]-1 along the first axis."""
        from bridge_engine.algo.spanning import SpanningSearch
        return SpanningSearch(self).search()

    def check_invariant(self):
        """Audits the partition; raises CorruptState on the first violation found."""
        overlap = self.occupied & self._empty_pos.keys()
        if overlap:
            raise CorruptState(f"{len(overlap)} locations in both sets, e.g. {next(iter(overlap))!r}")
        if len(self._empty_list) != len(self._empty_pos):
            raise CorruptState("empty index out of sync with empty set")

        total = len(self.occupied) + len(self._empty_pos)
        if total != self.cell_count:
            raise CorruptState(f"{total} tracked locations, expected {self.cell_count}")

        for key in itertools.chain(self.occupied, self._empty_list):
            try:
                coords = keys.decode(key)
            except InvalidKeyFormat as e:
                raise CorruptState(f"unreadable key {key!r}") from e
            if not self.in_bounds(*coords):
                raise CorruptState(f"out of bound piece {list(coords)} tracked")

    def __str__(self) -> str:
        from bridge_engine.viz.text import render
        return render(self)

    def __repr__(self) -> str:
        return f"Orthotope(lengths={list(self.lengths)}, occupied={self.occupied_count}/{self.cell_count})"
