import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from bridge_engine.core.grid import Orthotope
from bridge_engine.core.errors import CorruptState
from bridge_engine.algo.spanning import SpanningSearch

CONNECTED = [(0, 0), (0, 2), (1, 0), (1, 1), (2, 1)]
DISCONNECTED = [(0, 0), (0, 2), (1, 1), (2, 1)]

def build(lengths, cells):
    grid = Orthotope(lengths)
    for cell in cells:
        grid.occupy(*cell)
    return grid

class TestSpanning(unittest.TestCase):
    def test_empty(self):
        self.assertFalse(Orthotope([3, 4]).is_spanning())
        self.assertFalse(Orthotope([1]).is_spanning())
        self.assertFalse(Orthotope([2, 2, 2]).is_spanning())

    def test_zero_dimensions(self):
        self.assertFalse(Orthotope([]).is_spanning())

    def test_connected_bridges(self):
        # (0,0)-(1,0)-(1,1)-(2,1) touches column 0 and column 2
        self.assertTrue(build([3, 4], CONNECTED).is_spanning())

    def test_disconnected_bridges(self):
        self.assertFalse(build([3, 4], DISCONNECTED).is_spanning())

    def test_single_cell_axis(self):
        grid = Orthotope([1])
        grid.occupy(0)
        self.assertTrue(grid.is_spanning())

        grid = Orthotope([1, 5])
        grid.occupy(0, 3)
        self.assertTrue(grid.is_spanning())

    def test_line(self):
        grid = Orthotope([5])
        for x in range(4):
            grid.occupy(x)
            self.assertFalse(grid.is_spanning())
        grid.occupy(4)
        self.assertTrue(grid.is_spanning())

    def test_both_edges_without_path(self):
        grid = build([4, 2], [(0, 0), (3, 0), (0, 1), (3, 1)])
        self.assertFalse(grid.is_spanning())
        grid.occupy(1, 1)
        self.assertFalse(grid.is_spanning())
        grid.occupy(2, 1)
        self.assertTrue(grid.is_spanning())

    def test_three_dimensions(self):
        path = [(0, 0, 0), (1, 0, 0), (1, 1, 0), (1, 1, 1), (2, 1, 1)]
        self.assertTrue(build([3, 2, 2], path).is_spanning())

        broken = [c for c in path if c != (1, 1, 0)]
        self.assertFalse(build([3, 2, 2], broken).is_spanning())

    def test_full_grid(self):
        grid = Orthotope([4, 3, 2])
        while grid.empty_count:
            grid.occupy_random()
        self.assertTrue(grid.is_spanning())

    def test_search_details(self):
        search = SpanningSearch(build([3, 4], DISCONNECTED))
        self.assertFalse(search.search())
        # {(0,0)}, {(0,2)}, {(1,1),(2,1)}
        self.assertEqual(search.components, 3)
        self.assertEqual(search.visited_count, 4)
        self.assertIsNone(search.spanning_seed)

        grid = build([3, 4], CONNECTED)
        search = SpanningSearch(grid)
        self.assertTrue(search.search())
        self.assertIn(search.spanning_seed, grid.occupied)
        self.assertNotEqual(search.spanning_seed, "0,2")

    def test_run_yields_progress(self):
        # One long cluster on the left face only
        grid = Orthotope([2, 300])
        for y in range(300):
            grid.occupy(0, y)
        statuses = list(SpanningSearch(grid).run())
        self.assertEqual(statuses, ["Visited: 100", "Visited: 200", "Visited: 300", "Done"])

        grid.occupy(1, 150)
        self.assertEqual(list(SpanningSearch(grid).run())[-1], "Spanning")

        statuses = list(SpanningSearch(Orthotope([3, 3])).run())
        self.assertEqual(statuses, ["Done"])

    def test_corrupt_keys(self):
        grid = Orthotope([3, 4])
        grid.occupied.add("x")
        with self.assertRaises(CorruptState):
            grid.is_spanning()

        grid = Orthotope([3, 4])
        grid.occupied.add("7,7")
        with self.assertRaises(CorruptState):
            grid.is_spanning()

if __name__ == '__main__':
    unittest.main()
