import unittest
from unittest import mock
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from bridge_engine.core.grid import Orthotope
from bridge_engine.algo.builder import RandomBridgeBuilder, run_trials

class TestBuilder(unittest.TestCase):
    def test_completes(self):
        grid = Orthotope([5, 4], seed=7)
        builder = RandomBridgeBuilder(grid)
        builder.run_all()

        self.assertTrue(builder.completed)
        self.assertFalse(builder.exhausted)
        self.assertTrue(grid.is_spanning())
        self.assertEqual(builder.step_count, grid.occupied_count)
        self.assertLessEqual(builder.step_count, grid.cell_count)
        self.assertTrue(grid.is_occupied(*builder.last_cell))
        grid.check_invariant()

    def test_stops_at_first_spanning_step(self):
        grid = Orthotope([6, 6], seed=99)
        builder = RandomBridgeBuilder(grid)
        builder.run_all()
        steps = builder.step_count

        # Same seed, one step short
        grid2 = Orthotope([6, 6], seed=99)
        builder2 = RandomBridgeBuilder(grid2, max_steps=steps - 1)
        builder2.run_all()
        self.assertFalse(builder2.completed)
        self.assertFalse(grid2.is_spanning())
        self.assertEqual(grid2.occupied_count, steps - 1)

    def test_invariant_every_step(self):
        grid = Orthotope([4, 3, 3], seed=5)
        builder = RandomBridgeBuilder(grid)
        for status in builder.run():
            grid.check_invariant()
            self.assertEqual(grid.occupied_count + grid.empty_count, grid.cell_count)
        self.assertEqual(status, "Done")

    def test_max_steps(self):
        grid = Orthotope([10, 10], seed=1)
        builder = RandomBridgeBuilder(grid, max_steps=0)
        statuses = list(builder.run())
        self.assertEqual(statuses, ["Stopped"])
        self.assertEqual(builder.step_count, 0)
        self.assertFalse(builder.completed)
        self.assertEqual(grid.occupied_count, 0)

    def test_already_spanning(self):
        grid = Orthotope([1])
        grid.occupy(0)
        builder = RandomBridgeBuilder(grid)
        builder.run_all()
        self.assertTrue(builder.completed)
        self.assertEqual(builder.step_count, 0)

    def test_exhausted(self):
        builder = RandomBridgeBuilder(Orthotope([]))
        with self.assertLogs("bridge_engine.algo.builder", level="WARNING"):
            statuses = list(builder.run())
        self.assertEqual(statuses, ["Exhausted"])
        self.assertTrue(builder.exhausted)
        self.assertFalse(builder.completed)

    def test_delay_between_steps(self):
        grid = Orthotope([4, 4], seed=11)
        builder = RandomBridgeBuilder(grid, delay=0.3)
        with mock.patch("bridge_engine.algo.builder.time.sleep") as sleep:
            builder.run_all()
        # No pause after the final, spanning step
        self.assertEqual(sleep.call_count, builder.step_count - 1)
        if sleep.call_count:
            sleep.assert_called_with(0.3)

    def test_logs_completion(self):
        grid = Orthotope([3, 3], seed=2)
        with self.assertLogs("bridge_engine.algo.builder", level="INFO") as logs:
            RandomBridgeBuilder(grid).run_all()
        self.assertTrue(any("Bridge completed" in line for line in logs.output))

    def test_run_trials(self):
        results = run_trials([4, 4], trials=3, seed=1)
        self.assertEqual(len(results), 3)
        for r in results:
            self.assertTrue(r["completed"])
            self.assertGreater(r["occupancy"], 0.0)
            self.assertLessEqual(r["occupancy"], 1.0)
            self.assertEqual(r["occupancy"], r["steps"] / 16)

        again = run_trials([4, 4], trials=3, seed=1)
        self.assertEqual([r["steps"] for r in results], [r["steps"] for r in again])

if __name__ == '__main__':
    unittest.main()
