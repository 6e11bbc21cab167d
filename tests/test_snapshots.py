import unittest

from handpose.core.snapshots import SnapshotTracker

class TestSnapshotTracker(unittest.TestCase):
    def setUp(self):
        self.tracker = SnapshotTracker()

    def test_two_stage_sequence_completes(self):
        """Start, then finisher within the TTL, returns the final label."""
        self.assertIsNone(self.tracker.add_snapshot(None, "A", False, 1.0))
        self.tracker.decrement(0.5)
        self.assertEqual(self.tracker.add_snapshot("A", "B", True, 1.0), "B")
        self.assertFalse(self.tracker.is_tracked("A"))
        self.assertTrue(self.tracker.is_tracked("B"))

    def test_expired_start_breaks_sequence(self):
        self.tracker.add_snapshot(None, "A", False, 1.0)
        expired = self.tracker.decrement(1.0)
        self.assertEqual(expired, ["A"])
        self.assertIsNone(self.tracker.add_snapshot("A", "B", True, 1.0))
        self.assertEqual(len(self.tracker), 0)

    def test_finisher_without_start(self):
        """A finisher with no tracked predecessor is ignored and adds nothing."""
        self.assertIsNone(self.tracker.add_snapshot("A", "B", True, 1.0))
        self.assertFalse(self.tracker.is_tracked("B"))

    def test_holding_a_stage_refreshes_ttl(self):
        self.tracker.add_snapshot(None, "A", False, 1.0)
        self.tracker.decrement(0.75)
        self.tracker.add_snapshot(None, "A", False, 1.0)
        self.assertAlmostEqual(self.tracker.times["A"], 1.0)

    def test_holding_final_stage_keeps_reporting(self):
        """Once B is tracked, re-adding B keeps returning it without needing A."""
        self.tracker.add_snapshot(None, "A", False, 1.0)
        self.tracker.add_snapshot("A", "B", True, 0.5)
        self.assertEqual(self.tracker.add_snapshot("A", "B", True, 0.5), "B")
        self.assertAlmostEqual(self.tracker.times["B"], 0.5)

    def test_middle_stage(self):
        self.tracker.add_snapshot(None, "START", False, 1.0)
        self.assertIsNone(self.tracker.add_snapshot("START", "MIDDLE", False, 1.0))
        self.assertEqual(self.tracker.names, ["MIDDLE"])
        self.assertEqual(self.tracker.add_snapshot("MIDDLE", "END", True, 1.0), "END")

    def test_decrement_removes_at_zero(self):
        """An entry reaching exactly zero is gone."""
        self.tracker.add_snapshot(None, "A", False, 0.5)
        self.tracker.add_snapshot(None, "B", False, 2.0)
        self.assertEqual(self.tracker.decrement(0.5), ["A"])
        self.assertEqual(self.tracker.names, ["B"])
        self.assertAlmostEqual(self.tracker.times["B"], 1.5)

    def test_times_is_a_copy(self):
        self.tracker.add_snapshot(None, "A", False, 1.0)
        times = self.tracker.times
        times["A"] = 99.0
        self.assertAlmostEqual(self.tracker.times["A"], 1.0)

    def test_clear(self):
        self.tracker.add_snapshot(None, "A", False, 1.0)
        self.tracker.clear()
        self.assertEqual(len(self.tracker), 0)

if __name__ == '__main__':
    unittest.main()
