import unittest

from handpose.config import CONFIG
from handpose.core.state_manager import ConsensusState
from handpose.core.types import GestureSentinel

def run_frame(state, votes, library_count=None):
    state.begin_frame(len(votes) if library_count is None else library_count)
    for vote in votes:
        state.report(vote)
    return state.end_frame()

class TestConsensusState(unittest.TestCase):
    def setUp(self):
        self.state = ConsensusState()
        CONFIG["CONSENSUS_TIE_BREAK"] = "last"

    def test_initial_state(self):
        self.assertEqual(self.state.curr_gesture, "None")
        self.assertEqual(self.state.prev_gesture, "None")

    def test_all_empty_frame(self):
        """Three libraries with nothing to say leave 'None'."""
        run_frame(self.state, ["X"])
        self.assertEqual(run_frame(self.state, [None, None, None]), "None")

    def test_single_vote_wins(self):
        self.assertEqual(run_frame(self.state, [None, "X", None]), "X")
        self.assertEqual(self.state.prev_gesture, "None")

    def test_history_rolls_over(self):
        """prev_gesture is the gesture that stood when the frame began."""
        run_frame(self.state, ["Rock"])
        run_frame(self.state, ["Paper"])
        self.assertEqual(self.state.prev_gesture, "Rock")
        self.assertEqual(self.state.curr_gesture, "Paper")

    def test_too_many_reports(self):
        """A fourth report for three libraries is an inconsistency, whatever it says."""
        with self.assertLogs(level="ERROR"):
            result = run_frame(self.state, [None, "X", None, None], library_count=3)
        self.assertEqual(result, GestureSentinel.INVALID_COUNT.value)
        self.assertFalse(self.state.is_consistent)

    def test_counters_reset_each_frame(self):
        with self.assertLogs(level="ERROR"):
            run_frame(self.state, [None, None], library_count=1)
        self.assertEqual(run_frame(self.state, ["X"]), "X")
        self.assertTrue(self.state.is_consistent)

    def test_last_label_wins_by_default(self):
        with self.assertLogs(level="WARNING"):
            self.assertEqual(run_frame(self.state, ["X", None, "Y"]), "Y")

    def test_first_label_wins(self):
        CONFIG["CONSENSUS_TIE_BREAK"] = "first"
        with self.assertLogs(level="WARNING"):
            self.assertEqual(run_frame(self.state, ["X", "Y"]), "X")

    def test_reject_disagreement(self):
        CONFIG["CONSENSUS_TIE_BREAK"] = "reject"
        with self.assertLogs(level="WARNING"):
            self.assertEqual(run_frame(self.state, ["X", "Y"]), GestureSentinel.CONFLICT.value)
        self.assertEqual(run_frame(self.state, ["X", "X"]), "X")

    def test_no_libraries(self):
        run_frame(self.state, ["X"])
        self.assertEqual(run_frame(self.state, []), "None")

    def test_update_gesture(self):
        self.state.update_gesture("Wave")
        self.assertEqual(self.state.curr_gesture, "Wave")
        self.assertEqual(self.state.prev_gesture, "None")

    def tearDown(self):
        CONFIG["CONSENSUS_TIE_BREAK"] = "last"

if __name__ == '__main__':
    unittest.main()
