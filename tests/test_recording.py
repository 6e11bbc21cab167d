import os
import shutil
import sys
import tempfile
import unittest

import numpy as np
import pandas as pd

from handpose.config import CONFIG
from handpose.hand_manager import HandManager
from handpose.libraries.asl_alphabet import ASLAlphabetGestures
from handpose.recording import (RecordedPoseSource, load_recording, recording_columns,
                                row_to_sample, save_recording)

from pose_factory import ASL_A, ASL_B, make_frame, make_sample

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'tools')))
from replay_session import replay

class TestRecording(unittest.TestCase):
    def setUp(self):
        CONFIG["PRIMARY_HAND"] = "right"
        CONFIG["CONSENSUS_TIE_BREAK"] = "last"
        self.tmp = tempfile.mkdtemp()
        self.path = os.path.join(self.tmp, "session.csv")

    def tearDown(self):
        shutil.rmtree(self.tmp)

    def test_replay_recognises_saved_session(self):
        """A saved session replays to the same gestures it was recorded with."""
        samples = [
            make_sample(right=make_frame(ASL_A, pinch=[0, 0.2, 0, 0, 0]), dt=0.02),
            make_sample(right=make_frame(ASL_B), dt=0.02),
            make_sample(dt=0.02),
        ]
        self.assertEqual(save_recording(samples, self.path), 3)

        source = RecordedPoseSource(self.path)
        self.assertEqual(len(source), 3)
        timeline = replay(source, HandManager([ASLAlphabetGestures()]))
        self.assertEqual([g for _, _, g in timeline], ["A", "B", "None"])
        self.assertIsNone(source.read())

    def test_untracked_hand_round_trip(self):
        save_recording([make_sample(right=make_frame(ASL_A), dt=0.5)], self.path)
        sample = row_to_sample(load_recording(self.path).iloc[0])
        self.assertIsNone(sample.left)
        self.assertIsNotNone(sample.right)
        self.assertAlmostEqual(sample.delta_time, 0.5)
        np.testing.assert_allclose(sample.right.positions, make_frame(ASL_A).positions)

    def test_missing_dt_uses_default(self):
        save_recording([make_sample(dt=0.5)], self.path)
        df = load_recording(self.path)
        row = df.iloc[0].copy()
        row["dt"] = np.nan
        self.assertAlmostEqual(row_to_sample(row).delta_time, CONFIG["REPLAY_DEFAULT_DT"])

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_recording(os.path.join(self.tmp, "nope.csv"))

    def test_malformed_file(self):
        pd.DataFrame({"foo": [1]}).to_csv(self.path, index=False)
        with self.assertRaises(ValueError):
            load_recording(self.path)

    def test_column_layout(self):
        cols = recording_columns()
        self.assertEqual(cols[0], "dt")
        # dt + head (4 vectors) + 2 hands * (tracked + 24 joints + 5 pinch + 3 axes)
        self.assertEqual(len(cols), 1 + 12 + 2 * (1 + 72 + 5 + 9))

if __name__ == '__main__':
    unittest.main()
