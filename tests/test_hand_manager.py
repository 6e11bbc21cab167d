import threading
import unittest

import numpy as np

from handpose.config import CONFIG
from handpose.core.types import KNUCKLES, FingerType, HandType, HeadFrame, JointFrame, Orientation
from handpose.hand_manager import HandManager
from handpose.libraries.asl import ASLGestures
from handpose.libraries.example import ExampleGestures
from handpose.libraries.social import SocialGestures

from pose_factory import (ASL_A, ASL_B, HEAD_AXES, KNUCKLES_UP_PALM_BACK, build_positions,
                          make_frame, make_sample)

class TestHandManager(unittest.TestCase):
    def setUp(self):
        CONFIG["PRIMARY_HAND"] = "right"
        CONFIG["CONSENSUS_TIE_BREAK"] = "last"
        self.manager = HandManager([ExampleGestures(), ASLGestures(), SocialGestures()])

    def test_snapshots_age_once_per_frame(self):
        """Three libraries, one tick: the timer drops by dt once, not three times."""
        self.manager.add_snapshot(None, "Held", False, 1.0)
        self.manager.process(make_sample(dt=0.25))
        self.assertAlmostEqual(self.manager.snapshot_times()["Held"], 0.75)

    def test_default_primary_is_config(self):
        CONFIG["PRIMARY_HAND"] = "left"
        manager = HandManager()
        self.assertEqual(manager.primary_hand_type, HandType.LEFT)
        self.assertEqual(manager.secondary_hand_type, HandType.RIGHT)
        CONFIG["PRIMARY_HAND"] = "right"

    def test_primary_and_secondary_readback(self):
        sample = make_sample(right=make_frame(ASL_A, pinch=[0, 0.3, 0, 0, 0]),
                             left=make_frame(ASL_B))
        self.manager.process(sample)
        self.assertEqual(self.manager.primary_hand_shape(), (1, 4, 4, 4, 4))
        self.assertEqual(self.manager.secondary_hand_shape(), (4, 1, 1, 1, 1))
        self.assertTrue(self.manager.primary_exact_hand_shape([1, 0, 0, 0, 0]))
        self.assertTrue(self.manager.secondary_tolerant_hand_shape([4, 1, 1, 1, 2], 1, 0.8))
        self.assertEqual(self.manager.primary_finger_pinch(FingerType.INDEX), 0.3)
        self.assertTrue(self.manager.secondary_finger_touch(FingerType.INDEX, FingerType.MIDDLE))
        self.assertEqual(self.manager.primary_orientation()[KNUCKLES], Orientation.KNUCKLES_UP)

        self.manager.set_primary_hand(HandType.LEFT)
        self.assertEqual(self.manager.primary_hand_shape(), (4, 1, 1, 1, 1))

    def test_untracked_hand_readback(self):
        self.manager.process(make_sample(right=make_frame(ASL_A)))
        self.assertEqual(self.manager.secondary_hand_shape(), (6, 6, 6, 6, 6))
        self.assertEqual(self.manager.secondary_orientation(), (Orientation.INVALID,) * 5)
        self.assertFalse(self.manager.secondary_finger_touch(FingerType.INDEX, FingerType.MIDDLE))
        self.assertEqual(self.manager.secondary_finger_pinch(FingerType.INDEX), 0.0)
        self.assertIsNone(self.manager.secondary_location())
        self.assertFalse(self.manager.secondary_exact_hand_shape([0, 0, 0, 4, 0]))

    def test_location_in_head_frame(self):
        """Location is the root offset from the head, expressed as (forward, right, up)."""
        frame = JointFrame.from_raw(build_positions(ASL_A), axes=KNUCKLES_UP_PALM_BACK, root=(0.1, 0.2, 0.3))
        self.manager.process(make_sample(right=frame))
        np.testing.assert_allclose(self.manager.primary_location(), [0.3, 0.1, 0.2])

        head = HeadFrame(axes=HEAD_AXES, position=np.array([0.1, 0.0, 0.0]))
        self.manager.process(make_sample(right=frame, head=head))
        np.testing.assert_allclose(self.manager.primary_location(), [0.3, 0.0, 0.2])

    def test_bone_names(self):
        self.assertEqual(HandManager.bone_name(0), "Hand_WristRoot")
        self.assertEqual(HandManager.bone_name(19), "Hand_ThumbTip")
        self.assertEqual(HandManager.bone_name(-1), "INVALID ID")
        self.assertEqual(HandManager.bone_name(24), "INVALID ID")
        self.assertEqual(HandManager.bone_name("3"), "INVALID ID")

    def test_set_gesture_active_by_library(self):
        self.assertTrue(self.manager.set_gesture_active("SocialGestures", "snap", False))
        self.assertFalse(self.manager.library("SocialGestures").is_gesture_active("snap"))
        with self.assertLogs(level="WARNING"):
            self.assertFalse(self.manager.set_gesture_active("Klingon", "snap", True))

    def test_history(self):
        self.manager.process(make_sample(right=make_frame(ASL_A)))
        self.assertEqual(self.manager.previous_gesture, "None")
        self.assertEqual(self.manager.current_gesture, "None")

    def test_concurrent_ticks(self):
        """Ticks from several threads serialise; the counters stay consistent."""
        errors = []
        sample = make_sample(right=make_frame(ASL_A), dt=0.001)

        def worker():
            try:
                for _ in range(20):
                    self.manager.process(sample)
                    if not self.manager.consensus.is_consistent:
                        errors.append("inconsistent")
            except Exception as e:  # collected for the assertion below
                errors.append(repr(e))

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual(errors, [])

    def test_host_snapshot_waits_for_tick(self):
        """A host add_snapshot from another thread blocks while a tick holds the lock."""
        writer = threading.Thread(target=self.manager.add_snapshot, args=(None, "X", False, 1.0))
        with self.manager._lock:
            writer.start()
            writer.join(timeout=0.2)
            self.assertTrue(writer.is_alive())
            self.assertEqual(self.manager.snapshots.names, [])
        writer.join(timeout=2.0)
        self.assertFalse(writer.is_alive())
        self.assertEqual(self.manager.snapshot_names(), ["X"])

    def test_primary_switch_waits_for_tick(self):
        switcher = threading.Thread(target=self.manager.set_primary_hand, args=("left",))
        with self.manager._lock:
            switcher.start()
            switcher.join(timeout=0.2)
            self.assertEqual(self.manager.primary_hand_type, HandType.RIGHT)
        switcher.join(timeout=2.0)
        self.assertEqual(self.manager.primary_hand_type, HandType.LEFT)

if __name__ == '__main__':
    unittest.main()
