import unittest

import numpy as np

from handpose.config import CONFIG
from handpose.hand_manager import HandManager
from handpose.libraries.asl_alphabet import ASLAlphabetGestures
from handpose.ui.hud import HUD

from pose_factory import ASL_A, make_frame, make_sample

class TestHUD(unittest.TestCase):
    def setUp(self):
        CONFIG["PRIMARY_HAND"] = "right"
        CONFIG["CONSENSUS_TIE_BREAK"] = "last"
        self.hud = HUD()
        self.manager = HandManager([ASLAlphabetGestures()])

    def test_readouts_follow_manager(self):
        self.manager.process(make_sample(right=make_frame(ASL_A, pinch=[0, 0.5, 0, 0, 0])))
        lines = self.hud.readouts(self.manager)
        self.assertEqual(lines["Gesture"], "A")
        self.assertEqual(lines["Shape"], "14444")
        self.assertTrue(lines["Orient"].startswith("Palm_Back"))
        self.assertEqual(lines["Pinch"], "0.50 0.00 0.00 0.00")
        self.assertEqual(lines["Loc 2nd"], "-")
        self.assertEqual(lines["Touch (2nd)"], "0 0 0 0")

    def test_render_blank_canvas(self):
        """Without a camera frame the HUD draws onto a dark canvas of its own size."""
        frame = self.hud.render(self.manager)
        self.assertEqual(frame.shape, (360, 640, 3))
        self.assertEqual(frame.dtype, np.uint8)
        self.assertGreater(int(frame.sum()), 0)

    def test_status_color(self):
        self.assertEqual(self.hud._status_color(self.manager), self.hud.C_CYAN)
        self.manager.add_snapshot(None, "J_Start", False, 1.0)
        self.assertEqual(self.hud._status_color(self.manager), self.hud.C_ORANGE)
        self.manager.consensus.update_gesture("A")
        self.assertEqual(self.hud._status_color(self.manager), self.hud.C_GREEN)
        self.manager.consensus.update_gesture("Conflicting gestures")
        self.assertEqual(self.hud._status_color(self.manager), self.hud.C_RED)

if __name__ == '__main__':
    unittest.main()
