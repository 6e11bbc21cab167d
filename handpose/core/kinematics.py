"""
HandPose Kinematics (The Finger Classifier).
Turns four joints of a finger into one discrete FingerShape.

Every finger is read through three dot products of unit segment vectors:
  bigStraight : is the whole finger a straight line from its base?
  litStraight : is the outer half (intermediate -> tip) straight?
  direction   : does the finger point along the palm or back into it?
The thumb has its own geometry and a graded direction threshold.
"""
import logging
from typing import Tuple

import numpy as np

from handpose.config import CONFIG
from handpose.core.types import FingerShape, FingerType, JointFrame
from handpose.hand_utils import unit

class FingerKinematics:

    def classify(self, finger: FingerType, frame: JointFrame) -> FingerShape:
        """
        Pure function of the joint positions: same input, same shape.
        Returns FingerShape.MAX when no rule matches or the input is unusable.
        """
        wrist, prox, inter, dist, tip = frame.finger_joints(finger)
        if not all(np.all(np.isfinite(p)) for p in (wrist, prox, inter, dist, tip)):
            logging.warning(f"⚠️ Non-finite joints on {finger.name}, shape unavailable")
            return FingerShape.MAX

        if finger == FingerType.THUMB:
            shape = self._classify_thumb(wrist, prox, inter, dist, tip)
        else:
            shape = self._classify_finger(wrist, prox, inter, dist, tip)

        if shape == FingerShape.MAX:
            logging.warning(f"⚠️ No shape rule matched {finger.name}, reporting MAX")
        return shape

    def _dot(self, a: np.ndarray, b: np.ndarray) -> float:
        min_len = CONFIG["MIN_SEGMENT_LENGTH"]
        return float(np.dot(unit(a, min_len), unit(b, min_len)))

    def _classify_finger(self, wrist, prox, inter, dist, tip) -> FingerShape:
        big_straight = self._dot(tip - prox, inter - prox) > CONFIG["BIG_STRAIGHT"]
        lit_straight = self._dot(tip - inter, dist - inter) > CONFIG["LIT_STRAIGHT"]
        direction = self._dot(tip - prox, prox - wrist) > CONFIG["DIRECTION"]

        # First match wins
        if big_straight and direction:
            return FingerShape.EXTENDED
        if lit_straight and direction:
            return FingerShape.CURVED
        if not lit_straight and direction:
            return FingerShape.BENT
        if not lit_straight and not direction:
            return FingerShape.FOLDED
        if lit_straight and not direction:
            return FingerShape.INWARD
        return FingerShape.MAX

    def _classify_thumb(self, wrist, prox, inter, dist, tip) -> FingerShape:
        lit_straight = self._dot(tip - dist, dist - inter) > CONFIG["LIT_STRAIGHT_THUMB"]
        direction = self._dot(tip - inter, prox - wrist)
        big_straight = self._dot(tip - dist, tip - inter) > CONFIG["BIG_STRAIGHT_THUMB"]

        extended = CONFIG["THUMB_DIR_EXTENDED"]
        curved = CONFIG["THUMB_DIR_CURVED"]
        floor = CONFIG["THUMB_DIR_FOLDED"]

        if lit_straight and direction > extended and big_straight:
            return FingerShape.EXTENDED
        if (lit_straight and direction > CONFIG["THUMB_DIR_BENT"]) or (not lit_straight and direction > curved):
            return FingerShape.CURVED
        if not lit_straight and floor < direction < curved:
            return FingerShape.BENT
        if not lit_straight and direction < floor:
            return FingerShape.FOLDED
        # Thumb tucked across the palm
        if big_straight and direction < extended:
            return FingerShape.INWARD
        return FingerShape.MAX

    def hand_shape(self, frame: JointFrame) -> Tuple[FingerShape, ...]:
        return tuple(self.classify(finger, frame) for finger in FingerType)

    # --- CONTACT ---
    def tip_distance_cm(self, finger_1: FingerType, finger_2: FingerType, frame: JointFrame) -> float:
        tip_1 = frame.finger_joints(finger_1)[4]
        tip_2 = frame.finger_joints(finger_2)[4]
        return float(np.linalg.norm(tip_1 - tip_2)) * CONFIG["UNITS_TO_CM"]

    def fingers_touching(self, finger_1: FingerType, finger_2: FingerType, frame: JointFrame) -> bool:
        """
        Tip-to-tip contact, with a pad fallback for the thumb:
        thumb distal against index proximal, or against middle intermediate.
        Order of arguments does not matter.
        """
        if finger_1 == finger_2:
            return False
        if self.tip_distance_cm(finger_1, finger_2, frame) < CONFIG["TOUCH_DISTANCE_CM"]:
            return True

        pair = {finger_1, finger_2}
        if FingerType.THUMB not in pair:
            return False
        other = (pair - {FingerType.THUMB}).pop()
        if other == FingerType.INDEX:
            pad = frame.finger_joints(FingerType.INDEX)[1]
        elif other == FingerType.MIDDLE:
            pad = frame.finger_joints(FingerType.MIDDLE)[2]
        else:
            return False

        thumb_distal = frame.finger_joints(FingerType.THUMB)[3]
        dist_cm = float(np.linalg.norm(thumb_distal - pad)) * CONFIG["UNITS_TO_CM"]
        return dist_cm < CONFIG["PAD_TOUCH_DISTANCE_CM"]

    def pinch_strength(self, finger: FingerType, frame: JointFrame) -> float:
        """Passthrough of the runtime's pinch strength, no rounding."""
        return frame.pinch[int(finger)]
