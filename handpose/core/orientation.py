"""
HandPose Orientation Classifier.
Buckets the palm's attitude relative to the viewer into a 5-slot reading.

Two stages per frame:
1. Readings: seven dot products between the reference (head) axes and the
   hand's up axis and negated right / forward axes.
2. Buckets: each reading is thresholded into its axis scale. The knuckle and
   thumb slots then get a second look from a perpendicular reading that can
   override a Mid bucket to *_In.
"""
from collections import namedtuple
from typing import Optional, Tuple

import numpy as np

from handpose.config import CONFIG
from handpose.core.types import Axes, HandType, Orientation

O = Orientation

AxisReadings = namedtuple(
    "AxisReadings",
    ["forward", "lateral", "vertical", "knuckle_lateral", "knuckle_vertical", "thumb_forward", "thumb_vertical"],
)

# (high, mid, low) labels per hand; "high" is reading >= +threshold
_FORWARD = {HandType.RIGHT: (O.PALM_BACK, O.PALM_MID_FR, O.PALM_FRONT),
            HandType.LEFT: (O.PALM_FRONT, O.PALM_MID_FR, O.PALM_BACK)}
_LATERAL = {HandType.RIGHT: (O.PALM_IN, O.PALM_MID_IN, O.PALM_OUT),
            HandType.LEFT: (O.PALM_IN, O.PALM_MID_IN, O.PALM_OUT)}
_VERTICAL = {HandType.RIGHT: (O.PALM_DOWN, O.PALM_MID_DW, O.PALM_UP),
             HandType.LEFT: (O.PALM_UP, O.PALM_MID_DW, O.PALM_DOWN)}
_KNUCKLES = {HandType.RIGHT: (O.KNUCKLES_UP, O.KNUCKLES_MID, O.KNUCKLES_DOWN),
             HandType.LEFT: (O.KNUCKLES_DOWN, O.KNUCKLES_MID, O.KNUCKLES_UP)}
_THUMB = {HandType.RIGHT: (O.THUMB_UP, O.THUMB_MID, O.THUMB_DOWN),
          HandType.LEFT: (O.THUMB_DOWN, O.THUMB_MID, O.THUMB_UP)}

INVALID_READING = (O.INVALID,) * 5

def _bucket(value: float, high: float, low: float, labels) -> Orientation:
    if value >= high:
        return labels[0]
    if value <= low:
        return labels[2]
    return labels[1]

class OrientationClassifier:

    def readings(self, hand_axes: Axes, reference_axes: Axes) -> AxisReadings:
        ref, hand = reference_axes, hand_axes
        return AxisReadings(
            forward=float(np.dot(ref.forward, hand.up)),
            lateral=float(np.dot(ref.right, hand.up)),
            vertical=float(np.dot(ref.up, hand.up)),
            knuckle_lateral=float(np.dot(ref.right, -hand.right)),
            knuckle_vertical=float(np.dot(ref.up, -hand.right)),
            thumb_forward=float(np.dot(ref.forward, -hand.forward)),
            thumb_vertical=float(np.dot(ref.up, -hand.forward)),
        )

    def bucket(self, r: AxisReadings, handedness: HandType) -> Tuple[Orientation, ...]:
        fwd_t = CONFIG["FORWARD_THRESHOLD"]
        lat_t = CONFIG["LATERAL_THRESHOLD"]
        vert_t = CONFIG["VERTICAL_THRESHOLD"]
        thumb_t = CONFIG["THUMB_ROT_THRESHOLD"]
        override = CONFIG["INWARD_OVERRIDE"]

        forward = _bucket(r.forward, fwd_t, -fwd_t, _FORWARD[handedness])
        lateral = _bucket(r.lateral, lat_t, -lat_t, _LATERAL[handedness])
        vertical = _bucket(r.vertical, vert_t, -vert_t, _VERTICAL[handedness])

        knuckles = _bucket(r.knuckle_vertical, CONFIG["KNUCKLES_UP_THRESHOLD"],
                           CONFIG["KNUCKLES_DOWN_THRESHOLD"], _KNUCKLES[handedness])
        if knuckles == O.KNUCKLES_MID and r.knuckle_lateral <= override:
            knuckles = O.KNUCKLES_IN

        thumb = _bucket(r.thumb_vertical, thumb_t, -thumb_t, _THUMB[handedness])
        if thumb == O.THUMB_MID and r.thumb_forward <= override:
            thumb = O.THUMB_IN

        return (forward, lateral, vertical, knuckles, thumb)

    def classify(self, hand_axes: Optional[Axes], reference_axes: Optional[Axes],
                 handedness: HandType) -> Tuple[Orientation, ...]:
        """Full (forward, lateral, vertical, knuckles, thumb) reading, INVALID when axes are missing."""
        if hand_axes is None or reference_axes is None:
            return INVALID_READING
        if not (hand_axes.is_finite and reference_axes.is_finite):
            return INVALID_READING
        return self.bucket(self.readings(hand_axes, reference_axes), handedness)
