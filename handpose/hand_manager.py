"""
HandPose Session Manager (The Brain).
=====================================

This module owns one hand-tracking session and runs its per-frame tick:

1. **Classification:** both hands are reduced once to a HandPose
   (finger-shape vector + orientation vector).
2. **Sequencing:** snapshot timers age exactly once per frame.
3. **Rules:** every enabled gesture library votes on the primary hand.
4. **Consensus:** the votes collapse into one authoritative gesture.

Everything a host needs afterwards (current gesture, shapes, orientations,
touches, pinches, locations) is read back from the manager.
"""

import logging
import threading
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from handpose.config import BONE_NAMES, CONFIG
from handpose.core.kinematics import FingerKinematics
from handpose.core.orientation import OrientationClassifier
from handpose.core.shape_matching import exact_match, tolerant_match
from handpose.core.snapshots import SnapshotTracker
from handpose.core.state_manager import ConsensusState
from handpose.core.types import (FingerType, HandPose, HandType, HeadFrame, JointFrame,
                                 Orientation, PoseSample)
from handpose.libraries import GestureLibrary, HandContext

INVALID_BONE = "INVALID ID"

class HandManager:
    """
    The per-session engine.

    Attributes:
        snapshots (SnapshotTracker): In-flight multi-stage gestures.
        consensus (ConsensusState): Current gesture and per-frame counters.
        libraries (list): Registered gesture libraries, evaluated in registration order.
    """
    def __init__(self, libraries: Sequence[GestureLibrary] = (), primary_hand=None):
        self.kinematics = FingerKinematics()
        self.orienter = OrientationClassifier()
        self.snapshots = SnapshotTracker()
        self.consensus = ConsensusState()
        self.libraries: List[GestureLibrary] = list(libraries)

        self.primary_hand_type = HandType.from_label(primary_hand or CONFIG["PRIMARY_HAND"])
        self._poses: Dict[HandType, HandPose] = {h: HandPose.untracked() for h in HandType}
        self._head: Optional[HeadFrame] = None
        self._lock = threading.Lock()

    # --- SETUP ---
    def register_library(self, library: GestureLibrary):
        self.libraries.append(library)

    def library(self, name: str) -> Optional[GestureLibrary]:
        for lib in self.libraries:
            if lib.name == name:
                return lib
        return None

    def set_gesture_active(self, library_name: str, gesture: str, is_active: bool) -> bool:
        lib = self.library(library_name)
        if lib is None:
            logging.warning(f"⚠️ No gesture library named {library_name!r}")
            return False
        return lib.set_gesture_active(gesture, is_active)

    def set_primary_hand(self, hand) -> None:
        with self._lock:
            self.primary_hand_type = HandType.from_label(hand)

    @property
    def secondary_hand_type(self) -> HandType:
        return self.primary_hand_type.other

    # --- THE TICK ---
    def process(self, sample: PoseSample) -> str:
        """Runs one frame and returns the current gesture."""
        with self._lock:
            active = [lib for lib in self.libraries if lib.enabled]
            self.consensus.begin_frame(len(active))
            self.snapshots.decrement(sample.delta_time)

            self._head = sample.head
            for hand in HandType:
                self._poses[hand] = self._classify(sample.hand(hand), hand)

            ctx = HandContext(self._poses[self.primary_hand_type], self.snapshots, self.kinematics)
            for lib in active:
                self.consensus.report(lib.evaluate(ctx))

            return self.consensus.end_frame()

    def _classify(self, frame: Optional[JointFrame], hand: HandType) -> HandPose:
        if frame is None:
            return HandPose.untracked()
        shape = self.kinematics.hand_shape(frame)
        reference = self._head.axes if self._head is not None else None
        orientation = self.orienter.classify(frame.axes, reference, hand)
        return HandPose(shape=shape, orientation=orientation, frame=frame)

    @property
    def current_gesture(self) -> str:
        return self.consensus.curr_gesture

    @property
    def previous_gesture(self) -> str:
        return self.consensus.prev_gesture

    # --- SEQUENCES ---
    # Host-side access shares the tick lock so it never lands mid-decrement
    def add_snapshot(self, previous: Optional[str], current: str, is_final: bool, ttl: float) -> Optional[str]:
        with self._lock:
            return self.snapshots.add_snapshot(previous, current, is_final, ttl)

    def snapshot_times(self) -> Dict[str, float]:
        with self._lock:
            return self.snapshots.times

    def snapshot_names(self) -> List[str]:
        with self._lock:
            return self.snapshots.names

    # --- POSE READ-BACK ---
    def pose(self, hand: HandType) -> HandPose:
        return self._poses[hand]

    def primary_hand_shape(self) -> Tuple[int, ...]:
        return self._poses[self.primary_hand_type].shape_ints

    def secondary_hand_shape(self) -> Tuple[int, ...]:
        return self._poses[self.secondary_hand_type].shape_ints

    def primary_orientation(self) -> Tuple[Orientation, ...]:
        return self._poses[self.primary_hand_type].orientation

    def secondary_orientation(self) -> Tuple[Orientation, ...]:
        return self._poses[self.secondary_hand_type].orientation

    def primary_exact_hand_shape(self, desired: Sequence[int]) -> bool:
        return exact_match(desired, self.primary_hand_shape())

    def secondary_exact_hand_shape(self, desired: Sequence[int]) -> bool:
        return exact_match(desired, self.secondary_hand_shape())

    def primary_tolerant_hand_shape(self, desired: Sequence[int], tolerance: int, min_fraction: float) -> bool:
        return tolerant_match(desired, self.primary_hand_shape(), tolerance, min_fraction)

    def secondary_tolerant_hand_shape(self, desired: Sequence[int], tolerance: int, min_fraction: float) -> bool:
        return tolerant_match(desired, self.secondary_hand_shape(), tolerance, min_fraction)

    def _finger_touch(self, hand: HandType, finger_1: FingerType, finger_2: FingerType) -> bool:
        frame = self._poses[hand].frame
        if frame is None:
            return False
        return self.kinematics.fingers_touching(finger_1, finger_2, frame)

    def primary_finger_touch(self, finger_1: FingerType, finger_2: FingerType) -> bool:
        return self._finger_touch(self.primary_hand_type, finger_1, finger_2)

    def secondary_finger_touch(self, finger_1: FingerType, finger_2: FingerType) -> bool:
        return self._finger_touch(self.secondary_hand_type, finger_1, finger_2)

    def _finger_pinch(self, hand: HandType, finger: FingerType) -> float:
        frame = self._poses[hand].frame
        if frame is None:
            return 0.0
        return self.kinematics.pinch_strength(finger, frame)

    def primary_finger_pinch(self, finger: FingerType) -> float:
        return self._finger_pinch(self.primary_hand_type, finger)

    def secondary_finger_pinch(self, finger: FingerType) -> float:
        return self._finger_pinch(self.secondary_hand_type, finger)

    def _location(self, hand: HandType) -> Optional[np.ndarray]:
        """Hand root relative to the head as (forward, right, up)."""
        frame = self._poses[hand].frame
        if frame is None or self._head is None:
            return None
        offset = frame.root - self._head.position
        axes = self._head.axes
        return np.array([np.dot(axes.forward, offset), np.dot(axes.right, offset), np.dot(axes.up, offset)])

    def primary_location(self) -> Optional[np.ndarray]:
        return self._location(self.primary_hand_type)

    def secondary_location(self) -> Optional[np.ndarray]:
        return self._location(self.secondary_hand_type)

    @staticmethod
    def bone_name(bone_id: int) -> str:
        if not isinstance(bone_id, (int, np.integer)) or not 0 <= bone_id < len(BONE_NAMES):
            return INVALID_BONE
        return BONE_NAMES[bone_id]
