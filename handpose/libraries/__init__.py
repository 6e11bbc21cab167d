"""
Gesture Library Context Definition.
Defines the Data Transfer Object (DTO) handed to every rule, the rule record,
and the GestureLibrary base that walks a rule table in priority order.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from handpose.core.kinematics import FingerKinematics
from handpose.core.shape_matching import exact_match, tolerant_match
from handpose.core.snapshots import SnapshotTracker
from handpose.core.types import FingerShape, FingerType, HandPose, Orientation

class HandContext:
    """
    A unified context object containing all data a rule needs to decide.
    Wraps the primary hand's derived pose (shape + orientation), contact
    queries on its joints, and the session's snapshot tracker.

    Shape comparisons never match the MAX defect sentinel.
    """
    def __init__(self, pose: HandPose, snapshots: SnapshotTracker, kinematics: FingerKinematics):
        self.pose = pose
        self.shape = pose.shape
        self.orientation = pose.orientation
        self.snapshots = snapshots
        self._kinematics = kinematics
        self._touch_cache: Dict[Tuple[FingerType, FingerType], bool] = {}

    @property
    def is_tracked(self) -> bool:
        return self.pose.is_tracked

    # --- FINGER SHAPE ---
    def is_shape(self, finger: FingerType, *shapes: FingerShape) -> bool:
        actual = self.shape[finger]
        return actual != FingerShape.MAX and actual in shapes

    def not_shape(self, finger: FingerType, shape: FingerShape) -> bool:
        actual = self.shape[finger]
        return actual != FingerShape.MAX and actual != shape

    def at_least(self, finger: FingerType, shape: FingerShape) -> bool:
        """At least as curled as `shape`."""
        actual = self.shape[finger]
        return actual != FingerShape.MAX and actual >= shape

    def at_most(self, finger: FingerType, shape: FingerShape) -> bool:
        actual = self.shape[finger]
        return actual != FingerShape.MAX and actual <= shape

    def exact(self, desired: Sequence[int]) -> bool:
        return exact_match(desired, self.shape)

    def tolerant(self, desired: Sequence[int], tolerance: int, min_fraction: float) -> bool:
        return tolerant_match(desired, self.shape, tolerance, min_fraction)

    # --- ORIENTATION ---
    def faces(self, *orientations: Orientation) -> bool:
        """Every given value is present in the reading."""
        return all(o in self.orientation for o in orientations)

    def faces_any(self, *orientations: Orientation) -> bool:
        return any(o in self.orientation for o in orientations)

    def faces_not(self, orientation: Orientation) -> bool:
        """Reading is valid and does not contain `orientation`."""
        return Orientation.INVALID not in self.orientation and orientation not in self.orientation

    # --- CONTACT ---
    def touching(self, finger_1: FingerType, finger_2: FingerType) -> bool:
        if self.pose.frame is None:
            return False
        key = (min(finger_1, finger_2), max(finger_1, finger_2))
        if key not in self._touch_cache:
            self._touch_cache[key] = self._kinematics.fingers_touching(finger_1, finger_2, self.pose.frame)
        return self._touch_cache[key]

    def pinch(self, finger: FingerType) -> float:
        if self.pose.frame is None:
            return 0.0
        return self._kinematics.pinch_strength(finger, self.pose.frame)

    # --- SEQUENCES ---
    def add_snapshot(self, previous: Optional[str], current: str, is_final: bool, ttl: float) -> Optional[str]:
        return self.snapshots.add_snapshot(previous, current, is_final, ttl)

@dataclass(frozen=True)
class SnapshotStage:
    """One stage of a multi-part gesture, routed through AddSnapshot."""
    previous: Optional[str]
    current: str
    is_final: bool
    ttl: float

@dataclass(frozen=True)
class GestureRule:
    """
    One row of a library's rule table.
    label: vote when the predicate holds (ignored when stage or resolve is set).
    toggles: names that enable the rule; any one being active is enough.
    """
    label: str
    toggles: Tuple[str, ...]
    predicate: Callable[[HandContext], bool]
    stage: Optional[SnapshotStage] = None
    resolve: Optional[Callable[[HandContext, "GestureLibrary"], Optional[str]]] = None

    def vote(self, ctx: HandContext, library: "GestureLibrary") -> Optional[str]:
        if self.resolve is not None:
            return self.resolve(ctx, library)
        if self.stage is not None:
            s = self.stage
            return ctx.add_snapshot(s.previous, s.current, s.is_final, s.ttl)
        return self.label

class GestureLibrary:
    """
    Named toggles plus an ordered rule table.
    First enabled rule whose predicate holds decides the library's vote.
    """
    name = "GestureLibrary"
    TOGGLES: Tuple[str, ...] = ()
    RULES: Tuple[GestureRule, ...] = ()

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._toggles: Dict[str, bool] = {t: True for t in self.TOGGLES}

    def gesture_list(self) -> List[str]:
        return list(self._toggles)

    def set_gesture_active(self, gesture: str, is_active: bool) -> bool:
        if gesture not in self._toggles:
            logging.warning(f"⚠️ {self.name}: no gesture toggle named {gesture!r}")
            return False
        self._toggles[gesture] = bool(is_active)
        return True

    def is_gesture_active(self, gesture: str) -> bool:
        return self._toggles.get(gesture, False)

    def _rule_enabled(self, rule: GestureRule) -> bool:
        return any(self._toggles.get(t, False) for t in rule.toggles)

    def evaluate(self, ctx: HandContext) -> Optional[str]:
        if not ctx.is_tracked:
            return None
        for rule in self.RULES:
            if self._rule_enabled(rule) and rule.predicate(ctx):
                return rule.vote(ctx, self)
        return None
