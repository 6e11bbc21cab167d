"""
HandPose Types.
Central definition of Data Contracts to prevent circular imports.
"""
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Optional, Tuple

import numpy as np

from handpose.config import BONE_NAMES, FINGER_BONES, WRIST_BONE
from handpose.hand_utils import to_joint_array

# --- SKELETON TYPES ---
class FingerType(IntEnum):
    THUMB = 0
    INDEX = 1
    MIDDLE = 2
    RING = 3
    PINKY = 4

class FingerShape(IntEnum):
    EXTENDED = 1
    CURVED = 2
    BENT = 3
    FOLDED = 4
    INWARD = 5
    MAX = 6  # Classifier defect, never a real pose

# Shape-vector slot value meaning "any shape"
DONT_CARE = 0

class HandType(Enum):
    LEFT = "left"
    RIGHT = "right"

    @property
    def other(self) -> "HandType":
        return HandType.RIGHT if self is HandType.LEFT else HandType.LEFT

    @classmethod
    def from_label(cls, raw_label: str) -> "HandType":
        if isinstance(raw_label, cls):
            return raw_label
        clean = str(raw_label or "").strip().lower()
        for member in cls:
            if member.value == clean:
                return member
        raise ValueError(f"Unknown hand: {raw_label!r}")

# --- ORIENTATION TYPES ---
class Orientation(Enum):
    # Forward axis
    PALM_BACK = "Palm_Back"
    PALM_MID_FR = "Palm_Mid_Fr"
    PALM_FRONT = "Palm_Front"
    # Lateral axis
    PALM_OUT = "Palm_Out"
    PALM_MID_IN = "Palm_Mid_In"
    PALM_IN = "Palm_In"
    # Vertical axis
    PALM_UP = "Palm_Up"
    PALM_MID_DW = "Palm_Mid_Dw"
    PALM_DOWN = "Palm_Down"
    # Knuckle rotation
    KNUCKLES_DOWN = "Knuckles_Down"
    KNUCKLES_MID = "Knuckles_Mid"
    KNUCKLES_UP = "Knuckles_Up"
    KNUCKLES_IN = "Knuckles_In"
    # Thumb rotation
    THUMB_DOWN = "Thumb_Down"
    THUMB_MID = "Thumb_Mid"
    THUMB_UP = "Thumb_Up"
    THUMB_IN = "Thumb_In"

    INVALID = "Invalid"

# Slots of the orientation reading
FORWARD, LATERAL, VERTICAL, KNUCKLES, THUMB = range(5)

# --- CONSENSUS TYPES ---
class GestureSentinel(str, Enum):
    NONE = "None"
    INVALID_COUNT = "Number of libraries invalid"
    CONFLICT = "Conflicting gestures"

class TieBreak(Enum):
    LAST = "last"      # Later library overwrites earlier ones
    FIRST = "first"    # Earliest library in the frame keeps its label
    REJECT = "reject"  # Disagreement becomes GestureSentinel.CONFLICT

# --- FRAME TYPES ---
@dataclass(frozen=True)
class Axes:
    """Unit direction vectors of a tracked transform, in world space."""
    forward: np.ndarray
    right: np.ndarray
    up: np.ndarray

    @classmethod
    def from_raw(cls, forward, right, up) -> "Axes":
        return cls(*(np.asarray(v, dtype=float).reshape(3) for v in (forward, right, up)))

    @property
    def is_finite(self) -> bool:
        return all(np.all(np.isfinite(v)) for v in (self.forward, self.right, self.up))

@dataclass(frozen=True)
class JointFrame:
    """
    One tracked hand for one frame.
    positions: (24, 3) bone world positions in metres, indexed by bone id.
    pinch: five pinch strengths in [0, 1], Thumb..Pinky.
    """
    positions: np.ndarray
    pinch: Tuple[float, ...] = (0.0, 0.0, 0.0, 0.0, 0.0)
    axes: Optional[Axes] = None
    root: Optional[np.ndarray] = None

    def __post_init__(self):
        if self.positions.shape != (len(BONE_NAMES), 3):
            raise ValueError(f"Expected ({len(BONE_NAMES)}, 3) joint positions, got {self.positions.shape}")
        if len(self.pinch) != len(FingerType):
            raise ValueError(f"Expected {len(FingerType)} pinch strengths, got {len(self.pinch)}")

    @classmethod
    def from_raw(cls, joints: Any, pinch=None, axes: Optional[Axes] = None, root=None) -> "JointFrame":
        positions = to_joint_array(joints)
        pinch = tuple(float(p) for p in pinch) if pinch is not None else (0.0,) * len(FingerType)
        root = np.asarray(root, dtype=float).reshape(3) if root is not None else positions[WRIST_BONE].copy()
        return cls(positions=positions, pinch=pinch, axes=axes, root=root)

    def finger_joints(self, finger: FingerType) -> Tuple[np.ndarray, ...]:
        """(wrist, proximal, intermediate, distal, tip) positions of a finger."""
        ids = FINGER_BONES[int(finger)]
        return (self.positions[WRIST_BONE],) + tuple(self.positions[i] for i in ids)

    @property
    def is_finite(self) -> bool:
        return bool(np.all(np.isfinite(self.positions)))

@dataclass(frozen=True)
class HeadFrame:
    axes: Axes
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))

@dataclass(frozen=True)
class PoseSample:
    """Everything the Pose Source delivers for one frame."""
    head: HeadFrame
    left: Optional[JointFrame] = None
    right: Optional[JointFrame] = None
    delta_time: float = 0.0

    def hand(self, hand_type: HandType) -> Optional[JointFrame]:
        return self.left if hand_type is HandType.LEFT else self.right

@dataclass(frozen=True)
class HandPose:
    """Derived per-hand record. Computed once per frame, never mutated."""
    shape: Tuple[FingerShape, ...]
    orientation: Tuple[Orientation, ...]
    frame: Optional[JointFrame] = None

    @property
    def is_tracked(self) -> bool:
        return self.frame is not None

    @property
    def shape_ints(self) -> Tuple[int, ...]:
        return tuple(int(s) for s in self.shape)

    @classmethod
    def untracked(cls) -> "HandPose":
        return cls(shape=(FingerShape.MAX,) * len(FingerType),
                   orientation=(Orientation.INVALID,) * 5,
                   frame=None)
