"""
HandPose Configuration Management.
==================================

This module defines the threshold space for the HandPose gesture engine.
The parameters are organized into the same "Layer Cake" model the engine
executes in: finger geometry first, then palm orientation, then contact,
then rule matching and cross-library consensus.

! WARNING !
The finger and orientation thresholds are tuned against the shipped gesture
libraries. Loosening them changes which letters of the ASL alphabet resolve.
"""

from pathlib import Path
import os

# --- SYSTEM PATHS ---
FILE_PATH = Path(__file__).resolve()
PROJECT_ROOT = FILE_PATH.parent.parent
DATA_DIR = PROJECT_ROOT / "data"

PATHS = {
    "RECORDINGS_DIR": DATA_DIR / "recordings",
    "DEFAULT_RECORDING": DATA_DIR / "recordings" / "session.csv",
}

# --- SKELETON DEFINITION (CRITICAL) ---
# Bone ids follow the tracking runtime's 24-joint hand skeleton.
# Index in this list == bone id reported by the Pose Source.
BONE_NAMES = [
    "Hand_WristRoot",    # 0 - wrist / finger reference point
    "Hand_ForearmStub",  # 1
    "Hand_Thumb0",       # 2 - thumb proximal
    "Hand_Thumb1",       # 3
    "Hand_Thumb2",       # 4 - thumb intermediate
    "Hand_Thumb3",       # 5 - thumb distal
    "Hand_Index1",       # 6
    "Hand_Index2",       # 7
    "Hand_Index3",       # 8
    "Hand_Middle1",      # 9
    "Hand_Middle2",      # 10
    "Hand_Middle3",      # 11
    "Hand_Ring1",        # 12
    "Hand_Ring2",        # 13
    "Hand_Ring3",        # 14
    "Hand_Pinky0",       # 15 - metacarpal, unused by the classifier
    "Hand_Pinky1",       # 16
    "Hand_Pinky2",       # 17
    "Hand_Pinky3",       # 18
    "Hand_ThumbTip",     # 19
    "Hand_IndexTip",     # 20
    "Hand_MiddleTip",    # 21
    "Hand_RingTip",      # 22
    "Hand_PinkyTip",     # 23
]

# (proximal, intermediate, distal, tip) per finger, Thumb..Pinky
FINGER_BONES = (
    (2, 4, 5, 19),
    (6, 7, 8, 20),
    (9, 10, 11, 21),
    (12, 13, 14, 22),
    (16, 17, 18, 23),
)
WRIST_BONE = 0

# --- MASTER CONFIGURATION ---
CONFIG = {
    # =========================================================
    # LAYER 1: FINGER GEOMETRY (The Finger Classifier)
    # =========================================================
    "BIG_STRAIGHT": 0.9,            # tip-from-proximal vs intermediate-from-proximal
    "LIT_STRAIGHT": 0.9,            # tip-from-intermediate vs distal-from-intermediate
    "DIRECTION": 0.0,               # finger vs palm (wrist -> proximal)

    "LIT_STRAIGHT_THUMB": 0.75,     # thumb distal segment continuation
    "BIG_STRAIGHT_THUMB": 0.7,      # thumb tip-from-distal vs tip-from-intermediate
    "THUMB_DIR_EXTENDED": 0.7,      # directionThumb cuts, from straight to curled
    "THUMB_DIR_CURVED": 0.5,
    "THUMB_DIR_BENT": 0.4,
    "THUMB_DIR_FOLDED": 0.0,

    "MIN_SEGMENT_LENGTH": 1e-9,     # Shorter vectors normalise to zero

    # =========================================================
    # LAYER 2: PALM ORIENTATION (The Orientation Classifier)
    # =========================================================
    "FORWARD_THRESHOLD": 0.25,      # Palm_Back / Palm_Front
    "LATERAL_THRESHOLD": 0.25,      # Palm_In / Palm_Out
    "VERTICAL_THRESHOLD": 0.5,      # Palm_Up / Palm_Down
    "KNUCKLES_UP_THRESHOLD": 0.8,
    "KNUCKLES_DOWN_THRESHOLD": -0.5,
    "THUMB_ROT_THRESHOLD": 0.5,     # Thumb_Up / Thumb_Down
    "INWARD_OVERRIDE": -0.5,        # Mid buckets become *_In below this

    # =========================================================
    # LAYER 3: CONTACT (Touch & Pinch)
    # =========================================================
    "UNITS_TO_CM": 100.0,           # Pose Source reports metres
    "TOUCH_DISTANCE_CM": 4.0,       # tip-to-tip
    "PAD_TOUCH_DISTANCE_CM": 4.2,   # thumb distal against index/middle pad

    # =========================================================
    # LAYER 4: RULE MATCHING (The Libraries)
    # =========================================================
    "MATCH_EPSILON": 0.01,          # Slack on tolerant-match fraction

    # =========================================================
    # LAYER 5: CONSENSUS & TIMING
    # =========================================================
    "CONSENSUS_TIE_BREAK": "last",  # last | first | reject
    "PRIMARY_HAND": "right",        # right | left
    "REPLAY_DEFAULT_DT": 1.0 / 72,  # Headset refresh when a recording lacks dt
}

def init_environment():
    """
    Creates necessary directories safely at runtime.
    """
    os.makedirs(PATHS["RECORDINGS_DIR"], exist_ok=True)
