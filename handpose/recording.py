"""
HandPose Session Recordings.

A recording is a CSV with one row per frame. Column groups:
    dt                                    frame delta time (seconds)
    head_pos_*, head_fwd_*, head_right_*, head_up_*   reference transform
    {hand}_tracked                        1 / 0, hand = left | right
    {hand}_j{id}_{x|y|z}                  24 joint positions (metres)
    {hand}_pinch_{0..4}                   pinch strengths, Thumb..Pinky
    {hand}_fwd_*, {hand}_right_*, {hand}_up_*          hand transform axes

Rows are replayed through an IPoseSource so the engine cannot tell a file
from a live runtime.
"""

import logging
import os
from typing import Dict, Iterable, List, Optional

import numpy as np
import pandas as pd

from handpose.config import BONE_NAMES, CONFIG
from handpose.core.interfaces import IPoseSource
from handpose.core.types import Axes, FingerType, HandType, HeadFrame, JointFrame, PoseSample

XYZ = ("x", "y", "z")
AXES = ("fwd", "right", "up")

def _vec_cols(prefix: str) -> List[str]:
    return [f"{prefix}_{c}" for c in XYZ]

def hand_columns(hand: HandType) -> List[str]:
    h = hand.value
    cols = [f"{h}_tracked"]
    for j in range(len(BONE_NAMES)):
        cols += _vec_cols(f"{h}_j{j}")
    cols += [f"{h}_pinch_{f}" for f in range(len(FingerType))]
    for axis in AXES:
        cols += _vec_cols(f"{h}_{axis}")
    return cols

def recording_columns() -> List[str]:
    cols = ["dt"] + _vec_cols("head_pos")
    for axis in AXES:
        cols += _vec_cols(f"head_{axis}")
    for hand in HandType:
        cols += hand_columns(hand)
    return cols

def _read_vec(row, prefix: str) -> np.ndarray:
    return np.array([row[c] for c in _vec_cols(prefix)], dtype=float)

def _read_axes(row, prefix: str) -> Axes:
    return Axes(*(_read_vec(row, f"{prefix}_{axis}") for axis in AXES))

def row_to_sample(row) -> PoseSample:
    """Builds one PoseSample from a recording row (dict or pandas Series)."""
    head = HeadFrame(axes=_read_axes(row, "head"), position=_read_vec(row, "head_pos"))
    hands: Dict[HandType, Optional[JointFrame]] = {}
    for hand in HandType:
        h = hand.value
        if not row.get(f"{h}_tracked", 0):
            hands[hand] = None
            continue
        joints = [_read_vec(row, f"{h}_j{j}") for j in range(len(BONE_NAMES))]
        pinch = [row[f"{h}_pinch_{f}"] for f in range(len(FingerType))]
        hands[hand] = JointFrame.from_raw(joints, pinch=pinch, axes=_read_axes(row, h))

    dt = row.get("dt", CONFIG["REPLAY_DEFAULT_DT"])
    if pd.isna(dt):
        dt = CONFIG["REPLAY_DEFAULT_DT"]
    return PoseSample(head=head, left=hands[HandType.LEFT], right=hands[HandType.RIGHT], delta_time=float(dt))

def sample_to_row(sample: PoseSample) -> Dict[str, float]:
    row: Dict[str, float] = {"dt": sample.delta_time}
    for c, v in zip(_vec_cols("head_pos"), sample.head.position):
        row[c] = float(v)
    head_axes = sample.head.axes
    for axis, vec in zip(AXES, (head_axes.forward, head_axes.right, head_axes.up)):
        for c, v in zip(_vec_cols(f"head_{axis}"), vec):
            row[c] = float(v)

    for hand in HandType:
        h = hand.value
        frame = sample.hand(hand)
        if frame is None:
            row.update({c: 0.0 for c in hand_columns(hand)})
            continue
        row[f"{h}_tracked"] = 1
        for j, pos in enumerate(frame.positions):
            for c, v in zip(_vec_cols(f"{h}_j{j}"), pos):
                row[c] = float(v)
        for f, p in enumerate(frame.pinch):
            row[f"{h}_pinch_{f}"] = float(p)
        axes = frame.axes if frame.axes is not None else Axes.from_raw((0, 0, 0), (0, 0, 0), (0, 0, 0))
        for axis, vec in zip(AXES, (axes.forward, axes.right, axes.up)):
            for c, v in zip(_vec_cols(f"{h}_{axis}"), vec):
                row[c] = float(v)
    return row

def save_recording(samples: Iterable[PoseSample], path) -> int:
    """Writes samples to CSV. Returns the number of frames written."""
    rows = [sample_to_row(s) for s in samples]
    df = pd.DataFrame(rows, columns=recording_columns())
    df.to_csv(path, index=False)
    print(f"💾 Saved {len(df)} frames to {path}")
    return len(df)

def load_recording(path) -> pd.DataFrame:
    if not os.path.exists(path):
        raise FileNotFoundError(f"❌ Recording not found at: {path}")
    df = pd.read_csv(path)
    missing = [c for c in ("dt", "head_fwd_x") if c not in df.columns]
    if missing:
        raise ValueError(f"Recording {path} lacks columns: {missing}")
    print(f"🔄 Loaded {len(df)} frames.")
    return df

class RecordedPoseSource(IPoseSource):
    """Replays a recording frame by frame."""
    def __init__(self, path):
        self.path = path
        self.df = load_recording(path)
        self._cursor = 0

    def __len__(self):
        return len(self.df)

    def read(self) -> Optional[PoseSample]:
        if self._cursor >= len(self.df):
            return None
        row = self.df.iloc[self._cursor]
        self._cursor += 1
        try:
            return row_to_sample(row)
        except ValueError as e:
            logging.error(f"❌ Frame {self._cursor - 1} of {self.path} unusable: {e}")
            raise

    def release(self) -> None:
        self._cursor = len(self.df)
