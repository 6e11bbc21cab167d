"""
HandPose Joint Processing Utilities.
====================================

Handles the conversion of raw tracking output into the engine's joint matrix.
Pose sources deliver joints in several shapes:
1. Runtime bone objects exposing `.x`, `.y`, `.z`.
2. Nested lists / arrays of (x, y, z).
3. A flat 72-float row (recordings, CSV exports).

This module funnels all of them into one (24, 3) float matrix.
"""

import numpy as np
from typing import Any

from handpose.config import BONE_NAMES

JOINT_COUNT = len(BONE_NAMES)

def to_joint_array(joint_list: Any) -> np.ndarray:
    """
    Transforms raw joints into a (24, 3) float matrix indexed by bone id.

    Raises:
        ValueError: if the input does not hold exactly 24 joints.
    """
    # 1. Data Structuring: Convert runtime objects / lists to NumPy matrix
    if len(joint_list) and hasattr(joint_list[0], 'x'):
        coords = np.array([[j.x, j.y, j.z] for j in joint_list], dtype=float)
    else:
        coords = np.array(joint_list, dtype=float).reshape(-1, 3)

    if coords.shape != (JOINT_COUNT, 3):
        raise ValueError(f"Expected {JOINT_COUNT} joints, got {coords.shape[0]}")
    return coords

def mirror_positions(coords: np.ndarray, axis: int = 0) -> np.ndarray:
    """Reflects joint positions across the plane normal to `axis` (left <-> right hand)."""
    mirrored = np.array(coords, dtype=float, copy=True)
    mirrored[..., axis] *= -1
    return mirrored

def unit(vec: np.ndarray, min_length: float = 1e-9) -> np.ndarray:
    """Normalises a vector. Degenerate vectors become the zero vector."""
    norm = np.linalg.norm(vec)
    if not np.isfinite(norm) or norm < min_length:
        return np.zeros_like(vec, dtype=float)
    return vec / norm
