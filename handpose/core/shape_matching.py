"""
HandPose Shape Matching.
Compares a desired 5-slot finger-shape pattern against the live hand shape.
Slots holding DONT_CARE (0) are skipped.
"""
from typing import Sequence

from handpose.config import CONFIG
from handpose.core.types import DONT_CARE, FingerShape, FingerType

SLOTS = len(FingerType)

def _valid(desired: Sequence[int], actual: Sequence[int]) -> bool:
    return len(desired) == SLOTS and len(actual) == SLOTS

def exact_match(desired: Sequence[int], actual: Sequence[int]) -> bool:
    """Every non don't-care slot must be equal."""
    if not _valid(desired, actual):
        return False
    for want, got in zip(desired, actual):
        if int(want) == DONT_CARE:
            continue
        if int(got) == FingerShape.MAX or int(want) != int(got):
            return False
    return True

def tolerant_match(desired: Sequence[int], actual: Sequence[int],
                   tolerance: int, min_fraction: float) -> bool:
    """
    Near-miss matching.
    Any considered slot further than `tolerance` steps away fails the whole match.
    Otherwise the share of exactly-equal slots must reach `min_fraction`
    (minus MATCH_EPSILON). A pattern of only don't-care slots matches anything.
    """
    if not _valid(desired, actual):
        return False

    correct = 0
    considered = 0
    for want, got in zip(desired, actual):
        want, got = int(want), int(got)
        if want == DONT_CARE:
            continue
        if got == FingerShape.MAX or abs(got - want) > tolerance:
            return False
        considered += 1
        if got == want:
            correct += 1

    if considered == 0:
        return True
    return correct / considered >= min_fraction - CONFIG["MATCH_EPSILON"]
