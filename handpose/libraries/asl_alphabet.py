"""
ASL Alphabet Gesture Library.
=============================

Fingerspelling A-Z for the primary hand. Rule order matters: several letters
share a finger pattern and are only told apart because a more specific
letter earlier in the table claims the pose first (R before U, K before K Alt).

J is the only moving letter: the I pose starts a 2 second window and the
same pose rotated palm-back completes it. Z is recognised statically.
"""
from typing import Optional

from handpose.core.types import DONT_CARE, FingerShape, FingerType, Orientation as O
from handpose.libraries import GestureLibrary, GestureRule, HandContext, SnapshotStage

THUMB, INDEX, MIDDLE, RING, PINKY = FingerType
EXTENDED, CURVED, BENT, FOLDED, INWARD = (FingerShape.EXTENDED, FingerShape.CURVED, FingerShape.BENT,
                                         FingerShape.FOLDED, FingerShape.INWARD)

J_WINDOW = 2.0

def _folded(ctx: HandContext, *fingers: FingerType) -> bool:
    return all(ctx.at_least(f, FOLDED) for f in fingers)

def _extended(ctx: HandContext, *fingers: FingerType) -> bool:
    return all(ctx.is_shape(f, EXTENDED) for f in fingers)

def _flat_together(ctx: HandContext) -> bool:
    return (ctx.touching(INDEX, MIDDLE) and ctx.touching(MIDDLE, RING) and
            ctx.touching(RING, PINKY))

def _a(ctx):
    return (ctx.is_shape(THUMB, EXTENDED) and _folded(ctx, INDEX, MIDDLE, RING, PINKY) and
            ctx.touching(THUMB, INDEX) and ctx.faces(O.KNUCKLES_UP))

def _b(ctx):
    return (ctx.at_least(THUMB, BENT) and _extended(ctx, INDEX, MIDDLE, RING, PINKY) and
            _flat_together(ctx) and ctx.faces(O.KNUCKLES_UP))

def _c(ctx):
    return (ctx.at_most(THUMB, CURVED) and
            all(ctx.is_shape(f, CURVED) for f in (INDEX, MIDDLE, RING)) and
            ctx.at_most(PINKY, CURVED) and _flat_together(ctx) and
            ctx.faces(O.PALM_IN, O.KNUCKLES_UP) and ctx.faces_not(O.THUMB_UP) and
            ctx.pinch(INDEX) <= 0.25)

def _d(ctx):
    return (ctx.at_most(THUMB, CURVED) and ctx.is_shape(INDEX, EXTENDED) and
            ctx.at_least(RING, CURVED) and ctx.at_least(PINKY, CURVED) and
            ctx.touching(MIDDLE, RING) and ctx.touching(RING, PINKY) and
            ctx.faces(O.KNUCKLES_UP) and ctx.pinch(MIDDLE) == 1)

def _e(ctx):
    return (ctx.not_shape(THUMB, EXTENDED) and
            ctx.tolerant((DONT_CARE, BENT, BENT, BENT, BENT), 1, 0.25) and
            _flat_together(ctx) and ctx.faces(O.KNUCKLES_UP))

def _f(ctx):
    return (ctx.at_most(THUMB, CURVED) and _extended(ctx, MIDDLE, RING, PINKY) and
            ctx.faces(O.KNUCKLES_UP) and ctx.pinch(INDEX) == 1)

def _g(ctx):
    return (ctx.at_most(THUMB, CURVED) and ctx.is_shape(INDEX, EXTENDED) and
            _folded(ctx, MIDDLE, RING, PINKY) and ctx.touching(THUMB, MIDDLE) and
            ctx.faces(O.PALM_BACK, O.KNUCKLES_IN))

def _h(ctx):
    return (_extended(ctx, INDEX, MIDDLE) and _folded(ctx, RING, PINKY) and
            ctx.touching(THUMB, RING) and ctx.faces(O.PALM_BACK, O.KNUCKLES_IN))

def _pinky_up(ctx):
    return (ctx.at_most(THUMB, BENT) and _folded(ctx, INDEX, MIDDLE, RING) and
            ctx.is_shape(PINKY, EXTENDED) and ctx.touching(THUMB, INDEX) and
            ctx.touching(INDEX, MIDDLE) and ctx.touching(MIDDLE, RING))

def _i_or_j_start(ctx):
    return _pinky_up(ctx) and ctx.faces(O.PALM_FRONT, O.KNUCKLES_UP)

def _resolve_i(ctx: HandContext, library: GestureLibrary) -> Optional[str]:
    # The I pose doubles as the first half of J
    if library.is_gesture_active("j"):
        ctx.add_snapshot(None, "J_Start", False, J_WINDOW)
    return "I" if library.is_gesture_active("i") else None

def _j(ctx):
    return _pinky_up(ctx) and ctx.faces(O.PALM_BACK, O.KNUCKLES_UP)

def _two_up(ctx):
    return _extended(ctx, INDEX, MIDDLE) and _folded(ctx, RING, PINKY)

def _k(ctx):
    return (ctx.at_most(THUMB, BENT) and _two_up(ctx) and
            (ctx.touching(THUMB, INDEX) or ctx.touching(THUMB, MIDDLE)) and
            not ctx.touching(INDEX, MIDDLE) and ctx.faces(O.KNUCKLES_UP))

def _l(ctx):
    return (_extended(ctx, THUMB, INDEX) and _folded(ctx, MIDDLE, RING, PINKY) and
            not ctx.touching(THUMB, INDEX) and not ctx.touching(THUMB, MIDDLE) and
            ctx.touching(MIDDLE, RING) and ctx.touching(RING, PINKY) and
            ctx.faces(O.KNUCKLES_UP))

def _m_n(ctx):
    return (ctx.at_least(THUMB, CURVED) and
            ctx.tolerant((DONT_CARE, INWARD, INWARD, INWARD, DONT_CARE), 2, 0.66) and
            ctx.at_least(PINKY, FOLDED) and
            ctx.touching(INDEX, MIDDLE) and ctx.touching(MIDDLE, RING) and
            ctx.faces(O.KNUCKLES_UP))

def _o(ctx):
    return (ctx.tolerant((DONT_CARE, CURVED, CURVED, CURVED, CURVED), 2, 0.5) and
            _flat_together(ctx) and ctx.faces(O.PALM_IN) and ctx.faces_not(O.THUMB_UP) and
            ctx.pinch(INDEX) >= 0.5)

def _p(ctx):
    return (ctx.tolerant((DONT_CARE, EXTENDED, EXTENDED, FOLDED, FOLDED), 2, 0.25) and
            not ctx.touching(INDEX, MIDDLE) and ctx.faces(O.PALM_DOWN))

def _q(ctx):
    return (ctx.is_shape(INDEX, EXTENDED) and ctx.faces(O.PALM_DOWN) and
            ctx.faces_any(O.KNUCKLES_MID, O.KNUCKLES_IN) and ctx.pinch(INDEX) >= 0.1)

def _r(ctx):
    return (ctx.at_least(THUMB, CURVED) and _two_up(ctx) and
            ctx.touching(THUMB, RING) and ctx.touching(INDEX, MIDDLE) and
            ctx.touching(RING, PINKY) and ctx.faces(O.KNUCKLES_UP))

def _s(ctx):
    return (ctx.tolerant((DONT_CARE, FOLDED, FOLDED, FOLDED, FOLDED), 1, 0.75) and
            ctx.at_least(THUMB, CURVED) and ctx.touching(THUMB, MIDDLE) and
            _flat_together(ctx) and ctx.faces(O.KNUCKLES_UP))

def _t(ctx):
    return (ctx.at_least(THUMB, CURVED) and
            ctx.tolerant((DONT_CARE, CURVED, FOLDED, FOLDED, DONT_CARE), 2, 0.66) and
            ctx.at_least(PINKY, FOLDED) and ctx.touching(MIDDLE, RING) and
            ctx.faces(O.KNUCKLES_UP) and ctx.pinch(INDEX) >= 0.75)

def _u_v_base(ctx):
    return (ctx.at_least(THUMB, CURVED) and _extended(ctx, INDEX, MIDDLE) and
            ctx.at_least(RING, BENT) and ctx.at_least(PINKY, FOLDED) and
            ctx.touching(THUMB, RING) and ctx.faces(O.KNUCKLES_UP))

def _u(ctx):
    return _u_v_base(ctx) and ctx.touching(INDEX, MIDDLE)

def _v(ctx):
    return _u_v_base(ctx) and not ctx.touching(INDEX, MIDDLE)

def _w(ctx):
    return (ctx.at_least(THUMB, BENT) and
            ctx.tolerant((DONT_CARE, EXTENDED, EXTENDED, EXTENDED, BENT), 2, 0.6) and
            (not ctx.touching(INDEX, MIDDLE) or not ctx.touching(MIDDLE, RING)) and
            ctx.faces(O.KNUCKLES_UP))

def _x(ctx):
    return (ctx.at_least(THUMB, BENT) and ctx.is_shape(INDEX, CURVED, BENT) and
            _folded(ctx, MIDDLE, RING, PINKY) and ctx.touching(THUMB, MIDDLE) and
            ctx.faces(O.PALM_IN, O.KNUCKLES_UP))

def _y(ctx):
    return (ctx.is_shape(THUMB, EXTENDED) and _folded(ctx, INDEX, MIDDLE, RING) and
            ctx.at_most(PINKY, CURVED) and ctx.faces(O.KNUCKLES_UP))

def _z_static(ctx):
    return (ctx.at_least(THUMB, CURVED) and ctx.is_shape(INDEX, EXTENDED) and
            all(ctx.at_least(f, BENT) for f in (MIDDLE, RING, PINKY)) and
            ctx.faces(O.KNUCKLES_MID))

def _k_alt(ctx):
    return (ctx.at_most(THUMB, BENT) and _two_up(ctx) and
            not ctx.touching(INDEX, MIDDLE) and ctx.faces(O.PALM_FRONT, O.KNUCKLES_UP))

class ASLAlphabetGestures(GestureLibrary):
    name = "ASLAlphabetGestures"
    TOGGLES = tuple("abcdefghijklmnopqrstuvwxyz")
    RULES = (
        GestureRule("A", ("a",), _a),
        GestureRule("B", ("b",), _b),
        GestureRule("C", ("c",), _c),
        GestureRule("D", ("d",), _d),
        GestureRule("E", ("e",), _e),
        GestureRule("F", ("f",), _f),
        GestureRule("G", ("g",), _g),
        GestureRule("H", ("h",), _h),
        GestureRule("I", ("i", "j"), _i_or_j_start, resolve=_resolve_i),
        GestureRule("J", ("j",), _j, stage=SnapshotStage("J_Start", "J", True, J_WINDOW)),
        GestureRule("K", ("k",), _k),
        GestureRule("L", ("l",), _l),
        GestureRule("M/N", ("m", "n"), _m_n),
        GestureRule("O", ("o",), _o),
        GestureRule("P", ("p",), _p),
        GestureRule("Q", ("q",), _q),
        GestureRule("R", ("r",), _r),
        GestureRule("S", ("s",), _s),
        GestureRule("T", ("t",), _t),
        GestureRule("U", ("u",), _u),
        GestureRule("V", ("v",), _v),
        GestureRule("W", ("w",), _w),
        GestureRule("X", ("x",), _x),
        GestureRule("Y", ("y",), _y),
        GestureRule("Z_Static", ("z",), _z_static),
        GestureRule("K Alt", ("k",), _k_alt),
    )
