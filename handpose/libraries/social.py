"""
Social Gesture Library.
Everyday hand signs. Finger Gun, Waving and Snap are two-stage gestures;
the Snap finisher must stay last so its broad pose cannot fire before
the pinch that starts it.
"""
from typing import Optional

from handpose.core.types import FingerShape, FingerType, Orientation as O
from handpose.libraries import GestureLibrary, GestureRule, HandContext, SnapshotStage

THUMB, INDEX, MIDDLE, RING, PINKY = FingerType
EXTENDED, CURVED, BENT, FOLDED, INWARD = (FingerShape.EXTENDED, FingerShape.CURVED, FingerShape.BENT,
                                         FingerShape.FOLDED, FingerShape.INWARD)
ALL_FINGERS = tuple(FingerType)
OPEN_HAND = (EXTENDED,) * 5

def _all(test, shape, fingers=ALL_FINGERS) -> bool:
    return all(test(f, shape) for f in fingers)

def _palm_vertical(ctx) -> bool:
    return ctx.faces_any(O.PALM_BACK, O.PALM_FRONT) and ctx.faces(O.KNUCKLES_UP)

def _thumbs_up(ctx):
    return (ctx.at_most(THUMB, CURVED) and _all(ctx.at_least, FOLDED, ALL_FINGERS[1:]) and
            ctx.faces(O.THUMB_UP) and ctx.pinch(INDEX) == 0)

def _thumbs_down(ctx):
    return (ctx.at_most(THUMB, CURVED) and _all(ctx.at_least, BENT, ALL_FINGERS[1:]) and
            ctx.faces(O.THUMB_DOWN) and ctx.pinch(INDEX) == 0)

def _paper(ctx):
    return (_all(ctx.at_most, CURVED) and
            ctx.touching(INDEX, MIDDLE) and ctx.touching(MIDDLE, RING) and ctx.touching(RING, PINKY) and
            ctx.faces(O.PALM_DOWN, O.KNUCKLES_MID))

def _rock(ctx):
    return (ctx.at_least(THUMB, CURVED) and _all(ctx.at_least, FOLDED, ALL_FINGERS[1:]) and
            ctx.faces(O.PALM_IN, O.THUMB_UP) and ctx.faces_not(O.KNUCKLES_IN))

def _scissors(ctx):
    return (ctx.at_least(THUMB, CURVED) and ctx.at_most(INDEX, CURVED) and ctx.at_most(MIDDLE, CURVED) and
            ctx.at_least(RING, FOLDED) and ctx.at_least(PINKY, FOLDED) and
            ctx.faces(O.PALM_IN, O.THUMB_UP) and not ctx.touching(INDEX, MIDDLE))

def _okay(ctx):
    return _all(ctx.at_most, CURVED) and ctx.faces(O.KNUCKLES_UP) and ctx.pinch(INDEX) == 1

def _spider_man(ctx):
    return (ctx.at_most(THUMB, CURVED) and ctx.at_most(INDEX, CURVED) and
            ctx.at_least(MIDDLE, FOLDED) and ctx.at_least(RING, FOLDED) and ctx.at_most(PINKY, CURVED) and
            ctx.faces(O.PALM_UP, O.KNUCKLES_MID))

def _hang_ten(ctx):
    return (ctx.is_shape(THUMB, EXTENDED) and _all(ctx.at_least, FOLDED, (INDEX, MIDDLE, RING)) and
            ctx.at_most(PINKY, CURVED) and ctx.faces(O.KNUCKLES_UP))

def _telephone(ctx):
    return (ctx.at_most(THUMB, CURVED) and _all(ctx.at_least, FOLDED, (INDEX, MIDDLE, RING)) and
            ctx.at_most(PINKY, CURVED) and ctx.faces(O.KNUCKLES_IN))

def _middle_finger(ctx):
    return (ctx.at_least(INDEX, BENT) and ctx.is_shape(MIDDLE, EXTENDED) and
            ctx.at_least(RING, FOLDED) and ctx.at_least(PINKY, FOLDED) and
            ctx.faces(O.PALM_BACK, O.KNUCKLES_UP) and ctx.pinch(INDEX) > 0)

def _vulcan_salute(ctx):
    return (_all(ctx.is_shape, EXTENDED) and
            not ctx.touching(THUMB, INDEX) and ctx.touching(INDEX, MIDDLE) and
            not ctx.touching(MIDDLE, RING) and ctx.touching(RING, PINKY) and
            ctx.faces(O.KNUCKLES_UP))

def _peace(ctx):
    return (ctx.at_least(THUMB, CURVED) and _all(ctx.is_shape, EXTENDED, (INDEX, MIDDLE)) and
            ctx.at_least(RING, FOLDED) and ctx.at_least(PINKY, FOLDED) and
            not ctx.touching(INDEX, MIDDLE) and _palm_vertical(ctx))

def _scouts_honor(ctx):
    return (ctx.at_least(THUMB, FOLDED) and _all(ctx.is_shape, EXTENDED, (INDEX, MIDDLE, RING)) and
            ctx.is_shape(PINKY, BENT, FOLDED) and
            ctx.touching(INDEX, MIDDLE) and ctx.touching(MIDDLE, RING) and
            _palm_vertical(ctx) and ctx.pinch(PINKY) >= 0.75)

def _pinky_promise(ctx):
    return (ctx.at_least(THUMB, CURVED) and _all(ctx.at_least, BENT, (INDEX, MIDDLE, RING)) and
            ctx.is_shape(PINKY, EXTENDED) and _palm_vertical(ctx))

def _rock_and_roll(ctx):
    return (ctx.at_least(THUMB, CURVED) and ctx.at_most(INDEX, CURVED) and
            ctx.at_least(MIDDLE, FOLDED) and ctx.at_least(RING, FOLDED) and ctx.at_most(PINKY, CURVED) and
            _palm_vertical(ctx))

def _finger_gun_pose(ctx):
    return (ctx.at_most(THUMB, CURVED) and _all(ctx.is_shape, EXTENDED, (INDEX, MIDDLE)) and
            ctx.at_least(RING, FOLDED) and ctx.at_least(PINKY, FOLDED) and ctx.faces(O.PALM_IN))

def _finger_gun_start(ctx):
    return _finger_gun_pose(ctx) and ctx.faces(O.KNUCKLES_UP)

def _finger_gun(ctx):
    return _finger_gun_pose(ctx) and ctx.faces(O.KNUCKLES_MID)

def _open_palm_front(ctx):
    return ctx.tolerant(OPEN_HAND, 1, 0.8) and ctx.faces(O.PALM_FRONT)

def _waving_start(ctx):
    return _open_palm_front(ctx) and ctx.faces(O.KNUCKLES_UP)

def _resolve_waving_start(ctx: HandContext, library: GestureLibrary) -> Optional[str]:
    # Returning to the start pose while still waving keeps the wave alive
    waving = ctx.add_snapshot("Waving", "Waving", True, 0.25)
    if waving is not None:
        return waving
    return ctx.add_snapshot(None, "Waving Temp", False, 0.25)

def _waving(ctx):
    return _open_palm_front(ctx) and ctx.faces(O.KNUCKLES_IN)

def _wolfie(ctx):
    return (_all(ctx.is_shape, EXTENDED, (INDEX, PINKY)) and ctx.faces(O.KNUCKLES_UP) and
            ctx.pinch(MIDDLE) >= 0.5 and ctx.pinch(RING) >= 0.5)

def _snap_start(ctx):
    return ctx.not_shape(MIDDLE, INWARD) and ctx.pinch(MIDDLE) == 1

def _snap(ctx):
    return ctx.at_most(THUMB, BENT) and ctx.at_most(INDEX, CURVED) and ctx.is_shape(MIDDLE, INWARD)

class SocialGestures(GestureLibrary):
    name = "SocialGestures"
    TOGGLES = ("thumbsUp", "thumbsDown", "paper", "rock", "scissors", "okay", "spiderMan",
               "hangTen", "telephone", "middleFinger", "vulcanSalute", "peace", "scoutsHonor",
               "pinkyPromise", "rockAndRoll", "fingerGun", "waving", "wolfie", "snap")
    RULES = (
        GestureRule("Thumb's Up", ("thumbsUp",), _thumbs_up),
        GestureRule("Thumb's Down", ("thumbsDown",), _thumbs_down),
        GestureRule("Paper", ("paper",), _paper),
        GestureRule("Rock", ("rock",), _rock),
        GestureRule("Scissors", ("scissors",), _scissors),
        GestureRule("Okay", ("okay",), _okay),
        GestureRule("Spider Man", ("spiderMan",), _spider_man),
        GestureRule("Hang Ten", ("hangTen",), _hang_ten),
        GestureRule("Telephone", ("telephone",), _telephone),
        GestureRule("Middle Finger", ("middleFinger",), _middle_finger),
        GestureRule("Vulcan Salute", ("vulcanSalute",), _vulcan_salute),
        GestureRule("Peace", ("peace",), _peace),
        GestureRule("Scout's Honor", ("scoutsHonor",), _scouts_honor),
        GestureRule("Pinky Promise", ("pinkyPromise",), _pinky_promise),
        GestureRule("Rock and Roll", ("rockAndRoll",), _rock_and_roll),
        GestureRule("Finger Gun Temp", ("fingerGun",), _finger_gun_start,
                    stage=SnapshotStage(None, "Finger Gun Temp", False, 0.5)),
        GestureRule("Finger Gun", ("fingerGun",), _finger_gun,
                    stage=SnapshotStage("Finger Gun Temp", "Finger Gun", True, 0.5)),
        GestureRule("Waving Temp", ("waving",), _waving_start, resolve=_resolve_waving_start),
        GestureRule("Waving", ("waving",), _waving,
                    stage=SnapshotStage("Waving Temp", "Waving", True, 0.25)),
        GestureRule("Wolfie", ("wolfie",), _wolfie),
        GestureRule("Snap Temp", ("snap",), _snap_start,
                    stage=SnapshotStage(None, "Snap Temp", False, 0.5)),
        GestureRule("Snap", ("snap",), _snap,
                    stage=SnapshotStage("Snap Temp", "Snap", True, 0.2)),
    )
