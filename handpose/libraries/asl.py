"""ASL Gesture Library (whole-word signs)."""
from handpose.core.types import FingerShape, FingerType, Orientation as O
from handpose.libraries import GestureLibrary, GestureRule, HandContext

THUMB, INDEX, MIDDLE, RING, PINKY = FingerType

def _i_love_you(ctx: HandContext) -> bool:
    return (ctx.is_shape(THUMB, FingerShape.EXTENDED) and
            ctx.is_shape(INDEX, FingerShape.EXTENDED) and
            ctx.at_least(MIDDLE, FingerShape.FOLDED) and
            ctx.at_least(RING, FingerShape.FOLDED) and
            ctx.is_shape(PINKY, FingerShape.EXTENDED) and
            ctx.faces(O.PALM_FRONT, O.KNUCKLES_UP))

class ASLGestures(GestureLibrary):
    name = "ASLGestures"
    TOGGLES = ("iLoveYou",)
    RULES = (
        GestureRule("I Love You", ("iLoveYou",), _i_love_you),
    )
