"""
Example Gesture Library.
A template: one single-frame gesture using every kind of condition, and a
three-stage sequence driven by the knuckle orientation.
"""
from handpose.core.types import FingerShape, FingerType, Orientation as O
from handpose.libraries import GestureLibrary, GestureRule, HandContext, SnapshotStage

THUMB, INDEX, MIDDLE, RING, PINKY = FingerType
EXTENDED, CURVED, BENT, FOLDED, INWARD = (FingerShape.EXTENDED, FingerShape.CURVED, FingerShape.BENT,
                                         FingerShape.FOLDED, FingerShape.INWARD)

EXAMPLE_SHAPE = (EXTENDED, CURVED, BENT, FOLDED, INWARD)

def _example_gesture(ctx: HandContext) -> bool:
    # Per-finger checks, exact pattern and tolerant pattern agree on the same shape
    return (ctx.is_shape(THUMB, EXTENDED) and ctx.is_shape(INDEX, CURVED) and
            ctx.is_shape(MIDDLE, BENT) and ctx.is_shape(RING, FOLDED) and
            ctx.is_shape(PINKY, INWARD) and
            ctx.exact(EXAMPLE_SHAPE) and
            ctx.tolerant(EXAMPLE_SHAPE, 1, 0.6) and
            ctx.faces(O.PALM_FRONT, O.PALM_OUT, O.PALM_UP, O.KNUCKLES_IN, O.THUMB_DOWN) and
            ctx.pinch(INDEX) == 1 and
            ctx.touching(INDEX, MIDDLE))

def _thumb_out_fist(ctx: HandContext) -> bool:
    return ctx.is_shape(THUMB, EXTENDED) and ctx.at_least(INDEX, FOLDED)

def _multi_start(ctx: HandContext) -> bool:
    return _thumb_out_fist(ctx) and ctx.faces(O.KNUCKLES_UP)

def _multi_middle(ctx: HandContext) -> bool:
    return _thumb_out_fist(ctx) and ctx.faces(O.KNUCKLES_IN)

def _multi_end(ctx: HandContext) -> bool:
    return ctx.is_shape(THUMB, EXTENDED) and ctx.is_shape(INDEX, EXTENDED) and ctx.faces(O.KNUCKLES_IN)

class ExampleGestures(GestureLibrary):
    name = "ExampleGestures"
    TOGGLES = ("exampleGesture", "exampleMultiPartGesture")
    RULES = (
        GestureRule("Example Gesture", ("exampleGesture",), _example_gesture),
        GestureRule("Multi-Part START", ("exampleMultiPartGesture",), _multi_start,
                    stage=SnapshotStage(None, "Multi-Part START", False, 1.0)),
        GestureRule("Multi-Part MIDDLE", ("exampleMultiPartGesture",), _multi_middle,
                    stage=SnapshotStage("Multi-Part START", "Multi-Part MIDDLE", False, 1.0)),
        GestureRule("Multi-Part END", ("exampleMultiPartGesture",), _multi_end,
                    stage=SnapshotStage("Multi-Part MIDDLE", "Multi-Part END", True, 1.0)),
    )
