"""
HandPose HUD.
Debug overlay for a HandManager: shape digits, orientation, contact, pinch,
location and the live gesture, drawn onto an OpenCV frame.
"""

from collections import OrderedDict
from typing import Dict

import cv2
import numpy as np

from handpose.core.types import FingerType, GestureSentinel
from handpose.hand_manager import HandManager

TOUCH_PAIRS = (
    (FingerType.THUMB, FingerType.INDEX),
    (FingerType.INDEX, FingerType.MIDDLE),
    (FingerType.MIDDLE, FingerType.RING),
    (FingerType.RING, FingerType.PINKY),
)

class HUD:
    def __init__(self, width: int = 640, height: int = 360):
        self.width = width
        self.height = height

        # --- THEME COLORS (BGR) ---
        self.C_CYAN   = (255, 255, 0)    # Standard UI
        self.C_RED    = (0, 0, 255)      # Sentinels / errors
        self.C_ORANGE = (0, 165, 255)    # Sequence in flight
        self.C_GREEN  = (0, 255, 0)      # Gesture recognised
        self.C_DARK   = (20, 20, 20)     # Backgrounds

    def _draw_glass_panel(self, img, x, y, w, h, color, alpha=0.6):
        """Draws a semi-transparent 'Glass' background."""
        if y+h > img.shape[0] or x+w > img.shape[1] or x < 0 or y < 0: return

        sub_img = img[y:y+h, x:x+w]
        tint = np.full(sub_img.shape, color, dtype=np.uint8)
        img[y:y+h, x:x+w] = cv2.addWeighted(sub_img, 1 - alpha, tint, alpha, 1.0)
        cv2.rectangle(img, (x, y), (x+w, y+h), color, 1)

    def readouts(self, manager: HandManager) -> Dict[str, str]:
        """The panel's text lines, in display order."""
        lines = OrderedDict()
        lines["Gesture"] = manager.current_gesture
        lines["Shape"] = "".join(str(s) for s in manager.primary_hand_shape())
        lines["Orient"] = " ".join(o.value for o in manager.primary_orientation())

        touches = [manager.secondary_finger_touch(a, b) for a, b in TOUCH_PAIRS]
        lines["Touch (2nd)"] = " ".join("1" if t else "0" for t in touches)

        pinches = [manager.primary_finger_pinch(f) for f in FingerType if f != FingerType.THUMB]
        lines["Pinch"] = " ".join(f"{p:.2f}" for p in pinches)

        for label, loc in (("Loc 1st", manager.primary_location()), ("Loc 2nd", manager.secondary_location())):
            lines[label] = "-" if loc is None else "({:.3f}, {:.3f}, {:.3f})".format(*loc)

        timers = manager.snapshot_times()
        lines["Snapshots"] = ", ".join(f"{n}:{t:.2f}" for n, t in timers.items()) or "-"
        return lines

    def _status_color(self, manager: HandManager):
        gesture = manager.current_gesture
        if gesture in (GestureSentinel.INVALID_COUNT.value, GestureSentinel.CONFLICT.value):
            return self.C_RED
        if gesture != GestureSentinel.NONE.value:
            return self.C_GREEN
        if manager.snapshot_names():
            return self.C_ORANGE
        return self.C_CYAN

    def render(self, manager: HandManager, frame=None):
        """Draws the panel. Creates a blank canvas when no frame is given."""
        if frame is None:
            frame = np.zeros((self.height, self.width, 3), dtype=np.uint8)

        ui_color = self._status_color(manager)
        lines = self.readouts(manager)

        line_h = 26
        self._draw_glass_panel(frame, 10, 10, min(frame.shape[1] - 20, 600),
                               line_h * len(lines) + 16, self.C_DARK, 0.5)

        y = 36
        for key, value in lines.items():
            color = ui_color if key == "Gesture" else self.C_CYAN
            cv2.putText(frame, f"{key}: {value}", (20, y),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.55, color, 1)
            y += line_h
        return frame

    def draw_fps(self, frame, fps):
        cv2.putText(frame, f"{int(fps)} FPS", (frame.shape[1]-100, 40),
                    cv2.FONT_HERSHEY_PLAIN, 1.2, self.C_GREEN, 1)
