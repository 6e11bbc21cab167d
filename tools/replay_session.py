"""
HandPose Session Replay (The Lab).

Feeds a recorded CSV session through a HandManager with every shipped
gesture library and prints the gesture timeline: one line per change.

Usage:
    python tools/replay_session.py [recording.csv] [--show]
    --show  opens the HUD window and steps at the recorded frame rate.
            [SPACE] pause, [Q] quit.
"""

import os
import sys
import time

import cv2

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from handpose.config import PATHS, init_environment
from handpose.hand_manager import HandManager
from handpose.libraries.asl import ASLGestures
from handpose.libraries.asl_alphabet import ASLAlphabetGestures
from handpose.libraries.example import ExampleGestures
from handpose.libraries.social import SocialGestures
from handpose.recording import RecordedPoseSource
from handpose.ui.hud import HUD

WINDOW = "HandPose Replay"

def build_manager() -> HandManager:
    return HandManager([ExampleGestures(), ASLGestures(), ASLAlphabetGestures(), SocialGestures()])

def replay(source, manager, show=False):
    """Runs every frame of `source`. Returns [(frame_idx, time, gesture)] for each change."""
    hud = HUD() if show else None
    timeline = []
    clock = 0.0
    idx = 0
    last = None
    paused = False

    while True:
        if paused and show:
            key = cv2.waitKey(30) & 0xFF
            if key == ord(' '): paused = False
            if key == ord('q'): break
            continue

        sample = source.read()
        if sample is None:
            break
        clock += sample.delta_time
        gesture = manager.process(sample)

        if gesture != last:
            timeline.append((idx, clock, gesture))
            print(f"  [{idx:05d}] {clock:7.3f}s  {gesture}")
            last = gesture

        if show:
            tick = time.time()
            frame = hud.render(manager)
            hud.draw_fps(frame, 1.0 / sample.delta_time if sample.delta_time > 0 else 0)
            cv2.imshow(WINDOW, frame)
            wait_ms = max(1, int(sample.delta_time * 1000 - (time.time() - tick) * 1000))
            key = cv2.waitKey(wait_ms) & 0xFF
            if key == ord(' '): paused = True
            if key == ord('q'): break
        idx += 1

    source.release()
    if show:
        cv2.destroyAllWindows()
    return timeline

def run_replay(argv):
    init_environment()
    show = "--show" in argv
    paths = [a for a in argv if not a.startswith("--")]
    path = paths[0] if paths else str(PATHS["DEFAULT_RECORDING"])

    print("🎬 SESSION REPLAY")
    print(f"   -> Recording: {path}")
    source = RecordedPoseSource(path)
    timeline = replay(source, build_manager(), show=show)
    print(f"✅ {len(source)} frames, {len(timeline)} gesture changes.")
    return timeline

if __name__ == "__main__":
    run_replay(sys.argv[1:])
