"""
HandPose State Management (The Consensus Aggregator).
Reduces every active library's per-frame vote to one current gesture.
"""
import logging
from typing import Optional

from handpose.config import CONFIG
from handpose.core.types import GestureSentinel, TieBreak

class ConsensusState:
    def __init__(self):
        # --- GESTURE HISTORY ---
        self.prev_gesture: str = GestureSentinel.NONE.value
        self.curr_gesture: str = GestureSentinel.NONE.value

        # --- PER-FRAME COUNTERS ---
        self.library_count = 0
        self.tracked_count = 0
        self.empty_count = 0

        self._frame_label: Optional[str] = None
        self._tie_break = TieBreak.LAST
        self._frame_start_gesture = self.curr_gesture
        self._in_frame = False

    def begin_frame(self, library_count: int):
        """Resets the counters. Must run before any library reports."""
        self.library_count = library_count
        self.tracked_count = 0
        self.empty_count = 0
        self._frame_label = None
        self._tie_break = TieBreak(CONFIG["CONSENSUS_TIE_BREAK"])
        self._frame_start_gesture = self.curr_gesture
        self._in_frame = True

    def report(self, label: Optional[str]):
        """One library's vote for this frame: a label, or None for no gesture."""
        if label is not None:
            self.tracked_count += 1
        else:
            self.empty_count += 1

        if self.tracked_count + self.empty_count > self.library_count:
            if self.curr_gesture != GestureSentinel.INVALID_COUNT:
                logging.error(
                    f"❌ {self.tracked_count + self.empty_count} reports for "
                    f"{self.library_count} active libraries"
                )
            self.curr_gesture = GestureSentinel.INVALID_COUNT.value
            return

        if label is not None:
            self._accept(label)
        elif self.empty_count == self.library_count:
            self.curr_gesture = GestureSentinel.NONE.value

    def _accept(self, label: str):
        first = self._frame_label
        if first is None:
            self._frame_label = label
            self.curr_gesture = label
            return

        if first != label:
            logging.warning(f"⚠️ Libraries disagree this frame: {first!r} vs {label!r} ({self._tie_break.value})")

        if self._tie_break == TieBreak.LAST:
            self.curr_gesture = label
        elif self._tie_break == TieBreak.REJECT and first != label:
            self.curr_gesture = GestureSentinel.CONFLICT.value
        # TieBreak.FIRST keeps the earliest label

    def end_frame(self) -> str:
        """Finalises the frame and returns the authoritative gesture."""
        if self.library_count == 0:
            self.curr_gesture = GestureSentinel.NONE.value
        if self._in_frame:
            self.prev_gesture = self._frame_start_gesture
        self._in_frame = False
        return self.curr_gesture

    def update_gesture(self, gesture: str):
        """Forces the current gesture outside the frame tick (host overrides, resets)."""
        self.prev_gesture = self.curr_gesture
        self.curr_gesture = gesture

    @property
    def is_consistent(self) -> bool:
        return self.tracked_count + self.empty_count <= self.library_count
