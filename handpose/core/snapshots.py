"""
HandPose Snapshot Tracker.
Time-boxed progress markers for gestures performed in stages.

A stage is reported with AddSnapshot(previous, current, is_final, ttl):
the first stage opens an entry, each later stage consumes its predecessor,
and the final stage returns the completed label. Entries that are not
advanced within their TTL expire on the frame tick.
"""
import logging
from typing import Dict, List, Optional

class SnapshotTracker:
    def __init__(self):
        self._entries: Dict[str, float] = {}

    def add_snapshot(self, previous: Optional[str], current: str,
                     is_final: bool, ttl: float) -> Optional[str]:
        # Holding a stage refreshes it without restarting the sequence
        if current in self._entries:
            self._entries[current] = ttl
            return current if is_final else None

        if previous is None:
            self._entries[current] = ttl
            return None

        if previous not in self._entries:
            return None

        del self._entries[previous]
        self._entries[current] = ttl
        if is_final:
            logging.debug(f"Sequence {previous} -> {current} completed")
            return current
        return None

    def decrement(self, delta_time: float) -> List[str]:
        """Ages every entry once. Returns the names that expired this tick."""
        expired = []
        for name in list(self._entries):
            self._entries[name] -= delta_time
            if self._entries[name] <= 0:
                del self._entries[name]
                expired.append(name)
        return expired

    def is_tracked(self, name: str) -> bool:
        return name in self._entries

    @property
    def times(self) -> Dict[str, float]:
        return dict(self._entries)

    @property
    def names(self) -> List[str]:
        return list(self._entries)

    def clear(self):
        self._entries.clear()

    def __len__(self):
        return len(self._entries)
