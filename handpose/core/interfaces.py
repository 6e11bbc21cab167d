"""
HandPose Core Interfaces.
Defines the abstract contracts for the tracking boundary.
"""

from abc import ABC, abstractmethod
from typing import Optional

from handpose.core.types import PoseSample

class IPoseSource(ABC):
    """
    Abstract Protocol for the skeletal hand-tracking runtime.
    One call per frame; None means the source has no more frames.
    """

    @abstractmethod
    def read(self) -> Optional[PoseSample]: pass

    def release(self) -> None:
        """Frees the underlying device or file. Optional."""
        return None
