"""
Keyframe

Keyframe samples and indexed keyframe lookups.
"""

from dataclasses import dataclass, field
from typing import Optional

from pyrr import Matrix44

from ..config.settings import INVALID_KEYFRAME_TIME


class KeyFrame:
    """
    Single keyframe of a node animation.

    Stores the node transform at a given time.
    """

    def __init__(self, time: float, transform: Matrix44):
        """
        Initialize keyframe.

        Args:
            time: Clip-local time
            transform: Node transform at this time
        """
        self.time = time
        self.transform = transform

    def __iter__(self):
        # Allows ``time, transform = keyframe``
        yield self.time
        yield self.transform

    def __repr__(self):
        return f"KeyFrame(t={self.time:.3f})"


@dataclass
class KeyFrameLookup:
    """
    Result of fetching a keyframe by index.

    An out-of-range index yields time == INVALID_KEYFRAME_TIME, an identity
    transform and a message in ``error``. Check ``ok`` before trusting the
    transform.
    """
    time: float
    transform: Matrix44 = field(default_factory=Matrix44.identity)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def invalid(cls, message: str) -> "KeyFrameLookup":
        return cls(INVALID_KEYFRAME_TIME, Matrix44.identity(), message)

    def __iter__(self):
        yield self.time
        yield self.transform
