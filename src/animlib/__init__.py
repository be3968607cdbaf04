"""
AnimLib - Skeletal Animation Keyframe Engine

Per-node keyframe timelines with interpolated pose sampling,
looping playback and position-based time lookup.
"""

# Configuration
from .config.settings import *

# Animation
from .animation import (
    AnimationController,
    AnimationError,
    DegenerateIntervalError,
    EmptyAnimationError,
    InterpolationError,
    InterpolationRangeError,
    KeyFrame,
    KeyFrameLookup,
    MissingNodeError,
    NodeAnimation,
    Pose,
    SkeletonAnimation,
)

__version__ = "0.1.0"
__all__ = [
    # Config (exported via *)
    # Animation
    "NodeAnimation",
    "SkeletonAnimation",
    "AnimationController",
    "KeyFrame",
    "KeyFrameLookup",
    "Pose",
    # Errors
    "AnimationError",
    "MissingNodeError",
    "EmptyAnimationError",
    "InterpolationError",
    "DegenerateIntervalError",
    "InterpolationRangeError",
]
