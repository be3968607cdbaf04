"""
Animation System

Keyframe storage and interpolation for skeletal animation clips.
"""

from .errors import (
    AnimationError,
    MissingNodeError,
    EmptyAnimationError,
    InterpolationError,
    DegenerateIntervalError,
    InterpolationRangeError,
)
from .transforms import Pose, float_equal
from .keyframe import KeyFrame, KeyFrameLookup
from .node_animation import NodeAnimation
from .skeleton_animation import SkeletonAnimation
from .animation_controller import AnimationController

__all__ = [
    'AnimationError',
    'MissingNodeError',
    'EmptyAnimationError',
    'InterpolationError',
    'DegenerateIntervalError',
    'InterpolationRangeError',
    'Pose',
    'float_equal',
    'KeyFrame',
    'KeyFrameLookup',
    'NodeAnimation',
    'SkeletonAnimation',
    'AnimationController',
]
