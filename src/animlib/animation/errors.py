"""
Animation Errors

Exceptions raised by keyframe queries.
"""


class AnimationError(RuntimeError):
    """Base class for animation query failures."""


class MissingNodeError(AnimationError, KeyError):
    """Raised when a query names a node the clip does not animate."""

    def __init__(self, node: str, clip: str = ""):
        self.node = node
        self.clip = clip
        where = f" in animation '{clip}'" if clip else ""
        super().__init__(f"No node animation named '{node}'{where}")

    def __str__(self):
        # KeyError would otherwise repr() the message
        return self.args[0]


class EmptyAnimationError(AnimationError):
    """Raised when a node without keyframes is queried."""


class InterpolationError(AnimationError):
    """Raised when the neighbouring keyframes of a query are inconsistent."""


class DegenerateIntervalError(InterpolationError):
    """Raised when the two neighbouring keyframes share the same time."""


class InterpolationRangeError(InterpolationError):
    """Raised when the interpolation fraction falls outside [0, 1]."""
