"""
Node Animation

Keyframe timeline of a single animated node (bone).

Keyframes may be added in any order; they are kept sorted by time. Mutation
(add_keyframe, scale) and queries are not synchronized: populate the
timeline first, then query it from as many readers as needed. Concurrent
mutation and query needs a lock held by the caller.
"""

import logging
import math
from bisect import bisect_right, insort
from typing import Dict, Iterator, List, Tuple

import numpy as np
from pyrr import Matrix44

from ..config.settings import POSITION_EPSILON, TIME_EPSILON
from .errors import DegenerateIntervalError, EmptyAnimationError, InterpolationRangeError
from .keyframe import KeyFrame, KeyFrameLookup
from .transforms import as_transform, compose, float_equal, rotation_of, slerp

logger = logging.getLogger(__name__)


class NodeAnimation:
    """
    Time-ordered keyframes for one node.

    Provides:
    - Insertion of transforms or poses at arbitrary times
    - Interpolated sampling (linear translation, slerp rotation)
    - Inverse lookup from an X coordinate to a time
    """

    def __init__(self, name: str):
        """
        Initialize node animation.

        Args:
            name: Name of the animated node
        """
        self.name = name
        self._times: List[float] = []
        self._frames: Dict[float, Matrix44] = {}
        self._length: float = 0.0

    def add_keyframe(self, time: float, transform):
        """
        Add or replace the keyframe at a time.

        Args:
            time: Clip-local time
            transform: 4x4 transform or Pose
        """
        time = float(time)
        mat = as_transform(transform)

        if time > self._length:
            self._length = time

        if time not in self._frames:
            insort(self._times, time)
        self._frames[time] = mat

    def frame_count(self) -> int:
        """Number of distinct keyframe times."""
        return len(self._times)

    def keyframe(self, index: int) -> KeyFrameLookup:
        """
        Get the keyframe at an ordinal position in ascending time order.

        Args:
            index: Keyframe index

        Returns:
            KeyFrameLookup; ``ok`` is False if the index is out of range
        """
        if index < 0 or index >= len(self._times):
            message = f"Invalid key frame index {index}"
            logger.warning("%s for node '%s' (%d frames)", message, self.name, len(self._times))
            return KeyFrameLookup.invalid(message)

        time = self._times[index]
        return KeyFrameLookup(time, self._frames[time].copy())

    def keyframes(self) -> Iterator[KeyFrame]:
        """Iterate keyframes in ascending time order."""
        for time in self._times:
            yield KeyFrame(time, self._frames[time].copy())

    @property
    def times(self) -> Tuple[float, ...]:
        return tuple(self._times)

    def length(self) -> float:
        """Largest keyframe time added so far."""
        return self._length

    def scale(self, factor: float):
        """
        Scale the translation of every keyframe.

        Rotations are left untouched. Repeated calls compound.

        Args:
            factor: Uniform scale applied to x, y and z
        """
        for mat in self._frames.values():
            mat[3, :3] = np.asarray(mat[3, :3], dtype=float) * factor

    def frame_at(self, time: float, loop: bool) -> Matrix44:
        """
        Sample the node transform at a time.

        Args:
            time: Clip-local query time
            loop: Wrap times past the end instead of clamping

        Returns:
            Interpolated transform (a new matrix)
        """
        if not self._times:
            raise EmptyAnimationError(f"Node animation '{self.name}' has no keyframes")

        length = self._length
        time = float(time)

        if time > length:
            if loop and length > TIME_EPSILON:
                time = math.fmod(time, length)
                # A whole number of periods lands on the clip end, not its start
                if float_equal(time, 0.0):
                    time = length
            else:
                time = length

        if float_equal(time, length):
            return self._frames[self._times[-1]].copy()

        upper = bisect_right(self._times, time)
        if upper == len(self._times):
            # Every keyframe precedes the query (negative keyframe times)
            return self._frames[self._times[-1]].copy()

        next_key = self._times[upper]

        if upper == 0 or float_equal(next_key, time):
            return self._frames[next_key].copy()

        prev_key = self._times[upper - 1]
        if float_equal(prev_key, time):
            return self._frames[prev_key].copy()

        if float_equal(next_key, prev_key):
            raise DegenerateIntervalError(
                f"Keyframes at {prev_key} and {next_key} of '{self.name}' are too close to interpolate"
            )

        t = (time - prev_key) / (next_key - prev_key)
        if not 0.0 <= t <= 1.0:
            raise InterpolationRangeError(
                f"Invalid time range: fraction {t} for time {time} "
                f"between keyframes {prev_key} and {next_key} of '{self.name}'"
            )

        return self._interpolate(self._frames[prev_key], self._frames[next_key], t)

    def _interpolate(self, prev_frame: Matrix44, next_frame: Matrix44, t: float) -> Matrix44:
        """Blend two keyframe transforms by fraction t."""
        prev_pos = np.asarray(prev_frame[3, :3], dtype=float)
        next_pos = np.asarray(next_frame[3, :3], dtype=float)
        pos = prev_pos + (next_pos - prev_pos) * t

        rot = slerp(rotation_of(prev_frame), rotation_of(next_frame), t)

        return compose(rot, pos)

    def time_at_x(self, x: float) -> float:
        """
        Find the time at which the node's X translation reaches x.

        Keyframes are scanned in time order; the first keyframe whose X is
        at least x decides the answer, with the time interpolated linearly
        from the keyframe before it. Only meaningful when X is monotonic in
        time. If no keyframe reaches x, the last keyframe time is returned.

        Args:
            x: X coordinate

        Returns:
            Clip-local time
        """
        if not self._times:
            raise EmptyAnimationError(f"Node animation '{self.name}' has no keyframes")

        for index, time in enumerate(self._times):
            frame_x = float(self._frames[time][3, 0])
            if frame_x < x and not float_equal(frame_x, x, POSITION_EPSILON):
                continue

            if index == 0 or float_equal(frame_x, x, POSITION_EPSILON):
                return time

            prev_time = self._times[index - 1]
            prev_x = float(self._frames[prev_time][3, 0])
            return prev_time + (time - prev_time) * (x - prev_x) / (frame_x - prev_x)

        return self._times[-1]

    def __repr__(self):
        return f"NodeAnimation(name='{self.name}', frames={len(self._times)}, length={self._length:.2f})"
