"""
Skeleton Animation

Animation clip made of one NodeAnimation per animated node.
"""

import logging
import math
from typing import Dict, List

from pyrr import Matrix44

from ..config.settings import POSITION_EPSILON
from .errors import EmptyAnimationError, MissingNodeError
from .node_animation import NodeAnimation
from .transforms import as_transform, float_equal

logger = logging.getLogger(__name__)


class SkeletonAnimation:
    """
    Complete skeletal animation clip.

    Each node owns an independent keyframe timeline. Poses are sampled per
    node, so nodes whose keyframes sit at different times are interpolated
    independently: the result is well defined per node but only visually
    coherent when importers emit a shared time grid (see shares_time_grid).

    Like NodeAnimation, the clip is not synchronized for concurrent
    mutation and query.
    """

    def __init__(self, name: str):
        """
        Initialize skeleton animation.

        Args:
            name: Clip name
        """
        self.name = name
        self.animations: Dict[str, NodeAnimation] = {}
        self._length: float = 0.0

    def add_keyframe(self, node: str, time: float, transform):
        """
        Add a keyframe for a node, creating its timeline on first use.

        Args:
            node: Node name
            time: Clip-local time
            transform: 4x4 transform or Pose
        """
        # Validate before a new node can be registered
        time = float(time)
        mat = as_transform(transform)

        animation = self.animations.get(node)
        if animation is None:
            logger.debug("Animation '%s': adding node '%s'", self.name, node)
            animation = NodeAnimation(node)
            self.animations[node] = animation

        animation.add_keyframe(time, mat)

        if time > self._length:
            self._length = float(time)

    def has_node(self, node: str) -> bool:
        return node in self.animations

    def node_count(self) -> int:
        return len(self.animations)

    def node_names(self) -> List[str]:
        return list(self.animations)

    def node_animation(self, node: str) -> NodeAnimation:
        """
        Get the timeline of a node.

        Raises:
            MissingNodeError: If the clip does not animate the node
        """
        try:
            return self.animations[node]
        except KeyError:
            raise MissingNodeError(node, self.name) from None

    def length(self) -> float:
        """Largest keyframe time across all nodes."""
        return self._length

    def node_pose_at(self, node: str, time: float, loop: bool) -> Matrix44:
        """
        Sample a single node.

        Args:
            node: Node name (check has_node first)
            time: Clip-local time
            loop: Wrap times past the node's end

        Returns:
            Node transform
        """
        return self.node_animation(node).frame_at(time, loop)

    def pose_at(self, time: float, loop: bool) -> Dict[str, Matrix44]:
        """
        Sample every node at a time.

        Args:
            time: Clip-local time
            loop: Wrap times past each node's end

        Returns:
            Dictionary mapping node name -> transform
        """
        return {
            name: animation.frame_at(time, loop)
            for name, animation in self.animations.items()
        }

    def pose_at_x(self, x: float, node: str, loop: bool) -> Dict[str, Matrix44]:
        """
        Sample every node at the time a reference node reaches an X position.

        x is clamped to the reference node's first keyframe X. Past its last
        keyframe X, x is clamped (no loop) or wrapped by subtracting the last
        X (loop).

        Args:
            x: X coordinate of the reference node
            node: Reference node name
            loop: Wrap positions and times past the end

        Returns:
            Dictionary mapping node name -> transform
        """
        animation = self.node_animation(node)
        if animation.frame_count() == 0:
            raise EmptyAnimationError(f"Node animation '{node}' has no keyframes")

        first_x = float(animation.keyframe(0).transform[3, 0])
        last_x = float(animation.keyframe(animation.frame_count() - 1).transform[3, 0])

        if x < first_x:
            x = first_x

        if x > last_x:
            if loop and last_x > 0.0:
                x = math.fmod(x, last_x)
                if float_equal(x, 0.0, POSITION_EPSILON):
                    x = last_x
            else:
                if loop:
                    logger.warning(
                        "Animation '%s': cannot wrap x=%s, node '%s' ends at x=%s",
                        self.name, x, node, last_x,
                    )
                x = last_x

        time = animation.time_at_x(x)
        return self.pose_at(time, loop)

    def scale(self, factor: float):
        """Scale the translation of every node keyframe."""
        logger.debug("Animation '%s': scaling translations by %s", self.name, factor)
        for animation in self.animations.values():
            animation.scale(factor)

    def keyframe_times(self) -> List[float]:
        """Sorted union of keyframe times across all nodes."""
        times = set()
        for animation in self.animations.values():
            times.update(animation.times)
        return sorted(times)

    def shares_time_grid(self) -> bool:
        """
        Check whether every node has keyframes at the same times.

        Advisory only; sampling never requires it.
        """
        grids = [animation.times for animation in self.animations.values()]
        if not grids:
            return True

        reference = grids[0]
        for times in grids[1:]:
            if len(times) != len(reference):
                return False
            if not all(float_equal(a, b) for a, b in zip(times, reference)):
                return False
        return True

    def __repr__(self):
        return f"SkeletonAnimation(name='{self.name}', length={self._length:.2f}, nodes={len(self.animations)})"
