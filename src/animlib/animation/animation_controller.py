"""
Animation Controller

Manages a playhead over a SkeletonAnimation.
"""

import logging
from typing import Dict, Optional

from pyrr import Matrix44

from ..config.settings import DEFAULT_LOOP, DEFAULT_PLAYBACK_SPEED
from .skeleton_animation import SkeletonAnimation

logger = logging.getLogger(__name__)


class AnimationController:
    """
    Controls animation playback.

    Manages:
    - Current animation and playback time
    - Play/pause/loop states
    - The pose sampled at the current time

    The clip itself stays stateless; only the controller tracks time.
    """

    def __init__(self, playback_speed: float = DEFAULT_PLAYBACK_SPEED):
        """
        Initialize animation controller.

        Args:
            playback_speed: Multiplier applied to update() delta time
        """
        self.current_animation: Optional[SkeletonAnimation] = None
        self.current_time: float = 0.0
        self.current_pose: Dict[str, Matrix44] = {}
        self.is_playing: bool = False
        self.loop: bool = DEFAULT_LOOP
        self.playback_speed: float = playback_speed

    def play(self, animation: SkeletonAnimation, loop: bool = DEFAULT_LOOP):
        """
        Start playing an animation from the beginning.

        Args:
            animation: Animation to play
            loop: Whether to loop the animation
        """
        logger.debug("Playing animation '%s' (loop=%s)", animation.name, loop)
        self.current_animation = animation
        self.current_time = 0.0
        self.is_playing = True
        self.loop = loop
        self._sample()

    def pause(self):
        """Pause animation playback."""
        self.is_playing = False

    def resume(self):
        """Resume animation playback."""
        if self.current_animation is not None:
            self.is_playing = True

    def stop(self):
        """Stop animation and clear the current pose."""
        self.is_playing = False
        self.current_time = 0.0
        self.current_pose = {}

    def seek(self, time: float):
        """
        Move the playhead without changing the play state.

        Args:
            time: Clip-local time
        """
        if self.current_animation is None:
            return
        self.current_time = self._wrap(max(0.0, float(time)))
        self._sample()

    def update(self, delta_time: float):
        """
        Advance playback and resample the pose.

        Args:
            delta_time: Time elapsed since last update
        """
        if not self.is_playing or self.current_animation is None:
            return

        duration = self.current_animation.length()

        # Zero-length clips hold their only pose
        if duration > 0.0:
            time = self.current_time + delta_time * self.playback_speed
            if time >= duration and not self.loop:
                logger.debug("Animation '%s' finished", self.current_animation.name)
                self.is_playing = False
            self.current_time = self._wrap(time)

        self._sample()

    def _wrap(self, time: float) -> float:
        duration = self.current_animation.length()
        if time < duration:
            return time

        if self.loop and duration > 0.0:
            return time % duration
        return duration

    def _sample(self):
        self.current_pose = self.current_animation.pose_at(self.current_time, self.loop)

    def __repr__(self):
        anim_name = self.current_animation.name if self.current_animation else "None"
        return f"AnimationController(animation='{anim_name}', time={self.current_time:.2f}, playing={self.is_playing})"
