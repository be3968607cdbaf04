"""
Animation Configuration Settings

All configuration constants for the animation engine.
Modify these values to change engine behavior.
"""

# ============================================================================
# Floating-Point Tolerances
# ============================================================================

# Keyframe times from importers (e.g. 30fps sampling) are not bit-identical
# between insertion and query, so times are compared within this tolerance.
TIME_EPSILON = 1e-6

# Tolerance used when comparing translation components (time_at_x lookups)
POSITION_EPSILON = 1e-6

# ============================================================================
# Keyframe Access
# ============================================================================

# Time reported by NodeAnimation.keyframe() for an out-of-range index
INVALID_KEYFRAME_TIME = -1.0

# ============================================================================
# Playback Defaults
# ============================================================================

DEFAULT_LOOP = True             # Wrap queries past the clip end
DEFAULT_PLAYBACK_SPEED = 1.0    # Multiplier applied to controller delta time
