# Exp_Anim/engine/engine_config.py
"""
Configuration for the animation engine.
Adjust these values based on your needs.
"""

# Number of worker threads used to fan out animation players each frame
# 1 = serial (every player evaluated on the calling thread)
WORKER_COUNT = 4

# Quaternion slerp falls back to lerp + normalize above this dot product
# (nearly identical rotations, where sin(theta) is too small to divide by)
SLERP_LINEAR_THRESHOLD = 0.9995

# Smallest quaternion norm / sin(theta) used as a divisor
QUAT_EPSILON = 1e-10

# Debug flag - set to True to see controller prints
DEBUG_ANIMATIONS = False

# Debug properties enabled by default on a fresh DebugGate
# (see developer/dev_logger.py for the category -> property map)
DEBUG_CATEGORIES = frozenset({
    'animations',
    'anim_paths',
    'anim_guard',
    'anim_cache',
})

# Master debug frequency in Hz (1-30). 30 = log every frame (no gating)
DEBUG_MASTER_HZ = 30

# Transitions at or below this weight are dropped (absorbs float drift,
# e.g. ten steps of 0.1s against a 1.0s fade)
TRANSITION_WEIGHT_EPSILON = 1e-6
