# Exp_Anim/engine/animations/__init__.py
"""
Animation Engine - Worker-safe animation computation.

This module contains NO scene references and can be used from any thread.

Core Components:
- AnimationClip: Keyframe curves grouped per bone, addressed by EntityPath
- AnimationCache: Clip storage, handle -> AnimationClip
- blend: Curve sampling, interpolation and blending math (vectorized numpy)

Quaternion order everywhere: [w, x, y, z]
"""

from .data import (
    AnimationClip,
    EntityPath,
    KeyframeKind,
    Keyframes,
    VariableCurve,
)
from .cache import AnimationCache
from .blend import (
    IDENTITY,
    apply_curve,
    find_keyframe,
    lerp_vectorized,
    normalize_quaternions,
    sample_curve,
    slerp_vectorized,
)

__all__ = [
    # Data
    "AnimationClip",
    "EntityPath",
    "KeyframeKind",
    "Keyframes",
    "VariableCurve",

    # Cache
    "AnimationCache",

    # Sampling / blending
    "IDENTITY",
    "apply_curve",
    "find_keyframe",
    "lerp_vectorized",
    "normalize_quaternions",
    "sample_curve",
    "slerp_vectorized",
]
