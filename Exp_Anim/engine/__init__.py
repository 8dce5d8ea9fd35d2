# Exp_Anim/engine/__init__.py
"""
Engine - worker-safe data, math and the scene the animation pass runs on.
"""

from .scene import MorphWeights, Scene, Transform

__all__ = [
    "MorphWeights",
    "Scene",
    "Transform",
]
