"""Shared scene and clip builders for the Exp_Anim test suite."""

from types import SimpleNamespace

import pytest

from Exp_Anim import (
    AnimationCache,
    AnimationClip,
    EntityPath,
    Keyframes,
    Scene,
    VariableCurve,
)

# 90 degrees about Z, [w, x, y, z]
QUAT_Z90 = (0.70710678, 0.0, 0.0, 0.70710678)
# 45 degrees about Z
QUAT_Z45 = (0.92387953, 0.0, 0.0, 0.38268343)


def translation_curve(timestamps, vectors):
    return VariableCurve(timestamps, Keyframes.translation(vectors))


def rotation_curve(timestamps, quats):
    return VariableCurve(timestamps, Keyframes.rotation(quats))


def scale_curve(timestamps, vectors):
    return VariableCurve(timestamps, Keyframes.scale(vectors))


def weights_curve(timestamps, flat_weights):
    return VariableCurve(timestamps, Keyframes.weights(flat_weights))


def clip_with(name, *path_curves):
    """AnimationClip from (path_string, curve) pairs."""
    clip = AnimationClip(name)
    for path, curve in path_curves:
        clip.add_curve_to_path(EntityPath.parse(path), curve)
    return clip


@pytest.fixture
def rig():
    """
    Armature            (animation root)
      Hips
        Spine
      Tail
    """
    scene = Scene()
    root = scene.spawn("Armature")
    hips = scene.spawn("Hips", parent=root)
    spine = scene.spawn("Spine", parent=hips)
    tail = scene.spawn("Tail", parent=root)
    return SimpleNamespace(scene=scene, root=root, hips=hips, spine=spine, tail=tail)


@pytest.fixture
def cache():
    return AnimationCache()
