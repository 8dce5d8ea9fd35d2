# Exp_Anim/engine/animations/blend.py
"""
Animation blending math - NUMPY VECTORIZED, worker-safe, no scene access.

SINGLE SOURCE OF TRUTH for all animation math.

Two kinds of weights show up here:
  - lerp:   position between keyframe i and i+1 (from the timestamps)
  - weight: blend strength of the sampled value against the node's CURRENT
            value. This is what lets the active animation and its fading
            transitions accumulate onto one node in a single frame.

Transform format (10 floats):
  [quat_w, quat_x, quat_y, quat_z, loc_x, loc_y, loc_z, scale_x, scale_y, scale_z]
"""

from typing import Optional

import numpy as np

from ..engine_config import QUAT_EPSILON, SLERP_LINEAR_THRESHOLD
from .data import KeyframeKind, VariableCurve

# Identity transform
IDENTITY = np.array([1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 1.0, 1.0, 1.0], dtype=np.float32)


# =============================================================================
# VECTORIZED QUATERNION OPERATIONS
# =============================================================================

def normalize_quaternions(quats: np.ndarray) -> np.ndarray:
    """
    Normalize quaternions.

    Args:
        quats: (..., 4) array of quaternions [w, x, y, z]

    Returns:
        Normalized quaternions, same shape
    """
    quats = np.asarray(quats, dtype=np.float32)
    norms = np.linalg.norm(quats, axis=-1, keepdims=True)
    norms = np.maximum(norms, QUAT_EPSILON)  # Avoid division by zero
    return quats / norms


def slerp_vectorized(q1: np.ndarray, q2: np.ndarray, t: float) -> np.ndarray:
    """
    Vectorized spherical linear interpolation, always along the shorter arc.

    Args:
        q1: (..., 4) array of quaternions [w, x, y, z]
        q2: (..., 4) array of quaternions [w, x, y, z]
        t: Interpolation factor (0 = q1, 1 = q2)

    Returns:
        Interpolated quaternions, same shape as input
    """
    q1 = np.asarray(q1, dtype=np.float32)
    q2 = np.asarray(q2, dtype=np.float32)

    cos_angle = np.sum(q1 * q2, axis=-1, keepdims=True)

    # q and -q are the same rotation: flip q2 into q1's hemisphere
    sign = np.where(cos_angle < 0.0, -1.0, 1.0).astype(np.float32)
    q2 = q2 * sign
    cos_angle = np.clip(cos_angle * sign, 0.0, 1.0)

    # Nearly identical rotations: sin(angle) is too small to divide by
    near = cos_angle > SLERP_LINEAR_THRESHOLD

    angle = np.arccos(cos_angle)
    sin_angle = np.maximum(np.sin(angle), QUAT_EPSILON)

    w1 = np.where(near, 1.0 - t, np.sin((1.0 - t) * angle) / sin_angle)
    w2 = np.where(near, t, np.sin(t * angle) / sin_angle)
    result = w1 * q1 + w2 * q2

    # The linear blend leaves the unit sphere
    result = np.where(near, normalize_quaternions(result), result)
    return result.astype(np.float32)


def lerp_vectorized(a: np.ndarray, b: np.ndarray, t: float) -> np.ndarray:
    """Componentwise linear interpolation (t = 0 returns a, t = 1 returns b)."""
    a = np.asarray(a, dtype=np.float32)
    b = np.asarray(b, dtype=np.float32)
    return a + (b - a) * np.float32(t)


# =============================================================================
# CURVE SAMPLING
# =============================================================================

def find_keyframe(timestamps: np.ndarray, t: float) -> Optional[int]:
    """
    Binary search for the keyframe interval containing t.

    Returns:
        Index i such that timestamps[i] <= t < timestamps[i + 1], or None when
        the curve has not started (t before the first key) or has finished
        (t on or past the last key).
    """
    # Number of keyframes at or before t
    idx = int(np.searchsorted(timestamps, t, side='right'))
    if idx == 0:
        return None  # this curve isn't started yet
    if idx >= len(timestamps):
        return None  # this curve is finished
    return idx - 1


def sample_curve(curve: VariableCurve, t: float) -> Optional[np.ndarray]:
    """
    Sample a curve at time t (already wrapped into the clip duration).

    Single-keyframe curves return their only value whatever t is.

    Returns:
        (4,) quaternion, (3,) vector, or (target_count,) morph weights.
        None when t is outside the curve's keyframe range.
    """
    keyframes = curve.keyframes
    kind = keyframes.kind
    values = keyframes.values

    if curve.keyframe_count == 1:
        if kind is KeyframeKind.WEIGHTS:
            return values.copy()
        return values[0].copy()

    timestamps = curve.keyframe_timestamps
    step = find_keyframe(timestamps, t)
    if step is None:
        return None

    ts_start = timestamps[step]
    ts_end = timestamps[step + 1]
    lerp = float((t - ts_start) / (ts_end - ts_start))

    if kind is KeyframeKind.ROTATION:
        rot_start = normalize_quaternions(values[step])
        rot_end = normalize_quaternions(values[step + 1])
        # Choose the smallest angle for the rotation
        if np.dot(rot_start, rot_end) < 0:
            rot_end = -rot_end
        return slerp_vectorized(rot_start, rot_end, lerp)

    elif kind is KeyframeKind.TRANSLATION or kind is KeyframeKind.SCALE:
        return lerp_vectorized(values[step], values[step + 1], lerp)

    elif kind is KeyframeKind.WEIGHTS:
        target_count = curve.target_count
        start = target_count * step
        block_start = values[start:start + target_count]
        block_end = values[start + target_count:start + 2 * target_count]
        return lerp_vectorized(block_start, block_end, lerp)

    raise ValueError(f"Unknown keyframe kind: {kind!r}")


def apply_curve(curve: VariableCurve, t: float, weight: float, transform, morphs=None) -> bool:
    """
    Sample a curve and blend the result into a node's current values.

    Args:
        curve: Curve to sample
        t: Wrapped clip time in seconds
        weight: Blend strength against the current value (0-1)
        transform: Writable transform (rotation / translation / scale arrays)
        morphs: Writable morph weights, or None if the node has none

    Returns:
        True if a value was written
    """
    value = sample_curve(curve, t)
    if value is None:
        return False

    kind = curve.keyframes.kind

    if kind is KeyframeKind.ROTATION:
        transform.rotation[...] = slerp_vectorized(transform.rotation, value, weight)
    elif kind is KeyframeKind.TRANSLATION:
        transform.translation[...] = lerp_vectorized(transform.translation, value, weight)
    elif kind is KeyframeKind.SCALE:
        transform.scale[...] = lerp_vectorized(transform.scale, value, weight)
    elif kind is KeyframeKind.WEIGHTS:
        if morphs is None:
            return False
        morphs.weights[...] = lerp_vectorized(morphs.weights, value, weight)
    else:
        raise ValueError(f"Unknown keyframe kind: {kind!r}")

    return True
