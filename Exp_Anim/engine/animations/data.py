# Exp_Anim/engine/animations/data.py
"""
AnimationClip - Keyframe curves addressed by named entity paths.

Worker-safe: contains no scene references, only numpy arrays and names.

Layout:
  - A clip groups its curves into "bones": one bone per target node
  - Each bone holds one or more VariableCurves (rotation / translation /
    scale / morph weights), possibly from different source channels
  - EntityPath -> bone id mapping locates the target node at runtime

Keyframe value layout (numpy):
  - Rotation:    (n, 4) quaternions [w, x, y, z]
  - Translation: (n, 3)
  - Scale:       (n, 3)
  - Weights:     (n * target_count,) flat, one contiguous block of
                 target_count morph weights per keyframe (glTF layout)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np


@dataclass(frozen=True)
class EntityPath:
    """
    Path to a node, as the names from the animation root down to the target.

    parts[0] is the name of the root node that carries the AnimationPlayer.
    """
    parts: Tuple[str, ...]

    def __post_init__(self):
        parts = (self.parts,) if isinstance(self.parts, str) else tuple(self.parts)
        if not parts:
            raise ValueError("EntityPath needs at least the root name")
        object.__setattr__(self, 'parts', parts)

    @classmethod
    def parse(cls, text: str, sep: str = "/") -> "EntityPath":
        """Build a path from "Root/Child/Leaf"."""
        return cls(tuple(part for part in text.split(sep) if part))

    def __len__(self) -> int:
        return len(self.parts)

    def __str__(self) -> str:
        return "/".join(self.parts)


class KeyframeKind(Enum):
    """Attribute a curve animates."""
    ROTATION = "rotation"
    TRANSLATION = "translation"
    SCALE = "scale"
    WEIGHTS = "weights"


@dataclass(frozen=True, eq=False)
class Keyframes:
    """
    Keyframe values for one attribute.

    Use the constructors (Keyframes.rotation(...), etc.) so the values get
    the right shape and dtype.
    """
    kind: KeyframeKind
    values: np.ndarray

    @classmethod
    def rotation(cls, quats: Iterable) -> "Keyframes":
        return cls(KeyframeKind.ROTATION, np.asarray(quats, dtype=np.float32).reshape(-1, 4))

    @classmethod
    def translation(cls, vectors: Iterable) -> "Keyframes":
        return cls(KeyframeKind.TRANSLATION, np.asarray(vectors, dtype=np.float32).reshape(-1, 3))

    @classmethod
    def scale(cls, vectors: Iterable) -> "Keyframes":
        return cls(KeyframeKind.SCALE, np.asarray(vectors, dtype=np.float32).reshape(-1, 3))

    @classmethod
    def weights(cls, flat_weights: Iterable) -> "Keyframes":
        return cls(KeyframeKind.WEIGHTS, np.asarray(flat_weights, dtype=np.float32).reshape(-1))


@dataclass(eq=False)
class VariableCurve:
    """
    Timestamps plus keyframes for one attribute.

    keyframe_timestamps must be non-decreasing with one entry per keyframe.
    This is NOT validated: a curve whose lengths disagree is an authoring
    bug upstream and sampling it may raise.
    """
    keyframe_timestamps: np.ndarray
    keyframes: Keyframes

    def __post_init__(self):
        self.keyframe_timestamps = np.asarray(self.keyframe_timestamps, dtype=np.float64).reshape(-1)

    @property
    def keyframe_count(self) -> int:
        return len(self.keyframe_timestamps)

    @property
    def last_timestamp(self) -> float:
        """Timestamp of the last keyframe, 0.0 for an empty curve."""
        if len(self.keyframe_timestamps) == 0:
            return 0.0
        return float(self.keyframe_timestamps[-1])

    @property
    def target_count(self) -> int:
        """Morph weights per keyframe (1 for non-weight curves)."""
        if self.keyframes.kind is not KeyframeKind.WEIGHTS or self.keyframe_count == 0:
            return 1
        return len(self.keyframes.values) // self.keyframe_count


class AnimationClip:
    """
    A list of VariableCurves per bone, and the EntityPath each bone targets.

    Attributes:
        name: Default handle when stored in an AnimationCache
        duration: Last keyframe timestamp across every curve (seconds)
    """

    __slots__ = ('name', '_curves', '_paths', '_duration')

    def __init__(self, name: str = ""):
        self.name = name
        self._curves: List[List[VariableCurve]] = []
        self._paths: Dict[EntityPath, int] = {}
        self._duration: float = 0.0

    @property
    def duration(self) -> float:
        """Duration of the clip in seconds."""
        return self._duration

    @property
    def curves(self) -> List[List[VariableCurve]]:
        """VariableCurves for each bone, indexed by bone id."""
        return self._curves

    @property
    def paths(self) -> Dict[EntityPath, int]:
        """EntityPath -> bone id. Treat as read-only."""
        return self._paths

    @property
    def path_count(self) -> int:
        return len(self._paths)

    def curves_for(self, bone_id: int) -> Optional[List[VariableCurve]]:
        """Curves for a bone, or None if the bone id is invalid."""
        if 0 <= bone_id < len(self._curves):
            return self._curves[bone_id]
        return None

    def curves_for_path(self, path: EntityPath) -> Optional[List[VariableCurve]]:
        """Curves by EntityPath, or None if the path is not animated."""
        bone_id = self._paths.get(path)
        if bone_id is None:
            return None
        return self._curves[bone_id]

    def add_curve_to_path(self, path: EntityPath, curve: VariableCurve) -> None:
        """Add a curve to a path, allocating a new bone for unseen paths."""
        # Duration only ever grows
        self._duration = max(self._duration, curve.last_timestamp)

        bone_id = self._paths.get(path)
        if bone_id is not None:
            self._curves[bone_id].append(curve)
        else:
            self._paths[path] = len(self._curves)
            self._curves.append([curve])

    def compatible_with(self, root_name: str) -> bool:
        """Whether this clip can run on a root node named root_name."""
        return all(path.parts[0] == root_name for path in self._paths)

    def __repr__(self) -> str:
        curve_count = sum(len(c) for c in self._curves)
        return f"AnimationClip('{self.name}', {self._duration:.2f}s, {len(self._paths)} paths, {curve_count} curves)"
