# Exp_Anim/__init__.py

# ##### BEGIN GPL LICENSE BLOCK #####
#
#  This program is free software; you can redistribute it and/or
#  modify it under the terms of the GNU General Public License
#  as published by the Free Software Foundation; either version 2
#  of the License, or (at your option) any later version.
#
#  This program is distributed in the hope that it will be useful,
#  but WITHOUT ANY WARRANTY; without even the implied warranty of
#  MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#  GNU General Public License for more details.
#
#  You should have received a copy of the GNU General Public License
#  along with this program; if not, write to the Free Software Foundation,
#  Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301, USA.
#
# ##### END GPL LICENSE BLOCK #####

"""
Exp_Anim - keyframe animation evaluation on a scene hierarchy.

  engine/             clips, sampling math, scene, config (no player state)
  animations/         players, path resolution, aliasing guard, frame pass
  developer/          diagnostics buffer and frequency gating
"""

from .engine import MorphWeights, Scene, Transform
from .engine.animations import (
    AnimationCache,
    AnimationClip,
    EntityPath,
    KeyframeKind,
    Keyframes,
    VariableCurve,
)
from .animations import (
    AnimationController,
    AnimationPlayer,
    RepeatAnimation,
    animation_player,
)
from .developer import DebugGate, DevLogger

__all__ = [
    "AnimationCache",
    "AnimationClip",
    "AnimationController",
    "AnimationPlayer",
    "DebugGate",
    "DevLogger",
    "EntityPath",
    "KeyframeKind",
    "Keyframes",
    "MorphWeights",
    "RepeatAnimation",
    "Scene",
    "Transform",
    "VariableCurve",
    "animation_player",
]
