# Exp_Anim/animations/__init__.py
"""
Animations Module - per-frame playback on the scene hierarchy.

Worker-safe computation (clips, sampling math) is in engine/animations/.

Components:
- AnimationPlayer: playback state machine (active clip + fading transitions)
- path_resolver: EntityPath -> node lookup with a per-bone cache
- guard: ancestor-player check that hands out write access
- apply: the frame pass over every player
- AnimationController: main orchestrator (cache + scene + logger + workers)
"""

from .player import (
    AnimationPlayer,
    AnimationTransition,
    PlayingAnimation,
    RepeatAnimation,
    RepeatMode,
)
from .path_resolver import entity_from_path
from .guard import AnimationWriteAccess, acquire_write_access, verify_no_ancestor_player
from .apply import advance_animation, animation_player, apply_animation, run_animation_player, wrap_elapsed
from .controller import AnimationController

__all__ = [
    "AnimationController",
    "AnimationPlayer",
    "AnimationTransition",
    "AnimationWriteAccess",
    "PlayingAnimation",
    "RepeatAnimation",
    "RepeatMode",
    "acquire_write_access",
    "advance_animation",
    "animation_player",
    "apply_animation",
    "entity_from_path",
    "run_animation_player",
    "verify_no_ancestor_player",
    "wrap_elapsed",
]
