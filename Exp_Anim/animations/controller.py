# Exp_Anim/animations/controller.py
"""
AnimationController - Main animation orchestrator.

Owns the clip cache, the scene, the diagnostics logger and (optionally) a
thread pool for fanning players out. The host calls update() once per frame.

Usage:
    controller = AnimationController()
    walk = controller.add_animation(walk_clip)

    root = controller.scene.spawn("Armature")
    player = controller.attach_player(root)
    player.play(walk).repeat()

    # Each frame:
    controller.update(delta_time)

    # When done:
    controller.shutdown()
"""

import concurrent.futures
from typing import Optional

from ..developer.dev_logger import DevLogger
from ..engine.animations.cache import AnimationCache
from ..engine.animations.data import AnimationClip
from ..engine.engine_config import DEBUG_ANIMATIONS, WORKER_COUNT
from ..engine.scene import Scene
from .apply import animation_player
from .player import AnimationPlayer


class AnimationController:
    """
    Main animation controller.

    Architecture:
    - AnimationCache (engine/animations) stores clips by handle
    - Scene holds the hierarchy, the animated transforms and the players
    - apply.animation_player() runs the per-frame pass
    - DevLogger collects the pass's diagnostics
    """

    def __init__(
        self,
        scene: Optional[Scene] = None,
        logger: Optional[DevLogger] = None,
        worker_count: int = WORKER_COUNT
    ):
        # Clip storage (worker-safe)
        self.cache = AnimationCache()

        self.scene = scene if scene is not None else Scene()
        self.logger = logger if logger is not None else DevLogger()

        # Global time scale (1.0 = normal, 0.5 = half speed)
        self.time_scale: float = 1.0

        self._executor: Optional[concurrent.futures.ThreadPoolExecutor] = None
        if worker_count > 1:
            self._executor = concurrent.futures.ThreadPoolExecutor(
                max_workers=worker_count,
                thread_name_prefix="EXP-ANIM"
            )

        if DEBUG_ANIMATIONS:
            print(f"[AnimationController] Initialized (workers={worker_count})")

    # =========================================================================
    # CACHE MANAGEMENT
    # =========================================================================

    def add_animation(self, clip: AnimationClip, handle: Optional[str] = None) -> str:
        """Add a clip to the cache. Returns its handle."""
        return self.cache.add(clip, handle)

    def get_animation(self, handle: str) -> Optional[AnimationClip]:
        return self.cache.get(handle)

    def has_animation(self, handle: str) -> bool:
        return self.cache.has(handle)

    # =========================================================================
    # PLAYERS
    # =========================================================================

    def attach_player(self, entity: int) -> AnimationPlayer:
        """Attach a fresh AnimationPlayer to a node (or return its existing one)."""
        player = self.scene.player(entity)
        if player is None:
            player = self.scene.insert_player(entity, AnimationPlayer())
        return player

    def get_player(self, entity: int) -> Optional[AnimationPlayer]:
        return self.scene.player(entity)

    def detach_player(self, entity: int) -> Optional[AnimationPlayer]:
        return self.scene.remove_player(entity)

    def has_active_animations(self) -> bool:
        """Check if any player has an unfinished active clip or a running transition."""
        for _, _, player in self.scene.players():
            if player.transitions:
                return True
            if player.animation_clip is not None and not player.is_finished():
                return True
        return False

    # =========================================================================
    # FRAME
    # =========================================================================

    def update(self, delta_time: float) -> int:
        """
        Run one animation frame.

        Args:
            delta_time: Time since last frame in seconds

        Returns:
            Number of players applied this frame
        """
        if delta_time < 0:
            raise ValueError(f"delta_time must be >= 0, got {delta_time}")

        self.logger.increment_frame()
        dt = delta_time * self.time_scale

        applied = animation_player(dt, self.cache, self.scene, self.logger, self._executor)

        if DEBUG_ANIMATIONS:
            print(f"[AnimationController] frame={self.logger.current_frame} applied={applied}")

        return applied

    def shutdown(self) -> None:
        """Stop the worker pool (if any). The controller still works serially afterwards."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> "AnimationController":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    def __repr__(self) -> str:
        return f"AnimationController({self.cache!r}, {self.scene!r}, time_scale={self.time_scale})"
