# Exp_Anim/animations/apply.py
"""
Frame pass - advance every AnimationPlayer and write the sampled poses.

Per player, per frame, in order:
  1. Fade transitions, dropping the ones that reached 0
  2. Skip paused players unless they were changed since the last pass
  3. Ancestor check -> AnimationWriteAccess (skip the player if refused)
  4. Apply the active animation at weight 1.0
  5. Apply each transition at its current weight, oldest first

Players are independent jobs: with an executor they fan out across
threads. Jobs never touch a shared logger; each returns its own
(category, message) list and the calling thread merges them in player order.
"""

from concurrent.futures import Executor
from typing import List, Optional, Tuple

from ..engine.animations.blend import apply_curve
from ..engine.animations.cache import AnimationCache
from .guard import AnimationWriteAccess, acquire_write_access
from .path_resolver import entity_from_path
from .player import AnimationPlayer, PlayingAnimation


def wrap_elapsed(elapsed: float, duration: float) -> float:
    """Bring a playback time back into [0, duration)."""
    if duration <= 0.0:
        return 0.0
    if elapsed >= duration or elapsed < 0.0:
        elapsed %= duration
    return elapsed


def advance_animation(animation: PlayingAnimation, duration: float, delta_seconds: float, paused: bool) -> float:
    """
    Step one PlayingAnimation forward and wrap it into the clip.

    Time only advances while the animation is neither finished nor paused.
    A completion is counted when the new time reaches the clip end (forward)
    or drops below 0 (reverse), before wrapping. Elapsed is stored wrapped,
    so a forward step landing exactly on the end counts on that frame.

    Returns:
        The wrapped elapsed time (also stored on the animation)
    """
    if not animation.is_finished() and not paused:
        animation.elapsed += delta_seconds * animation.speed

    elapsed = animation.elapsed
    if animation.speed > 0.0:
        # A zero-length clip only completes once time actually moves past 0
        if elapsed > duration or (elapsed == duration and duration > 0.0):
            animation.completions += 1
    elif animation.speed < 0.0 and elapsed < 0.0:
        animation.completions += 1

    animation.elapsed = wrap_elapsed(elapsed, duration)
    return animation.elapsed


def apply_animation(
    weight: float,
    animation: PlayingAnimation,
    paused: bool,
    root: int,
    delta_seconds: float,
    animations: AnimationCache,
    scene,
    access: AnimationWriteAccess,
    logs: List[Tuple[str, str]]
) -> int:
    """
    Advance one PlayingAnimation and blend every curve of its clip into the scene.

    Returns:
        Number of curves written
    """
    handle = animation.animation_clip
    if handle is None:
        return 0

    clip = animations.get(handle)
    if clip is None:
        logs.append(("ANIM-CACHE", f"CLIP_MISSING player={root} handle='{handle}'"))
        return 0

    # Keeps running when finished or paused: set_elapsed() must still show up
    elapsed = advance_animation(animation, clip.duration, delta_seconds, paused)

    # Bone ids are append-only, so a resize keeps every surviving entry valid
    path_cache = animation.path_cache
    if len(path_cache) < clip.path_count:
        path_cache.extend([] for _ in range(clip.path_count - len(path_cache)))
    elif len(path_cache) > clip.path_count:
        del path_cache[clip.path_count:]

    written = 0
    for path, bone_id in clip.paths.items():
        target = entity_from_path(root, path, scene, path_cache[bone_id], logs)
        if target is None:
            continue

        transform = access.transform(target)
        if transform is None:
            continue
        morphs = access.morph_weights(target)

        for curve in clip.curves_for(bone_id):
            if apply_curve(curve, elapsed, weight, transform, morphs):
                written += 1

    return written


def run_animation_player(
    root: int,
    parent: Optional[int],
    player: AnimationPlayer,
    delta_seconds: float,
    animations: AnimationCache,
    scene,
    logs: List[Tuple[str, str]]
) -> bool:
    """
    Evaluate one player for this frame (transitions already faded).

    Returns:
        True if the player was applied, False if it was skipped
    """
    paused = player.is_paused()
    # Paused players still run on frames where they were changed, so a
    # set_elapsed() made while paused is visible
    if paused and not player.is_changed:
        return False

    transitions = player.transitions
    if player.animation_clip is None and not transitions:
        return False

    access = acquire_write_access(root, parent, scene)
    if access is None:
        logs.append((
            "ANIM-GUARD",
            f"ANCESTOR_CONFLICT player={root} - an ancestor also has an AnimationPlayer, cannot safely animate"
        ))
        return False

    # Apply the main animation
    apply_animation(1.0, player.animation, paused, root, delta_seconds, animations, scene, access, logs)

    # Apply any fade-out transitions from previous animations
    for transition in transitions:
        apply_animation(
            transition.current_weight,
            transition.animation,
            paused,
            root,
            delta_seconds,
            animations,
            scene,
            access,
            logs,
        )

    return True


def _player_job(entry, delta_seconds: float, animations: AnimationCache, scene) -> Tuple[bool, List[Tuple[str, str]]]:
    root, parent, player = entry
    logs: List[Tuple[str, str]] = []

    player.update_transitions(delta_seconds)
    applied = run_animation_player(root, parent, player, delta_seconds, animations, scene, logs)
    player.reset_changed()

    return applied, logs


def animation_player(
    delta_seconds: float,
    animations: AnimationCache,
    scene,
    logger=None,
    executor: Optional[Executor] = None
) -> int:
    """
    Run one frame for every AnimationPlayer in the scene.

    Args:
        delta_seconds: Frame time (seconds, >= 0)
        animations: Clip store the players' handles resolve against
        scene: Hierarchy holding the players and the animated nodes
        logger: DevLogger receiving the frame's diagnostics (optional)
        executor: Fan players out across this executor (optional)

    Returns:
        Number of players applied this frame
    """
    entries = list(scene.players())

    if executor is not None and len(entries) > 1:
        results = list(executor.map(
            lambda entry: _player_job(entry, delta_seconds, animations, scene),
            entries,
        ))
    else:
        results = [_player_job(entry, delta_seconds, animations, scene) for entry in entries]

    applied = 0
    for player_applied, logs in results:
        if player_applied:
            applied += 1
        if logger is not None and logs:
            logger.log_worker_messages(logs)

    return applied
