# Exp_Anim/animations/path_resolver.py
"""
EntityPath resolution against the live scene hierarchy.

Each PlayingAnimation keeps one path cache per bone: the node id found at
every depth of the path on an earlier frame. A cached node is reused only
while it is still a child of the node above it AND still carries the
expected name, so renames and re-parenting fall back to a scan of that
single level instead of invalidating the whole path.
"""

from typing import List, Optional, Tuple

from ..engine.animations.data import EntityPath


def entity_from_path(
    root: int,
    path: EntityPath,
    scene,
    path_cache: List[Optional[int]],
    logs: List[Tuple[str, str]]
) -> Optional[int]:
    """
    Find the node a path points to, starting at the animation root.

    Args:
        root: Node carrying the AnimationPlayer (matches path.parts[0])
        path: Names from the root down to the target
        scene: Hierarchy with children(entity) and name(entity)
        path_cache: This bone's cache; resized in place to len(path)
        logs: (category, message) sink for resolution misses

    Returns:
        Target node id, or None if some part of the path is missing this frame
    """
    parts = path.parts

    # Resize, never clear: entries for surviving depths stay valid
    if len(path_cache) < len(parts):
        path_cache.extend([None] * (len(parts) - len(path_cache)))
    elif len(path_cache) > len(parts):
        del path_cache[len(parts):]

    current = root

    # parts[0] is the root itself, which we already have
    for idx in range(1, len(parts)):
        part = parts[idx]
        children = scene.children(current)
        found = False

        cached = path_cache[idx]
        if cached is not None and cached in children and scene.name(cached) == part:
            current = cached
            found = True

        if not found:
            for child in children:
                if scene.name(child) == part:
                    # Found a child with the right name, continue to the next part
                    current = child
                    path_cache[idx] = child
                    found = True
                    break

        if not found:
            logs.append(("ANIM-PATH", f"PATH_MISS root={root} path='{path}' part='{part}'"))
            return None

    return current
