# Exp_Anim/engine/animations/cache.py
"""
AnimationCache - Storage and lookup for animation clips.

Worker-safe: no scene references. Players hold clip handles (plain strings)
and the frame pass resolves them here, read-only.
"""

from typing import Dict, List, Optional

from .data import AnimationClip


class AnimationCache:
    """
    Centralized store for animation clips, keyed by handle.

    Usage:
        cache = AnimationCache()
        walk = cache.add(walk_clip)        # handle defaults to clip.name
        cache.add(run_clip, "Run_Fast")    # or pick one
        clip = cache.get(walk)
    """

    __slots__ = ('_animations',)

    def __init__(self):
        # Clip storage: {handle: AnimationClip}
        self._animations: Dict[str, AnimationClip] = {}

    def add(self, clip: AnimationClip, handle: Optional[str] = None) -> str:
        """Add or replace a clip. Returns the handle it is stored under."""
        handle = clip.name if handle is None else handle
        if not handle:
            raise ValueError("AnimationCache.add needs a handle or a named clip")
        self._animations[handle] = clip
        return handle

    def get(self, handle: str) -> Optional[AnimationClip]:
        """Get clip by handle, or None if not found."""
        return self._animations.get(handle)

    def remove(self, handle: str) -> bool:
        """Remove clip by handle. Returns True if removed."""
        if handle in self._animations:
            del self._animations[handle]
            return True
        return False

    def has(self, handle: str) -> bool:
        return handle in self._animations

    def clear(self) -> None:
        self._animations.clear()

    @property
    def names(self) -> List[str]:
        """List all handles in cache."""
        return list(self._animations.keys())

    @property
    def count(self) -> int:
        return len(self._animations)

    def __contains__(self, handle: str) -> bool:
        return handle in self._animations

    def __repr__(self) -> str:
        return f"AnimationCache({self.count} animations)"
