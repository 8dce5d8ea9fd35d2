# Exp_Anim/animations/guard.py
"""
Aliasing guard for the parallel animation pass.

Players are evaluated independently (possibly on several threads) and each
one writes the transforms of nodes below it. Two players can only target
the same node if one player sits inside the other's subtree. So a player is
allowed to write only when none of its ancestors hosts a player.

The frame pass never fetches a writable Transform from the scene directly.
It asks acquire_write_access() for an AnimationWriteAccess, which only
exists after the ancestor check passed.
"""

from typing import Optional

from ..engine.scene import MorphWeights, Transform


def verify_no_ancestor_player(player_parent: Optional[int], scene) -> bool:
    """
    Verify that no ancestor of a player node hosts an AnimationPlayer.

    Args:
        player_parent: Parent of the player node (None for a root node)
        scene: Hierarchy with parent(entity), has_player(entity), __contains__

    Returns:
        True if safe (no ancestor player), False otherwise
    """
    current = player_parent
    while current is not None:
        if current not in scene:
            return True
        if scene.has_player(current):
            return False
        current = scene.parent(current)
    return True


# Only acquire_write_access() holds this
_ACCESS_KEY = object()


class AnimationWriteAccess:
    """
    Write capability for the nodes under one animation root.

    Only created by acquire_write_access(), i.e. after the ancestor check.
    Constructing one directly raises TypeError. Holding one for a root
    means no other player in this frame can write the nodes reached from
    that root.
    """

    __slots__ = ('root', '_scene')

    def __init__(self, root: int, scene, _key=None):
        if _key is not _ACCESS_KEY:
            raise TypeError("AnimationWriteAccess is only handed out by acquire_write_access()")
        self.root = root
        self._scene = scene

    def transform(self, target: int) -> Optional[Transform]:
        return self._scene.transform(target)

    def morph_weights(self, target: int) -> Optional[MorphWeights]:
        return self._scene.morph_weights(target)

    def __repr__(self) -> str:
        return f"AnimationWriteAccess(root={self.root})"


def acquire_write_access(root: int, player_parent: Optional[int], scene) -> Optional[AnimationWriteAccess]:
    """Write access for a player's subtree, or None if an ancestor also hosts a player."""
    if not verify_no_ancestor_player(player_parent, scene):
        return None
    return AnimationWriteAccess(root, scene, _ACCESS_KEY)
