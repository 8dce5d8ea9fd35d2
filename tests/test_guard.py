"""Tests for the ancestor-player check and write access."""

import pytest

from Exp_Anim import AnimationPlayer
from Exp_Anim.animations.guard import (
    AnimationWriteAccess,
    acquire_write_access,
    verify_no_ancestor_player,
)


class TestVerifyNoAncestorPlayer:
    def test_root_player_is_safe(self, rig):
        rig.scene.insert_player(rig.root, AnimationPlayer())
        assert verify_no_ancestor_player(None, rig.scene)

    def test_no_players_above(self, rig):
        rig.scene.insert_player(rig.spine, AnimationPlayer())
        assert verify_no_ancestor_player(rig.hips, rig.scene)

    def test_direct_parent_player(self, rig):
        rig.scene.insert_player(rig.root, AnimationPlayer())
        rig.scene.insert_player(rig.hips, AnimationPlayer())
        assert not verify_no_ancestor_player(rig.root, rig.scene)

    def test_distant_ancestor_player(self, rig):
        rig.scene.insert_player(rig.root, AnimationPlayer())
        rig.scene.insert_player(rig.spine, AnimationPlayer())
        assert not verify_no_ancestor_player(rig.hips, rig.scene)

    def test_sibling_player_does_not_conflict(self, rig):
        rig.scene.insert_player(rig.tail, AnimationPlayer())
        rig.scene.insert_player(rig.spine, AnimationPlayer())
        assert verify_no_ancestor_player(rig.hips, rig.scene)

    def test_missing_ancestor_counts_as_safe(self, rig):
        assert verify_no_ancestor_player(9999, rig.scene)


class TestWriteAccess:
    def test_granted_without_ancestor_player(self, rig):
        access = acquire_write_access(rig.root, None, rig.scene)
        assert isinstance(access, AnimationWriteAccess)
        assert access.root == rig.root
        assert access.transform(rig.hips) is rig.scene.transform(rig.hips)
        assert access.morph_weights(rig.hips) is None

    def test_refused_with_ancestor_player(self, rig):
        rig.scene.insert_player(rig.root, AnimationPlayer())
        assert acquire_write_access(rig.hips, rig.root, rig.scene) is None

    def test_cannot_be_built_directly(self, rig):
        with pytest.raises(TypeError):
            AnimationWriteAccess(rig.root, rig.scene)
        with pytest.raises(TypeError):
            AnimationWriteAccess(rig.root, rig.scene, object())
