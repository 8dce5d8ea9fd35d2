"""Tests for EntityPath resolution and the per-bone path cache."""

from Exp_Anim import EntityPath, Scene
from Exp_Anim.animations.path_resolver import entity_from_path


class CountingScene(Scene):
    """Scene that counts name() lookups."""

    def __init__(self):
        super().__init__()
        self.name_calls = 0

    def name(self, entity):
        self.name_calls += 1
        return super().name(entity)


def _decoy_rig():
    """
    Armature
      DecoyA
      DecoyB
      Hips
        Spine
    """
    scene = CountingScene()
    root = scene.spawn("Armature")
    scene.spawn("DecoyA", parent=root)
    scene.spawn("DecoyB", parent=root)
    hips = scene.spawn("Hips", parent=root)
    spine = scene.spawn("Spine", parent=hips)
    return scene, root, hips, spine


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


class TestResolution:
    def test_root_only_path_resolves_to_root(self, rig):
        logs = []
        assert entity_from_path(rig.root, EntityPath("Armature"), rig.scene, [], logs) == rig.root
        assert logs == []

    def test_nested_path(self, rig):
        logs = []
        path = EntityPath.parse("Armature/Hips/Spine")
        assert entity_from_path(rig.root, path, rig.scene, [], logs) == rig.spine
        assert logs == []

    def test_missing_part_logs_and_returns_none(self, rig):
        logs = []
        path = EntityPath.parse("Armature/Hips/Neck")
        assert entity_from_path(rig.root, path, rig.scene, [], logs) is None
        assert len(logs) == 1
        category, message = logs[0]
        assert category == "ANIM-PATH"
        assert "PATH_MISS" in message
        assert "part='Neck'" in message

    def test_cache_is_resized_to_path_length(self, rig):
        cache = [None] * 5
        entity_from_path(rig.root, EntityPath.parse("Armature/Hips"), rig.scene, cache, [])
        assert cache == [None, rig.hips]

        cache = []
        entity_from_path(rig.root, EntityPath.parse("Armature/Hips/Spine"), rig.scene, cache, [])
        assert cache == [None, rig.hips, rig.spine]


# ---------------------------------------------------------------------------
# Path cache
# ---------------------------------------------------------------------------


class TestPathCache:
    def test_cached_lookup_skips_sibling_scan(self):
        scene, root, hips, spine = _decoy_rig()
        path = EntityPath.parse("Armature/Hips/Spine")
        cache = []

        # Cold: DecoyA, DecoyB, Hips, then Spine
        assert entity_from_path(root, path, scene, cache, []) == spine
        assert scene.name_calls == 4

        # Warm: one name check per level
        scene.name_calls = 0
        assert entity_from_path(root, path, scene, cache, []) == spine
        assert scene.name_calls == 2

    def test_rename_falls_back_to_scan(self, rig):
        path = EntityPath.parse("Armature/Hips")
        cache = []
        assert entity_from_path(rig.root, path, rig.scene, cache, []) == rig.hips

        rig.scene.set_name(rig.hips, "OldHips")
        new_hips = rig.scene.spawn("Hips", parent=rig.root)

        assert entity_from_path(rig.root, path, rig.scene, cache, []) == new_hips
        assert cache[1] == new_hips

    def test_reparented_node_is_not_reused(self, rig):
        path = EntityPath.parse("Armature/Hips/Spine")
        cache = []
        entity_from_path(rig.root, path, rig.scene, cache, [])

        # Spine moves under Tail; the cached id is no longer a child of Hips
        rig.scene.set_parent(rig.spine, rig.tail)
        logs = []
        assert entity_from_path(rig.root, path, rig.scene, cache, logs) is None
        assert logs and logs[0][0] == "ANIM-PATH"

    def test_despawned_node_is_not_reused(self, rig):
        path = EntityPath.parse("Armature/Tail")
        cache = []
        entity_from_path(rig.root, path, rig.scene, cache, [])

        rig.scene.despawn(rig.tail)
        assert entity_from_path(rig.root, path, rig.scene, cache, []) is None

        tail = rig.scene.spawn("Tail", parent=rig.root)
        assert entity_from_path(rig.root, path, rig.scene, cache, []) == tail

    def test_miss_keeps_earlier_levels(self, rig):
        cache = []
        entity_from_path(rig.root, EntityPath.parse("Armature/Hips/Neck"), rig.scene, cache, [])
        assert cache[1] == rig.hips
        assert cache[2] is None
