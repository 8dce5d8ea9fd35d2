"""Tests for EntityPath, VariableCurve, AnimationClip and AnimationCache."""

import pytest

from Exp_Anim import AnimationCache, AnimationClip, EntityPath, KeyframeKind

from conftest import clip_with, rotation_curve, translation_curve, weights_curve, QUAT_Z90


# ---------------------------------------------------------------------------
# EntityPath
# ---------------------------------------------------------------------------


class TestEntityPath:
    def test_equality_and_hash_use_full_sequence(self):
        a = EntityPath(("Armature", "Hips"))
        b = EntityPath(["Armature", "Hips"])
        c = EntityPath(("Armature", "Tail"))
        assert a == b
        assert hash(a) == hash(b)
        assert a != c
        assert len({a, b, c}) == 2

    def test_parse_splits_on_slash(self):
        path = EntityPath.parse("Armature/Hips/Spine")
        assert path.parts == ("Armature", "Hips", "Spine")
        assert str(path) == "Armature/Hips/Spine"
        assert len(path) == 3

    def test_single_string_is_one_part(self):
        assert EntityPath("Armature").parts == ("Armature",)

    def test_empty_path_rejected(self):
        with pytest.raises(ValueError):
            EntityPath(())

    def test_immutable(self):
        path = EntityPath.parse("Armature/Hips")
        with pytest.raises(AttributeError):
            path.parts = ("Other",)


# ---------------------------------------------------------------------------
# VariableCurve
# ---------------------------------------------------------------------------


class TestVariableCurve:
    def test_last_timestamp(self):
        curve = translation_curve([0.0, 0.5, 1.5], [(0, 0, 0)] * 3)
        assert curve.keyframe_count == 3
        assert curve.last_timestamp == pytest.approx(1.5)

    def test_empty_curve_last_timestamp_is_zero(self):
        curve = translation_curve([], [])
        assert curve.keyframe_count == 0
        assert curve.last_timestamp == 0.0

    def test_target_count_from_weight_blocks(self):
        curve = weights_curve([0.0, 1.0], [0.0, 0.1, 0.2, 1.0, 0.9, 0.8])
        assert curve.keyframes.kind is KeyframeKind.WEIGHTS
        assert curve.target_count == 3

    def test_rotation_values_shape(self):
        curve = rotation_curve([0.0, 1.0], [(1, 0, 0, 0), QUAT_Z90])
        assert curve.keyframes.values.shape == (2, 4)
        assert curve.target_count == 1


# ---------------------------------------------------------------------------
# AnimationClip
# ---------------------------------------------------------------------------


class TestAnimationClip:
    def test_empty_clip(self):
        clip = AnimationClip("Empty")
        assert clip.duration == 0.0
        assert clip.path_count == 0
        assert clip.curves == []
        assert clip.curves_for(0) is None

    def test_new_paths_get_new_bones(self):
        clip = clip_with(
            "Walk",
            ("Armature/Hips", translation_curve([0.0, 1.0], [(0, 0, 0), (1, 0, 0)])),
            ("Armature/Tail", translation_curve([0.0, 1.0], [(0, 0, 0), (0, 1, 0)])),
        )
        assert clip.paths[EntityPath.parse("Armature/Hips")] == 0
        assert clip.paths[EntityPath.parse("Armature/Tail")] == 1
        assert len(clip.curves_for(0)) == 1
        assert len(clip.curves_for(1)) == 1

    def test_same_path_appends_to_bone(self):
        hips = EntityPath.parse("Armature/Hips")
        clip = AnimationClip("Walk")
        clip.add_curve_to_path(hips, translation_curve([0.0, 1.0], [(0, 0, 0), (1, 0, 0)]))
        clip.add_curve_to_path(hips, rotation_curve([0.0, 1.0], [(1, 0, 0, 0), QUAT_Z90]))

        assert clip.path_count == 1
        curves = clip.curves_for_path(hips)
        assert [c.keyframes.kind for c in curves] == [KeyframeKind.TRANSLATION, KeyframeKind.ROTATION]

    def test_curves_for_invalid_ids(self):
        clip = clip_with("Walk", ("Armature/Hips", translation_curve([0.0], [(0, 0, 0)])))
        assert clip.curves_for(1) is None
        assert clip.curves_for(-1) is None
        assert clip.curves_for_path(EntityPath.parse("Armature/Nope")) is None

    def test_duration_is_max_last_timestamp(self):
        clip = clip_with(
            "Walk",
            ("Armature/Hips", translation_curve([0.0, 2.5], [(0, 0, 0), (1, 0, 0)])),
            ("Armature/Tail", translation_curve([0.0, 1.0], [(0, 0, 0), (0, 1, 0)])),
        )
        assert clip.duration == pytest.approx(2.5)

    def test_duration_never_decreases(self):
        clip = AnimationClip("Grow")
        durations = []
        for last in (1.0, 3.0, 0.5, 2.0, 4.0):
            clip.add_curve_to_path(
                EntityPath.parse("Armature/Hips"),
                translation_curve([0.0, last], [(0, 0, 0), (1, 0, 0)]),
            )
            durations.append(clip.duration)
        assert durations == [1.0, 3.0, 3.0, 3.0, 4.0]

    def test_compatible_with_root_name(self):
        clip = clip_with(
            "Walk",
            ("Armature/Hips", translation_curve([0.0], [(0, 0, 0)])),
            ("Armature/Tail", translation_curve([0.0], [(0, 0, 0)])),
        )
        assert clip.compatible_with("Armature")
        assert not clip.compatible_with("Robot")

        clip.add_curve_to_path(EntityPath.parse("Robot/Arm"), translation_curve([0.0], [(0, 0, 0)]))
        assert not clip.compatible_with("Armature")

    def test_empty_clip_is_compatible_with_anything(self):
        assert AnimationClip().compatible_with("Anything")


# ---------------------------------------------------------------------------
# AnimationCache
# ---------------------------------------------------------------------------


class TestAnimationCache:
    def test_add_uses_clip_name(self):
        cache = AnimationCache()
        handle = cache.add(AnimationClip("Walk"))
        assert handle == "Walk"
        assert cache.has("Walk")
        assert "Walk" in cache
        assert cache.get("Walk").name == "Walk"

    def test_explicit_handle(self):
        cache = AnimationCache()
        clip = AnimationClip("Walk")
        assert cache.add(clip, "Walk_Fast") == "Walk_Fast"
        assert cache.get("Walk_Fast") is clip
        assert cache.get("Walk") is None

    def test_unnamed_clip_needs_handle(self):
        with pytest.raises(ValueError):
            AnimationCache().add(AnimationClip())

    def test_replace_and_remove(self):
        cache = AnimationCache()
        first, second = AnimationClip("Walk"), AnimationClip("Walk")
        cache.add(first)
        cache.add(second)
        assert cache.count == 1
        assert cache.get("Walk") is second

        assert cache.remove("Walk")
        assert not cache.remove("Walk")
        assert cache.names == []

    def test_clear(self):
        cache = AnimationCache()
        cache.add(AnimationClip("A"))
        cache.add(AnimationClip("B"))
        assert sorted(cache.names) == ["A", "B"]
        cache.clear()
        assert cache.count == 0
