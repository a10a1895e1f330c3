"""
Unit tests for goal configuration and goal weights.
"""
import pytest

from backend.core.goals import (
    DEFAULT_GOAL_REGISTRY,
    ExerciseBias,
    GoalConfig,
    GoalRegistry,
    combined_exercise_bias,
    combined_rest_multiplier,
    goal_label,
    goal_tags,
    migrate_legacy_goal,
)
from domain.models import Framework, build_goal_weights


@pytest.mark.unit
class TestBuildGoalWeights:

    def test_primary_only_carries_full_weight(self):
        assert build_goal_weights("fat_loss") == {"fat_loss": 1.0}

    def test_two_secondaries_split_the_remainder(self):
        weights = build_goal_weights("fat_loss", ["muscle_gain", "strength_power"])
        assert weights == {"fat_loss": 0.6, "muscle_gain": 0.2, "strength_power": 0.2}
        assert sum(weights.values()) == pytest.approx(1.0)

    def test_one_secondary(self):
        assert build_goal_weights("fat_loss", ["muscle_gain"]) == {
            "fat_loss": 0.6,
            "muscle_gain": 0.4,
        }

    def test_primary_and_duplicates_removed_from_secondaries(self):
        weights = build_goal_weights("fat_loss", ["fat_loss", "muscle_gain", "muscle_gain"])
        assert weights == {"fat_loss": 0.6, "muscle_gain": 0.4}

    def test_more_than_two_secondaries_rejected(self):
        with pytest.raises(ValueError):
            build_goal_weights("fat_loss", ["a", "b", "c"])


@pytest.mark.unit
class TestGoalRegistry:

    def test_default_goals(self):
        assert DEFAULT_GOAL_REGISTRY.ids() == ["fat_loss", "muscle_gain", "strength_power"]
        assert "fat_loss" in DEFAULT_GOAL_REGISTRY
        assert "cardio_endurance" not in DEFAULT_GOAL_REGISTRY

    def test_framework_bias_sums_to_one(self):
        for goal_id in DEFAULT_GOAL_REGISTRY.ids():
            bias = DEFAULT_GOAL_REGISTRY.get(goal_id).framework_bias
            assert sum(bias.values()) == pytest.approx(1.0)

    def test_framework_bias_is_read_only(self):
        source = {Framework.CIRCUIT: 1.0}
        config = GoalConfig(id="cardio_endurance", label="Cardio Endurance", framework_bias=source)
        source[Framework.TABATA] = 0.5
        assert dict(config.framework_bias) == {Framework.CIRCUIT: 1.0}
        with pytest.raises(TypeError):
            DEFAULT_GOAL_REGISTRY.get("fat_loss").framework_bias[Framework.TABATA] = 1.0

    def test_register_extends_the_goal_set(self):
        registry = GoalRegistry()
        registry.register(GoalConfig(
            id="cardio_endurance",
            label="Cardio Endurance",
            framework_bias={Framework.CIRCUIT: 1.0},
        ))
        assert registry.get("cardio_endurance").label == "Cardio Endurance"
        assert registry.get(None) is None

    def test_labels_and_tags(self):
        assert goal_label("strength_power") == "Strength & Power"
        assert goal_label("mystery") == "mystery"
        assert "hypertrophy" in goal_tags("muscle_gain")
        assert goal_tags("mystery") == []


@pytest.mark.unit
class TestCombinedBias:

    def test_single_goal_bias(self):
        bias = combined_exercise_bias({"muscle_gain": 1.0})
        assert bias == ExerciseBias(compound_lifts=0.9, cardio=0.2, plyometric=0.3, mobility=0.2)

    def test_unknown_goals_are_ignored(self):
        bias = combined_exercise_bias({"fat_loss": 0.6, "mobility_recovery": 0.4})
        assert bias.cardio == pytest.approx(0.48)
        assert bias.compound_lifts == pytest.approx(0.3)

    def test_rest_multiplier_blend(self):
        weights = build_goal_weights("fat_loss", ["strength_power"])
        assert combined_rest_multiplier(weights) == pytest.approx(0.85 * 0.6 + 1.3 * 0.4)

    def test_rest_multiplier_defaults_to_one(self):
        assert combined_rest_multiplier({"athletic_performance": 1.0}) == 1.0
        assert combined_rest_multiplier({}) == 1.0


@pytest.mark.unit
class TestMigrateLegacyGoal:

    def test_known_labels(self):
        assert migrate_legacy_goal("strength") == "strength_power"
        assert migrate_legacy_goal("cardio") == "cardio_endurance"
        assert migrate_legacy_goal("metcon") == "metabolic_conditioning"

    def test_unknown_or_empty(self):
        assert migrate_legacy_goal("yoga") is None
        assert migrate_legacy_goal(None) is None
