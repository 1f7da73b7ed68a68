from __future__ import annotations

import pytest
from marshmallow import ValidationError

from fitlog.schemas.draft import DraftEntryPatchSchema
from fitlog.schemas.workout import WorkoutSetInputSchema


class TestDraftEntryPatchSchema:
    def test_weight_is_rounded_to_two_decimals(self):
        data = DraftEntryPatchSchema().load({"target_weight": 62.556})

        assert data["target_weight"] == 62.56

    def test_largest_storable_weight_is_accepted(self):
        assert DraftEntryPatchSchema().load({"target_weight": "9999.99"})["target_weight"] == 9999.99

    @pytest.mark.parametrize(
        "payload",
        [
            {"target_weight": 1_000_000},
            {"target_weight": 10_000},
            {"target_sets": 2**31},
            {"target_reps": 100_000},
            {"rest_seconds": 10**9},
        ],
    )
    def test_values_beyond_column_limits_are_rejected(self, payload):
        with pytest.raises(ValidationError) as exc_info:
            DraftEntryPatchSchema().load(payload)

        assert set(exc_info.value.messages) == set(payload)


class TestWorkoutSetInputSchema:
    def test_weight_limits_apply_to_logged_sets(self):
        with pytest.raises(ValidationError) as exc_info:
            WorkoutSetInputSchema().load({"reps": 5, "weight": 123456.7})

        assert "weight" in exc_info.value.messages

    def test_weight_defaults_to_zero(self):
        assert WorkoutSetInputSchema().load({"reps": 5}).weight == 0.0
