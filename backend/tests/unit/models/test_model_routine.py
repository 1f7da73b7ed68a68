"""Tests for routines and their entries."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from fitlog.models.routine import Routine
from tests.factories.routine import RoutineExerciseFactory, RoutineFactory
from tests.factories.user import UserFactory


class TestRoutine:
    def test_name_unique_per_owner(self, session):
        owner = UserFactory()
        RoutineFactory(owner=owner, name="Push")
        RoutineFactory(name="Push")  # other owner is fine

        session.add(Routine(owner_user_id=owner.id, name="Push"))
        with pytest.raises(IntegrityError):
            session.flush()

    def test_entries_ordered_by_position(self, session):
        routine = RoutineFactory()
        late = RoutineExerciseFactory(routine=routine, order_index=2)
        early = RoutineExerciseFactory(routine=routine, order_index=0)
        session.flush()
        session.expire_all()

        assert [e.id for e in routine.entries] == [early.id, late.id]

    def test_entry_defaults(self, session):
        entry = RoutineExerciseFactory()
        session.flush()

        assert (entry.target_sets, entry.target_reps, entry.rest_seconds) == (3, 10, 60)
        assert entry.superset_id is None

    def test_position_unique_per_routine(self, session):
        routine = RoutineFactory()
        RoutineExerciseFactory(routine=routine, order_index=0)
        with pytest.raises(IntegrityError):
            RoutineExerciseFactory(routine=routine, order_index=0)
