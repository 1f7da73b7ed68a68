"""Tests for routine assignments."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from fitlog.models.assignment import RoutineAssignment
from tests.factories.assignment import RoutineAssignmentFactory
from tests.factories.user import UserFactory


class TestRoutineAssignment:
    def test_routine_assigned_once_per_member(self, session):
        first = RoutineAssignmentFactory()
        session.flush()

        session.add(
            RoutineAssignment(
                routine_id=first.routine_id,
                student_id=first.student_id,
                assigned_by=first.assigned_by,
            )
        )
        with pytest.raises(IntegrityError):
            session.flush()

    def test_relationships_resolve(self, session):
        coach = UserFactory(coach=True, username="coachy")
        row = RoutineAssignmentFactory(routine__owner=coach)
        session.flush()
        session.expire_all()

        assert row.coach.username == "coachy"
        assert row.routine.owner_user_id == coach.id
        assert row.student.id != coach.id
        assert row in row.routine.assignments

    def test_deleting_routine_drops_assignments(self, session):
        row = RoutineAssignmentFactory()
        row_id, routine = row.id, row.routine
        session.flush()

        session.delete(routine)
        session.flush()

        assert session.get(RoutineAssignment, row_id) is None
