"""Factory Boy definition for :class:`fitlog.models.assignment.RoutineAssignment`."""

from __future__ import annotations

import factory

from fitlog.models.assignment import RoutineAssignment
from tests.factories import BaseFactory
from tests.factories.routine import RoutineFactory
from tests.factories.user import UserFactory


class RoutineAssignmentFactory(BaseFactory):
    """Assign a coach-owned routine to a fresh member."""

    class Meta:
        model = RoutineAssignment

    id = None
    routine = factory.SubFactory(RoutineFactory, owner=factory.SubFactory(UserFactory, coach=True))
    routine_id = factory.SelfAttribute("routine.id")
    student = factory.SubFactory(UserFactory)
    student_id = factory.SelfAttribute("student.id")
    coach = factory.SelfAttribute("routine.owner")
    assigned_by = factory.SelfAttribute("coach.id")
    notes = None
