from __future__ import annotations

import pytest

from fitlog.services._shared.errors import (
    AuthorizationError,
    ConflictError,
    InvalidOperationError,
    NotFoundError,
)
from fitlog.services.assignments import (
    AssignmentCreateIn,
    AssignmentListIn,
    RoutineAssignmentService,
)
from fitlog.services.routines import RoutineCommandService, RoutineQueryService, RoutineUpdateIn
from fitlog.services.workouts import WorkoutExerciseIn, WorkoutLogIn, WorkoutService, WorkoutSetIn
from tests.factories.assignment import RoutineAssignmentFactory
from tests.factories.exercise import ExerciseFactory
from tests.factories.routine import RoutineExerciseFactory, RoutineFactory
from tests.factories.user import UserFactory


class TestAssign:
    def test_coach_assigns_own_routine(self, session, ctx_for):
        coach = UserFactory(coach=True, full_name="Ana Coach")
        routine = RoutineFactory(owner=coach, name="Push A", category="PUSH")
        member = UserFactory()
        session.commit()

        out = RoutineAssignmentService(ctx=ctx_for(coach)).assign(
            AssignmentCreateIn(routine_id=routine.id, student_id=member.id, notes="twice a week")
        )

        assert (out.routine_id, out.student_id, out.assigned_by) == (
            routine.id,
            member.id,
            coach.id,
        )
        assert (out.routine_name, out.routine_category, out.coach_name) == (
            "Push A",
            "PUSH",
            "Ana Coach",
        )
        assert out.notes == "twice a week"

    def test_members_cannot_assign(self, session, ctx_for):
        member = UserFactory()
        routine = RoutineFactory(owner=member)
        other = UserFactory()
        session.commit()

        with pytest.raises(AuthorizationError):
            RoutineAssignmentService(ctx=ctx_for(member)).assign(
                AssignmentCreateIn(routine_id=routine.id, student_id=other.id)
            )

    def test_coach_cannot_assign_foreign_routine_but_admin_can(self, session, ctx_for):
        coach = UserFactory(coach=True)
        admin = UserFactory(admin=True)
        routine = RoutineFactory()
        member = UserFactory()
        session.commit()
        dto = AssignmentCreateIn(routine_id=routine.id, student_id=member.id)

        with pytest.raises(NotFoundError):
            RoutineAssignmentService(ctx=ctx_for(coach)).assign(dto)
        assert RoutineAssignmentService(ctx=ctx_for(admin)).assign(dto).assigned_by == admin.id

    def test_unknown_member_or_routine(self, session, ctx_for):
        coach = UserFactory(coach=True)
        routine = RoutineFactory(owner=coach)
        session.commit()
        service = RoutineAssignmentService(ctx=ctx_for(coach))

        with pytest.raises(NotFoundError) as err:
            service.assign(AssignmentCreateIn(routine_id=routine.id, student_id=999_999))
        assert err.value.entity == "User"
        with pytest.raises(NotFoundError):
            service.assign(AssignmentCreateIn(routine_id=999_999, student_id=coach.id))

    def test_owner_cannot_be_assigned(self, session, ctx_for):
        coach = UserFactory(coach=True)
        routine = RoutineFactory(owner=coach)
        session.commit()

        with pytest.raises(InvalidOperationError) as err:
            RoutineAssignmentService(ctx=ctx_for(coach)).assign(
                AssignmentCreateIn(routine_id=routine.id, student_id=coach.id)
            )
        assert err.value.code == "self_assignment"

    def test_duplicate_assignment_conflicts(self, session, ctx_for):
        row = RoutineAssignmentFactory()
        session.commit()

        with pytest.raises(ConflictError):
            RoutineAssignmentService(ctx=ctx_for(row.coach)).assign(
                AssignmentCreateIn(routine_id=row.routine_id, student_id=row.student_id)
            )


class TestUnassign:
    def test_assigning_coach_and_admin_may_remove(self, session, ctx_for):
        first, second = RoutineAssignmentFactory(), RoutineAssignmentFactory()
        admin = UserFactory(admin=True)
        session.commit()

        RoutineAssignmentService(ctx=ctx_for(first.coach)).unassign(first.id)
        RoutineAssignmentService(ctx=ctx_for(admin)).unassign(second.id)

        with pytest.raises(NotFoundError):
            RoutineAssignmentService(ctx=ctx_for(admin)).unassign(first.id)

    def test_member_cannot_remove(self, session, ctx_for):
        row = RoutineAssignmentFactory()
        session.commit()

        with pytest.raises(AuthorizationError):
            RoutineAssignmentService(ctx=ctx_for(row.student)).unassign(row.id)


class TestList:
    def test_member_lists_own_assignments(self, session, ctx_for):
        member = UserFactory()
        older = RoutineAssignmentFactory(student=member)
        newer = RoutineAssignmentFactory(student=member)
        RoutineAssignmentFactory()
        session.commit()

        out = RoutineAssignmentService(ctx=ctx_for(member)).list(AssignmentListIn())

        assert [a.id for a in out] == [newer.id, older.id]

    def test_coach_sees_only_own_assignments_of_member(self, session, ctx_for):
        member = UserFactory()
        mine = RoutineAssignmentFactory(student=member)
        RoutineAssignmentFactory(student=member)  # another coach
        admin = UserFactory(admin=True)
        session.commit()
        dto = AssignmentListIn(student_id=member.id)

        assert [a.id for a in RoutineAssignmentService(ctx=ctx_for(mine.coach)).list(dto)] == [
            mine.id
        ]
        assert len(RoutineAssignmentService(ctx=ctx_for(admin)).list(dto)) == 2

    def test_member_cannot_list_others(self, session, ctx_for):
        member, other = UserFactory(), UserFactory()
        session.commit()

        with pytest.raises(AuthorizationError):
            RoutineAssignmentService(ctx=ctx_for(member)).list(
                AssignmentListIn(student_id=other.id)
            )

    def test_list_for_routine_is_owner_only(self, session, ctx_for):
        row = RoutineAssignmentFactory()
        session.commit()

        out = RoutineAssignmentService(ctx=ctx_for(row.coach)).list_for_routine(row.routine_id)
        assert [a.student_id for a in out] == [row.student_id]
        with pytest.raises(NotFoundError):
            RoutineAssignmentService(ctx=ctx_for(row.student)).list_for_routine(row.routine_id)


class TestAssignedAccess:
    def test_assigned_member_reads_and_trains_but_cannot_edit(self, session, ctx_for):
        row = RoutineAssignmentFactory(routine__name="Coach Plan")
        RoutineExerciseFactory(routine=row.routine, order_index=0, target_sets=2, target_reps=5)
        bench = ExerciseFactory(name="Bench")
        session.commit()
        ctx = ctx_for(row.student)

        assert RoutineQueryService(ctx=ctx).get(row.routine_id).name == "Coach Plan"
        template = WorkoutService(ctx=ctx).start(row.routine_id)
        assert [len(e.sets) for e in template.exercises] == [2]

        logged = WorkoutService(ctx=ctx).log(
            WorkoutLogIn(
                routine_id=row.routine_id,
                elapsed_seconds=600,
                exercises=[
                    WorkoutExerciseIn(
                        exercise_id=bench.id,
                        sets=[WorkoutSetIn(reps=5, weight=60.0, completed=True)],
                    )
                ],
            )
        )
        assert logged.name == "Coach Plan"

        with pytest.raises(AuthorizationError):
            RoutineCommandService(ctx=ctx).update(
                RoutineUpdateIn(routine_id=row.routine_id, name="Mine now")
            )

    def test_access_ends_with_the_assignment(self, session, ctx_for):
        row = RoutineAssignmentFactory()
        session.commit()
        student = row.student

        RoutineAssignmentService(ctx=ctx_for(row.coach)).unassign(row.id)

        with pytest.raises(NotFoundError):
            RoutineQueryService(ctx=ctx_for(student)).get(row.routine_id)
        with pytest.raises(NotFoundError):
            WorkoutService(ctx=ctx_for(student)).start(row.routine_id)
