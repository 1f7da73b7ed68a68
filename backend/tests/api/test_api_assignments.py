from __future__ import annotations

from tests.factories.assignment import RoutineAssignmentFactory
from tests.factories.routine import RoutineExerciseFactory, RoutineFactory
from tests.factories.user import UserFactory


def test_coach_assigns_and_member_trains(client, session, auth_headers):
    coach = UserFactory(coach=True)
    routine = RoutineFactory(owner=coach, name="Base Strength")
    RoutineExerciseFactory(routine=routine, order_index=0, target_sets=3)
    member = UserFactory()
    session.commit()
    member_headers = auth_headers(member)

    resp = client.post(
        f"/api/v1/routines/{routine.id}/assignments",
        json={"student_id": member.id, "notes": "mon/thu"},
        headers=auth_headers(coach),
    )
    assert resp.status_code == 201
    assert resp.get_json()["data"]["routine_name"] == "Base Strength"

    mine = client.get("/api/v1/assignments", headers=member_headers)
    assert [a["routine_id"] for a in mine.get_json()["data"]] == [routine.id]
    assert client.get(f"/api/v1/routines/{routine.id}", headers=member_headers).status_code == 200
    template = client.get(f"/api/v1/routines/{routine.id}/workout-template", headers=member_headers)
    assert template.status_code == 200


def test_assign_errors(client, session, auth_headers):
    coach = UserFactory(coach=True)
    routine = RoutineFactory(owner=coach)
    member = UserFactory()
    session.commit()
    url = f"/api/v1/routines/{routine.id}/assignments"
    coach_headers = auth_headers(coach)

    assert client.post(url, json={}, headers=coach_headers).status_code == 422

    own = client.post(url, json={"student_id": coach.id}, headers=coach_headers)
    assert own.status_code == 422
    assert own.get_json()["code"] == "self_assignment"

    by_member = client.post(url, json={"student_id": coach.id}, headers=auth_headers(member))
    assert by_member.status_code == 403

    created = client.post(url, json={"student_id": member.id}, headers=coach_headers)
    assert created.status_code == 201
    again = client.post(url, json={"student_id": member.id}, headers=coach_headers)
    assert again.status_code == 409


def test_routine_assignments_visible_to_owner_only(client, session, auth_headers):
    row = RoutineAssignmentFactory()
    session.commit()
    url = f"/api/v1/routines/{row.routine_id}/assignments"

    owner_view = client.get(url, headers=auth_headers(row.coach))
    assert [a["student_id"] for a in owner_view.get_json()["data"]] == [row.student_id]
    assert client.get(url, headers=auth_headers(row.student)).status_code == 404


def test_coach_lists_member_and_unassigns(client, session, auth_headers):
    row = RoutineAssignmentFactory()
    session.commit()
    coach_headers = auth_headers(row.coach)
    student_headers = auth_headers(row.student)
    url = f"/api/v1/assignments/{row.id}"

    listed = client.get(f"/api/v1/assignments?student_id={row.student_id}", headers=coach_headers)
    assert [a["id"] for a in listed.get_json()["data"]] == [row.id]

    assert client.delete(url, headers=student_headers).status_code == 403
    assert client.delete(url, headers=coach_headers).status_code == 204
    routine = client.get(f"/api/v1/routines/{row.routine_id}", headers=student_headers)
    assert routine.status_code == 404
