from __future__ import annotations

from uuid import uuid4

from fitlog.models.workout import WorkoutLog
from tests.factories.exercise import ExerciseFactory
from tests.factories.routine import RoutineFactory
from tests.factories.user import UserFactory
from tests.factories.workout import WorkoutLogFactory


def _payload(routine_id, exercise_id):
    return {
        "routine_id": routine_id,
        "elapsed_seconds": 3725,
        "completed_at": "2024-05-01T18:30:00Z",
        "exercises": [
            {
                "exercise_id": exercise_id,
                "sets": [
                    {"reps": 8, "weight": 60, "completed": True},
                    {"reps": 8, "weight": 60},
                ],
            }
        ],
    }


def test_log_workout_and_replay(client, session, auth_headers):
    me = UserFactory()
    routine = RoutineFactory(owner=me, name="Push")
    ex = ExerciseFactory()
    session.commit()
    headers = auth_headers(me, **{"Idempotency-Key": uuid4().hex})

    first = client.post("/api/v1/workouts", json=_payload(routine.id, ex.id), headers=headers)
    second = client.post("/api/v1/workouts", json=_payload(routine.id, ex.id), headers=headers)

    assert first.status_code == 201
    data = first.get_json()["data"]
    assert data["name"] == "Push"
    assert data["duration_minutes"] == 63
    assert data["duration"] == "1:03:00"
    assert len(data["exercises"][0]["sets"]) == 1
    assert second.status_code == 201
    assert second.headers["Idempotent-Replay"] == "true"
    assert second.get_json()["data"]["id"] == data["id"]
    session.expire_all()
    assert session.query(WorkoutLog).filter_by(user_id=me.id).count() == 1


def test_log_requires_exercises(client, session, auth_headers):
    me = UserFactory()
    session.commit()

    resp = client.post(
        "/api/v1/workouts",
        json={"name": "Empty", "elapsed_seconds": 10, "exercises": []},
        headers=auth_headers(me),
    )

    assert resp.status_code == 422
    assert "exercises" in resp.get_json()["details"]["errors"]


def test_log_without_name_or_routine_is_422(client, session, auth_headers):
    me = UserFactory()
    ex = ExerciseFactory()
    session.commit()

    resp = client.post(
        "/api/v1/workouts", json=_payload(None, ex.id), headers=auth_headers(me)
    )

    assert resp.status_code == 422
    assert resp.get_json()["code"] == "name_required"


def test_list_and_get(client, session, auth_headers):
    me, other = UserFactory(), UserFactory()
    mine = WorkoutLogFactory(user=me)
    theirs = WorkoutLogFactory(user=other)
    session.commit()
    headers = auth_headers(me)

    listed = client.get("/api/v1/workouts", headers=headers).get_json()
    assert [w["id"] for w in listed["data"]] == [mine.id]
    assert listed["meta"]["total"] == 1

    assert client.get(f"/api/v1/workouts/{mine.id}", headers=headers).status_code == 200
    assert client.get(f"/api/v1/workouts/{theirs.id}", headers=headers).status_code == 404
