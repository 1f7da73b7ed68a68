from __future__ import annotations

from datetime import date

from tests.factories.body_metrics import BodyMetricFactory
from tests.factories.user import UserFactory


def test_record_creates_then_replaces_the_day(client, session, auth_headers):
    me = UserFactory()
    session.commit()
    headers = auth_headers(me)
    body = {"measured_on": "2024-05-01", "weight_kg": 80.457, "body_fat_pct": 18.26}

    created = client.post("/api/v1/body-metrics", json=body, headers=headers)
    assert created.status_code == 201
    data = created.get_json()["data"]
    assert (data["weight_kg"], data["body_fat_pct"]) == (80.46, 18.3)

    replaced = client.post(
        "/api/v1/body-metrics",
        json={"measured_on": "2024-05-01", "weight_kg": 79.9},
        headers=headers,
    )
    assert replaced.status_code == 200
    assert replaced.get_json()["data"]["id"] == data["id"]
    assert replaced.get_json()["data"]["body_fat_pct"] is None


def test_record_validates_ranges_and_dates(client, session, auth_headers):
    me = UserFactory()
    session.commit()
    headers = auth_headers(me)

    bad = client.post(
        "/api/v1/body-metrics", json={"weight_kg": 0, "body_fat_pct": 101}, headers=headers
    )
    assert bad.status_code == 422
    assert set(bad.get_json()["details"]["errors"]) == {"weight_kg", "body_fat_pct"}

    future = client.post(
        "/api/v1/body-metrics",
        json={"measured_on": "2999-01-01", "weight_kg": 80.0},
        headers=headers,
    )
    assert future.status_code == 422
    assert future.get_json()["code"] == "future_measurement"


def test_list_filters_by_range(client, session, auth_headers):
    me = UserFactory()
    for day in (1, 10, 20):
        BodyMetricFactory(user=me, measured_on=date(2024, 5, day))
    BodyMetricFactory(measured_on=date(2024, 5, 10))
    session.commit()

    resp = client.get(
        "/api/v1/body-metrics?date_from=2024-05-05&date_to=2024-05-31&limit=1",
        headers=auth_headers(me),
    )

    assert resp.status_code == 200
    payload = resp.get_json()
    assert [m["measured_on"] for m in payload["data"]] == ["2024-05-20"]
    assert payload["meta"]["total"] == 2


def test_get_latest_and_delete_by_day(client, session, auth_headers):
    me = UserFactory()
    BodyMetricFactory(user=me, measured_on=date(2024, 5, 1), weight_kg=81.0)
    BodyMetricFactory(user=me, measured_on=date(2024, 5, 2), weight_kg=80.5)
    session.commit()
    headers = auth_headers(me)

    latest = client.get("/api/v1/body-metrics/latest", headers=headers).get_json()["data"]
    assert latest["measured_on"] == "2024-05-02"
    day = client.get("/api/v1/body-metrics/2024-05-01", headers=headers).get_json()["data"]
    assert day["weight_kg"] == 81.0

    assert client.delete("/api/v1/body-metrics/2024-05-01", headers=headers).status_code == 204
    assert client.delete("/api/v1/body-metrics/2024-05-01", headers=headers).status_code == 204
    assert client.get("/api/v1/body-metrics/2024-05-01", headers=headers).status_code == 404


def test_malformed_day_is_rejected(client, session, auth_headers):
    me = UserFactory()
    session.commit()

    resp = client.get("/api/v1/body-metrics/yesterday", headers=auth_headers(me))

    assert resp.status_code == 422
    assert resp.get_json()["code"] == "invalid_date"


def test_requires_authentication(client):
    assert client.get("/api/v1/body-metrics").status_code == 401
