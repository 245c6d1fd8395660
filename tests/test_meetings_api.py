# tests/test_meetings_api.py
from http import HTTPStatus


def _meeting_payload(student_id: int, **overrides) -> dict:
    payload = {
        "title": "Algebra",
        "student_id": student_id,
        "meeting_date": "2024-03-04",
        "start_time": "09:00",
        "end_time": "10:00",
        "description": "Quadratics",
    }
    payload.update(overrides)
    return payload


def test_create_single_meeting(client, auth_headers, student_id):
    resp = client.post(
        "/meetings",
        json=_meeting_payload(student_id, is_completed=True),
        headers=auth_headers,
    )
    assert resp.status_code == HTTPStatus.CREATED

    data = resp.json()
    assert len(data) == 1
    assert data[0]["title"] == "Algebra"
    assert data[0]["start_time"] == "2024-03-04T09:00:00"
    assert data[0]["end_time"] == "2024-03-04T10:00:00"
    assert data[0]["is_completed"] is True
    assert isinstance(data[0]["id"], int)


def test_create_weekly_series(client, auth_headers, student_id):
    """
    A weekly series of three returns all occurrences, numbered after the first.
    """
    resp = client.post(
        "/meetings",
        json=_meeting_payload(
            student_id,
            is_repeating=True,
            repeat_type="weekly",
            repeat_count=3,
            is_completed=True,
        ),
        headers=auth_headers,
    )
    assert resp.status_code == HTTPStatus.CREATED

    data = resp.json()
    assert [m["title"] for m in data] == ["Algebra", "Algebra (2/3)", "Algebra (3/3)"]
    assert [m["start_time"][:10] for m in data] == ["2024-03-04", "2024-03-11", "2024-03-18"]
    assert all(m["is_completed"] is False for m in data)


def test_create_meeting_missing_fields_returns_400(client, auth_headers):
    resp = client.post("/meetings", json={"title": "Algebra"}, headers=auth_headers)

    assert resp.status_code == HTTPStatus.BAD_REQUEST
    assert "required fields" in resp.json()["detail"]


def test_create_meeting_end_before_start_returns_400(client, auth_headers, student_id):
    resp = client.post(
        "/meetings",
        json=_meeting_payload(student_id, start_time="10:00", end_time="09:30"),
        headers=auth_headers,
    )

    assert resp.status_code == HTTPStatus.BAD_REQUEST
    assert resp.json()["detail"] == "End time must be after start time."


def test_create_meeting_repeat_count_out_of_range(client, auth_headers, student_id):
    resp = client.post(
        "/meetings",
        json=_meeting_payload(
            student_id,
            is_repeating=True,
            repeat_type="biweekly",
            repeat_count=60,
        ),
        headers=auth_headers,
    )

    assert resp.status_code == HTTPStatus.BAD_REQUEST
    assert "between 2 and 52" in resp.json()["detail"]

    listing = client.get("/meetings?year=2024&month=3", headers=auth_headers)
    assert listing.json() == []


def test_create_meeting_for_other_users_student_returns_404(client, student_id, other_user_headers):
    resp = client.post(
        "/meetings",
        json=_meeting_payload(student_id),
        headers=other_user_headers,
    )

    assert resp.status_code == HTTPStatus.NOT_FOUND


def test_list_month_returns_only_that_month(client, auth_headers, student_id):
    client.post(
        "/meetings",
        json=_meeting_payload(
            student_id,
            meeting_date="2024-01-31",
            is_repeating=True,
            repeat_type="monthly",
            repeat_count=2,
        ),
        headers=auth_headers,
    )

    january = client.get("/meetings?year=2024&month=1", headers=auth_headers).json()
    february = client.get("/meetings?year=2024&month=2", headers=auth_headers).json()
    march = client.get("/meetings?year=2024&month=3", headers=auth_headers).json()

    assert [m["start_time"] for m in january] == ["2024-01-31T09:00:00"]
    assert february == []
    assert [m["start_time"] for m in march] == ["2024-03-02T09:00:00"]


def test_update_and_delete_meeting(client, auth_headers, student_id):
    created = client.post(
        "/meetings",
        json=_meeting_payload(student_id),
        headers=auth_headers,
    ).json()
    meeting_id = created[0]["id"]

    resp = client.patch(
        f"/meetings/{meeting_id}",
        json={"is_completed": True, "title": "Algebra (moved)"},
        headers=auth_headers,
    )
    assert resp.status_code == HTTPStatus.OK
    assert resp.json()["is_completed"] is True
    assert resp.json()["title"] == "Algebra (moved)"

    bad = client.patch(
        f"/meetings/{meeting_id}",
        json={"end_time": "2024-03-04T08:00:00"},
        headers=auth_headers,
    )
    assert bad.status_code == HTTPStatus.BAD_REQUEST

    resp = client.delete(f"/meetings/{meeting_id}", headers=auth_headers)
    assert resp.status_code == HTTPStatus.NO_CONTENT

    resp = client.delete(f"/meetings/{meeting_id}", headers=auth_headers)
    assert resp.status_code == HTTPStatus.NOT_FOUND


def test_update_meeting_rejects_timezone_aware_times(client, auth_headers, student_id):
    """
    Meetings are stored as local wall-clock times; an offset is a 422,
    not a server error.
    """
    created = client.post(
        "/meetings",
        json=_meeting_payload(student_id),
        headers=auth_headers,
    ).json()
    meeting_id = created[0]["id"]

    resp = client.patch(
        f"/meetings/{meeting_id}",
        json={"start_time": "2024-03-04T08:00:00Z"},
        headers=auth_headers,
    )
    assert resp.status_code == HTTPStatus.UNPROCESSABLE_ENTITY

    resp = client.patch(
        f"/meetings/{meeting_id}",
        json={"end_time": "2024-03-04T11:00:00+02:00"},
        headers=auth_headers,
    )
    assert resp.status_code == HTTPStatus.UNPROCESSABLE_ENTITY


def test_update_meeting_null_fields_are_left_unchanged(client, auth_headers, student_id):
    created = client.post(
        "/meetings",
        json=_meeting_payload(student_id, is_completed=True),
        headers=auth_headers,
    ).json()
    meeting_id = created[0]["id"]

    resp = client.patch(
        f"/meetings/{meeting_id}",
        json={"start_time": None, "end_time": None, "is_completed": None},
        headers=auth_headers,
    )

    assert resp.status_code == HTTPStatus.OK
    data = resp.json()
    assert data["start_time"] == "2024-03-04T09:00:00"
    assert data["end_time"] == "2024-03-04T10:00:00"
    assert data["is_completed"] is True


def test_recent_meetings_newest_first(client, auth_headers, student_id):
    client.post(
        "/meetings",
        json=_meeting_payload(
            student_id,
            is_repeating=True,
            repeat_type="weekly",
            repeat_count=3,
        ),
        headers=auth_headers,
    )

    resp = client.get("/meetings/recent?limit=2", headers=auth_headers)
    assert resp.status_code == HTTPStatus.OK
    assert [m["title"] for m in resp.json()] == ["Algebra (3/3)", "Algebra (2/3)"]


def test_upcoming_meetings_shape(client, auth_headers):
    resp = client.get("/meetings/upcoming", headers=auth_headers)

    assert resp.status_code == HTTPStatus.OK
    assert isinstance(resp.json(), list)


def test_meetings_require_authentication(client):
    assert client.get("/meetings").status_code == HTTPStatus.UNAUTHORIZED
    assert (
        client.get("/meetings", headers={"X-User-Id": "abc"}).status_code
        == HTTPStatus.UNAUTHORIZED
    )
    assert (
        client.get("/meetings", headers={"X-User-Id": "999999"}).status_code
        == HTTPStatus.UNAUTHORIZED
    )
