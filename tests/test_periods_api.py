# tests/test_periods_api.py
from http import HTTPStatus


def _period(name: str, start: str, end: str, **extra) -> dict:
    payload = {"name": name, "start_date": start, "end_date": end, "year": int(start[:4])}
    payload.update(extra)
    return payload


def test_create_term_defaults(client, auth_headers):
    resp = client.post(
        "/terms",
        json=_period("Spring A", "2024-02-01", "2024-02-14"),
        headers=auth_headers,
    )

    assert resp.status_code == HTTPStatus.CREATED
    data = resp.json()
    assert data["type"] == "term"
    assert data["is_active"] is True
    assert data["color"] == "#3B82F6"


def test_create_period_rejects_inverted_range(client, auth_headers):
    resp = client.post(
        "/holidays",
        json=_period("Backwards", "2024-03-14", "2024-03-01"),
        headers=auth_headers,
    )

    assert resp.status_code == HTTPStatus.UNPROCESSABLE_ENTITY


def test_single_day_period_is_allowed(client, auth_headers):
    resp = client.post(
        "/holidays",
        json=_period("Bank holiday", "2024-05-06", "2024-05-06"),
        headers=auth_headers,
    )

    assert resp.status_code == HTTPStatus.CREATED
    assert resp.json()["color"] == "#F59E0B"


def test_overview_reports_gap_and_current_term(client, auth_headers):
    """
    Term 02-01..02-14 and holiday 03-01..03-14 leave 02-15..02-29 uncovered.
    """
    client.post(
        "/holidays",
        json=_period("Easter", "2024-03-01", "2024-03-14"),
        headers=auth_headers,
    )
    client.post(
        "/terms",
        json=_period("Spring A", "2024-02-01", "2024-02-14"),
        headers=auth_headers,
    )

    resp = client.get("/teaching-periods?today=2024-02-10", headers=auth_headers)
    assert resp.status_code == HTTPStatus.OK

    data = resp.json()
    assert [p["name"] for p in data["periods"]] == ["Spring A", "Easter"]
    assert [p["type"] for p in data["periods"]] == ["term", "holiday"]
    assert data["gaps"] == [{"start_date": "2024-02-15", "end_date": "2024-02-29"}]

    current = data["current"]
    assert current["today"] == "2024-02-10"
    assert current["term"]["name"] == "Spring A"
    assert current["week"] == 2
    assert current["total_weeks"] == 2


def test_overview_contiguous_periods_have_no_gaps(client, auth_headers):
    client.post(
        "/terms",
        json=_period("February", "2024-02-01", "2024-02-29"),
        headers=auth_headers,
    )
    client.post(
        "/terms",
        json=_period("March", "2024-03-01", "2024-03-14"),
        headers=auth_headers,
    )

    data = client.get("/teaching-periods?today=2024-06-01", headers=auth_headers).json()

    assert data["gaps"] == []
    assert data["current"]["term"] is None
    assert data["current"]["week"] is None


def test_inactive_term_is_not_current(client, auth_headers):
    client.post(
        "/terms",
        json=_period("Paused", "2024-02-01", "2024-02-29", is_active=False),
        headers=auth_headers,
    )

    data = client.get("/teaching-periods?today=2024-02-10", headers=auth_headers).json()

    assert data["current"]["term"] is None
    assert len(data["periods"]) == 1


def test_week_info(client, auth_headers):
    client.post(
        "/terms",
        json=_period("Autumn", "2024-09-02", "2024-12-20"),
        headers=auth_headers,
    )

    resp = client.get("/teaching-periods/week-info?day=2024-09-16", headers=auth_headers)
    assert resp.status_code == HTTPStatus.OK
    assert resp.json()["period_name"] == "Autumn"
    assert resp.json()["week"] == 3

    resp = client.get("/teaching-periods/week-info?day=2024-08-01", headers=auth_headers)
    assert resp.status_code == HTTPStatus.OK
    assert resp.json() is None


def test_update_and_delete_term(client, auth_headers, other_user_headers):
    term = client.post(
        "/terms",
        json=_period("Summer", "2024-04-15", "2024-07-19", color="#10B981"),
        headers=auth_headers,
    ).json()

    resp = client.put(
        f"/terms/{term['id']}",
        json=_period("Summer term", "2024-04-16", "2024-07-19", is_active=False),
        headers=auth_headers,
    )
    assert resp.status_code == HTTPStatus.OK
    data = resp.json()
    assert data["name"] == "Summer term"
    assert data["is_active"] is False
    assert data["color"] == "#10B981"

    resp = client.delete(f"/terms/{term['id']}", headers=other_user_headers)
    assert resp.status_code == HTTPStatus.NOT_FOUND

    resp = client.delete(f"/terms/{term['id']}", headers=auth_headers)
    assert resp.status_code == HTTPStatus.NO_CONTENT
    assert client.get("/terms", headers=auth_headers).json() == []


def test_holidays_listed_newest_year_first(client, auth_headers):
    client.post("/holidays", json=_period("Old", "2023-12-20", "2024-01-05"), headers=auth_headers)
    client.post("/holidays", json=_period("New", "2024-12-20", "2025-01-05"), headers=auth_headers)

    names = [h["name"] for h in client.get("/holidays", headers=auth_headers).json()]

    assert names == ["New", "Old"]
