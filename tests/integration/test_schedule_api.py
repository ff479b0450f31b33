# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Integration tests for work schedule API endpoints."""

import uuid

WEEKDAYS = [
    {
        "day_of_week": d,
        "start_time": "09:00",
        "end_time": "18:00",
        "break_start_time": "13:00",
        "break_end_time": "14:00",
    }
    for d in range(5)
]


class TestDefaultSchedule:
    """Tests for the company default schedule endpoints."""

    def test_put_and_get(self, client, db_session, company, test_user):
        url = f"/api/v1/companies/{company.id}/work-schedules/default"
        response = client.put(url, json={"days": WEEKDAYS})

        assert response.status_code == 200
        assert len(response.json()) == 5
        assert len(client.get(url).json()) == 5

        db_session.refresh(test_user)
        assert str(test_user.hourly_cost) == "17.24"

    def test_invalid_time_format(self, client, company):
        response = client.put(
            f"/api/v1/companies/{company.id}/work-schedules/default",
            json={"days": [{"day_of_week": 0, "start_time": "9:00", "end_time": "17:00"}]},
        )
        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "validation_error"
        assert "start_time" in body["detail"]

    def test_day_of_week_out_of_range(self, client, company):
        response = client.put(
            f"/api/v1/companies/{company.id}/work-schedules/default",
            json={"days": [{"day_of_week": 9, "start_time": "09:00", "end_time": "17:00"}]},
        )
        assert response.status_code == 400
        assert response.json()["code"] == "validation_error"

    def test_end_before_start(self, client, company):
        response = client.put(
            f"/api/v1/companies/{company.id}/work-schedules/default",
            json={"days": [{"day_of_week": 0, "start_time": "17:00", "end_time": "09:00"}]},
        )
        assert response.status_code == 400
        assert response.json()["code"] == "validation_error"

    def test_unknown_company(self, client):
        response = client.get(f"/api/v1/companies/{uuid.uuid4()}/work-schedules/default")
        assert response.status_code == 404


class TestUserSchedule:
    """Tests for per-user override endpoints."""

    def test_override_and_effective(self, client, company, test_user, default_schedule):
        url = f"/api/v1/companies/{company.id}/users/{test_user.id}/work-schedule"
        response = client.put(
            url, json={"days": [{"day_of_week": 4, "start_time": "08:00", "end_time": "14:00"}]}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["has_overrides"] is True
        assert len(data["overrides"]) == 1
        friday = data["effective"]["days"][4]
        assert friday["expected_minutes"] == 360
        assert friday["is_override"] is True
        assert data["effective"]["weekly_minutes"] == 4 * 480 + 360

    def test_delete_overrides(self, client, company, test_user, default_schedule):
        url = f"/api/v1/companies/{company.id}/users/{test_user.id}/work-schedule"
        client.put(url, json={"days": [{"day_of_week": 5, "is_workable": False}]})

        assert client.delete(url).status_code == 204
        data = client.get(url).json()
        assert data["overrides"] == []
        assert data["has_overrides"] is False

    def test_editing_disabled(self, client, db_session, company, test_user):
        company.allow_user_schedule_edit = False
        db_session.commit()

        response = client.put(
            f"/api/v1/companies/{company.id}/users/{test_user.id}/work-schedule",
            json={"days": []},
        )
        assert response.status_code == 403
        assert response.json()["code"] == "permission_denied"
