# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Integration tests for time entry API endpoints."""


def entries_url(company, user) -> str:
    return f"/api/v1/companies/{company.id}/users/{user.id}/time-entries"


class TestTimeEntryEndpoints:
    """Tests for recording and editing entries over HTTP."""

    def test_create_list_update_delete(self, client, company, test_user):
        url = entries_url(company, test_user)
        response = client.post(
            url,
            json={"start_time": "2025-03-18T09:00:00", "end_time": "2025-03-18T13:00:00"},
        )

        assert response.status_code == 201
        created = response.json()
        assert created["duration_minutes"] == 240
        assert created["entry_type"] == "WORK"

        listed = client.get(url, params={"from": "2025-03-18", "to": "2025-03-18"}).json()
        assert [e["id"] for e in listed] == [created["id"]]

        updated = client.put(
            f"{url}/{created['id']}", json={"end_time": "2025-03-18T12:30:00"}
        )
        assert updated.status_code == 200
        assert updated.json()["duration_minutes"] == 210

        assert client.delete(f"{url}/{created['id']}").status_code == 204
        assert client.get(f"{url}/{created['id']}").status_code == 404

    def test_end_before_start(self, client, company, test_user):
        response = client.post(
            entries_url(company, test_user),
            json={"start_time": "2025-03-18T13:00:00", "end_time": "2025-03-18T09:00:00"},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "validation_error"

    def test_entries_appear_in_calendar(self, client, company, test_user, default_schedule):
        client.post(
            entries_url(company, test_user),
            json={"start_time": "2025-03-18T09:00:00", "end_time": "2025-03-18T17:00:00"},
        )

        calendar = client.get(
            f"/api/v1/companies/{company.id}/users/{test_user.id}/calendar",
            params={"from": "2025-03-18", "to": "2025-03-18"},
        ).json()

        day = calendar["days"][0]
        assert day["status"] == "WORKED"
        assert day["logged_minutes"] == 480
