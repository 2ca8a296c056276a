# tests/test_week_grid_api.py
from http import HTTPStatus


def _cell(grid, day_of_week, slot_start):
    day = grid["days"][day_of_week - 1]
    for slot in day["slots"]:
        if slot["start"] == slot_start:
            return slot["occurrences"]
    raise AssertionError(f"no slot starting at {slot_start}")


def test_week_grid_normalizes_to_monday_and_has_seven_days(client, campus):
    response = client.get("/week-grid", params={"weekStart": "2025-01-22"})

    assert response.status_code == HTTPStatus.OK
    grid = response.json()
    assert grid["week_start"] == "2025-01-20"
    assert grid["week_end"] == "2025-01-26"
    assert len(grid["days"]) == 7
    assert grid["slot_minutes"] == 60
    assert len(grid["days"][0]["slots"]) == 12


def test_week_grid_places_rule_and_rescheduled_meetings(client, campus):
    grid = client.get("/week-grid", params={"weekStart": "2025-01-20"}).json()

    assert [o["course_id"] for o in _cell(grid, 1, "10:00:00")] == [10]
    assert [o["room_id"] for o in _cell(grid, 1, "15:00:00")] == [3]
    assert _cell(grid, 1, "14:00:00") == []
    assert grid["warnings"] == []


def test_week_grid_reports_unaligned_meetings(client, campus):
    grid = client.get("/week-grid", params={"weekStart": "2025-02-03"}).json()

    assert [o["course_id"] for o in grid["unaligned"]] == [30]
    assert [w["code"] for w in grid["warnings"]] == ["UNALIGNED_OCCURRENCE"]
    assert [o["course_id"] for o in _cell(grid, 1, "14:00:00")] == [20]


def test_empty_week_still_has_full_grid(client, campus):
    grid = client.get("/week-grid", params={"weekStart": "2030-01-07"}).json()

    assert len(grid["days"]) == 7
    assert all(not slot["occurrences"] for day in grid["days"] for slot in day["slots"])


def test_personal_week_grid_for_student(client, campus):
    grid = client.get("/week-grid", params={"weekStart": "2025-01-20", "student": "student-1"}).json()

    assert [o["course_id"] for o in _cell(grid, 1, "10:00:00")] == [10]
    assert _cell(grid, 1, "15:00:00") == []


def test_malformed_week_start(client, campus):
    response = client.get("/week-grid", params={"weekStart": "next-monday"})

    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY


def test_week_running_past_the_last_date_is_rejected(client, campus):
    response = client.get("/week-grid", params={"weekStart": "9999-12-31"})

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.json()["details"] == {"weekStart": "9999-12-31"}


def test_last_complete_week_is_served(client, campus):
    grid = client.get("/week-grid", params={"weekStart": "9999-12-20"}).json()

    assert grid["week_start"] == "9999-12-20"
    assert grid["week_end"] == "9999-12-26"
