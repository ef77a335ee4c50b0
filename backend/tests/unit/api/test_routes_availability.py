"""Unit tests for availability API routes.

Tests for:
- GET/POST /api/blocked-dates
- DELETE /api/blocked-dates/{range_id}
- GET /api/availability
- GET /api/availability/calendar/{month}
"""

import datetime as dt

import pytest
from fastapi.testclient import TestClient
from starlette.status import (
    HTTP_200_OK,
    HTTP_201_CREATED,
    HTTP_204_NO_CONTENT,
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
)


def _future(days: int) -> dt.date:
    return dt.date.today() + dt.timedelta(days=days)


class TestBlockedDates:
    """Tests for blocked date management endpoints."""

    def test_empty(self, client: TestClient) -> None:
        """No ranges blocked yet."""
        response = client.get("/api/blocked-dates")
        assert response.status_code == HTTP_200_OK
        assert response.json() == {"blocked_ranges": [], "blocked_dates": []}

    def test_block_and_list(self, client: TestClient) -> None:
        """Blocked range shows up with every covered date."""
        response = client.post(
            "/api/blocked-dates",
            json={"start_date": "2025-07-01", "end_date": "2025-07-03", "reason": "Manutenção"},
        )
        assert response.status_code == HTTP_201_CREATED
        created = response.json()
        assert created["id"]
        assert created["start_date"] == "2025-07-01"

        client.post("/api/blocked-dates", json={"start_date": "2025-07-03", "end_date": "2025-07-04"})

        data = client.get("/api/blocked-dates").json()
        assert len(data["blocked_ranges"]) == 2
        assert data["blocked_dates"] == ["2025-07-01", "2025-07-02", "2025-07-03", "2025-07-04"]

    def test_utc_midnight_boundaries(self, client: TestClient) -> None:
        """Instant boundaries map to the day they denote."""
        response = client.post(
            "/api/blocked-dates",
            json={"start_date": "2025-07-01T00:00:00Z", "end_date": "2025-07-01T00:00:00Z"},
        )
        assert response.status_code == HTTP_201_CREATED
        assert response.json()["end_date"] == "2025-07-01"

    def test_inverted_range_returns_400(self, client: TestClient) -> None:
        """end_date before start_date."""
        response = client.post(
            "/api/blocked-dates",
            json={"start_date": "2025-07-03", "end_date": "2025-07-01"},
        )
        assert response.status_code == HTTP_400_BAD_REQUEST
        assert response.json()["error_code"] == "ERR_001"

    def test_delete(self, client: TestClient) -> None:
        """Unblocked range disappears."""
        created = client.post(
            "/api/blocked-dates",
            json={"start_date": "2025-07-01", "end_date": "2025-07-01"},
        ).json()

        response = client.delete(f"/api/blocked-dates/{created['id']}")
        assert response.status_code == HTTP_204_NO_CONTENT
        assert client.get("/api/blocked-dates").json()["blocked_ranges"] == []

    def test_delete_missing_returns_404(self, client: TestClient) -> None:
        """Unknown range id."""
        response = client.delete("/api/blocked-dates/missing")
        assert response.status_code == HTTP_404_NOT_FOUND
        assert response.json()["error_code"] == "ERR_005"


class TestCheckAvailability:
    """Tests for GET /api/availability."""

    def test_available_future_stay(self, client: TestClient) -> None:
        """Free future stay is available and priced."""
        check_in, check_out = _future(30), _future(33)
        response = client.get(f"/api/availability?check_in={check_in}&check_out={check_out}")
        assert response.status_code == HTTP_200_OK

        data = response.json()
        assert data["is_available"] is True
        assert data["unavailable_dates"] == []
        assert data["total_nights"] == 3
        assert data["total_amount"] > 0

    def test_blocked_night(self, client: TestClient) -> None:
        """A blocked night makes the stay unavailable."""
        blocked = _future(31)
        client.post(
            "/api/blocked-dates",
            json={"start_date": blocked.isoformat(), "end_date": blocked.isoformat()},
        )

        data = client.get(
            f"/api/availability?check_in={_future(30)}&check_out={_future(33)}"
        ).json()
        assert data["is_available"] is False
        assert data["unavailable_dates"] == [blocked.isoformat()]

    def test_blocked_check_out_day(self, client: TestClient) -> None:
        """Checking out on a blocked day is allowed."""
        check_out = _future(33)
        client.post(
            "/api/blocked-dates",
            json={"start_date": check_out.isoformat(), "end_date": _future(40).isoformat()},
        )

        data = client.get(f"/api/availability?check_in={_future(30)}&check_out={check_out}").json()
        assert data["is_available"] is True

    def test_empty_stay_returns_400(self, client: TestClient) -> None:
        """check_out must be after check_in."""
        day = _future(30)
        response = client.get(f"/api/availability?check_in={day}&check_out={day}")
        assert response.status_code == HTTP_400_BAD_REQUEST


class TestCalendar:
    """Tests for GET /api/availability/calendar/{month}."""

    def test_month_view(self, client: TestClient) -> None:
        """Past month is fully disabled and holidays are flagged."""
        client.post("/api/blocked-dates", json={"start_date": "2020-06-10", "end_date": "2020-06-12"})

        response = client.get("/api/availability/calendar/2020-06")
        assert response.status_code == HTTP_200_OK

        data = response.json()
        assert data["month"] == "2020-06"
        assert len(data["days"]) == 30
        assert data["disabled_count"] == 30
        assert data["available_count"] == 0
        assert data["blocked_count"] == 3
        # Corpus Christi 2020
        holiday = next(d for d in data["days"] if d["date"] == "2020-06-11")
        assert holiday["is_holiday"] is True

    @pytest.mark.parametrize("month", ["2025-13", "2025-00", "2025-7", "July"])
    def test_invalid_month_returns_400(self, client: TestClient, month: str) -> None:
        """Month must be YYYY-MM with a month between 01 and 12."""
        response = client.get(f"/api/availability/calendar/{month}")
        assert response.status_code == HTTP_400_BAD_REQUEST
