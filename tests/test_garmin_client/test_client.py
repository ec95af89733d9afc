"""Tests for garmin_client.client — mock-based, no real network calls."""

from __future__ import annotations

from datetime import date
from unittest.mock import MagicMock, patch

import pytest

from garmin_client.client import GarminClient
from garmin_client.exceptions import GarminAPIError, GarminAuthError, GarminRateLimitError


@pytest.fixture
def mock_garmin():
    """Create a mock Garmin instance."""
    mock = MagicMock()
    mock.garth = MagicMock()
    return mock


@pytest.fixture
def client(mock_garmin):
    """Create a GarminClient with a mocked Garmin session."""
    with patch("garmin_client.client.create_session", return_value=mock_garmin):
        c = GarminClient(email="test@test.com", password="pass")
    return c


def _http_error(status: int) -> Exception:
    exc = Exception(f"HTTP {status}")
    exc.status = status
    return exc


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_from_garmin_wraps_session(self, mock_garmin):
        c = GarminClient.from_garmin(mock_garmin)
        mock_garmin.upload_workout.return_value = {"workoutId": 1}
        assert c.upload_workout({}) == 1

    @patch("garmin_client.client.resume_session")
    def test_from_tokens(self, mock_resume, mock_garmin, tmp_path):
        mock_resume.return_value = mock_garmin
        c = GarminClient.from_tokens(tmp_path)
        mock_resume.assert_called_once_with(tmp_path)
        c.delete_workout(5)
        mock_garmin.delete_workout.assert_called_once_with(5)

    @patch("garmin_client.client.resume_session", side_effect=GarminAuthError("no tokens"))
    def test_from_tokens_propagates_auth_error(self, mock_resume, tmp_path):
        with pytest.raises(GarminAuthError):
            GarminClient.from_tokens(tmp_path)


# ---------------------------------------------------------------------------
# upload_workout
# ---------------------------------------------------------------------------


class TestUploadWorkout:
    def test_returns_workout_id(self, client, mock_garmin):
        mock_garmin.upload_workout.return_value = {"workoutId": 12345}
        wid = client.upload_workout({"workoutName": "Test"})
        assert wid == 12345
        mock_garmin.upload_workout.assert_called_once_with({"workoutName": "Test"})

    def test_raises_on_unexpected_response(self, client, mock_garmin):
        mock_garmin.upload_workout.return_value = {"error": "bad"}
        with pytest.raises(GarminAPIError, match="Unexpected upload response"):
            client.upload_workout({"workoutName": "Test"})

    def test_raises_on_api_error(self, client, mock_garmin):
        mock_garmin.upload_workout.side_effect = _http_error(500)
        with pytest.raises(GarminAPIError) as exc_info:
            client.upload_workout({"workoutName": "Test"})
        assert exc_info.value.status_code == 500


# ---------------------------------------------------------------------------
# schedule_workout
# ---------------------------------------------------------------------------


class TestScheduleWorkout:
    def test_calls_garth_post(self, client, mock_garmin):
        client.schedule_workout(12345, date(2026, 3, 10))
        mock_garmin.garth.post.assert_called_once_with(
            "connectapi",
            "/workout-service/schedule/12345",
            json={"date": "2026-03-10"},
            api=True,
        )


# ---------------------------------------------------------------------------
# upload_and_schedule
# ---------------------------------------------------------------------------


class TestUploadAndSchedule:
    def test_combines_upload_and_schedule(self, client, mock_garmin):
        mock_garmin.upload_workout.return_value = {"workoutId": 99}
        wid = client.upload_and_schedule({"workoutName": "X"}, date(2026, 3, 10))
        assert wid == 99
        mock_garmin.upload_workout.assert_called_once()
        mock_garmin.garth.post.assert_called_once()
        mock_garmin.delete_workout.assert_not_called()

    def test_removes_upload_when_schedule_fails(self, client, mock_garmin):
        mock_garmin.upload_workout.return_value = {"workoutId": 99}
        mock_garmin.garth.post.side_effect = _http_error(400)
        with pytest.raises(GarminAPIError):
            client.upload_and_schedule({"workoutName": "X"}, date(2026, 3, 10))
        mock_garmin.delete_workout.assert_called_once_with(99)

    def test_schedule_error_kept_when_cleanup_fails(self, client, mock_garmin):
        mock_garmin.upload_workout.return_value = {"workoutId": 99}
        mock_garmin.garth.post.side_effect = _http_error(400)
        mock_garmin.delete_workout.side_effect = _http_error(500)
        with pytest.raises(GarminAPIError) as exc_info:
            client.upload_and_schedule({"workoutName": "X"}, date(2026, 3, 10))
        assert exc_info.value.status_code == 400
        mock_garmin.delete_workout.assert_called_once_with(99)

    def test_upload_failure_skips_schedule(self, client, mock_garmin):
        mock_garmin.upload_workout.side_effect = _http_error(500)
        with pytest.raises(GarminAPIError):
            client.upload_and_schedule({"workoutName": "X"}, date(2026, 3, 10))
        mock_garmin.garth.post.assert_not_called()


# ---------------------------------------------------------------------------
# Retry on 429
# ---------------------------------------------------------------------------


class TestRetryLogic:
    @patch("garmin_client.client.time.sleep")
    def test_retries_on_429(self, mock_sleep, client, mock_garmin):
        exc_429 = _http_error(429)
        mock_garmin.upload_workout.side_effect = [
            exc_429,
            exc_429,
            {"workoutId": 42},
        ]
        wid = client.upload_workout({"workoutName": "Retry Test"})
        assert wid == 42
        assert [c.args[0] for c in mock_sleep.call_args_list] == [2, 4]

    @patch("garmin_client.client.time.sleep")
    def test_raises_after_max_retries(self, mock_sleep, client, mock_garmin):
        mock_garmin.upload_workout.side_effect = [_http_error(429)] * 3
        with pytest.raises(GarminRateLimitError) as exc_info:
            client.upload_workout({"workoutName": "Fail"})
        assert exc_info.value.status_code == 429

    @patch("garmin_client.client.time.sleep")
    def test_status_code_attribute_also_detected(self, mock_sleep, client, mock_garmin):
        exc = Exception("slow down")
        exc.status_code = 429
        mock_garmin.upload_workout.side_effect = [exc, {"workoutId": 7}]
        assert client.upload_workout({}) == 7
        mock_sleep.assert_called_once()


# ---------------------------------------------------------------------------
# delete_workout
# ---------------------------------------------------------------------------


class TestDeleteWorkout:
    def test_delete_workout(self, client, mock_garmin):
        client.delete_workout(123)
        mock_garmin.delete_workout.assert_called_once_with(123)
