# SPDX-License-Identifier: MIT
"""
Tests for expiry status classification.
"""
from datetime import date, datetime, timedelta, timezone

import pytest

from expirytrack.classify import (
    ExpiryState,
    classify,
    countdown_percentage,
    days_until,
    progress_percentage,
)
from expirytrack.core.exceptions import InvalidEvaluationInstant

NOW = datetime(2026, 1, 15, 12, 0, 0)


class TestClassification:
    """Test state and day-count derivation."""

    def test_window_boundary_is_expiring(self):
        status = classify(NOW + timedelta(days=30), NOW, window_days=30)

        assert status.state == ExpiryState.EXPIRING_SOON
        assert status.days_until_expiry == 30
        assert status.is_expired is False

    def test_one_past_window_is_valid(self):
        status = classify(NOW + timedelta(days=31), NOW, window_days=30)

        assert status.state == ExpiryState.VALID
        assert status.days_until_expiry == 31

    def test_one_second_ago_is_expired(self):
        status = classify(NOW - timedelta(seconds=1), NOW, window_days=30)

        assert status.state == ExpiryState.EXPIRED
        assert status.is_expired is True
        assert status.days_until_expiry <= 0

    def test_exact_instant_is_not_expired(self):
        status = classify(NOW, NOW)

        assert status.is_expired is False
        assert status.state == ExpiryState.EXPIRING_SOON
        assert status.days_until_expiry == 0

    def test_partial_day_rounds_up(self):
        status = classify(NOW + timedelta(hours=23, minutes=6), NOW)
        assert status.days_until_expiry == 1

    def test_overdue_days(self):
        status = classify(NOW - timedelta(days=2, hours=1), NOW)

        assert status.days_until_expiry == -2
        assert status.days_overdue == 2
        assert status.days_remaining == 0

    def test_window_is_caller_supplied(self):
        expiry = NOW + timedelta(days=20)

        assert classify(expiry, NOW, window_days=30).state == ExpiryState.EXPIRING_SOON
        assert classify(expiry, NOW, window_days=15).state == ExpiryState.VALID

    def test_default_window_is_thirty_days(self):
        assert classify(NOW + timedelta(days=30), NOW).state == ExpiryState.EXPIRING_SOON
        assert classify(NOW + timedelta(days=31), NOW).state == ExpiryState.VALID

    def test_date_expiry(self):
        """A plain date is treated as midnight at the start of that day."""
        status = classify(date(2026, 2, 14), NOW)
        assert status.days_until_expiry == 30

    def test_mixed_awareness(self):
        now = NOW.replace(tzinfo=timezone.utc)
        status = classify(NOW + timedelta(days=3), now)
        assert status.days_until_expiry == 3

    def test_days_until(self):
        assert days_until(NOW + timedelta(days=10), NOW) == 10
        assert days_until(NOW - timedelta(hours=36), NOW) == -1


class TestInvalidInstants:
    """Test the programming-error path."""

    @pytest.mark.parametrize("bad_now", ["2026-01-15", 1736942400, object()])
    def test_bad_now_raises(self, bad_now):
        with pytest.raises(InvalidEvaluationInstant):
            classify(NOW, bad_now)

    def test_error_is_a_type_error(self):
        with pytest.raises(TypeError):
            classify(NOW, "yesterday")

    def test_bad_expiry_raises(self):
        with pytest.raises(InvalidEvaluationInstant) as exc_info:
            classify(None, NOW)
        assert exc_info.value.argument == "expiry"
        assert str(exc_info.value).startswith("expiry must be")

    def test_bad_now_names_now(self):
        with pytest.raises(InvalidEvaluationInstant) as exc_info:
            classify(NOW, "2026-01-15")
        assert exc_info.value.argument == "now"
        assert str(exc_info.value).startswith("now must be")


class TestProgress:
    """Test renewal progress and the countdown bar."""

    def test_progress_only_with_lifetime(self):
        assert classify(NOW + timedelta(days=40), NOW).progress_percentage is None

    def test_progress_values(self):
        assert classify(NOW + timedelta(days=365), NOW, total_days=365).progress_percentage == 0.0
        assert classify(NOW + timedelta(days=73), NOW, total_days=365).progress_percentage == pytest.approx(80.0)
        assert classify(NOW, NOW, total_days=365).progress_percentage == 100.0

    def test_progress_clamped(self):
        assert progress_percentage(730, 365) == 0.0
        assert progress_percentage(-10, 365) == 100.0

    def test_progress_monotonic(self):
        """Progress never drops as the remaining days shrink."""
        values = [progress_percentage(days, 365) for days in range(365, -1, -1)]
        assert values == sorted(values)
        assert values[0] == 0.0
        assert values[-1] == 100.0

    @pytest.mark.parametrize(
        "days,expired,expected",
        [(30, False, 100.0), (15, False, 100.0), (6, False, 40.0), (0, False, 0.0), (5, True, 0.0), (-3, True, 0.0)],
    )
    def test_countdown_percentage(self, days, expired, expected):
        assert countdown_percentage(days, 15, expired) == pytest.approx(expected)


class TestStatusOutput:
    """Test labels and serialization."""

    def test_labels(self):
        assert classify(NOW + timedelta(days=12), NOW).label == "12 days"
        assert classify(NOW + timedelta(days=90), NOW).label == "Valid"
        assert classify(NOW - timedelta(days=1), NOW).label == "Expired"

    def test_to_dict_upcoming(self):
        data = classify(NOW + timedelta(days=12), NOW, total_days=365).to_dict()

        assert data["status"] == "expiring"
        assert data["days_remaining"] == 12
        assert "days_overdue" not in data
        assert data["progress_percentage"] == pytest.approx((365 - 12) / 365 * 100)

    def test_to_dict_overdue(self):
        data = classify(NOW - timedelta(days=4), NOW).to_dict()

        assert data["status"] == "expired"
        assert data["is_expired"] is True
        assert data["days_overdue"] == 4
        assert "progress_percentage" not in data
