"""Tests for date-only arithmetic."""

from datetime import date, datetime

import pytest

from supply_tracker.date_utils import (
    days_between,
    days_until_expiration,
    is_before,
    is_expired,
    is_expiring_soon,
    parse_date_only,
)


class TestParseDateOnly:
    """Tests for parse_date_only."""

    def test_iso_string(self):
        assert parse_date_only("2026-03-01") == date(2026, 3, 1)

    def test_drops_time_component(self):
        assert parse_date_only("2026-03-01T23:59:00Z") == date(2026, 3, 1)
        assert parse_date_only(datetime(2026, 3, 1, 23, 59)) == date(2026, 3, 1)

    def test_date_passthrough(self):
        d = date(2026, 3, 1)
        assert parse_date_only(d) is d

    def test_invalid_string(self):
        with pytest.raises(ValueError):
            parse_date_only("not-a-date")


class TestDayCounting:
    """Tests for days_between and is_before."""

    def test_days_between(self):
        assert days_between("2026-01-15", "2026-01-25") == 10
        assert days_between("2026-01-25", "2026-01-15") == -10
        assert days_between("2026-01-15", "2026-01-15") == 0

    def test_days_between_across_leap_day(self):
        assert days_between("2028-02-28", "2028-03-01") == 2

    def test_is_before(self):
        assert is_before("2026-01-14", "2026-01-15")
        assert not is_before("2026-01-15", "2026-01-15")


class TestExpiration:
    """Tests for expiration helpers."""

    def test_never_expires_has_no_days(self, as_of):
        assert days_until_expiration("2020-01-01", never_expires=True, as_of=as_of) is None

    def test_no_date_has_no_days(self, as_of):
        assert days_until_expiration(None, as_of=as_of) is None

    def test_expired_yesterday(self, as_of):
        assert is_expired("2026-01-14", as_of=as_of)
        assert not is_expiring_soon("2026-01-14", as_of=as_of)

    def test_expiring_today_is_not_expired(self, as_of):
        assert not is_expired("2026-01-15", as_of=as_of)
        assert is_expiring_soon("2026-01-15", as_of=as_of)

    def test_expiring_soon_boundary(self, as_of):
        assert is_expiring_soon("2026-01-29", threshold_days=14, as_of=as_of)
        assert not is_expiring_soon("2026-01-30", threshold_days=14, as_of=as_of)

    def test_never_expires_is_never_expired(self, as_of):
        assert not is_expired("2000-01-01", never_expires=True, as_of=as_of)
        assert not is_expiring_soon("2000-01-01", never_expires=True, as_of=as_of)
