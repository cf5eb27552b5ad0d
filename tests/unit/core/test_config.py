# tests/unit/core/test_config.py
from pydantic import ValidationError
import pytest

from availability_engine.core.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DEFAULT_TIMEZONE", raising=False)
        s = Settings(_env_file=None)
        assert s.default_timezone == "America/New_York"
        assert s.default_slot_duration_minutes == 60
        assert s.default_schedule_days == [0, 1, 2, 3, 4]
        assert s.default_schedule_start == "09:00"
        assert s.default_schedule_end == "17:00"
        assert s.dedupe_union_slots is False

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_TIMEZONE", "Europe/London")
        monkeypatch.setenv("DEDUPE_UNION_SLOTS", "true")
        s = Settings(_env_file=None)
        assert s.default_timezone == "Europe/London"
        assert s.dedupe_union_slots is True

    def test_unknown_timezone_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, default_timezone="Nowhere/Special")

    def test_schedule_days_sorted_and_unique(self):
        s = Settings(_env_file=None, default_schedule_days=[4, 0, 0, 2])
        assert s.default_schedule_days == [0, 2, 4]

    def test_schedule_day_out_of_range(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, default_schedule_days=[7])

    def test_inverted_default_window_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, default_schedule_start="17:00", default_schedule_end="09:00")

    def test_end_of_day_window_accepted(self):
        s = Settings(_env_file=None, default_schedule_start="18:00", default_schedule_end="24:00")
        assert s.default_schedule_end == "24:00"

    def test_booking_lock_settings(self, monkeypatch):
        monkeypatch.setenv("REDIS_URL", "redis://cache:6380/2")
        monkeypatch.setenv("BOOKING_LOCK_TTL_SECONDS", "30")
        s = Settings(_env_file=None)
        assert s.redis_url == "redis://cache:6380/2"
        assert s.booking_lock_ttl_seconds == 30
        assert s.lock_namespace == "availability"

    def test_non_positive_lock_ttl_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, booking_lock_ttl_seconds=0)
