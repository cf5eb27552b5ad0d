# tests/unit/services/test_slot_generator.py
"""
Unit tests for slot generation.

Covers the canonical weekday scenarios, past-slot flagging, window fitting,
duplicate handling for overlapping rules, and DST days.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from availability_engine.core.exceptions import ValidationException
from availability_engine.services.slot_generator import generate_slots

from ...fakes import NY, RESOURCE_ID, busy, local_dt, one_time_rule, recurring_rule


def _starts(slots):
    return [slot.start.astimezone(timezone.utc).strftime("%H:%M") for slot in slots]


class TestWeekdayScenarios:
    def test_full_day_all_available(self, monday, now):
        slots = generate_slots(monday, RESOURCE_ID, 60, [recurring_rule(0)], [], now, NY)

        assert len(slots) == 8
        assert slots[0].start == local_dt(2025, 6, 2, 9)
        assert slots[-1].end == local_dt(2025, 6, 2, 17)
        assert all(slot.available for slot in slots)
        assert all(slot.duration_minutes == 60 for slot in slots)

    def test_busy_interval_blocks_one_slot(self, monday, now):
        booked = busy(local_dt(2025, 6, 2, 11), local_dt(2025, 6, 2, 12))
        slots = generate_slots(monday, RESOURCE_ID, 60, [recurring_rule(0)], [booked], now, NY)

        unavailable = [slot for slot in slots if not slot.available]
        assert len(slots) == 8
        assert len(unavailable) == 1
        assert unavailable[0].start == local_dt(2025, 6, 2, 11)

    def test_window_shorter_than_duration_yields_nothing(self, monday, now):
        slots = generate_slots(monday, RESOURCE_ID, 60, [recurring_rule(0, "09:00", "09:45")], [], now, NY)
        assert slots == []

    def test_partial_busy_overlap_blocks_slot(self, monday, now):
        booked = busy(local_dt(2025, 6, 2, 10, 30), local_dt(2025, 6, 2, 10, 45))
        slots = generate_slots(monday, RESOURCE_ID, 60, [recurring_rule(0)], [booked], now, NY)
        assert [slot.available for slot in slots[:3]] == [True, False, True]

    def test_no_rule_for_day(self, tuesday, now):
        assert generate_slots(tuesday, RESOURCE_ID, 60, [recurring_rule(0)], [], now, NY) == []


class TestSlotShape:
    def test_slots_are_back_to_back_and_fit_window(self, monday, now):
        slots = generate_slots(monday, RESOURCE_ID, 45, [recurring_rule(0, "09:00", "10:30")], [], now, NY)

        assert len(slots) == 2
        assert slots[0].end == slots[1].start
        assert slots[-1].end <= local_dt(2025, 6, 2, 10, 30)

    def test_remainder_is_discarded(self, monday, now):
        slots = generate_slots(monday, RESOURCE_ID, 60, [recurring_rule(0, "09:00", "10:30")], [], now, NY)
        assert len(slots) == 1

    def test_end_of_day_window(self, monday, now):
        slots = generate_slots(monday, RESOURCE_ID, 60, [recurring_rule(0, "22:00", "24:00")], [], now, NY)
        assert len(slots) == 2
        assert slots[-1].end == local_dt(2025, 6, 3, 0)


class TestPastSlots:
    def test_slots_ending_at_or_before_now_are_unavailable(self, monday):
        current = local_dt(2025, 6, 2, 11)
        slots = generate_slots(monday, RESOURCE_ID, 60, [recurring_rule(0)], [], current, NY)

        assert [slot.available for slot in slots[:4]] == [False, False, True, True]

    def test_in_progress_slot_stays_available(self, monday):
        current = local_dt(2025, 6, 2, 9, 30)
        slots = generate_slots(monday, RESOURCE_ID, 60, [recurring_rule(0)], [], current, NY)
        assert slots[0].available is True


class TestOverlappingRules:
    def test_recurring_and_one_time_duplicate_slots(self, tuesday, now):
        rules = [recurring_rule(1, "09:00", "12:00"), one_time_rule(tuesday, "09:00", "12:00")]
        slots = generate_slots(tuesday, RESOURCE_ID, 60, rules, [], now, NY)

        assert len(slots) == 6
        assert _starts(slots) == ["13:00", "14:00", "15:00", "13:00", "14:00", "15:00"]

    def test_dedupe_collapses_identical_slots(self, tuesday, now):
        rules = [recurring_rule(1, "09:00", "12:00"), one_time_rule(tuesday, "09:00", "12:00")]
        slots = generate_slots(tuesday, RESOURCE_ID, 60, rules, [], now, NY, dedupe=True)
        assert _starts(slots) == ["13:00", "14:00", "15:00"]

    def test_dedupe_keeps_partially_overlapping_windows(self, tuesday, now):
        rules = [recurring_rule(1, "09:00", "11:00"), one_time_rule(tuesday, "10:00", "12:00")]
        slots = generate_slots(tuesday, RESOURCE_ID, 60, rules, [], now, NY, dedupe=True)
        assert _starts(slots) == ["13:00", "14:00", "15:00"]


class TestDaylightSaving:
    def test_spring_forward_day_has_23_hourly_slots(self):
        sunday = date(2025, 3, 9)
        current = datetime(2025, 3, 1, tzinfo=timezone.utc)
        slots = generate_slots(sunday, RESOURCE_ID, 60, [recurring_rule(6, "00:00", "24:00")], [], current, NY)
        assert len(slots) == 23

    def test_fall_back_day_has_25_hourly_slots(self):
        sunday = date(2025, 11, 2)
        current = datetime(2025, 10, 1, tzinfo=timezone.utc)
        slots = generate_slots(sunday, RESOURCE_ID, 60, [recurring_rule(6, "00:00", "24:00")], [], current, NY)
        assert len(slots) == 25

    def test_window_starting_in_gap_is_shifted(self):
        sunday = date(2025, 3, 9)
        current = datetime(2025, 3, 1, tzinfo=timezone.utc)
        slots = generate_slots(sunday, RESOURCE_ID, 30, [recurring_rule(6, "02:30", "04:00")], [], current, NY)
        assert len(slots) == 1
        assert slots[0].start == datetime(2025, 3, 9, 7, 30, tzinfo=timezone.utc)


class TestInputValidation:
    @pytest.mark.parametrize("duration", [0, -15, True, 30.5, "60"])
    def test_invalid_duration(self, monday, now, duration):
        with pytest.raises(ValidationException) as exc_info:
            generate_slots(monday, RESOURCE_ID, duration, [recurring_rule(0)], [], now, NY)
        assert exc_info.value.code == "INVALID_DURATION"

    def test_datetime_instead_of_date(self, now):
        with pytest.raises(ValidationException) as exc_info:
            generate_slots(datetime(2025, 6, 2, 9), RESOURCE_ID, 60, [], [], now, NY)
        assert exc_info.value.code == "INVALID_DATE"

    def test_naive_now(self, monday):
        with pytest.raises(ValidationException):
            generate_slots(monday, RESOURCE_ID, 60, [], [], datetime(2025, 6, 1, 12), NY)

    def test_unknown_timezone(self, monday, now):
        with pytest.raises(ValidationException):
            generate_slots(monday, RESOURCE_ID, 60, [], [], now, "Atlantis/Capital")

    def test_validation_happens_before_resolution(self, monday, now):
        # No applicable rules, still rejected
        with pytest.raises(ValidationException):
            generate_slots(monday, RESOURCE_ID, 0, [], [], now, NY)


def test_is_deterministic(monday, now):
    rules = [recurring_rule(0)]
    booked = [busy(local_dt(2025, 6, 2, 11), local_dt(2025, 6, 2, 12))]
    first = generate_slots(monday, RESOURCE_ID, 30, rules, booked, now, NY)
    second = generate_slots(monday, RESOURCE_ID, 30, rules, booked, now, NY)
    assert first == second
    assert all(b.start - a.start == timedelta(minutes=30) for a, b in zip(first, first[1:]))
