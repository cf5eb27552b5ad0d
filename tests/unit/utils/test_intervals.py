# tests/unit/utils/test_intervals.py
"""
Unit tests for the shared half-open overlap predicate.
"""

from datetime import datetime, timedelta, timezone

import pytest

from availability_engine.utils.intervals import find_overlapping, overlaps, pad_intervals

from ...fakes import busy

T0 = datetime(2025, 6, 2, 13, 0, tzinfo=timezone.utc)


def at(minutes: int) -> datetime:
    return T0 + timedelta(minutes=minutes)


class TestOverlaps:
    @pytest.mark.parametrize(
        "a,b,expected",
        [
            ((0, 60), (30, 90), True),  # partial overlap
            ((0, 60), (60, 120), False),  # touching end/start
            ((0, 120), (30, 60), True),  # containment
            ((30, 60), (0, 120), True),  # contained
            ((0, 60), (0, 60), True),  # identical
            ((0, 30), (60, 90), False),  # disjoint
        ],
    )
    def test_overlap_cases(self, a, b, expected):
        assert overlaps(at(a[0]), at(a[1]), at(b[0]), at(b[1])) is expected

    @pytest.mark.parametrize("a,b", [((0, 60), (30, 90)), ((0, 60), (60, 120)), ((0, 120), (30, 60))])
    def test_overlap_is_symmetric(self, a, b):
        assert overlaps(at(a[0]), at(a[1]), at(b[0]), at(b[1])) == overlaps(
            at(b[0]), at(b[1]), at(a[0]), at(a[1])
        )

    def test_zero_length_interval_never_overlaps(self):
        assert overlaps(at(30), at(30), at(0), at(60)) is False
        assert overlaps(at(0), at(60), at(30), at(30)) is False

    def test_works_on_plain_numbers(self):
        assert overlaps(0, 10, 5, 15) is True
        assert overlaps(0, 10, 10, 15) is False


class TestFindOverlapping:
    def test_returns_matches_in_input_order(self):
        intervals = [
            busy(at(90), at(120), "b3"),
            busy(at(0), at(30), "b1"),
            busy(at(200), at(260), "b4"),
            busy(at(45), at(75), "b2"),
        ]
        result = find_overlapping(at(0), at(100), intervals)
        assert [i.source_id for i in result] == ["b3", "b1", "b2"]

    def test_excluding_only_overlapping_source_yields_nothing(self):
        intervals = [busy(at(0), at(60), "booking-42")]
        assert find_overlapping(at(30), at(90), intervals, exclude_source_id="booking-42") == []

    def test_exclusion_keeps_other_sources(self):
        intervals = [busy(at(0), at(60), "booking-42"), busy(at(30), at(90), "google:evt")]
        result = find_overlapping(at(30), at(90), intervals, exclude_source_id="booking-42")
        assert [i.source_id for i in result] == ["google:evt"]


class TestPadIntervals:
    def test_pads_both_sides(self):
        [padded] = pad_intervals([busy(at(60), at(120))], 15)
        assert padded.start == at(45)
        assert padded.end == at(135)
        assert padded.source_id == "booking-1"

    def test_zero_buffer_returns_same_intervals(self):
        original = [busy(at(60), at(120))]
        assert pad_intervals(original, 0) == original
