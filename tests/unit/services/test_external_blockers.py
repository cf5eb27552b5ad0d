# tests/unit/services/test_external_blockers.py
from datetime import datetime, timezone

from availability_engine.core.exceptions import ExternalCalendarException
from availability_engine.schemas.external_calendar import (
    ExternalBusyDegraded,
    ExternalBusyOk,
    RawCalendarEvent,
)
from availability_engine.services.calendar_providers import StaticCalendarProvider
from availability_engine.services.external_blockers import ExternalBlockerAdapter
from availability_engine.services.slot_generator import generate_slots

from ...fakes import NY, RESOURCE_ID, local_dt, metric_value, recurring_rule

RANGE_START = datetime(2025, 6, 2, 4, 0, tzinfo=timezone.utc)
RANGE_END = datetime(2025, 6, 3, 4, 0, tzinfo=timezone.utc)


def _event(event_id, start=None, end=None, **kwargs):
    return RawCalendarEvent(id=event_id, start=start, end=end, **kwargs)


class TestAdaptEvents:
    def test_event_missing_end_is_dropped(self):
        adapter = ExternalBlockerAdapter()
        events = [
            _event("a", local_dt(2025, 6, 2, 10), local_dt(2025, 6, 2, 11)),
            _event("b", local_dt(2025, 6, 2, 12)),
            _event("c", local_dt(2025, 6, 2, 14), local_dt(2025, 6, 2, 15)),
        ]
        intervals = adapter.adapt_events("google", events)
        assert [i.source_id for i in intervals] == ["google:a", "google:c"]
        assert all(i.source == "google" for i in intervals)

    def test_event_missing_start_is_dropped(self):
        adapter = ExternalBlockerAdapter()
        assert adapter.adapt_events("google", [_event("a", end=local_dt(2025, 6, 2, 11))]) == []

    def test_inverted_event_is_dropped(self):
        adapter = ExternalBlockerAdapter()
        events = [_event("a", local_dt(2025, 6, 2, 11), local_dt(2025, 6, 2, 10))]
        assert adapter.adapt_events("google", events) == []

    def test_cancelled_and_free_events_do_not_block(self):
        adapter = ExternalBlockerAdapter()
        events = [
            _event("a", local_dt(2025, 6, 2, 10), local_dt(2025, 6, 2, 11), status="cancelled"),
            _event("b", local_dt(2025, 6, 2, 12), local_dt(2025, 6, 2, 13), transparency="transparent"),
            _event("c", local_dt(2025, 6, 2, 14), local_dt(2025, 6, 2, 15), transparency="opaque"),
        ]
        assert [i.source_id for i in adapter.adapt_events("google", events)] == ["google:c"]

    def test_generation_still_succeeds_with_dropped_events(self, monday, now):
        adapter = ExternalBlockerAdapter()
        intervals = adapter.adapt_events(
            "google",
            [_event("bad", local_dt(2025, 6, 2, 9)), _event("ok", local_dt(2025, 6, 2, 10), local_dt(2025, 6, 2, 11))],
        )
        slots = generate_slots(monday, RESOURCE_ID, 60, [recurring_rule(0)], intervals, now, NY)
        assert len(slots) == 8
        assert [slot.available for slot in slots[:2]] == [True, False]


class TestCollect:
    def test_all_providers_answer(self):
        provider = StaticCalendarProvider(
            [_event("a", local_dt(2025, 6, 2, 10), local_dt(2025, 6, 2, 11))], name="google"
        )
        result = ExternalBlockerAdapter([provider]).collect(RANGE_START, RANGE_END)
        assert isinstance(result, ExternalBusyOk)
        assert result.status == "ok"
        assert [i.source_id for i in result.intervals] == ["google:a"]

    def test_no_providers_is_ok(self):
        result = ExternalBlockerAdapter().collect(RANGE_START, RANGE_END)
        assert isinstance(result, ExternalBusyOk)
        assert result.intervals == []

    def test_failing_provider_degrades_without_raising(self, caplog):
        healthy = StaticCalendarProvider(
            [_event("a", local_dt(2025, 6, 2, 10), local_dt(2025, 6, 2, 11))], name="outlook"
        )
        broken = StaticCalendarProvider(
            name="google", error=ExternalCalendarException("google", "credentials expired or revoked")
        )
        result = ExternalBlockerAdapter([broken, healthy]).collect(RANGE_START, RANGE_END)

        assert isinstance(result, ExternalBusyDegraded)
        assert result.degraded is True
        assert result.failed_providers == ["google"]
        assert "credentials expired" in result.reasons[0]
        assert [i.source_id for i in result.intervals] == ["outlook:a"]
        assert "google unavailable" in caplog.text

    def test_unexpected_provider_error_also_degrades(self):
        broken = StaticCalendarProvider(name="google", error=RuntimeError("socket closed"))
        result = ExternalBlockerAdapter([broken]).collect(RANGE_START, RANGE_END)
        assert result.status == "degraded"
        assert result.intervals == []

    def test_provider_failure_is_counted(self):
        before = metric_value("availability_engine_external_calendar_failures_total", provider="icloud")
        broken = StaticCalendarProvider(name="icloud", error=RuntimeError("timeout"))
        ExternalBlockerAdapter([broken]).collect(RANGE_START, RANGE_END)
        assert metric_value("availability_engine_external_calendar_failures_total", provider="icloud") == before + 1
