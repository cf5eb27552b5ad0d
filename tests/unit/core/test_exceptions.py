# tests/unit/core/test_exceptions.py
from fastapi import HTTPException
import pytest

from availability_engine.core.exceptions import (
    BusinessRuleException,
    ConflictException,
    DomainException,
    ExternalCalendarException,
    NotFoundException,
    OutsideAvailabilityException,
    PastSlotException,
    ServiceException,
    SlotUnavailableException,
    ValidationException,
)


class TestHttpMapping:
    @pytest.mark.parametrize(
        "exc,status_code",
        [
            (ValidationException("bad input"), 400),
            (NotFoundException("missing"), 404),
            (ConflictException("taken"), 409),
            (BusinessRuleException("nope"), 422),
            (ServiceException("boom"), 500),
        ],
    )
    def test_status_codes(self, exc, status_code):
        http_exc = exc.to_http_exception()
        assert isinstance(http_exc, HTTPException)
        assert http_exc.status_code == status_code
        assert http_exc.detail["message"] == exc.message

    def test_default_code_is_class_name(self):
        assert NotFoundException("missing").code == "NotFoundException"

    def test_details_default_to_empty(self):
        assert DomainException("x").details == {}


class TestSchedulingExceptions:
    def test_slot_unavailable_is_conflict(self):
        exc = SlotUnavailableException(details={"conflicting_source_ids": ["b1"]})
        assert isinstance(exc, ConflictException)
        assert exc.code == "SLOT_NO_LONGER_AVAILABLE"
        assert "no longer available" in exc.message
        assert exc.to_http_exception().status_code == 409

    def test_slot_unavailable_custom_message(self):
        assert SlotUnavailableException("Try again").message == "Try again"

    def test_outside_availability(self):
        exc = OutsideAvailabilityException("2025-06-04T14:00:00+00:00", "2025-06-04T15:00:00+00:00")
        assert exc.code == "OUTSIDE_AVAILABILITY"
        assert exc.details["start"] == "2025-06-04T14:00:00+00:00"
        assert exc.to_http_exception().status_code == 422

    def test_past_slot(self):
        exc = PastSlotException("2025-06-01T10:00:00+00:00")
        assert exc.code == "SLOT_IN_PAST"
        assert isinstance(exc, BusinessRuleException)

    def test_external_calendar_carries_provider(self):
        exc = ExternalCalendarException("google", "unexpected status 503")
        assert isinstance(exc, ServiceException)
        assert exc.message == "google: unexpected status 503"
        assert exc.details == {"provider": "google"}
