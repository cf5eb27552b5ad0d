# availability_engine/core/exceptions.py
"""
Domain-specific exceptions for the availability engine.

These exceptions carry business-focused messages and stable codes so the
API layer embedding the engine can map them straight to HTTP responses.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status

HTTP_422_UNPROCESSABLE: int = getattr(status, "HTTP_422_UNPROCESSABLE_CONTENT", 422)


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=self.status_code,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )


class ValidationException(DomainException):
    """Raised when caller input is malformed (programming error, not runtime state)."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundException(DomainException):
    """Raised when a requested resource is not found."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictException(DomainException):
    """Raised when there's a conflict with existing data."""

    status_code = status.HTTP_409_CONFLICT


class BusinessRuleException(DomainException):
    """Raised when a business rule is violated."""

    status_code = HTTP_422_UNPROCESSABLE


class ServiceException(DomainException):
    """Raised when a service operation fails."""

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "message": self.message or "An error occurred processing your request",
                "code": self.code,
                "details": self.details if self.details else {},
            },
        )


# Specific scheduling exceptions


class SlotUnavailableException(ConflictException):
    """Raised when a proposed booking overlaps a committed or external busy interval."""

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message
            or "The requested time slot is no longer available. Please choose another time.",
            code="SLOT_NO_LONGER_AVAILABLE",
            details=details or {},
        )


class OutsideAvailabilityException(BusinessRuleException):
    """Raised when no active availability rule covers the proposed booking."""

    def __init__(self, start: str, end: str):
        super().__init__(
            message="The requested time is outside the resource's availability",
            code="OUTSIDE_AVAILABILITY",
            details={"start": start, "end": end},
        )


class PastSlotException(BusinessRuleException):
    """Raised when the proposed booking has already ended."""

    def __init__(self, end: str):
        super().__init__(
            message="Cannot book a time slot in the past",
            code="SLOT_IN_PAST",
            details={"end": end},
        )


class ExternalCalendarException(ServiceException):
    """Raised when an external calendar provider cannot be read."""

    def __init__(self, provider: str, message: str):
        super().__init__(
            message=f"{provider}: {message}",
            code="EXTERNAL_CALENDAR_UNAVAILABLE",
            details={"provider": provider},
        )


class RepositoryException(Exception):
    """
    Exception raised for repository layer errors.

    Used when data access operations fail, such as connection issues,
    query failures, or constraint violations.
    """
