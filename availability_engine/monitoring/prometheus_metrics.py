"""
Prometheus metrics for the availability engine.

Service timings come from @BaseService.measure_operation; booking lock and
external calendar outcomes are recorded where they happen. The embedding
application serves get_metrics() from its /metrics endpoint.
"""

from typing import Optional, cast

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Counter, Histogram, generate_latest

# Custom registry so embedding apps can mount it next to their own
REGISTRY = CollectorRegistry()

service_operation_duration_seconds = Histogram(
    "availability_engine_service_operation_duration_seconds",
    "Service operation duration in seconds",
    ["service", "operation"],
    registry=REGISTRY,
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

service_operations_total = Counter(
    "availability_engine_service_operations_total",
    "Total number of service operations",
    ["service", "operation", "status"],
    registry=REGISTRY,
)

errors_total = Counter(
    "availability_engine_errors_total",
    "Total number of service errors",
    ["service", "operation", "error_type"],
    registry=REGISTRY,
)

booking_lock_operations_total = Counter(
    "availability_engine_booking_lock_operations_total",
    "Booking lock acquire/release outcomes",
    ["action", "outcome"],
    registry=REGISTRY,
)

external_calendar_failures_total = Counter(
    "availability_engine_external_calendar_failures_total",
    "External calendar reads that failed and degraded availability",
    ["provider"],
    registry=REGISTRY,
)


class PrometheusMetrics:
    """Records engine metrics and renders them in exposition format."""

    @staticmethod
    def record_service_operation(
        service: str,
        operation: str,
        duration: float,
        status: str = "success",
        error_type: Optional[str] = None,
    ) -> None:
        """
        Record service operation metrics from @measure_operation decorator.

        Args:
            service: Service name (e.g., 'AvailabilityService')
            operation: Operation name (e.g., 'get_available_slots')
            duration: Operation duration in seconds
            status: 'success' or 'error'
            error_type: Exception class name when status is 'error'
        """
        service_operation_duration_seconds.labels(service=service, operation=operation).observe(duration)
        service_operations_total.labels(service=service, operation=operation, status=status).inc()

        if status == "error" and error_type:
            errors_total.labels(service=service, operation=operation, error_type=error_type).inc()

    @staticmethod
    def record_booking_lock(action: str, outcome: str) -> None:
        booking_lock_operations_total.labels(action=action, outcome=outcome).inc()

    @staticmethod
    def record_external_calendar_failure(provider: str) -> None:
        external_calendar_failures_total.labels(provider=provider).inc()

    @staticmethod
    def get_metrics() -> bytes:
        """Metrics in Prometheus text format."""
        return cast(bytes, generate_latest(REGISTRY))

    @staticmethod
    def get_content_type() -> str:
        return cast(str, CONTENT_TYPE_LATEST)


prometheus_metrics = PrometheusMetrics()
