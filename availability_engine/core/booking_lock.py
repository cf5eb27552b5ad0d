"""
Per-resource booking lock for the check-then-persist step.

Backed by Redis SET NX EX, so every worker sharing the Redis instance
serializes commits for the same resource. If Redis cannot be reached the
lock degrades open: the commit-time re-check and the persistence layer
remain the guard, and the outcome is logged and counted.
"""

from __future__ import annotations

from contextlib import contextmanager
import logging
import threading
import time
from typing import Iterator, Optional

from redis import Redis
from redis.exceptions import RedisError

from ..monitoring.prometheus_metrics import prometheus_metrics
from .config import settings

logger = logging.getLogger(__name__)

_SYNC_REDIS: Optional[Redis] = None
_SYNC_REDIS_LOCK = threading.Lock()


def _lock_key(resource_id: str) -> str:
    return f"resource:{resource_id}:booking"


def _namespaced_key(key: str) -> str:
    return f"{settings.lock_namespace}:lock:{key}"


def _get_sync_redis() -> Optional[Redis]:
    global _SYNC_REDIS
    if _SYNC_REDIS is not None:
        return _SYNC_REDIS
    with _SYNC_REDIS_LOCK:
        if _SYNC_REDIS is not None:
            return _SYNC_REDIS
        try:
            client = Redis.from_url(
                settings.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
            client.ping()
        except (RedisError, ValueError) as exc:
            logger.warning("booking_lock_sync_redis_unavailable: %s", exc)
            return None
        _SYNC_REDIS = client
        return _SYNC_REDIS


def acquire_booking_lock_sync(resource_id: str, ttl_s: Optional[int] = None) -> bool:
    """
    Try to take the resource's booking lock without waiting.

    Returns:
        True when acquired (or when Redis is unavailable), False when another
        worker holds it
    """
    ttl = ttl_s if ttl_s is not None else settings.booking_lock_ttl_seconds
    client = _get_sync_redis()
    if client is None:
        prometheus_metrics.record_booking_lock("acquire", "redis_unavailable")
        logger.warning("booking_lock_sync_redis_unavailable", extra={"resource_id": resource_id})
        return True
    try:
        acquired = bool(client.set(_namespaced_key(_lock_key(resource_id)), str(time.time()), nx=True, ex=ttl))
    except RedisError as exc:
        prometheus_metrics.record_booking_lock("acquire", "error")
        logger.warning(
            "booking_lock_sync_failed",
            extra={"resource_id": resource_id, "error": str(exc), "error_type": type(exc).__name__},
        )
        return True

    prometheus_metrics.record_booking_lock("acquire", "success" if acquired else "blocked")
    return acquired


def release_booking_lock_sync(resource_id: str) -> None:
    client = _get_sync_redis()
    if client is None:
        prometheus_metrics.record_booking_lock("release", "redis_unavailable")
        logger.warning("booking_lock_sync_redis_unavailable", extra={"resource_id": resource_id})
        return
    try:
        deleted = client.delete(_namespaced_key(_lock_key(resource_id)))
    except RedisError as exc:
        prometheus_metrics.record_booking_lock("release", "error")
        logger.warning(
            "booking_lock_sync_release_failed",
            extra={"resource_id": resource_id, "error": str(exc), "error_type": type(exc).__name__},
        )
        return
    prometheus_metrics.record_booking_lock("release", "success" if deleted else "not_found")


@contextmanager
def booking_lock_sync(resource_id: str, ttl_s: Optional[int] = None) -> Iterator[bool]:
    """
    Hold the booking lock for a resource.

    Yields True when the lock is held, False when another worker has it.
    Callers must not commit when False is yielded.
    """
    acquired = acquire_booking_lock_sync(resource_id, ttl_s=ttl_s)
    try:
        yield acquired
    finally:
        if acquired:
            release_booking_lock_sync(resource_id)
