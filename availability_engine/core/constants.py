"""Scheduling constants for the availability engine."""

from __future__ import annotations

SECONDS_PER_DAY = 24 * 60 * 60

# Source tag for intervals drawn from internally tracked bookings
INTERNAL_SOURCE = "internal"

# Separator between provider name and event id in external source ids
EXTERNAL_SOURCE_SEPARATOR = ":"
