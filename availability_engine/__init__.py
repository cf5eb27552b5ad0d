"""Availability rules, slot generation and booking conflict checks."""

__version__ = "0.1.0"
