# availability_engine/services/rule_resolution.py
"""
Availability rule resolution.

Selects the rules that apply to a calendar date and turns their wall-clock
windows into absolute instants. Recurring and one-time rules carry no
precedence over each other: every matching active rule contributes its
own window.
"""

from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Optional, Tuple

import pytz

from ..core.timezone_utils import localize_wall_time
from ..models.availability import RuleKind
from ..schemas.availability import AvailabilityRuleSnapshot


def rule_applies_on(rule: AvailabilityRuleSnapshot, target_date: date) -> bool:
    """Check whether an active rule matches a calendar date."""
    if not rule.is_active:
        return False
    if rule.kind == RuleKind.RECURRING:
        return rule.day_of_week == target_date.weekday()
    return rule.specific_date == target_date


def resolve_applicable_rules(
    rules: Iterable[AvailabilityRuleSnapshot],
    target_date: date,
    resource_id: Optional[str] = None,
) -> List[AvailabilityRuleSnapshot]:
    """
    Active rules that apply to target_date, in input order.

    Args:
        rules: Candidate rules (typically all active rules of a resource)
        target_date: Local calendar date being scheduled
        resource_id: When given, rules owned by other resources are ignored

    Returns:
        Matching rules, recurring and one-time alike
    """
    return [
        rule
        for rule in rules
        if (resource_id is None or rule.resource_id == resource_id) and rule_applies_on(rule, target_date)
    ]


def rule_window(
    rule: AvailabilityRuleSnapshot, target_date: date, tz: pytz.BaseTzInfo
) -> Tuple[datetime, datetime]:
    """
    Absolute [start, end) of a rule's window on a date, as UTC instants.

    An end time of 00:00 closes the window at the following local midnight.
    """
    window_start = localize_wall_time(target_date, rule.start_time, tz)
    if rule.end_time == time(0, 0):
        window_end = localize_wall_time(target_date + timedelta(days=1), time(0, 0), tz)
    else:
        window_end = localize_wall_time(target_date, rule.end_time, tz)
    return window_start, window_end
