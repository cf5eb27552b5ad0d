from datetime import datetime, time


def string_to_time(time_str: str) -> time:
    """Parse HH:MM[:SS] strings, mapping the '24:00[:00]' sentinel to midnight."""
    normalized = time_str.strip()
    if len(normalized) == 5:
        normalized += ":00"
    if normalized == "24:00:00":
        return time(0, 0)
    return datetime.strptime(normalized, "%H:%M:%S").time()
