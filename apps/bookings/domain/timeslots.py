"""
Time-Slot Expansion

Turns the date and the two clock labels of a request into the hourly slots
they cover. Parsing failures become booking input errors.
"""

from datetime import date, datetime

from django.utils.dateparse import parse_date, parse_datetime

from shared.domain.value_objects import HourRange, InvalidTimeLabel, TimeLabel

from .exceptions import InvalidDate, InvalidTimeFormat


def parse_booking_date(raw) -> date:
    """
    Parse a booking date

    Accepts ``date`` objects, ISO dates ("2024-06-01") and ISO date-times,
    of which only the date part is kept.

    Raises:
        InvalidDate: If the value is not a date
    """
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidDate("Invalid date format.")

    value = raw.strip()
    try:
        parsed = parse_date(value)
        if parsed is None:
            moment = parse_datetime(value)
            parsed = moment.date() if moment else None
    except ValueError:
        parsed = None

    if parsed is None:
        raise InvalidDate(f"Invalid date format: '{raw}'.")
    return parsed


def expand_time_range(from_label: str, to_label: str) -> HourRange:
    """
    Expand a from/to pair of 12-hour labels into hourly slots

    "12 AM" as ``to_label`` is the end of the day. A ``to_label`` earlier
    than ``from_label`` runs into the next day; equal labels cover nothing.

    Raises:
        InvalidTimeFormat: If either label is not a 12-hour time
    """
    try:
        return HourRange.from_labels(from_label, to_label)
    except InvalidTimeLabel as exc:
        raise InvalidTimeFormat(f"Invalid time format: {exc}") from None


def canonical_labels(raw_labels) -> list:
    """
    Validate and canonicalise a list of slot labels

    Keeps the first occurrence of each hour, in request order.

    Raises:
        InvalidTimeFormat: If any label is not a 12-hour time
    """
    seen = set()
    labels = []
    for raw in raw_labels:
        try:
            label = TimeLabel.parse(raw)
        except InvalidTimeLabel as exc:
            raise InvalidTimeFormat(f"Invalid time format: {exc}") from None
        if label in seen:
            continue
        seen.add(label)
        labels.append(str(label))
    return labels
