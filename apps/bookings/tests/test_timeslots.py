"""Unit tests for time-range expansion and request parsing."""

from datetime import date, datetime

import pytest

from apps.bookings.domain.exceptions import InvalidDate, InvalidTimeFormat
from apps.bookings.domain.timeslots import (
    canonical_labels,
    expand_time_range,
    parse_booking_date,
)


def test_afternoon_range_excludes_end_hour():
    assert expand_time_range("2 PM", "5 PM").labels() == ["2 PM", "3 PM", "4 PM"]


def test_midnight_end_means_end_of_day():
    hours = expand_time_range("10 PM", "12 AM")
    assert hours.labels() == ["10 PM", "11 PM"]
    assert not hours.crosses_midnight


def test_range_wraps_past_midnight():
    hours = expand_time_range("11 PM", "1 AM")
    assert hours.labels() == ["11 PM", "12 AM"]
    assert hours.crosses_midnight


def test_equal_labels_expand_to_nothing():
    hours = expand_time_range("3 PM", "3 PM")
    assert hours.labels() == []
    assert len(hours) == 0


def test_midnight_to_midnight_is_whole_day():
    hours = expand_time_range("12 AM", "12 AM")
    assert len(hours) == 24
    assert hours.labels()[0] == "12 AM"
    assert hours.labels()[-1] == "11 PM"


def test_zero_padded_and_lowercase_labels_are_accepted():
    assert expand_time_range("09 am", " 11 AM ").labels() == ["9 AM", "10 AM"]


def test_expansion_can_be_iterated_twice():
    hours = expand_time_range("1 PM", "4 PM")
    assert list(hours) == list(hours)


@pytest.mark.parametrize(
    "start, end, expected",
    [
        ("6 AM", "7 AM", 1),
        ("12 PM", "12 AM", 12),
        ("8 PM", "2 AM", 6),
        ("5 PM", "4 PM", 23),
        ("1 AM", "11 PM", 22),
    ],
)
def test_length_counts_whole_hours(start, end, expected):
    hours = expand_time_range(start, end)
    assert len(hours) == expected
    assert len(hours.labels()) == expected


@pytest.mark.parametrize("bad", ["14:00", "2PM-ish", "", "13 PM", "noon"])
def test_bad_labels_raise_invalid_time_format(bad):
    with pytest.raises(InvalidTimeFormat) as excinfo:
        expand_time_range(bad, "5 PM")
    assert excinfo.value.reason_kind == "InvalidTimeFormat"


def test_bad_end_label_is_reported_too():
    with pytest.raises(InvalidTimeFormat):
        expand_time_range("2 PM", "17:00")


def test_parse_iso_date():
    assert parse_booking_date("2024-06-01") == date(2024, 6, 1)


def test_parse_iso_datetime_keeps_date_part():
    assert parse_booking_date("2024-06-01T18:30:00") == date(2024, 6, 1)


def test_parse_passes_dates_through():
    assert parse_booking_date(date(2024, 6, 1)) == date(2024, 6, 1)
    assert parse_booking_date(datetime(2024, 6, 1, 9)) == date(2024, 6, 1)


@pytest.mark.parametrize("bad", ["", "   ", "tomorrow", "2024-02-30", "01/06/2024", None])
def test_bad_dates_raise_invalid_date(bad):
    with pytest.raises(InvalidDate):
        parse_booking_date(bad)


def test_canonical_labels_dedupe_in_request_order():
    assert canonical_labels(["3 PM", "01 pm", "03 PM", "2 PM"]) == ["3 PM", "1 PM", "2 PM"]


def test_canonical_labels_reject_bad_label():
    with pytest.raises(InvalidTimeFormat):
        canonical_labels(["3 PM", "15:00"])
