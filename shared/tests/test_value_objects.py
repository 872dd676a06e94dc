import pytest

from shared.domain.value_objects import HourRange, InvalidTimeLabel, TimeLabel


@pytest.mark.parametrize(
    "raw, hour",
    [("12 AM", 0), ("1 AM", 1), ("11 am", 11), ("12 PM", 12), ("02 PM", 14), (" 11 PM ", 23)],
)
def test_time_label_parses_twelve_hour_clock(raw, hour):
    assert TimeLabel.parse(raw).hour == hour


@pytest.mark.parametrize("hour, rendered", [(0, "12 AM"), (9, "9 AM"), (12, "12 PM"), (13, "1 PM"), (23, "11 PM")])
def test_time_label_renders_without_leading_zero(hour, rendered):
    assert str(TimeLabel(hour)) == rendered


@pytest.mark.parametrize("raw", ["", "0 AM", "13 PM", "2:00 PM", "2 P.M.", 14, None])
def test_time_label_rejects_other_formats(raw):
    with pytest.raises(InvalidTimeLabel):
        TimeLabel.parse(raw)


def test_time_label_is_a_value_error():
    assert issubclass(InvalidTimeLabel, ValueError)


def test_time_label_range_is_checked():
    with pytest.raises(ValueError):
        TimeLabel(24)


def test_time_labels_compare_by_hour():
    assert TimeLabel.parse("02 pm") == TimeLabel.parse("2 PM")
    assert TimeLabel(3) < TimeLabel(15)
    assert TimeLabel.canonical("07 pm") == "7 PM"


def test_hour_range_renders_its_bounds():
    assert str(HourRange.from_labels("10 PM", "12 AM")) == "10 PM - 12 AM"
    assert str(HourRange.from_labels("11 PM", "1 AM")) == "11 PM - 1 AM"


def test_hour_range_rejects_more_than_a_day():
    with pytest.raises(ValueError):
        HourRange(TimeLabel(5), 30)
    with pytest.raises(ValueError):
        HourRange(TimeLabel(5), 4)


def test_hour_range_crossing_midnight():
    assert HourRange.from_labels("11 PM", "1 AM").crosses_midnight
    assert not HourRange.from_labels("10 PM", "12 AM").crosses_midnight
