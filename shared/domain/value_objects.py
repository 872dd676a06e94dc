"""
Common Value Objects

Value objects used by both the slot and booking domains:
- TimeLabel: One hour of the day, written as a 12-hour clock label ("2 PM")
- HourRange: A half-open run of whole hours, possibly running past midnight
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterator, List

from shared.domain.base import ValueObject

TIME_LABEL_FORMAT = '%I %p'
HOURS_PER_DAY = 24


class InvalidTimeLabel(ValueError):
    """Raised when a string is not a 12-hour clock label"""


@dataclass(frozen=True, order=True)
class TimeLabel(ValueObject):
    """
    Hour-of-day value object

    Parsed from labels such as "2 PM", "02 PM" or "11 am" and always
    rendered back without a leading zero ("2 PM").
    """
    hour: int

    def __post_init__(self):
        if not 0 <= self.hour < HOURS_PER_DAY:
            raise ValueError(f"Hour must be within 0..23, got {self.hour}")

    @classmethod
    def parse(cls, raw: str) -> 'TimeLabel':
        if not isinstance(raw, str):
            raise InvalidTimeLabel(f"Time label must be a string, got {type(raw).__name__}")
        try:
            parsed = datetime.strptime(raw.strip(), TIME_LABEL_FORMAT)
        except ValueError:
            raise InvalidTimeLabel(
                f"'{raw}' is not a 12-hour time such as '2 PM' or '11 AM'"
            ) from None
        return cls(parsed.hour)

    @classmethod
    def canonical(cls, raw: str) -> str:
        """Parse and re-render a label ("02 pm" -> "2 PM")"""
        return str(cls.parse(raw))

    @property
    def is_midnight(self) -> bool:
        return self.hour == 0

    def __str__(self):
        hour12 = self.hour % 12 or 12
        suffix = 'AM' if self.hour < 12 else 'PM'
        return f"{hour12} {suffix}"

    def __repr__(self):
        return f"TimeLabel('{self}')"


@dataclass(frozen=True)
class HourRange(ValueObject):
    """
    Hour range value object

    Covers the hours from ``start`` (inclusive) to ``end_offset``
    (exclusive). ``end_offset`` counts hours from midnight of the start day,
    so a range running past midnight has ``end_offset > 24``.

    Built from a pair of labels with ``HourRange.from_labels``:
        - "2 PM" to "5 PM"   -> 2 PM, 3 PM, 4 PM
        - "10 PM" to "12 AM" -> 10 PM, 11 PM ("12 AM" as an end is end of day)
        - "11 PM" to "1 AM"  -> 11 PM, 12 AM (wraps to the next day)
        - "3 PM" to "3 PM"   -> nothing
    """
    start: TimeLabel
    end_offset: int

    def __post_init__(self):
        if not self.start.hour <= self.end_offset <= self.start.hour + HOURS_PER_DAY:
            raise ValueError(
                f"End offset {self.end_offset} is outside one day from {self.start}"
            )

    @classmethod
    def from_labels(cls, from_label: str, to_label: str) -> 'HourRange':
        """
        Build a range from two 12-hour labels

        Raises:
            InvalidTimeLabel: If either label cannot be parsed
        """
        start = TimeLabel.parse(from_label)
        end = TimeLabel.parse(to_label)

        if end.is_midnight:
            end_offset = HOURS_PER_DAY
        elif end.hour < start.hour:
            end_offset = end.hour + HOURS_PER_DAY
        else:
            end_offset = end.hour

        return cls(start, end_offset)

    def __iter__(self) -> Iterator[TimeLabel]:
        for offset in range(self.start.hour, self.end_offset):
            yield TimeLabel(offset % HOURS_PER_DAY)

    def __len__(self) -> int:
        """Number of whole hours in the range"""
        return self.end_offset - self.start.hour

    @property
    def crosses_midnight(self) -> bool:
        return self.end_offset > HOURS_PER_DAY

    def labels(self) -> List[str]:
        return [str(label) for label in self]

    def __str__(self):
        return f"{self.start} - {TimeLabel(self.end_offset % HOURS_PER_DAY)}"

    def __repr__(self):
        return f"HourRange({self.start.hour}, {self.end_offset})"
