"""Calendar data: months, weekdays, events and the user's event file."""

import datetime
import os
import tomllib
from dataclasses import dataclass, field
from enum import Enum

import tomli_w


class CalError(Exception):
    """A calendar value or the user file could not be used."""


def is_leap(year):
    """Return whether ``year`` is a Gregorian leap year."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


class Month(Enum):
    JAN = 1
    FEB = 2
    MAR = 3
    APR = 4
    MAY = 5
    JUN = 6
    JUL = 7
    AUG = 8
    SEP = 9
    OCT = 10
    NOV = 11
    DEC = 12

    @classmethod
    def from_number(cls, number):
        """Return the month numbered 1 to 12."""
        try:
            return cls(number)
        except ValueError:
            raise CalError(f"Can't make Month with {number}") from None

    @property
    def label(self):
        return self.name.capitalize()

    def next(self):
        return Month(self.value % 12 + 1)

    def prev(self):
        return Month((self.value - 2) % 12 + 1)

    def day_count(self, year):
        if self is Month.FEB:
            return 29 if is_leap(year) else 28
        if self in (Month.APR, Month.JUN, Month.SEP, Month.NOV):
            return 30
        return 31


class Weekday(Enum):
    SUN = 0
    MON = 1
    TUE = 2
    WED = 3
    THU = 4
    FRI = 5
    SAT = 6

    @property
    def label(self):
        return self.name.capitalize()


def _from_label(enum, label):
    if isinstance(label, str):
        for member in enum:
            if member.label == label:
                return member
    raise CalError(f"unknown {enum.__name__} {label!r}")


@dataclass(frozen=True)
class SingleEvent:
    """An event on one date."""

    description: str
    year: int
    month: Month
    day: int


@dataclass(frozen=True)
class YearlyEvent:
    """An event on the same day of the given months every year."""

    description: str
    months: tuple
    day: int

    def __post_init__(self):
        object.__setattr__(self, "months", tuple(self.months))


@dataclass(frozen=True)
class WeekdayEvent:
    """An event on the given weekdays of the given months every year."""

    description: str
    months: tuple
    days: tuple

    def __post_init__(self):
        object.__setattr__(self, "months", tuple(self.months))
        object.__setattr__(self, "days", tuple(self.days))


def _require(table, key, kind):
    if not isinstance(table, dict) or key not in table:
        raise CalError(f"missing field `{key}`")
    value = table[key]
    if not isinstance(value, kind) or isinstance(value, bool):
        raise CalError(f"field `{key}` has the wrong type")
    return value


def _day(table):
    day = _require(table, "day", int)
    if day < 0:
        raise CalError("field `day` must not be negative")
    return day


def _months(table):
    return [_from_label(Month, m) for m in _require(table, "months", list)]


def _decode_event(raw):
    if not isinstance(raw, dict) or len(raw) != 1:
        raise CalError("each event must be a table with one variant")
    (tag, body), = raw.items()
    if tag == "Single":
        return SingleEvent(
            _require(body, "description", str),
            _require(body, "year", int),
            _from_label(Month, _require(body, "month", str)),
            _day(body),
        )
    if tag == "Yearly":
        return YearlyEvent(_require(body, "description", str), _months(body), _day(body))
    if tag == "YearlyByWeekday":
        days = [_from_label(Weekday, d) for d in _require(body, "days", list)]
        return WeekdayEvent(_require(body, "description", str), _months(body), days)
    raise CalError(f"unknown event variant `{tag}`")


def _encode_event(event):
    match event:
        case SingleEvent():
            return {
                "Single": {
                    "description": event.description,
                    "year": event.year,
                    "month": event.month.label,
                    "day": event.day,
                }
            }
        case YearlyEvent():
            return {
                "Yearly": {
                    "description": event.description,
                    "months": [m.label for m in event.months],
                    "day": event.day,
                }
            }
        case WeekdayEvent():
            return {
                "YearlyByWeekday": {
                    "description": event.description,
                    "months": [m.label for m in event.months],
                    "days": [d.label for d in event.days],
                }
            }
    raise CalError(f"not an event: {event!r}")


@dataclass
class UserData:
    """The user's events and the names used for months and weekdays."""

    events: list
    months: tuple
    weekdays: tuple

    def __post_init__(self):
        self.events = list(self.events)
        self.months = tuple(self.months)
        self.weekdays = tuple(self.weekdays)
        if len(self.months) != 12:
            raise CalError("expected 12 month names")
        if len(self.weekdays) != 7:
            raise CalError("expected 7 weekday names")

    @classmethod
    def from_toml(cls, text):
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as error:
            raise CalError(str(error)) from error
        events = [_decode_event(e) for e in _require(data, "events", list)]
        months = _require(data, "months", list)
        weekdays = _require(data, "weekdays", list)
        if not all(isinstance(name, str) for name in [*months, *weekdays]):
            raise CalError("month and weekday names must be strings")
        return cls(events, months, weekdays)

    def to_toml(self):
        return tomli_w.dumps(
            {
                "events": [_encode_event(e) for e in self.events],
                "months": list(self.months),
                "weekdays": list(self.weekdays),
            }
        )


def user_file_path():
    """Return $CAL_RS_USERFILE, or ~/.config/cal-rs.toml."""
    configured = os.environ.get("CAL_RS_USERFILE")
    if configured is not None:
        return configured
    home = os.environ.get("HOME")
    if home is None:
        raise CalError("Can't find CAL_RS_USERFILE nor HOME env vars to find user file")
    return home + "/.config/cal-rs.toml"


@dataclass
class Date:
    """A day of a month together with the user's calendar data."""

    year: int
    month: Month
    day: int
    date: datetime.date
    first_of_month: datetime.date
    user_data: UserData

    @classmethod
    def now(cls):
        """Today's date, with user data read from the user file."""
        today = datetime.date.today()
        try:
            with open(user_file_path(), encoding="utf-8") as handle:
                content = handle.read()
        except (OSError, UnicodeDecodeError) as error:
            raise CalError(str(error)) from error
        return cls(
            year=today.year,
            month=Month.from_number(today.month),
            day=today.day,
            date=today,
            first_of_month=today.replace(day=1),
            user_data=UserData.from_toml(content),
        )

    def _matches(self, event, check_day):
        match event:
            case SingleEvent():
                return (
                    event.year == self.year
                    and event.month == self.month
                    and event.day == check_day
                )
            case YearlyEvent():
                return self.month in event.months and event.day == check_day
            case WeekdayEvent():
                return self.month in event.months and any(
                    d.value == check_day % 7 for d in event.days
                )
        return False

    def get_events(self, check_day):
        """Return the events that fall on ``check_day`` of this month."""
        return [e for e in self.user_data.events if self._matches(e, check_day)]

    def add_event(self, event):
        self.user_data.events.append(event)

    def remove_event(self, index):
        """Remove the event at ``index``; the last event takes its place."""
        events = self.user_data.events
        removed = events[index]
        last = events.pop()
        if index < len(events) and index != -1:
            events[index] = last
        return removed

    def save(self):
        try:
            with open(user_file_path(), "w", encoding="utf-8") as handle:
                handle.write(self.user_data.to_toml())
        except OSError as error:
            raise CalError(str(error)) from error

    def month_string(self):
        return self.user_data.months[self.month.value - 1]

    def weekday_string(self, weekday):
        return self.user_data.weekdays[weekday.value]