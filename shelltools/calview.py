"""Render a month calendar with the day's events."""

import sys

from shelltools.caldata import CalError, Date, WeekdayEvent

_RESET = "\x1b[39m"
_BRIGHT_BLACK = "\x1b[90m"
_GREEN = "\x1b[32m"
_WHITE = "\x1b[37m"
_BRIGHT_GREEN = "\x1b[92m"
_BRIGHT_WHITE = "\x1b[97m"


def _paint(colour, text):
    return f"{colour}{text}{_RESET}"


def render_event(event, date):
    """Return one line describing ``event``."""
    if isinstance(event, WeekdayEvent):
        when = ", ".join(date.weekday_string(d) for d in event.days)
    else:
        when = str(event.day)
    return f"{when} | {event.description}\n"


def render(date):
    """Render the header, the month grid and today's events."""
    month = date.month_string()
    padding = " " * max(0, (18 - len(month.encode("utf-8"))) // 2)
    header = f"{padding}{date.day:>2}, {month} {date.year}\n"
    header += "".join(name + " " for name in date.user_data.weekdays) + "\n"

    cells = []
    prev_count = date.month.prev().day_count(date.year)
    prev_appear = (date.first_of_month.weekday() + 1) % 7
    total = prev_appear
    for i in range(prev_appear):
        day = prev_count - (prev_appear - i)
        cells.append(f" {_paint(_BRIGHT_BLACK, f'{day:>2}')} ")

    events = []
    for day in range(1, date.month.day_count(date.year) + 1):
        total += 1
        day_events = date.get_events(day)
        if day == date.day:
            colour = _BRIGHT_GREEN if day_events else _BRIGHT_WHITE
            cells.append(_paint(colour, f"{f'[{day}]':>4}"))
            events.extend(day_events)
        else:
            colour = _GREEN if day_events else _WHITE
            cells.append(f" {_paint(colour, f'{day:>2}')} ")
        if total % 7 == 0:
            cells.append("\n")

    for day in range(1, 7 - total % 7 + 1):
        cells.append(f"{_paint(_BRIGHT_BLACK, f'{day:>3}')} ")

    body = "".join(cells) + "\n\n"
    return header + body + "".join(render_event(e, date) for e in events)


def main(argv=None):
    try:
        date = Date.now()
    except CalError as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    print(render(date))
    return 0


if __name__ == "__main__":
    sys.exit(main())