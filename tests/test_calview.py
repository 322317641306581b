import datetime
import re

from shelltools.caldata import (
    Date,
    Month,
    SingleEvent,
    UserData,
    Weekday,
    WeekdayEvent,
    YearlyEvent,
)
from shelltools.calview import _BRIGHT_GREEN, _BRIGHT_WHITE, main, render, render_event

MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
WEEKDAYS = ("sun", "mon", "tue", "wed", "thu", "fri", "sat")
ANSI = re.compile(r"\x1b\[[0-9;]*m")


def make_date(events=(), day=25):
    d = datetime.date(2024, 6, day)
    return Date(2024, Month.JUN, day, d, d.replace(day=1), UserData(list(events), MONTHS, WEEKDAYS))


def plain(text):
    return ANSI.sub("", text)


def test_render_event_by_day():
    date = make_date()
    assert render_event(SingleEvent("dentist", 2024, Month.JUN, 3), date) == "3 | dentist\n"
    assert render_event(YearlyEvent("party", [Month.JUN], 7), date) == "7 | party\n"


def test_render_event_by_weekday():
    date = make_date()
    event = WeekdayEvent("gym", [Month.JUN], [Weekday.MON, Weekday.FRI])
    assert render_event(event, date) == "mon, fri | gym\n"


def test_render_matches_documented_layout():
    lines = plain(render(make_date())).split("\n")
    assert lines[0].rstrip() == "       25, June 2024"
    assert lines[1].rstrip() == "sun mon tue wed thu fri sat"
    assert lines[2].strip() == "25  26  27  28  29  30   1"
    assert lines[6].strip() == "23  24 [25] 26  27  28  29"
    assert lines[7].strip() == "30   1   2   3   4   5   6"


def test_grid_rows_have_fixed_width():
    lines = plain(render(make_date())).split("\n")
    for row in lines[2:8]:
        assert len(row) == 4 * 7


def test_every_day_of_month_appears():
    grid = plain(render(make_date(day=10))).split("\n")[2:8]
    cells = " ".join(grid).replace("[", " ").replace("]", " ").split()
    for day in range(1, 31):
        assert str(day) in cells


def test_today_with_event_is_highlighted_and_listed():
    event = YearlyEvent("Birthday", [Month.JUN], 25)
    text = render(make_date([event]))
    assert _BRIGHT_GREEN + "[25]" in text
    lines = plain(text).split("\n")
    assert lines[8] == ""
    assert lines[9] == "25 | Birthday"


def test_today_without_event():
    text = render(make_date())
    assert _BRIGHT_WHITE + "[25]" in text
    assert plain(text).endswith("\n\n")


def test_events_on_other_days_are_not_listed():
    event = YearlyEvent("Elsewhere", [Month.JUN], 3)
    assert "Elsewhere" not in render(make_date([event]))


def test_main_prints_calendar(monkeypatch, tmp_path, capsys):
    target = tmp_path / "cal.toml"
    target.write_text(UserData([], MONTHS, WEEKDAYS).to_toml())
    monkeypatch.setenv("CAL_RS_USERFILE", str(target))
    assert main([]) == 0
    out = plain(capsys.readouterr().out)
    today = datetime.date.today()
    assert MONTHS[today.month - 1] in out
    assert f"[{today.day}]" in out


def test_main_reports_missing_file(monkeypatch, tmp_path, capsys):
    monkeypatch.setenv("CAL_RS_USERFILE", str(tmp_path / "missing.toml"))
    assert main([]) == 1
    assert capsys.readouterr().err.startswith("Error:")