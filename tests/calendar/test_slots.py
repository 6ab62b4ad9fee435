"""
tests/calendar/test_slots.py

Covers:
  - HH:MM parsing and weekday lookup
  - WorkSlot duration and overlap
  - WeeklyTemplate construction and hour patterns
  - Holiday ranges
"""

from datetime import date

import pytest

from dayplan.calendar import CalendarError, Holiday, WeeklyTemplate, WorkSlot
from dayplan.calendar.slots import parse_minutes, weekday_index


class TestParsing:

    @pytest.mark.parametrize("text, minutes", [("00:00", 0), ("09:30", 570), ("23:59", 1439)])
    def test_parse_minutes(self, text, minutes):
        assert parse_minutes(text) == minutes

    @pytest.mark.parametrize("text", ["24:00", "9:00", "09:60", "nine", ""])
    def test_parse_minutes_rejects(self, text):
        with pytest.raises(CalendarError):
            parse_minutes(text)

    def test_weekday_index(self):
        assert weekday_index("Monday") == 0
        assert weekday_index(" sunday ") == 6
        assert weekday_index(3) == 3

    @pytest.mark.parametrize("day", ["funday", 7, -1])
    def test_weekday_index_rejects(self, day):
        with pytest.raises(CalendarError):
            weekday_index(day)


class TestWorkSlot:

    def test_duration(self):
        assert WorkSlot("09:00", "12:30").duration == pytest.approx(3.5)

    def test_zero_duration(self):
        assert WorkSlot("09:00", "09:00").duration == 0.0

    def test_crossing_midnight_raises(self):
        with pytest.raises(CalendarError):
            WorkSlot("22:00", "02:00").duration

    def test_overlap(self):
        assert WorkSlot("09:00", "12:00").overlaps(WorkSlot("11:00", "13:00"))

    def test_touching_slots_do_not_overlap(self):
        assert not WorkSlot("09:00", "12:00").overlaps(WorkSlot("12:00", "13:00"))


class TestWeeklyTemplate:

    def test_standard(self):
        t = WeeklyTemplate.standard(8.0)
        assert t.hours_pattern() == [8.0, 8.0, 8.0, 8.0, 8.0, 0.0, 0.0]
        assert t.weekly_hours == pytest.approx(40.0)
        assert t.slots_for("monday") == (WorkSlot("09:00", "17:00"),)

    def test_standard_custom_days(self):
        t = WeeklyTemplate.standard(4.0, days=("saturday", "sunday"), start="10:00")
        assert t.hours_pattern() == [0.0] * 5 + [4.0, 4.0]

    def test_standard_must_fit_in_a_day(self):
        with pytest.raises(CalendarError):
            WeeklyTemplate.standard(16.0, start="09:00")

    def test_from_mapping_accepts_slots_and_tuples(self):
        t = WeeklyTemplate.from_mapping({
            0: [WorkSlot("08:00", "10:00"), ("14:00", "15:30")],
        })
        assert t.hours_for(0) == pytest.approx(3.5)

    def test_empty_template(self):
        assert WeeklyTemplate().weekly_hours == 0.0

    def test_needs_seven_days(self):
        with pytest.raises(CalendarError):
            WeeklyTemplate(((),) * 6)

    def test_templates_compare_by_value(self):
        assert WeeklyTemplate.standard(8.0) == WeeklyTemplate.standard(8.0)
        assert hash(WeeklyTemplate.standard(8.0)) == hash(WeeklyTemplate.standard(8.0))


class TestHoliday:

    def test_contains_and_length(self):
        h = Holiday(date(2026, 12, 24), date(2026, 12, 26), "Christmas")
        assert h.contains(date(2026, 12, 25))
        assert not h.contains(date(2026, 12, 27))
        assert h.length == 3
        assert list(h.days())[-1] == date(2026, 12, 26)

    def test_inverted_range_has_no_days(self):
        h = Holiday(date(2026, 12, 26), date(2026, 12, 24))
        assert h.length == 0
        assert list(h.days()) == []
