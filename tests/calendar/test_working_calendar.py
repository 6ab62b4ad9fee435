"""
tests/calendar/test_working_calendar.py

Covers:
  - Working-day and working-hour lookups from the weekly template
  - Split shifts and per-day hour sums
  - Holiday ranges (construction, add, remove, overlapping holidays)
  - Range queries (working_days, counts, hour sums)
  - next_working_day across weekends and holidays
  - Horizon growth forwards and backwards
  - Call-order independence
"""

from datetime import date, timedelta

import pytest

from dayplan.calendar import CalendarError, Holiday, WeeklyTemplate, WorkingCalendar


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def work_week():
    """Mon–Fri, 8h per day."""
    return WorkingCalendar(WeeklyTemplate.standard(8.0))


@pytest.fixture
def split_shift():
    """Mon: 9–12 + 13–17 (7h); Wed: 10–14 (4h); nothing else."""
    template = WeeklyTemplate.from_mapping({
        "monday": [("09:00", "12:00"), ("13:00", "17:00")],
        "wednesday": [("10:00", "14:00")],
    })
    return WorkingCalendar(template)


# 2026-02-01 is a Sunday; February 2026 has 20 weekdays.
FEB_1 = date(2026, 2, 1)
FEB_28 = date(2026, 2, 28)
MON = date(2026, 2, 2)
FRI = date(2026, 2, 6)
SAT = date(2026, 2, 7)


# ── Single-day lookups ────────────────────────────────────────────────────────

class TestSingleDay:

    def test_weekday_is_working_day(self, work_week):
        assert work_week.is_working_day(MON)

    def test_weekend_is_not_working_day(self, work_week):
        assert not work_week.is_working_day(SAT)
        assert not work_week.is_working_day(SAT + timedelta(days=1))

    def test_working_hours_weekday(self, work_week):
        assert work_week.working_hours(MON) == pytest.approx(8.0)

    def test_working_hours_weekend_is_zero(self, work_week):
        assert work_week.working_hours(SAT) == 0.0

    def test_split_shift_hours_are_summed(self, split_shift):
        assert split_shift.working_hours(MON) == pytest.approx(7.0)

    def test_split_shift_other_days(self, split_shift):
        assert split_shift.working_hours(MON + timedelta(days=2)) == pytest.approx(4.0)
        assert not split_shift.is_working_day(MON + timedelta(days=1))

    def test_zero_length_slot_is_not_working(self):
        cal = WorkingCalendar(WeeklyTemplate.from_mapping({0: [("09:00", "09:00")]}))
        assert not cal.is_working_day(MON)

    def test_returns_python_types(self, work_week):
        assert isinstance(work_week.is_working_day(MON), bool)
        assert isinstance(work_week.working_hours(MON), float)


# ── Holidays ──────────────────────────────────────────────────────────────────

class TestHolidays:

    def test_holiday_at_construction(self):
        cal = WorkingCalendar(
            WeeklyTemplate.standard(8.0), holidays=[Holiday(MON, MON, "Bank holiday")]
        )
        assert not cal.is_working_day(MON)
        assert cal.working_hours(MON) == 0.0
        assert cal.is_working_day(MON + timedelta(days=1))

    def test_holiday_range_is_inclusive(self, work_week):
        work_week.add_holiday(Holiday(MON, FRI, "Ski week"))
        assert work_week.working_days(MON, FRI) == []
        assert work_week.is_working_day(FRI + timedelta(days=3))

    def test_remove_holiday_restores_template(self, work_week):
        h = Holiday(MON, MON)
        work_week.add_holiday(h)
        work_week.remove_holiday(h)
        assert work_week.working_hours(MON) == pytest.approx(8.0)

    def test_remove_keeps_overlapping_holiday(self, work_week):
        week = Holiday(MON, FRI, "week")
        tuesday = Holiday(MON + timedelta(days=1), MON + timedelta(days=1), "tuesday")
        work_week.add_holiday(week)
        work_week.add_holiday(tuesday)
        work_week.remove_holiday(week)
        assert work_week.is_working_day(MON)
        assert not work_week.is_working_day(MON + timedelta(days=1))
        assert work_week.is_working_day(MON + timedelta(days=2))

    def test_remove_nonexistent_holiday_is_noop(self, work_week):
        before = work_week.count_working_days(FEB_1, FEB_28)
        work_week.remove_holiday(Holiday(MON, MON))
        assert work_week.count_working_days(FEB_1, FEB_28) == before

    def test_holiday_on_weekend_changes_nothing(self, work_week):
        work_week.add_holiday(Holiday(SAT, SAT + timedelta(days=1)))
        assert work_week.count_working_days(FEB_1, FEB_28) == 20

    def test_inverted_holiday_raises(self, work_week):
        with pytest.raises(CalendarError):
            work_week.add_holiday(Holiday(FRI, MON))

    def test_holidays_property(self, work_week):
        h = Holiday(MON, MON, "x")
        work_week.add_holiday(h)
        assert work_week.holidays == (h,)

    def test_holiday_far_in_future_extends_horizon(self, work_week):
        far = date(2090, 6, 5)
        work_week.add_holiday(Holiday(far, far))
        assert not work_week.is_working_day(far)


# ── Range queries ─────────────────────────────────────────────────────────────

class TestRanges:

    def test_february_2026_has_twenty_working_days(self, work_week):
        days = work_week.working_days(FEB_1, FEB_28)
        assert len(days) == 20
        assert days[0] == MON
        assert days[-1] == date(2026, 2, 27)
        assert all(d.weekday() < 5 for d in days)

    def test_count_matches_list(self, work_week):
        assert work_week.count_working_days(FEB_1, FEB_28) == 20

    def test_hours_between(self, work_week):
        assert work_week.working_hours_between(FEB_1, FEB_28) == pytest.approx(160.0)

    def test_single_day_range(self, work_week):
        assert work_week.working_days(MON, MON) == [MON]
        assert work_week.working_days(SAT, SAT) == []

    def test_inverted_range_is_empty(self, work_week):
        assert work_week.working_days(FEB_28, FEB_1) == []
        assert work_week.count_working_days(FEB_28, FEB_1) == 0
        assert work_week.working_hours_between(FEB_28, FEB_1) == 0.0

    def test_range_with_holiday(self, work_week):
        work_week.add_holiday(Holiday(date(2026, 2, 16), date(2026, 2, 16)))
        assert work_week.count_working_days(FEB_1, FEB_28) == 19
        assert date(2026, 2, 16) not in work_week.working_days(FEB_1, FEB_28)


# ── next_working_day ──────────────────────────────────────────────────────────

class TestNextWorkingDay:

    def test_working_day_returns_itself(self, work_week):
        assert work_week.next_working_day(MON) == MON

    def test_exclusive_skips_weekend(self, work_week):
        assert work_week.next_working_day(FRI, include_self=False) == date(2026, 2, 9)

    def test_from_saturday(self, work_week):
        assert work_week.next_working_day(SAT) == date(2026, 2, 9)

    def test_skips_holiday(self, work_week):
        work_week.add_holiday(Holiday(date(2026, 2, 9), date(2026, 2, 10)))
        assert work_week.next_working_day(SAT) == date(2026, 2, 11)

    def test_empty_template_raises(self):
        cal = WorkingCalendar(WeeklyTemplate())
        with pytest.raises(CalendarError):
            cal.next_working_day(MON)


# ── Horizon growth ────────────────────────────────────────────────────────────

class TestHorizon:

    def test_date_before_origin(self):
        cal = WorkingCalendar(WeeklyTemplate.standard(8.0), origin=date(2026, 1, 1))
        old_monday = date(2019, 3, 4)
        assert cal.is_working_day(old_monday)
        assert cal.origin <= old_monday

    def test_date_beyond_horizon(self, work_week):
        initial = work_week.horizon
        monday = date(2075, 1, 7)   # a Monday
        assert work_week.is_working_day(monday)
        assert work_week.horizon > initial

    def test_holiday_survives_backward_growth(self):
        cal = WorkingCalendar(
            WeeklyTemplate.standard(8.0),
            holidays=[Holiday(MON, MON)],
            origin=date(2026, 2, 2),
        )
        cal.is_working_day(date(2010, 1, 4))
        assert not cal.is_working_day(MON)

    def test_first_lookup_past_initial_horizon(self):
        cal = WorkingCalendar(WeeklyTemplate.standard(8.0))
        assert cal.is_working_day(date(2026, 3, 2))
        assert cal.working_hours(date(2026, 3, 2)) == pytest.approx(8.0)

    def test_first_lookup_before_origin_repeats(self):
        # Origin defaults to the holiday start, so 02-01 forces backward growth.
        cal = WorkingCalendar(WeeklyTemplate.standard(8.0), holidays=[Holiday(MON, MON)])
        sunday = FEB_1
        assert (cal.is_working_day(sunday), cal.is_working_day(sunday)) == (False, False)
        assert cal.working_hours(date(2026, 1, 30)) == pytest.approx(8.0)

    def test_range_spanning_origin(self):
        cal = WorkingCalendar(WeeklyTemplate.standard(8.0), origin=date(2026, 2, 16))
        assert cal.count_working_days(FEB_1, FEB_28) == 20


# ── Invariants ────────────────────────────────────────────────────────────────

class TestInvariants:

    def test_call_order_does_not_matter(self):
        holidays = [Holiday(date(2026, 2, 10), date(2026, 2, 12))]
        a = WorkingCalendar(WeeklyTemplate.standard(6.0), holidays=holidays)
        b = WorkingCalendar(WeeklyTemplate.standard(6.0), holidays=holidays)
        probe = [FEB_1 + timedelta(days=i) for i in range(28)]

        b.is_working_day(date(2090, 1, 1))
        b.is_working_day(date(1990, 1, 1))
        first = [a.working_hours(d) for d in probe]
        second = [b.working_hours(d) for d in reversed(probe)][::-1]
        assert first == second

    def test_hours_between_equals_sum_of_days(self, work_week):
        work_week.add_holiday(Holiday(date(2026, 2, 18), date(2026, 2, 20)))
        total = sum(
            work_week.working_hours(FEB_1 + timedelta(days=i)) for i in range(28)
        )
        assert work_week.working_hours_between(FEB_1, FEB_28) == pytest.approx(total)

    def test_fingerprint_tracks_holidays(self, work_week):
        before = work_week.fingerprint
        work_week.add_holiday(Holiday(MON, MON))
        assert work_week.fingerprint != before

    def test_repr(self, work_week):
        r = repr(work_week)
        assert "WorkingCalendar(" in r
        assert "weekly_hours=40.0" in r
