"""Unit tests for weekly schedule generation."""

from datetime import date, timedelta

import pytest

from volleyleague.services.schedule_service import (
    RecurrenceRule,
    ScheduleError,
    generate_game_dates,
    to_sunday_weekday,
)


class TestToSundayWeekday:
    """Tests for to_sunday_weekday()."""

    def test_sunday_is_zero(self):
        assert to_sunday_weekday(date(2026, 1, 4)) == 0

    def test_saturday_is_six(self):
        assert to_sunday_weekday(date(2026, 1, 3)) == 6

    def test_friday_is_five(self):
        assert to_sunday_weekday(date(2026, 1, 2)) == 5


class TestGenerateGameDates:
    """Tests for generate_game_dates()."""

    def test_fridays_in_january(self):
        """Start on the matching weekday; both ends are inclusive."""
        dates = generate_game_dates(date(2026, 1, 2), date(2026, 1, 30), 5)
        assert dates == [
            date(2026, 1, 2),
            date(2026, 1, 9),
            date(2026, 1, 16),
            date(2026, 1, 23),
            date(2026, 1, 30),
        ]

    def test_first_date_rolls_forward_to_weekday(self):
        """Monday start with a Wednesday rule begins two days later."""
        dates = generate_game_dates(date(2026, 1, 5), date(2026, 1, 21), 3)
        assert dates == [date(2026, 1, 7), date(2026, 1, 14), date(2026, 1, 21)]

    def test_sunday_rule(self):
        dates = generate_game_dates(date(2026, 1, 2), date(2026, 1, 12), 0)
        assert dates == [date(2026, 1, 4), date(2026, 1, 11)]

    def test_every_date_matches_weekday(self):
        start = date(2026, 3, 1)
        end = start + timedelta(days=180)
        for weekday in range(7):
            dates = generate_game_dates(start, end, weekday)
            assert dates
            assert all(to_sunday_weekday(d) == weekday for d in dates)
            assert all(start <= d <= end for d in dates)
            assert dates == sorted(set(dates))

    def test_consecutive_dates_are_one_week_apart(self):
        dates = generate_game_dates(date(2026, 1, 1), date(2026, 6, 30), 2)
        gaps = {(b - a).days for a, b in zip(dates, dates[1:])}
        assert gaps == {7}

    def test_range_without_weekday_is_empty(self):
        """Mon..Wed holds no Friday."""
        assert generate_game_dates(date(2026, 1, 5), date(2026, 1, 7), 5) == []

    def test_inverted_range_is_empty(self):
        assert generate_game_dates(date(2026, 2, 1), date(2026, 1, 1), 5) == []

    def test_single_day_range(self):
        day = date(2026, 1, 2)
        assert generate_game_dates(day, day, 5) == [day]
        assert generate_game_dates(day, day, 4) == []

    def test_excluded_dates_are_skipped_without_shifting(self):
        dates = generate_game_dates(
            date(2026, 1, 2),
            date(2026, 1, 30),
            5,
            exclude_dates=[date(2026, 1, 16)],
        )
        assert dates == [
            date(2026, 1, 2),
            date(2026, 1, 9),
            date(2026, 1, 23),
            date(2026, 1, 30),
        ]

    @pytest.mark.parametrize("weekday", [-1, 7, 42])
    def test_rejects_out_of_range_weekday(self, weekday):
        with pytest.raises(ScheduleError):
            generate_game_dates(date(2026, 1, 1), date(2026, 2, 1), weekday)

    @pytest.mark.parametrize("weekday", [True, 2.0, "5", None])
    def test_rejects_non_integer_weekday(self, weekday):
        with pytest.raises(ScheduleError):
            generate_game_dates(date(2026, 1, 1), date(2026, 2, 1), weekday)

    def test_schedule_error_is_value_error(self):
        with pytest.raises(ValueError):
            generate_game_dates(date(2026, 1, 1), date(2026, 2, 1), 9)


class TestRecurrenceRule:
    """Tests for RecurrenceRule parsing and serialization."""

    def test_from_config_defaults_time(self):
        rule = RecurrenceRule.from_config({"day_of_week": 2})
        assert rule.day_of_week == 2
        assert rule.time == "19:00"
        assert rule.exclude_dates == frozenset()
        assert rule.weekday_name == "Tuesday"

    def test_from_config_parses_excludes(self):
        rule = RecurrenceRule.from_config(
            {"day_of_week": 5, "time": "18:30", "exclude_dates": ["2026-01-16"]}
        )
        assert rule.time == "18:30"
        assert rule.exclude_dates == frozenset({date(2026, 1, 16)})

    def test_to_config_sorts_excludes(self):
        rule = RecurrenceRule(
            day_of_week=5,
            time="20:00",
            exclude_dates=frozenset({date(2026, 2, 6), date(2026, 1, 16)}),
        )
        assert rule.to_config() == {
            "day_of_week": 5,
            "time": "20:00",
            "exclude_dates": ["2026-01-16", "2026-02-06"],
        }

    def test_config_survives_reload(self):
        rule = RecurrenceRule(day_of_week=1, exclude_dates=frozenset({date(2026, 3, 2)}))
        assert RecurrenceRule.from_config(rule.to_config()) == rule

    def test_missing_weekday_is_rejected(self):
        with pytest.raises(ScheduleError):
            RecurrenceRule.from_config({"time": "19:00"})

    def test_non_dict_config_is_rejected(self):
        with pytest.raises(ScheduleError):
            RecurrenceRule.from_config(None)

    def test_bad_time_is_rejected(self):
        with pytest.raises(ScheduleError):
            RecurrenceRule(day_of_week=5, time="7pm")

    def test_bad_exclude_date_is_rejected(self):
        with pytest.raises(ScheduleError):
            RecurrenceRule.from_config({"day_of_week": 5, "exclude_dates": ["soon"]})

    def test_dates_between_applies_excludes(self):
        rule = RecurrenceRule(day_of_week=5, exclude_dates=frozenset({date(2026, 1, 9)}))
        assert rule.dates_between(date(2026, 1, 1), date(2026, 1, 17)) == [
            date(2026, 1, 2),
            date(2026, 1, 16),
        ]
