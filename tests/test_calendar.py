"""
Unit tests for calendar helpers: overlap, month grid, highlighting
"""
from dataclasses import dataclass
from datetime import date, datetime

import pytest

from app.domain.calendar import (
    build_month_view,
    get_month_dates,
    is_day_in_range,
    is_day_selected,
    is_occupied_on,
    occupancy_rate,
    ranges_overlap,
    shift_month,
)

RESERVED = (date(2024, 5, 10), date(2024, 5, 15))


class TestDateOverlapLogic:
    """Half-open [check_in, check_out) overlap used by availability"""

    def test_overlapping_ranges(self):
        assert ranges_overlap(date(2024, 5, 12), date(2024, 5, 20), *RESERVED)

    def test_adjacent_after_no_overlap(self):
        # Checkout day of the reservation is the new check-in
        assert not ranges_overlap(date(2024, 5, 15), date(2024, 5, 20), *RESERVED)

    def test_adjacent_before_no_overlap(self):
        assert not ranges_overlap(date(2024, 5, 1), date(2024, 5, 10), *RESERVED)

    def test_contained_within(self):
        assert ranges_overlap(date(2024, 5, 11), date(2024, 5, 12), *RESERVED)

    def test_containing(self):
        assert ranges_overlap(date(2024, 5, 1), date(2024, 5, 31), *RESERVED)


@dataclass
class FakeStay:
    check_in_date: date
    check_out_date: date


def test_occupied_on_excludes_checkout_day():
    stays = [FakeStay(*RESERVED)]
    assert is_occupied_on(stays, date(2024, 5, 10))
    assert is_occupied_on(stays, date(2024, 5, 14))
    assert not is_occupied_on(stays, date(2024, 5, 15))
    assert not is_occupied_on([], date(2024, 5, 12))


def test_month_dates_handles_leap_year():
    assert len(get_month_dates(2024, 2)) == 29
    assert get_month_dates(2023, 2)[-1] == date(2023, 2, 28)


@pytest.mark.parametrize(
    "year,month,delta,expected",
    [
        (2024, 12, 1, (2025, 1)),
        (2024, 1, -1, (2023, 12)),
        (2024, 5, 0, (2024, 5)),
        (2024, 5, 14, (2025, 7)),
    ],
)
def test_shift_month(year, month, delta, expected):
    assert shift_month(year, month, delta) == expected


class TestHighlighting:
    def test_selected_by_calendar_date(self):
        assert is_day_selected(datetime(2024, 5, 10, 15, 0), date(2024, 5, 10), None)
        assert is_day_selected(date(2024, 5, 13), date(2024, 5, 10), date(2024, 5, 13))
        assert not is_day_selected(date(2024, 5, 11), date(2024, 5, 10), date(2024, 5, 13))
        assert not is_day_selected(date(2024, 5, 11), None, None)

    def test_range_display_is_inclusive(self):
        check_in, check_out = date(2024, 5, 10), date(2024, 5, 13)
        assert is_day_in_range(date(2024, 5, 10), check_in, check_out)
        assert is_day_in_range(date(2024, 5, 13), check_in, check_out)
        assert not is_day_in_range(date(2024, 5, 14), check_in, check_out)

    def test_no_range_until_complete(self):
        assert not is_day_in_range(date(2024, 5, 10), date(2024, 5, 10), None)


class TestMonthView:
    def test_may_2024_starts_on_wednesday(self):
        weeks = build_month_view(2024, 5, today=date(2024, 5, 1))
        # Sunday-first columns: Sun, Mon, Tue are blank
        assert weeks[0][:3] == [None, None, None]
        assert weeks[0][3].date == date(2024, 5, 1)
        assert all(len(week) == 7 for week in weeks)
        days = [cell for week in weeks for cell in week if cell]
        assert len(days) == 31

    def test_month_starting_on_sunday_has_no_leading_blank(self):
        weeks = build_month_view(2024, 9, today=date(2024, 9, 1))
        assert weeks[0][0].date == date(2024, 9, 1)

    def test_flags(self):
        weeks = build_month_view(
            2024, 5, today=date(2024, 5, 5),
            check_in=date(2024, 5, 10), check_out=date(2024, 5, 13),
        )
        cells = {cell.date.day: cell for week in weeks for cell in week if cell}
        assert cells[4].is_past and not cells[5].is_past
        assert cells[5].is_today
        assert cells[10].selected and cells[10].in_range
        assert cells[12].in_range and not cells[12].selected
        assert cells[13].selected
        assert not cells[14].in_range


@pytest.mark.parametrize(
    "occupied,total,expected",
    [(0, 0, 0), (0, 3, 0), (1, 3, 33), (2, 3, 67), (1, 8, 13), (4, 4, 100)],
)
def test_occupancy_rate(occupied, total, expected):
    assert occupancy_rate(occupied, total) == expected
