import calendar
import datetime
from dataclasses import dataclass
from typing import Iterable, Protocol


class Stay(Protocol):
    check_in_date: datetime.date
    check_out_date: datetime.date


def as_day(value: datetime.date | datetime.datetime) -> datetime.date:
    """Calendar date of a date or datetime (time-of-day ignored)."""
    if isinstance(value, datetime.datetime):
        return value.date()
    return value


def get_month_dates(year: int, month: int) -> list[datetime.date]:
    _, days_in_month = calendar.monthrange(year, month)
    return [
        datetime.date(year, month, day)
        for day in range(1, days_in_month + 1)
    ]


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def ranges_overlap(
    check_in: datetime.date,
    check_out: datetime.date,
    other_check_in: datetime.date,
    other_check_out: datetime.date,
) -> bool:
    """
    Half-open overlap of [check_in, check_out) and [other_check_in, other_check_out).

    A check-out day can be the next guest's check-in day.
    """
    return other_check_in < check_out and check_in < other_check_out


def is_occupied_on(stays: Iterable[Stay], day: datetime.date) -> bool:
    return any(s.check_in_date <= day < s.check_out_date for s in stays)


def nights(check_in: datetime.date, check_out: datetime.date) -> int:
    return (check_out - check_in).days


@dataclass(frozen=True)
class CalendarDay:
    date: datetime.date
    is_past: bool
    is_today: bool
    selected: bool
    in_range: bool


def is_day_selected(
    day: datetime.date,
    check_in: datetime.date | None,
    check_out: datetime.date | None,
) -> bool:
    day = as_day(day)
    return (check_in is not None and day == as_day(check_in)) or (
        check_out is not None and day == as_day(check_out)
    )


def is_day_in_range(
    day: datetime.date,
    check_in: datetime.date | None,
    check_out: datetime.date | None,
) -> bool:
    # Display highlighting is inclusive of the check-out day
    if check_in is None or check_out is None:
        return False
    return as_day(check_in) <= as_day(day) <= as_day(check_out)


def build_month_view(
    year: int,
    month: int,
    today: datetime.date,
    check_in: datetime.date | None = None,
    check_out: datetime.date | None = None,
) -> list[list[CalendarDay | None]]:
    """
    Week rows for a month, Sunday first.

    Cells before the 1st and after the last day are None.
    """
    row: list[CalendarDay | None] = []
    weeks: list[list[CalendarDay | None]] = []

    first = datetime.date(year, month, 1)
    # date.weekday(): Monday == 0; shift so that Sunday is column 0
    row.extend([None] * ((first.weekday() + 1) % 7))

    for day in get_month_dates(year, month):
        row.append(
            CalendarDay(
                date=day,
                is_past=day < today,
                is_today=day == today,
                selected=is_day_selected(day, check_in, check_out),
                in_range=is_day_in_range(day, check_in, check_out),
            )
        )
        if len(row) == 7:
            weeks.append(row)
            row = []

    if row:
        row.extend([None] * (7 - len(row)))
        weeks.append(row)

    return weeks


def occupancy_rate(occupied: int, total: int) -> int:
    """Occupied share in whole percent, halves rounded up; 0 without rooms."""
    if total <= 0:
        return 0
    return int(occupied * 100 / total + 0.5)
