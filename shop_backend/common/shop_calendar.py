# common/shop_calendar.py

"""
SHOP CALENDAR ARITHMETIC

Installment due dates follow the shop's native calendar (Solar Hijri /
Jalali by default). Rows store ordinary Gregorian `date` values; only the
month stepping happens in the configured calendar.

Rules:
- Obligation k falls on start_date + k calendar months.
- Offsets are always computed from the start date, so a 31st that had to be
  clamped in a short month comes back in the next long month.
- A day that does not exist in the target month clamps to the month's last day.
"""

from __future__ import annotations

import calendar as gregorian_calendar
from datetime import date

import jdatetime
from django.conf import settings

from common.exceptions import CommerceValidationError

JALALI = "jalali"
GREGORIAN = "gregorian"

SHOP_DATE_FORMAT = "%Y/%m/%d"


def active_calendar() -> str:
    name = (getattr(settings, "SHOP_CALENDAR", JALALI) or JALALI).strip().lower()
    if name not in (JALALI, GREGORIAN):
        raise CommerceValidationError(f"Unsupported shop calendar: {name!r}")
    return name


def _shift_month(year: int, month: int, months: int) -> tuple[int, int]:
    index = (year * 12 + (month - 1)) + months
    return index // 12, index % 12 + 1


def _add_months_jalali(start: date, months: int) -> date:
    j = jdatetime.date.fromgregorian(date=start)
    year, month = _shift_month(j.year, j.month, months)

    day = j.day
    while day > 0:
        try:
            return jdatetime.date(year, month, day).togregorian()
        except ValueError:
            day -= 1

    raise CommerceValidationError(f"Cannot step {start} by {months} months")


def _add_months_gregorian(start: date, months: int) -> date:
    year, month = _shift_month(start.year, start.month, months)
    last_day = gregorian_calendar.monthrange(year, month)[1]
    return date(year, month, min(start.day, last_day))


def add_months(start: date, months: int, *, calendar_name: str | None = None) -> date:
    name = calendar_name or active_calendar()
    if name == JALALI:
        return _add_months_jalali(start, months)
    return _add_months_gregorian(start, months)


def due_dates(start: date, count: int, *, calendar_name: str | None = None) -> list[date]:
    """One due date per calendar month, starting at `start`."""
    return [add_months(start, k, calendar_name=calendar_name) for k in range(count)]


def parse_shop_date(value: str) -> date:
    """
    Parse a 'YYYY/MM/DD' string written in the shop calendar.
    """
    raw = (value or "").strip()
    if not raw:
        raise CommerceValidationError("Date is required")

    try:
        if active_calendar() == JALALI:
            return jdatetime.datetime.strptime(raw, SHOP_DATE_FORMAT).date().togregorian()
        return date.fromisoformat(raw.replace("/", "-"))
    except ValueError as exc:
        raise CommerceValidationError(f"Invalid shop date: {value!r}") from exc


def format_shop_date(value: date | None) -> str | None:
    if value is None:
        return None
    if active_calendar() == JALALI:
        return jdatetime.date.fromgregorian(date=value).strftime(SHOP_DATE_FORMAT)
    return value.strftime(SHOP_DATE_FORMAT)
