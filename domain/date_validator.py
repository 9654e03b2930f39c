"""Date rules for reservations.

All checks compare against ``date.today()`` on the caller's clock. Every
function rejects ``None`` with ``InvalidArgumentError`` except
``validation_message``, which reports missing dates as a reason instead.
"""
from datetime import date
from typing import Optional

from domain.exceptions import InvalidArgumentError


MINIMUM_NIGHTS = 1
MAXIMUM_ADVANCE_DAYS = 365


def _require(*dates: Optional[date], message: str = "Dates cannot be null") -> None:
    if any(d is None for d in dates):
        raise InvalidArgumentError(message)


def is_past_date(d: date) -> bool:
    """True if the date is before today"""
    _require(d, message="Date cannot be null")
    return d < date.today()


def is_today(d: date) -> bool:
    _require(d, message="Date cannot be null")
    return d == date.today()


def is_future_date(d: date) -> bool:
    """True if the date is after today"""
    _require(d, message="Date cannot be null")
    return d > date.today()


def is_valid_check_in(check_in: date) -> bool:
    """Check-in must be today or later and within the booking horizon"""
    _require(check_in, message="Check-in date cannot be null")
    today = date.today()
    if check_in < today:
        return False
    return (check_in - today).days <= MAXIMUM_ADVANCE_DAYS


def is_valid_check_out(check_in: date, check_out: date) -> bool:
    _require(check_in, message="Check-in date cannot be null")
    _require(check_out, message="Check-out date cannot be null")
    return check_out > check_in


def meets_minimum_nights(check_in: date, check_out: date) -> bool:
    _require(check_in, check_out)
    return (check_out - check_in).days >= MINIMUM_NIGHTS


def is_valid_date_range(check_in: date, check_out: date) -> bool:
    """Conjunction of the check-in, check-out and minimum-stay rules"""
    _require(check_in, check_out)
    return (
        is_valid_check_in(check_in)
        and is_valid_check_out(check_in, check_out)
        and meets_minimum_nights(check_in, check_out)
    )


def nights_between(check_in: date, check_out: date) -> int:
    """Whole nights between two calendar dates"""
    _require(check_in, check_out)
    if check_out < check_in:
        raise InvalidArgumentError("Check-out date cannot be before check-in date")
    return (check_out - check_in).days


def ranges_overlap(start1: date, end1: date, start2: date, end2: date) -> bool:
    """Half-open interval overlap; a range ending the day another starts does not overlap it"""
    _require(start1, end1, start2, end2)
    return start1 < end2 and start2 < end1


def validation_message(check_in: Optional[date], check_out: Optional[date]) -> Optional[str]:
    """Return the first reason the range is invalid, or None when it is valid"""
    if check_in is None:
        return "Check-in date is required"
    if check_out is None:
        return "Check-out date is required"
    if is_past_date(check_in):
        return "Check-in date cannot be in the past"
    if (check_in - date.today()).days > MAXIMUM_ADVANCE_DAYS:
        return f"Check-in date cannot be more than {MAXIMUM_ADVANCE_DAYS} days in advance"
    if not check_out > check_in:
        return "Check-out date must be after check-in date"
    if (check_out - check_in).days < MINIMUM_NIGHTS:
        return f"Reservation must be for at least {MINIMUM_NIGHTS} night(s)"
    return None


def format_date_range(check_in: date, check_out: date) -> str:
    """e.g. '2026-11-01 to 2026-11-03 (2 nights)'"""
    nights = nights_between(check_in, check_out)
    return f"{check_in} to {check_out} ({nights} night{'' if nights == 1 else 's'})"
