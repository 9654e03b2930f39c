"""Room inventory checks against a snapshot of reservations.

Only active reservations (CONFIRMED, CHECKED_IN) consume inventory; pending,
completed and cancelled ones never block a room.
"""
from datetime import date
from typing import Iterable, List

from domain.date_validator import is_valid_date_range, ranges_overlap, validation_message
from domain.entities import Reservation
from domain.enums import ROOM_CAPACITIES, RoomType
from domain.exceptions import InvalidArgumentError
from domain.value_objects import AvailabilityReport, RoomAvailability, ValidationResult


def _check_arguments(reservations, room_type, check_in, check_out) -> None:
    if reservations is None:
        raise InvalidArgumentError("Reservations list cannot be null")
    if room_type is None:
        raise InvalidArgumentError("Room type cannot be null")
    if check_in is None or check_out is None:
        raise InvalidArgumentError("Dates cannot be null")


def capacity(room_type: RoomType) -> int:
    """Number of rooms of the given type"""
    if room_type is None:
        raise InvalidArgumentError("Room type cannot be null")
    try:
        return ROOM_CAPACITIES[room_type]
    except KeyError:
        raise InvalidArgumentError(f"Unknown room type: {room_type}")


def is_active(reservation: Reservation) -> bool:
    if reservation is None:
        raise InvalidArgumentError("Reservation cannot be null")
    return reservation.is_active()


def active_reservations_for(
    reservations: Iterable[Reservation],
    room_type: RoomType
) -> List[Reservation]:
    if reservations is None:
        raise InvalidArgumentError("Reservations list cannot be null")
    if room_type is None:
        raise InvalidArgumentError("Room type cannot be null")
    return [r for r in reservations if r.room_type == room_type and is_active(r)]


def overlap_count(
    reservations: Iterable[Reservation],
    room_type: RoomType,
    check_in: date,
    check_out: date
) -> int:
    """Active reservations of this room type whose stay overlaps the range"""
    _check_arguments(reservations, room_type, check_in, check_out)
    return sum(
        1 for r in active_reservations_for(reservations, room_type)
        if ranges_overlap(r.check_in, r.check_out, check_in, check_out)
    )


def is_available(
    reservations: Iterable[Reservation],
    room_type: RoomType,
    check_in: date,
    check_out: date
) -> bool:
    return overlap_count(reservations, room_type, check_in, check_out) < capacity(room_type)


def available_count(
    reservations: Iterable[Reservation],
    room_type: RoomType,
    check_in: date,
    check_out: date
) -> int:
    booked = overlap_count(reservations, room_type, check_in, check_out)
    return max(0, capacity(room_type) - booked)


def availability_report(
    reservations: Iterable[Reservation],
    check_in: date,
    check_out: date
) -> AvailabilityReport:
    """Availability of every room type over the range"""
    if reservations is None:
        raise InvalidArgumentError("Reservations list cannot be null")
    if check_in is None or check_out is None:
        raise InvalidArgumentError("Dates cannot be null")
    reservations = list(reservations)
    rooms = [
        RoomAvailability(
            room_type=room_type,
            available=available_count(reservations, room_type, check_in, check_out),
            capacity=capacity(room_type),
        )
        for room_type in RoomType
    ]
    return AvailabilityReport(check_in=check_in, check_out=check_out, rooms=rooms)


def validate_new_reservation(
    reservations: Iterable[Reservation],
    room_type: RoomType,
    check_in: date,
    check_out: date
) -> ValidationResult:
    """Date rules first, then inventory"""
    _check_arguments(reservations, room_type, check_in, check_out)
    reservations = list(reservations)

    if not is_valid_date_range(check_in, check_out):
        return ValidationResult(valid=False, message=validation_message(check_in, check_out))

    if not is_available(reservations, room_type, check_in, check_out):
        remaining = available_count(reservations, room_type, check_in, check_out)
        return ValidationResult(
            valid=False,
            message=(
                f"No {room_type.value} rooms available for the selected dates. "
                f"Available: {remaining}"
            ),
        )

    return ValidationResult(valid=True, message="Reservation can be created")
