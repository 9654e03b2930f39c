"""Domain Entities - Aggregates"""
import re
from pydantic import BaseModel, Field, validator
from uuid import uuid4
from datetime import date
from typing import Optional
from decimal import Decimal

from domain import pricing
from domain.enums import ReservationStatus, RoomType
from domain.exceptions import InvalidReservationError, InvalidTransitionError
from domain.value_objects import DateRange, format_price


EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")

ALLOWED_TRANSITIONS = {
    ReservationStatus.PENDING: {ReservationStatus.CONFIRMED, ReservationStatus.CANCELLED},
    ReservationStatus.CONFIRMED: {ReservationStatus.CHECKED_IN, ReservationStatus.CANCELLED},
    ReservationStatus.CHECKED_IN: {ReservationStatus.COMPLETED, ReservationStatus.CANCELLED},
    ReservationStatus.COMPLETED: set(),
    ReservationStatus.CANCELLED: set(),
}


def is_valid_email(email: Optional[str]) -> bool:
    return bool(email) and EMAIL_PATTERN.match(email) is not None


class Reservation(BaseModel):
    """Reservation Aggregate Root Entity"""

    # Identity
    id: str = Field(default_factory=lambda: str(uuid4()), frozen=True)

    # Guest
    guest_name: str
    guest_email: str

    # Stay
    date_range: DateRange
    room_type: RoomType
    total_price: Decimal = Field(ge=0)

    # Status
    status: ReservationStatus = ReservationStatus.PENDING

    # Metadata
    created_at: date = Field(default_factory=date.today)

    class Config:
        from_attributes = True

    @validator('guest_name')
    def guest_name_not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError('Guest name is required')
        return v

    @validator('guest_email')
    def guest_email_well_formed(cls, v):
        if not is_valid_email(v):
            raise ValueError('Invalid email format')
        return v

    # ==================== FACTORY METHOD ====================
    @staticmethod
    def create(
        guest_name: str,
        guest_email: str,
        check_in: date,
        check_out: date,
        room_type: RoomType,
        total_price: Optional[Decimal] = None
    ) -> "Reservation":
        """Create a new PENDING reservation, pricing the stay unless a price is given"""
        Reservation.validate_guest(guest_name, guest_email)
        if room_type is None:
            raise InvalidReservationError("Room type is required")
        if check_in is None:
            raise InvalidReservationError("Check-in date is required")
        if check_out is None:
            raise InvalidReservationError("Check-out date is required")
        if check_out <= check_in:
            raise InvalidReservationError("Check-out date must be after check-in date")

        if total_price is None:
            total_price = pricing.total_price_for_stay(room_type, check_in, check_out)
        elif total_price < 0:
            raise InvalidReservationError("Total price cannot be negative")

        return Reservation(
            guest_name=guest_name,
            guest_email=guest_email,
            date_range=DateRange(check_in=check_in, check_out=check_out),
            room_type=room_type,
            total_price=total_price,
            status=ReservationStatus.PENDING,
        )

    # ==================== QUERY METHODS ====================
    @property
    def check_in(self) -> date:
        return self.date_range.check_in

    @property
    def check_out(self) -> date:
        return self.date_range.check_out

    def nights(self) -> int:
        """Get number of nights"""
        return self.date_range.nights()

    def is_active(self) -> bool:
        """Only confirmed and checked-in reservations hold a room"""
        return self.status in (ReservationStatus.CONFIRMED, ReservationStatus.CHECKED_IN)

    def is_modifiable(self) -> bool:
        """Dates can change until the guest arrives"""
        return self.status in (ReservationStatus.PENDING, ReservationStatus.CONFIRMED)

    def can_transition_to(self, status: ReservationStatus) -> bool:
        return status in ALLOWED_TRANSITIONS[self.status]

    # ==================== STATE TRANSITION METHODS ====================
    def confirm(self) -> None:
        """PENDING -> CONFIRMED"""
        if self.status != ReservationStatus.PENDING:
            raise InvalidTransitionError("Only pending reservations can be confirmed")
        self.status = ReservationStatus.CONFIRMED

    def check_in_guest(self) -> None:
        """CONFIRMED -> CHECKED_IN"""
        if self.status != ReservationStatus.CONFIRMED:
            raise InvalidTransitionError("Only confirmed reservations can be checked in")
        self.status = ReservationStatus.CHECKED_IN

    def check_out_guest(self) -> None:
        """CHECKED_IN -> COMPLETED"""
        if self.status != ReservationStatus.CHECKED_IN:
            raise InvalidTransitionError("Only checked-in reservations can be completed")
        self.status = ReservationStatus.COMPLETED

    def cancel(self) -> None:
        """Allowed from any non-terminal status"""
        if self.status == ReservationStatus.COMPLETED:
            raise InvalidTransitionError("Cannot cancel a completed reservation")
        if self.status == ReservationStatus.CANCELLED:
            raise InvalidTransitionError("Reservation is already cancelled")
        self.status = ReservationStatus.CANCELLED

    # ==================== MODIFICATION METHODS ====================
    def ensure_modifiable(self) -> None:
        if not self.is_modifiable():
            raise InvalidTransitionError(
                f"Cannot change dates of a reservation with status {self.status.value}"
            )

    def reschedule(self, new_date_range: DateRange) -> None:
        """Move the stay to new dates and reprice it"""
        self.ensure_modifiable()
        self.date_range = new_date_range
        self._recalculate_price()

    # ==================== VALIDATION ====================
    @staticmethod
    def validate_guest(guest_name: Optional[str], guest_email: Optional[str]) -> None:
        if guest_name is None or not guest_name.strip():
            raise InvalidReservationError("Guest name is required")
        if guest_email is None or not guest_email.strip():
            raise InvalidReservationError("Guest email is required")
        if not is_valid_email(guest_email):
            raise InvalidReservationError("Invalid email format")

    # ==================== PRIVATE METHODS ====================
    def _recalculate_price(self) -> None:
        self.total_price = pricing.total_price(self.room_type, self.nights())

    def __str__(self) -> str:
        return (
            f"Reservation(id={self.id}, guest={self.guest_name} <{self.guest_email}>, "
            f"{self.check_in} to {self.check_out}, room={self.room_type.value}, "
            f"total={format_price(self.total_price)}, status={self.status.value}, "
            f"nights={self.nights()})"
        )
