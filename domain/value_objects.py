"""Domain Value Objects"""
from pydantic import BaseModel, Field, validator
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

from domain.enums import ReservationStatus, RoomType


CENTS = Decimal("0.01")


def format_price(amount: Decimal) -> str:
    """Render an amount as currency with two decimals, rounding half-up"""
    return f"${Decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)}"


class DateRange(BaseModel):
    """Value Object for date ranges"""
    check_in: date
    check_out: date

    @validator('check_out')
    def check_out_after_check_in(cls, v, values):
        if 'check_in' in values and v <= values['check_in']:
            raise ValueError('Check-out date must be after check-in date')
        return v

    def nights(self) -> int:
        """Calculate number of nights"""
        return (self.check_out - self.check_in).days

    def overlaps(self, other: "DateRange") -> bool:
        """Half-open overlap: touching ranges do not overlap"""
        return self.check_in < other.check_out and other.check_in < self.check_out

    class Config:
        frozen = True


class PriceBreakdown(BaseModel):
    """Customer-facing quote. Every intermediate amount is kept."""
    base_price: Decimal = Field(ge=0)
    discount_rate: Decimal = Field(ge=0, le=1)
    discount_amount: Decimal = Field(ge=0)
    price_after_discount: Decimal = Field(ge=0)
    tax: Decimal = Field(ge=0)
    total_price: Decimal = Field(ge=0)
    tax_rate: Decimal = Field(ge=0, le=1)

    class Config:
        frozen = True

    def __str__(self) -> str:
        lines = ["Price Breakdown:"]
        lines.append(f"  Base Price:         {format_price(self.base_price)}")
        if self.discount_rate > 0:
            lines.append(
                f"  Discount ({self.discount_rate * 100:.0f}%):     -{format_price(self.discount_amount)}"
            )
            lines.append(f"  Subtotal:           {format_price(self.price_after_discount)}")
        lines.append(f"  Tax ({self.tax_rate * 100:.0f}%):          {format_price(self.tax)}")
        lines.append(f"  Total:              {format_price(self.total_price)}")
        return "\n".join(lines) + "\n"


class ValidationResult(BaseModel):
    """Outcome of checking whether a reservation can be created"""
    valid: bool
    message: str

    class Config:
        frozen = True

    def __bool__(self) -> bool:
        return self.valid

    def __str__(self) -> str:
        return f"Valid: {str(self.valid).lower()} - {self.message}"


class RoomAvailability(BaseModel):
    """Availability of one room type over a date range"""
    room_type: RoomType
    available: int = Field(ge=0)
    capacity: int = Field(ge=0)

    class Config:
        frozen = True

    @property
    def status(self) -> str:
        return "Available" if self.available > 0 else "Fully Booked"


class AvailabilityReport(BaseModel):
    """Point-in-time availability for every room type"""
    check_in: date
    check_out: date
    rooms: List[RoomAvailability] = []

    class Config:
        frozen = True

    def for_room(self, room_type: RoomType) -> Optional[RoomAvailability]:
        for room in self.rooms:
            if room.room_type == room_type:
                return room
        return None

    def __str__(self) -> str:
        lines = [f"Availability Report for {self.check_in} to {self.check_out}:", ""]
        for room in self.rooms:
            lines.append(
                f"  {room.room_type.value:<10}: {room.available}/{room.capacity} "
                f"rooms available - {room.status}"
            )
        return "\n".join(lines) + "\n"


class ReservationSummary(BaseModel):
    """Reservation counts grouped by status"""
    total: int = 0
    pending: int = 0
    confirmed: int = 0
    checked_in: int = 0
    completed: int = 0
    cancelled: int = 0

    class Config:
        frozen = True

    @staticmethod
    def from_statuses(statuses: List[ReservationStatus]) -> "ReservationSummary":
        """Build a summary from the status of every stored reservation"""
        counts = {status: 0 for status in ReservationStatus}
        for status in statuses:
            counts[status] += 1
        return ReservationSummary(
            total=len(statuses),
            pending=counts[ReservationStatus.PENDING],
            confirmed=counts[ReservationStatus.CONFIRMED],
            checked_in=counts[ReservationStatus.CHECKED_IN],
            completed=counts[ReservationStatus.COMPLETED],
            cancelled=counts[ReservationStatus.CANCELLED],
        )

    def count(self, status: ReservationStatus) -> int:
        return getattr(self, status.value.lower())

    def __str__(self) -> str:
        return (
            "Reservation Summary:\n"
            f"  Total: {self.total}\n"
            f"  Pending: {self.pending}\n"
            f"  Confirmed: {self.confirmed}\n"
            f"  Checked In: {self.checked_in}\n"
            f"  Completed: {self.completed}\n"
            f"  Cancelled: {self.cancelled}"
        )


class NearbyCity(BaseModel):
    """A city reachable within a distance budget"""
    city: str
    distance: float = Field(ge=0)

    class Config:
        frozen = True


class Route(BaseModel):
    """Shortest path between two cities"""
    path: List[str]
    distance: float = Field(ge=0)

    class Config:
        frozen = True
