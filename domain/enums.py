"""Domain Enums"""
from decimal import Decimal
from enum import Enum


class ReservationStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CHECKED_IN = "CHECKED_IN"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        """COMPLETED and CANCELLED have no outgoing transitions"""
        return self in (ReservationStatus.COMPLETED, ReservationStatus.CANCELLED)


class RoomType(str, Enum):
    SINGLE = "SINGLE"
    DOUBLE = "DOUBLE"
    SUITE = "SUITE"
    DELUXE = "DELUXE"

    @property
    def base_price(self) -> Decimal:
        """Nightly rate before discounts and tax"""
        return ROOM_BASE_PRICES[self]

    @property
    def capacity(self) -> int:
        """Number of rooms of this type in the hotel"""
        return ROOM_CAPACITIES[self]


# Both tables must list every RoomType member.
ROOM_BASE_PRICES = {
    RoomType.SINGLE: Decimal("50"),
    RoomType.DOUBLE: Decimal("80"),
    RoomType.SUITE: Decimal("150"),
    RoomType.DELUXE: Decimal("200"),
}

ROOM_CAPACITIES = {
    RoomType.SINGLE: 10,
    RoomType.DOUBLE: 8,
    RoomType.SUITE: 5,
    RoomType.DELUXE: 3,
}
