"""Room pricing: tiered length-of-stay discounts, then tax on the discounted price."""
from datetime import date
from decimal import Decimal

from domain.date_validator import nights_between
from domain.enums import RoomType
from domain.exceptions import InvalidArgumentError
from domain.value_objects import PriceBreakdown


TAX_RATE = Decimal("0.16")

# (minimum nights, rate), highest threshold first
DISCOUNT_TIERS = (
    (30, Decimal("0.15")),
    (14, Decimal("0.10")),
    (7, Decimal("0.05")),
)
NO_DISCOUNT = Decimal("0")


def _check_room_type(room_type: RoomType) -> None:
    if room_type is None:
        raise InvalidArgumentError("Room type cannot be null")
    if not isinstance(room_type, RoomType):
        raise InvalidArgumentError(f"Unknown room type: {room_type}")


def _check_nights(nights: int) -> None:
    if nights is None:
        raise InvalidArgumentError("Number of nights cannot be null")
    if nights < 0:
        raise InvalidArgumentError("Number of nights cannot be negative")


def unit_price(room_type: RoomType) -> Decimal:
    _check_room_type(room_type)
    return room_type.base_price


def base_price(room_type: RoomType, nights: int) -> Decimal:
    """Nightly rate times nights, before discount and tax"""
    _check_room_type(room_type)
    _check_nights(nights)
    return room_type.base_price * nights


def discount_rate(nights: int) -> Decimal:
    """Look up the length-of-stay discount; lower bounds are inclusive"""
    _check_nights(nights)
    for threshold, rate in DISCOUNT_TIERS:
        if nights >= threshold:
            return rate
    return NO_DISCOUNT


def discount_amount(base: Decimal, nights: int) -> Decimal:
    if base < 0:
        raise InvalidArgumentError("Base price cannot be negative")
    return base * discount_rate(nights)


def price_after_discount(room_type: RoomType, nights: int) -> Decimal:
    base = base_price(room_type, nights)
    return base - discount_amount(base, nights)


def tax_amount(price: Decimal) -> Decimal:
    if price < 0:
        raise InvalidArgumentError("Price cannot be negative")
    return price * TAX_RATE


def total_price(room_type: RoomType, nights: int, include_tax: bool = True) -> Decimal:
    """Discount first, then tax the discounted price"""
    discounted = price_after_discount(room_type, nights)
    if include_tax:
        return discounted + tax_amount(discounted)
    return discounted


def total_price_for_stay(
    room_type: RoomType,
    check_in: date,
    check_out: date,
    include_tax: bool = True
) -> Decimal:
    return total_price(room_type, nights_between(check_in, check_out), include_tax)


def price_breakdown(room_type: RoomType, nights: int) -> PriceBreakdown:
    """Full quote with every intermediate amount; no side effects"""
    base = base_price(room_type, nights)
    rate = discount_rate(nights)
    discount = base * rate
    discounted = base - discount
    tax = tax_amount(discounted)
    return PriceBreakdown(
        base_price=base,
        discount_rate=rate,
        discount_amount=discount,
        price_after_discount=discounted,
        tax=tax,
        total_price=discounted + tax,
        tax_rate=TAX_RATE,
    )
