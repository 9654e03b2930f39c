"""API Schemas - Request and Response DTOs"""
from pydantic import BaseModel, Field
from datetime import date
from decimal import Decimal
from typing import Dict, List

from domain.enums import ReservationStatus, RoomType


# ============================================================================
# RESERVATION SCHEMAS
# ============================================================================

class CreateReservationRequest(BaseModel):
    """Create reservation request DTO"""
    guest_name: str
    guest_email: str
    check_in: date
    check_out: date
    room_type: RoomType


class UpdateDatesRequest(BaseModel):
    """Change reservation dates request DTO"""
    check_in: date
    check_out: date


class ReservationResponse(BaseModel):
    """Reservation response DTO"""
    id: str
    guest_name: str
    guest_email: str
    check_in: date
    check_out: date
    nights: int
    room_type: RoomType
    total_price: Decimal
    status: ReservationStatus
    created_at: date


class DeleteResponse(BaseModel):
    """Delete reservation response DTO"""
    deleted: bool


class SummaryResponse(BaseModel):
    """Reservation counts by status"""
    total: int
    pending: int
    confirmed: int
    checked_in: int
    completed: int
    cancelled: int


# ============================================================================
# AVAILABILITY & PRICING SCHEMAS
# ============================================================================

class RoomAvailabilityResponse(BaseModel):
    """Availability of one room type"""
    room_type: RoomType
    available: int
    capacity: int
    status: str


class AvailabilityReportResponse(BaseModel):
    """Availability of every room type"""
    check_in: date
    check_out: date
    rooms: List[RoomAvailabilityResponse]


class PriceQuoteRequest(BaseModel):
    """Price quote request DTO"""
    room_type: RoomType
    check_in: date
    check_out: date


class PriceQuoteResponse(BaseModel):
    """Price breakdown response DTO"""
    room_type: RoomType
    nights: int
    base_price: Decimal
    discount_rate: Decimal
    discount_amount: Decimal
    price_after_discount: Decimal
    tax: Decimal
    total_price: Decimal
    formatted_total: str


# ============================================================================
# ROUTE SCHEMAS
# ============================================================================

class AddCityRequest(BaseModel):
    """Add or replace a city request DTO"""
    name: str = Field(min_length=1)
    neighbors: Dict[str, float] = {}


class ConnectionRequest(BaseModel):
    """Connect two cities request DTO"""
    city1: str
    city2: str
    distance: float = Field(ge=0)


class NearbyCityResponse(BaseModel):
    """City reachable within a distance"""
    city: str
    distance: float


class RouteResponse(BaseModel):
    """Shortest path response DTO"""
    path: List[str]
    distance: float


class CitiesResponse(BaseModel):
    """Cities in the route graph"""
    cities: List[str]
    count: int
