import logging

from fastapi import FastAPI, HTTPException, Depends, Query
from datetime import date
from typing import List, Optional

from api.schemas import (
    # Reservation
    CreateReservationRequest, UpdateDatesRequest, ReservationResponse,
    DeleteResponse, SummaryResponse,
    # Availability & pricing
    AvailabilityReportResponse, RoomAvailabilityResponse,
    PriceQuoteRequest, PriceQuoteResponse,
    # Routes
    AddCityRequest, ConnectionRequest, NearbyCityResponse, RouteResponse, CitiesResponse
)

from application.services import ReservationService, RouteService
from config import settings, configure_logging
from domain.enums import ReservationStatus, RoomType
from domain.exceptions import (
    CityNotFoundError, InvalidArgumentError, InvalidReservationError,
    InvalidTransitionError, NoPathError, ReservationNotFoundError
)
from domain.value_objects import format_price
from infrastructure.repositories.in_memory_repositories import InMemoryReservationRepository

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_title,
    description="Hotel reservations, availability, pricing and city routes",
    version=settings.app_version
)

# Initialize repositories
reservation_repo = InMemoryReservationRepository()
route_service = RouteService()
if settings.seed_route_graph:
    route_service.seed()

# Dependency injection
def get_reservation_service() -> ReservationService:
    return ReservationService(reservation_repo)

def get_route_service() -> RouteService:
    return route_service

# Domain errors that are the caller's fault
BAD_REQUEST_ERRORS = (InvalidReservationError, InvalidTransitionError, InvalidArgumentError)

# ============================================================================
# HEALTH & ENUM REFERENCE ENDPOINTS
# ============================================================================

@app.get("/api/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "message": "API is running"}

@app.get("/api/enums/reservation-status", tags=["Enum Reference"])
async def get_reservation_statuses():
    """Get all ReservationStatus enum values"""
    return {
        "values": [item.name for item in ReservationStatus],
        "description": "Reservation status values: PENDING, CONFIRMED, CHECKED_IN, COMPLETED, CANCELLED"
    }

@app.get("/api/enums/room-types", tags=["Enum Reference"])
async def get_room_types():
    """Get all RoomType values with nightly price and capacity"""
    return {
        "values": {
            item.name: {"base_price": item.base_price, "capacity": item.capacity}
            for item in RoomType
        },
        "description": "Room types: SINGLE, DOUBLE, SUITE, DELUXE"
    }

# ============================================================================
# RESERVATION ENDPOINTS
# ============================================================================

@app.post("/api/reservations", response_model=ReservationResponse, status_code=201, tags=["Reservations"])
async def create_reservation(
    request: CreateReservationRequest,
    service: ReservationService = Depends(get_reservation_service)
):
    """Create new reservation"""
    try:
        reservation = await service.create_reservation(
            guest_name=request.guest_name,
            guest_email=request.guest_email,
            check_in=request.check_in,
            check_out=request.check_out,
            room_type=request.room_type
        )
        return _reservation_to_response(reservation)
    except BAD_REQUEST_ERRORS as e:
        raise HTTPException(status_code=400, detail=str(e))

@app.get("/api/reservations", response_model=List[ReservationResponse], tags=["Reservations"])
async def get_all_reservations(
    service: ReservationService = Depends(get_reservation_service)
):
    """Get all reservations"""
    reservations = await service.get_all_reservations()
    return [_reservation_to_response(r) for r in reservations]

@app.get("/api/reservations/search", response_model=List[ReservationResponse], tags=["Reservations"])
async def search_reservations(
    guest_name: Optional[str] = None,
    guest_email: Optional[str] = None,
    status: Optional[ReservationStatus] = None,
    room_type: Optional[RoomType] = None,
    check_in: Optional[date] = None,
    check_out: Optional[date] = None,
    service: ReservationService = Depends(get_reservation_service)
):
    """Search by one filter: name, email, status, room type or overlapping dates"""
    if guest_name is not None:
        reservations = await service.find_by_guest_name(guest_name)
    elif guest_email is not None:
        reservations = await service.find_by_guest_email(guest_email)
    elif status is not None:
        reservations = await service.find_by_status(status)
    elif room_type is not None:
        reservations = await service.find_by_room_type(room_type)
    else:
        reservations = await service.find_by_date_range(check_in, check_out)
    return [_reservation_to_response(r) for r in reservations]

@app.get("/api/reservations/summary", response_model=SummaryResponse, tags=["Reservations"])
async def get_reservation_summary(
    service: ReservationService = Depends(get_reservation_service)
):
    """Count reservations by status"""
    summary = await service.get_summary()
    return SummaryResponse(**summary.model_dump())

@app.get("/api/reservations/{reservation_id}", response_model=ReservationResponse, tags=["Reservations"])
async def get_reservation(
    reservation_id: str,
    service: ReservationService = Depends(get_reservation_service)
):
    """Get reservation by ID"""
    try:
        reservation = await service.get_reservation(reservation_id)
        return _reservation_to_response(reservation)
    except ReservationNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@app.delete("/api/reservations/{reservation_id}", response_model=DeleteResponse, tags=["Reservations"])
async def delete_reservation(
    reservation_id: str,
    service: ReservationService = Depends(get_reservation_service)
):
    """Remove a reservation regardless of its status"""
    deleted = await service.delete_reservation(reservation_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Reservation not found with ID: {reservation_id}")
    return {"deleted": True}

@app.put("/api/reservations/{reservation_id}/dates", response_model=ReservationResponse, tags=["Reservations"])
async def update_reservation_dates(
    reservation_id: str,
    request: UpdateDatesRequest,
    service: ReservationService = Depends(get_reservation_service)
):
    """Move a reservation to new dates"""
    try:
        reservation = await service.update_reservation_dates(
            reservation_id=reservation_id,
            new_check_in=request.check_in,
            new_check_out=request.check_out
        )
        return _reservation_to_response(reservation)
    except ReservationNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except BAD_REQUEST_ERRORS as e:
        raise HTTPException(status_code=400, detail=str(e))

@app.post("/api/reservations/{reservation_id}/confirm", response_model=ReservationResponse, tags=["Reservations"])
async def confirm_reservation(
    reservation_id: str,
    service: ReservationService = Depends(get_reservation_service)
):
    """Confirm a pending reservation"""
    return await _transition(service.confirm_reservation, reservation_id)

@app.post("/api/reservations/{reservation_id}/check-in", response_model=ReservationResponse, tags=["Reservations"])
async def check_in_guest(
    reservation_id: str,
    service: ReservationService = Depends(get_reservation_service)
):
    """Check in guest"""
    return await _transition(service.check_in_guest, reservation_id)

@app.post("/api/reservations/{reservation_id}/check-out", response_model=ReservationResponse, tags=["Reservations"])
async def check_out_guest(
    reservation_id: str,
    service: ReservationService = Depends(get_reservation_service)
):
    """Check out guest and complete the reservation"""
    return await _transition(service.check_out_guest, reservation_id)

@app.post("/api/reservations/{reservation_id}/cancel", response_model=ReservationResponse, tags=["Reservations"])
async def cancel_reservation(
    reservation_id: str,
    service: ReservationService = Depends(get_reservation_service)
):
    """Cancel reservation"""
    return await _transition(service.cancel_reservation, reservation_id)

# ============================================================================
# AVAILABILITY & PRICING ENDPOINTS
# ============================================================================

@app.get("/api/availability", response_model=AvailabilityReportResponse, tags=["Availability"])
async def get_availability_report(
    check_in: date,
    check_out: date,
    service: ReservationService = Depends(get_reservation_service)
):
    """Availability of every room type for a date range"""
    report = await service.get_availability_report(check_in, check_out)
    return AvailabilityReportResponse(
        check_in=report.check_in,
        check_out=report.check_out,
        rooms=[
            RoomAvailabilityResponse(
                room_type=room.room_type,
                available=room.available,
                capacity=room.capacity,
                status=room.status
            )
            for room in report.rooms
        ]
    )

@app.get("/api/availability/{room_type}", tags=["Availability"])
async def check_room_availability(
    room_type: RoomType,
    check_in: date,
    check_out: date,
    service: ReservationService = Depends(get_reservation_service)
):
    """Check one room type for a date range"""
    available_rooms = await service.get_available_room_count(room_type, check_in, check_out)
    return {
        "room_type": room_type.value,
        "available": available_rooms > 0,
        "available_rooms": available_rooms
    }

@app.post("/api/pricing/quote", response_model=PriceQuoteResponse, tags=["Pricing"])
async def get_price_quote(
    request: PriceQuoteRequest,
    service: ReservationService = Depends(get_reservation_service)
):
    """Quote a stay without creating a reservation"""
    try:
        breakdown = await service.get_price_quote(request.room_type, request.check_in, request.check_out)
    except BAD_REQUEST_ERRORS as e:
        raise HTTPException(status_code=400, detail=str(e))
    return PriceQuoteResponse(
        room_type=request.room_type,
        nights=(request.check_out - request.check_in).days,
        base_price=breakdown.base_price,
        discount_rate=breakdown.discount_rate,
        discount_amount=breakdown.discount_amount,
        price_after_discount=breakdown.price_after_discount,
        tax=breakdown.tax,
        total_price=breakdown.total_price,
        formatted_total=format_price(breakdown.total_price)
    )

# ============================================================================
# ROUTE ENDPOINTS
# ============================================================================

@app.get("/api/routes/cities", response_model=CitiesResponse, tags=["Routes"])
async def list_cities(service: RouteService = Depends(get_route_service)):
    """List cities in the route graph"""
    cities = service.list_cities()
    return {"cities": cities, "count": len(cities)}

@app.post("/api/routes/cities", status_code=201, tags=["Routes"])
async def add_city(request: AddCityRequest, service: RouteService = Depends(get_route_service)):
    """Add a city or replace its neighbors"""
    try:
        service.add_city(request.name, request.neighbors)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"city": request.name, "neighbors": request.neighbors}

@app.delete("/api/routes/cities/{name}", tags=["Routes"])
async def remove_city(name: str, service: RouteService = Depends(get_route_service)):
    """Remove a city and every connection to it"""
    if not service.remove_city(name):
        raise HTTPException(status_code=404, detail=f"City '{name}' does not exist in the graph")
    return {"removed": True}

@app.post("/api/routes/connections", status_code=201, tags=["Routes"])
async def add_connection(request: ConnectionRequest, service: RouteService = Depends(get_route_service)):
    """Connect two cities in both directions"""
    try:
        service.add_connection(request.city1, request.city2, request.distance)
    except CityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"city1": request.city1, "city2": request.city2, "distance": request.distance}

@app.delete("/api/routes/connections", tags=["Routes"])
async def remove_connection(city1: str, city2: str, service: RouteService = Depends(get_route_service)):
    """Disconnect two cities"""
    return {"removed": service.remove_connection(city1, city2)}

@app.get("/api/routes/shortest-path", response_model=RouteResponse, tags=["Routes"])
async def shortest_path(start: str, end: str, service: RouteService = Depends(get_route_service)):
    """Shortest route between two cities"""
    try:
        route = service.shortest_path(start, end)
    except (CityNotFoundError, NoPathError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    return RouteResponse(path=route.path, distance=route.distance)

@app.get("/api/routes/nearby", response_model=List[NearbyCityResponse], tags=["Routes"])
async def nearby_cities(
    start: str,
    max_distance: float = Query(ge=0),
    service: RouteService = Depends(get_route_service)
):
    """Cities within a road distance of start"""
    try:
        nearby = service.nearby_cities(start, max_distance)
    except CityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return [NearbyCityResponse(city=n.city, distance=n.distance) for n in nearby]

# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

async def _transition(action, reservation_id: str) -> ReservationResponse:
    """Run a lifecycle transition and map domain errors to HTTP errors"""
    try:
        reservation = await action(reservation_id)
        return _reservation_to_response(reservation)
    except ReservationNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except BAD_REQUEST_ERRORS as e:
        raise HTTPException(status_code=400, detail=str(e))

def _reservation_to_response(reservation) -> ReservationResponse:
    """Convert Reservation entity to ReservationResponse"""
    return ReservationResponse(
        id=reservation.id,
        guest_name=reservation.guest_name,
        guest_email=reservation.guest_email,
        check_in=reservation.check_in,
        check_out=reservation.check_out,
        nights=reservation.nights(),
        room_type=reservation.room_type,
        total_price=reservation.total_price,
        status=reservation.status,
        created_at=reservation.created_at
    )

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
