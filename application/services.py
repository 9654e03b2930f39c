"""Application Services - Business use cases"""
import logging
from datetime import date
from typing import List, Mapping, Optional

from domain import availability
from domain import pricing
from domain.date_validator import ranges_overlap, validation_message
from domain.entities import Reservation
from domain.enums import ReservationStatus, RoomType
from domain.exceptions import (
    InvalidArgumentError,
    InvalidReservationError,
    ReservationNotFoundError,
)
from domain.repositories import ReservationRepository
from domain.route_graph import RouteGraph
from domain.value_objects import (
    AvailabilityReport,
    DateRange,
    NearbyCity,
    PriceBreakdown,
    ReservationSummary,
    Route,
)

logger = logging.getLogger(__name__)


class ReservationService:
    """Service for Reservation business use cases.

    Creation and date changes read a snapshot of every reservation, decide
    availability, then write. The read and the write are separate store
    calls, so two concurrent requests for the last room of a type can both
    pass the check and both be saved.
    """

    def __init__(self, repository: ReservationRepository):
        if repository is None:
            raise InvalidArgumentError("Repository cannot be null")
        self.repository = repository

    # ==================== LIFECYCLE ====================
    async def create_reservation(
        self,
        guest_name: str,
        guest_email: str,
        check_in: date,
        check_out: date,
        room_type: RoomType
    ) -> Reservation:
        """Create new reservation with full validation"""
        Reservation.validate_guest(guest_name, guest_email)
        if room_type is None:
            raise InvalidReservationError("Room type is required")
        self._validate_dates(check_in, check_out)

        existing = await self.repository.find_all()
        result = availability.validate_new_reservation(existing, room_type, check_in, check_out)
        if not result.valid:
            logger.warning("Rejected %s reservation for %s: %s", room_type.value, guest_email, result.message)
            raise InvalidReservationError(result.message)

        reservation = Reservation.create(
            guest_name=guest_name,
            guest_email=guest_email,
            check_in=check_in,
            check_out=check_out,
            room_type=room_type,
            total_price=pricing.total_price_for_stay(room_type, check_in, check_out),
        )
        saved = await self.repository.save(reservation)
        logger.info("Created reservation %s (%s, %d nights)", saved.id, room_type.value, saved.nights())
        return saved

    async def get_reservation(self, reservation_id: str) -> Reservation:
        """Get reservation by ID"""
        reservation = await self.repository.find_by_id(reservation_id)
        if reservation is None:
            raise ReservationNotFoundError(f"Reservation not found with ID: {reservation_id}")
        return reservation

    async def get_all_reservations(self) -> List[Reservation]:
        """Get all reservations"""
        return await self.repository.find_all()

    async def confirm_reservation(self, reservation_id: str) -> Reservation:
        """PENDING -> CONFIRMED"""
        reservation = await self.get_reservation(reservation_id)
        reservation.confirm()
        updated = await self.repository.update(reservation)
        logger.info("Confirmed reservation %s", reservation_id)
        return updated

    async def check_in_guest(self, reservation_id: str) -> Reservation:
        """CONFIRMED -> CHECKED_IN"""
        reservation = await self.get_reservation(reservation_id)
        reservation.check_in_guest()
        updated = await self.repository.update(reservation)
        logger.info("Checked in reservation %s", reservation_id)
        return updated

    async def check_out_guest(self, reservation_id: str) -> Reservation:
        """CHECKED_IN -> COMPLETED"""
        reservation = await self.get_reservation(reservation_id)
        reservation.check_out_guest()
        updated = await self.repository.update(reservation)
        logger.info("Completed reservation %s", reservation_id)
        return updated

    async def cancel_reservation(self, reservation_id: str) -> Reservation:
        """Cancel from PENDING, CONFIRMED or CHECKED_IN"""
        reservation = await self.get_reservation(reservation_id)
        reservation.cancel()
        updated = await self.repository.update(reservation)
        logger.info("Cancelled reservation %s", reservation_id)
        return updated

    async def update_reservation_dates(
        self,
        reservation_id: str,
        new_check_in: date,
        new_check_out: date
    ) -> Reservation:
        """Move a reservation to new dates, rechecking availability and price"""
        reservation = await self.get_reservation(reservation_id)
        reservation.ensure_modifiable()
        self._validate_dates(new_check_in, new_check_out)

        others = [r for r in await self.repository.find_all() if r.id != reservation_id]
        result = availability.validate_new_reservation(
            others, reservation.room_type, new_check_in, new_check_out
        )
        if not result.valid:
            logger.warning("Rejected date change for %s: %s", reservation_id, result.message)
            raise InvalidReservationError(result.message)

        reservation.reschedule(DateRange(check_in=new_check_in, check_out=new_check_out))
        updated = await self.repository.update(reservation)
        logger.info("Moved reservation %s to %s - %s", reservation_id, new_check_in, new_check_out)
        return updated

    async def delete_reservation(self, reservation_id: str) -> bool:
        """Hard delete, regardless of status"""
        deleted = await self.repository.delete(reservation_id)
        if deleted:
            logger.info("Deleted reservation %s", reservation_id)
        return deleted

    # ==================== SEARCH ====================
    async def find_by_guest_name(self, guest_name: Optional[str]) -> List[Reservation]:
        """Case-insensitive substring match"""
        if guest_name is None or not guest_name.strip():
            return []
        term = guest_name.lower()
        return [r for r in await self.repository.find_all() if term in r.guest_name.lower()]

    async def find_by_guest_email(self, guest_email: Optional[str]) -> List[Reservation]:
        """Case-insensitive exact match"""
        if guest_email is None or not guest_email.strip():
            return []
        term = guest_email.lower()
        return [r for r in await self.repository.find_all() if r.guest_email.lower() == term]

    async def find_by_status(self, status: Optional[ReservationStatus]) -> List[Reservation]:
        if status is None:
            return []
        return [r for r in await self.repository.find_all() if r.status == status]

    async def find_by_room_type(self, room_type: Optional[RoomType]) -> List[Reservation]:
        if room_type is None:
            return []
        return [r for r in await self.repository.find_all() if r.room_type == room_type]

    async def find_by_date_range(
        self,
        check_in: Optional[date],
        check_out: Optional[date]
    ) -> List[Reservation]:
        """Reservations whose stay overlaps the range"""
        if check_in is None or check_out is None:
            return []
        return [
            r for r in await self.repository.find_all()
            if ranges_overlap(r.check_in, r.check_out, check_in, check_out)
        ]

    # ==================== AVAILABILITY & PRICING ====================
    async def get_availability_report(self, check_in: date, check_out: date) -> AvailabilityReport:
        return availability.availability_report(
            await self.repository.find_all(), check_in, check_out
        )

    async def is_room_available(self, room_type: RoomType, check_in: date, check_out: date) -> bool:
        return availability.is_available(
            await self.repository.find_all(), room_type, check_in, check_out
        )

    async def get_available_room_count(
        self,
        room_type: RoomType,
        check_in: date,
        check_out: date
    ) -> int:
        return availability.available_count(
            await self.repository.find_all(), room_type, check_in, check_out
        )

    async def get_price_quote(
        self,
        room_type: RoomType,
        check_in: date,
        check_out: date
    ) -> PriceBreakdown:
        """Quote a stay without storing anything"""
        if room_type is None:
            raise InvalidReservationError("Room type is required")
        self._validate_dates(check_in, check_out)
        return pricing.price_breakdown(room_type, (check_out - check_in).days)

    # ==================== REPORTING ====================
    async def get_summary(self) -> ReservationSummary:
        reservations = await self.repository.find_all()
        return ReservationSummary.from_statuses([r.status for r in reservations])

    async def get_total_count(self) -> int:
        return await self.repository.count()

    @staticmethod
    def _validate_dates(check_in: Optional[date], check_out: Optional[date]) -> None:
        message = validation_message(check_in, check_out)
        if message:
            raise InvalidReservationError(message)


# Sample network used when the API starts with route seeding enabled.
DEMO_NETWORK = {
    "Guadalajara": {"Mexico City": 540, "Puerto Vallarta": 300, "Leon": 220},
    "Mexico City": {"Guadalajara": 540, "Cancun": 1600, "Puebla": 130},
    "Puerto Vallarta": {"Guadalajara": 300},
    "Leon": {"Guadalajara": 220, "Aguascalientes": 130},
    "Aguascalientes": {"Leon": 130},
    "Cancun": {"Mexico City": 1600, "Playa del Carmen": 68},
    "Puebla": {"Mexico City": 130},
    "Playa del Carmen": {"Cancun": 68},
}


class RouteService:
    """Service for route and nearby-city use cases over one graph"""

    def __init__(self, graph: Optional[RouteGraph] = None):
        self.graph = graph if graph is not None else RouteGraph()

    def seed(self, network: Mapping[str, Mapping[str, float]] = DEMO_NETWORK) -> None:
        """Load a network of cities, replacing neighbor maps of cities already present"""
        for city, neighbors in network.items():
            self.graph.add_city(city, neighbors)
        logger.info("Seeded route graph with %d cities", len(network))

    def list_cities(self) -> List[str]:
        return sorted(self.graph.cities())

    def add_city(self, name: str, neighbors: Optional[Mapping[str, float]] = None) -> None:
        self.graph.add_city(name, neighbors)
        logger.info("Added city %s", name)

    def remove_city(self, name: str) -> bool:
        return self.graph.remove_city(name)

    def add_connection(self, city1: str, city2: str, distance: float) -> None:
        self.graph.add_connection(city1, city2, distance)

    def remove_connection(self, city1: str, city2: str) -> bool:
        return self.graph.remove_connection(city1, city2)

    def shortest_path(self, start: str, end: str) -> Route:
        return self.graph.shortest_path(start, end)

    def nearby_cities(self, start: str, max_distance: float) -> List[NearbyCity]:
        return self.graph.nearby_cities(start, max_distance)
