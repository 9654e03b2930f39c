"""In-Memory Repository Implementations"""
import logging
import threading
from typing import Optional, List, Dict

from domain.repositories import ReservationRepository
from domain.entities import Reservation
from domain.exceptions import InvalidArgumentError, ReservationNotFoundError

logger = logging.getLogger(__name__)


def _check_id(reservation_id: Optional[str]) -> None:
    if reservation_id is None or not str(reservation_id).strip():
        raise InvalidArgumentError("ID cannot be null or empty")


class InMemoryReservationRepository(ReservationRepository):
    """In-memory implementation of ReservationRepository.

    A lock guards the dict so calls from several threads never interleave
    inside one operation. Records are copied in and out, so callers never
    share state with the store or with each other.
    """

    def __init__(self):
        self._storage: Dict[str, Reservation] = {}
        self._lock = threading.Lock()

    async def save(self, reservation: Reservation) -> Reservation:
        """Save reservation to memory"""
        if reservation is None:
            raise InvalidArgumentError("Reservation cannot be null")
        _check_id(reservation.id)
        with self._lock:
            if reservation.id in self._storage:
                raise InvalidArgumentError(f"Reservation already exists with ID: {reservation.id}")
            self._storage[reservation.id] = reservation.model_copy(deep=True)
        logger.debug("Saved reservation %s", reservation.id)
        return reservation

    async def update(self, reservation: Reservation) -> Reservation:
        """Update reservation"""
        if reservation is None:
            raise InvalidArgumentError("Reservation cannot be null")
        _check_id(reservation.id)
        with self._lock:
            if reservation.id not in self._storage:
                raise ReservationNotFoundError(
                    f"Cannot update: Reservation not found with ID: {reservation.id}"
                )
            self._storage[reservation.id] = reservation.model_copy(deep=True)
        logger.debug("Updated reservation %s", reservation.id)
        return reservation

    async def find_by_id(self, reservation_id: str) -> Optional[Reservation]:
        """Find reservation by ID"""
        _check_id(reservation_id)
        with self._lock:
            reservation = self._storage.get(reservation_id)
            return reservation.model_copy(deep=True) if reservation else None

    async def find_all(self) -> List[Reservation]:
        """Find all reservations"""
        with self._lock:
            return [r.model_copy(deep=True) for r in self._storage.values()]

    async def delete(self, reservation_id: str) -> bool:
        """Delete reservation"""
        _check_id(reservation_id)
        with self._lock:
            removed = self._storage.pop(reservation_id, None) is not None
        if removed:
            logger.debug("Deleted reservation %s", reservation_id)
        return removed

    async def exists(self, reservation_id: str) -> bool:
        _check_id(reservation_id)
        with self._lock:
            return reservation_id in self._storage

    async def count(self) -> int:
        with self._lock:
            return len(self._storage)

    async def clear(self) -> None:
        with self._lock:
            self._storage.clear()

    def __repr__(self) -> str:
        return f"InMemoryReservationRepository(reservations={len(self._storage)})"
