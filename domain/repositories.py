"""Domain Repository Interfaces"""
from abc import ABC, abstractmethod
from typing import Optional, List

from domain.entities import Reservation


class ReservationRepository(ABC):
    """Repository interface for Reservation Aggregate"""

    @abstractmethod
    async def save(self, reservation: Reservation) -> Reservation:
        """Store a new reservation; the id must not already be present"""
        pass

    @abstractmethod
    async def update(self, reservation: Reservation) -> Reservation:
        """Replace a stored reservation"""
        pass

    @abstractmethod
    async def find_by_id(self, reservation_id: str) -> Optional[Reservation]:
        """Find reservation by ID"""
        pass

    @abstractmethod
    async def find_all(self) -> List[Reservation]:
        """Snapshot of every reservation, in no particular order"""
        pass

    @abstractmethod
    async def delete(self, reservation_id: str) -> bool:
        """Delete reservation"""
        pass

    @abstractmethod
    async def exists(self, reservation_id: str) -> bool:
        pass

    @abstractmethod
    async def count(self) -> int:
        pass

    @abstractmethod
    async def clear(self) -> None:
        """Remove every reservation"""
        pass
