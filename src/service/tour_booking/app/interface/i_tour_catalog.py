"""
Tour Catalog Interface

The only channel through which the booking engine reads tours or touches
slot inventory. Slots are keyed by (tour_id, start_date, end_date).
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from src.service.tour_booking.domain.entity.tour_entity import Tour


class ITourCatalog(ABC):
    @abstractmethod
    async def get_tour_by_id(self, *, tour_id: str) -> Optional[Tour]:
        pass

    @abstractmethod
    async def get_available_slots(self, *, tour_id: str, start_date: date, end_date: date) -> int:
        """
        max(max_slots - booked_slots, 0); 0 for an unknown slot.

        Raises NotFoundError for an unknown tour.
        """
        pass

    @abstractmethod
    async def increment_booked_slots(
        self, *, tour_id: str, start_date: date, end_date: date, slots: int
    ) -> None:
        """No-op for an unknown slot."""
        pass

    @abstractmethod
    async def decrement_booked_slots(
        self, *, tour_id: str, start_date: date, end_date: date, slots: int
    ) -> None:
        """Floors at zero; no-op for an unknown slot."""
        pass

    @abstractmethod
    async def reserve_slots(
        self, *, tour_id: str, start_date: date, end_date: date, slots: int
    ) -> bool:
        """
        Atomic check-and-increment.

        Returns False, leaving the slot untouched, when fewer than `slots`
        seats are available at the moment of the write.
        """
        pass
