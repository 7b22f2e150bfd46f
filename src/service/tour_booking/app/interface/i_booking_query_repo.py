from abc import ABC, abstractmethod
from typing import Optional

from uuid_utils import UUID

from src.service.tour_booking.app.dto.booking_listing import (
    BookingFilters,
    BookingPage,
    PageRequest,
)
from src.service.tour_booking.app.dto.booking_statistics import BookingStatistics
from src.service.tour_booking.domain.entity.booking_entity import Booking


class IBookingQueryRepo(ABC):
    """Repository interface for booking read operations"""

    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        pass

    @abstractmethod
    async def get_by_code(self, *, booking_code: str) -> Optional[Booking]:
        pass

    @abstractmethod
    async def find_all(self, *, filters: BookingFilters, page: PageRequest) -> BookingPage:
        """Filtered, sorted page; `total` counts every match, not just this page."""
        pass

    @abstractmethod
    async def get_statistics(self) -> BookingStatistics:
        pass
