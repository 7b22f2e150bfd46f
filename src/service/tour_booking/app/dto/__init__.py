"""Application layer DTOs"""

from src.service.tour_booking.app.dto.booking_listing import (
    BookingFilters,
    BookingPage,
    BookingSortField,
    PageRequest,
    SortOrder,
)
from src.service.tour_booking.app.dto.booking_results import BookingDetails, CancellationResult
from src.service.tour_booking.app.dto.booking_statistics import BookingStatistics

__all__ = [
    'BookingDetails',
    'BookingFilters',
    'BookingPage',
    'BookingSortField',
    'BookingStatistics',
    'CancellationResult',
    'PageRequest',
    'SortOrder',
]
