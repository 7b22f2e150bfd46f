"""Filter, sort and page DTOs for booking listings."""

from datetime import date
from enum import StrEnum
import math
from typing import List, Optional

import attrs

from src.service.tour_booking.domain.business_config import ListingDefaults
from src.service.tour_booking.domain.entity.booking_entity import Booking
from src.service.tour_booking.domain.enum.booking_status import BookingStatus


class BookingSortField(StrEnum):
    CREATED_AT = 'createdAt'
    UPDATED_AT = 'updatedAt'
    TOTAL = 'total'


class SortOrder(StrEnum):
    ASC = 'asc'
    DESC = 'desc'


@attrs.define(frozen=True)
class BookingFilters:
    """
    Conjunctive equality on status/user/tour plus an inclusive range on
    selected_date.start_date.
    """

    status: Optional[BookingStatus] = None
    user_id: Optional[str] = None
    tour_id: Optional[str] = None
    start_date_from: Optional[date] = None
    start_date_to: Optional[date] = None

    def matches(self, booking: Booking) -> bool:
        if self.status is not None and booking.status != self.status:
            return False
        if self.user_id is not None and booking.user_id != self.user_id:
            return False
        if self.tour_id is not None and booking.tour_id != self.tour_id:
            return False
        start = booking.selected_date.start_date
        if self.start_date_from is not None and start < self.start_date_from:
            return False
        if self.start_date_to is not None and start > self.start_date_to:
            return False
        return True


def _clamp_limit(value: int) -> int:
    return max(1, min(value, ListingDefaults.MAX_LIMIT))


@attrs.define(frozen=True)
class PageRequest:
    page: int = attrs.field(default=ListingDefaults.PAGE, converter=lambda v: max(1, v))
    limit: int = attrs.field(default=ListingDefaults.LIMIT, converter=_clamp_limit)
    sort_by: BookingSortField = BookingSortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@attrs.define(frozen=True)
class BookingPage:
    items: List[Booking]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


def booking_sort_value(booking: Booking, field: BookingSortField) -> object:
    if field == BookingSortField.TOTAL:
        return booking.pricing.total
    if field == BookingSortField.UPDATED_AT:
        return booking.updated_at or booking.created_at
    return booking.created_at
