from datetime import date
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import InvalidInputError
from src.platform.logging.loguru_io import Logger
from src.service.tour_booking.app.dto.booking_listing import (
    BookingFilters,
    BookingPage,
    PageRequest,
)
from src.service.tour_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.tour_booking.domain.enum.booking_status import BookingStatus


class ListBookingsUseCase:
    def __init__(self, *, booking_query_repo: IBookingQueryRepo) -> None:
        self.booking_query_repo = booking_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
    ) -> Self:
        return cls(booking_query_repo=booking_query_repo)

    @Logger.io
    async def list_user_bookings(
        self,
        *,
        user_id: str,
        page: PageRequest,
        status: Optional[str] = None,
        start_date_from: Optional[date] = None,
        start_date_to: Optional[date] = None,
    ) -> BookingPage:
        filters = self._build_filters(
            status=status,
            user_id=user_id,
            start_date_from=start_date_from,
            start_date_to=start_date_to,
        )
        return await self.booking_query_repo.find_all(filters=filters, page=page)

    @Logger.io
    async def list_all_bookings(
        self,
        *,
        page: PageRequest,
        status: Optional[str] = None,
        user_id: Optional[str] = None,
        tour_id: Optional[str] = None,
        start_date_from: Optional[date] = None,
        start_date_to: Optional[date] = None,
    ) -> BookingPage:
        filters = self._build_filters(
            status=status,
            user_id=user_id,
            tour_id=tour_id,
            start_date_from=start_date_from,
            start_date_to=start_date_to,
        )
        return await self.booking_query_repo.find_all(filters=filters, page=page)

    @Logger.io
    async def list_tour_bookings(
        self,
        *,
        tour_id: str,
        page: PageRequest,
        status: Optional[str] = None,
        start_date_from: Optional[date] = None,
        start_date_to: Optional[date] = None,
    ) -> BookingPage:
        filters = self._build_filters(
            status=status,
            tour_id=tour_id,
            start_date_from=start_date_from,
            start_date_to=start_date_to,
        )
        return await self.booking_query_repo.find_all(filters=filters, page=page)

    @staticmethod
    def _build_filters(
        *,
        status: Optional[str] = None,
        user_id: Optional[str] = None,
        tour_id: Optional[str] = None,
        start_date_from: Optional[date] = None,
        start_date_to: Optional[date] = None,
    ) -> BookingFilters:
        try:
            booking_status = BookingStatus(status) if status else None
        except ValueError:
            raise InvalidInputError('Invalid booking status') from None
        return BookingFilters(
            status=booking_status,
            user_id=user_id,
            tour_id=tour_id,
            start_date_from=start_date_from,
            start_date_to=start_date_to,
        )
