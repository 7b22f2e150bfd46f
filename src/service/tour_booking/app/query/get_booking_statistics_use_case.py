from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.tour_booking.app.dto.booking_statistics import BookingStatistics
from src.service.tour_booking.app.interface.i_booking_query_repo import IBookingQueryRepo


class GetBookingStatisticsUseCase:
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
    async def execute(self) -> BookingStatistics:
        return await self.booking_query_repo.get_statistics()
