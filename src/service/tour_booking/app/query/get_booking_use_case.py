from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.tour_booking.app.booking_access import ensure_booking_access, load_booking
from src.service.tour_booking.app.dto.booking_results import BookingDetails
from src.service.tour_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.tour_booking.app.interface.i_tour_catalog import ITourCatalog
from src.service.tour_booking.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.tour_booking.domain.entity.booking_entity import Booking
from src.service.tour_booking.domain.entity.user_entity import UserEntity


class GetBookingUseCase:
    def __init__(
        self,
        *,
        booking_query_repo: IBookingQueryRepo,
        tour_catalog: ITourCatalog,
        user_query_repo: IUserQueryRepo,
    ) -> None:
        self.booking_query_repo = booking_query_repo
        self.tour_catalog = tour_catalog
        self.user_query_repo = user_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
        tour_catalog: ITourCatalog = Depends(Provide[Container.tour_catalog]),
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
    ) -> Self:
        return cls(
            booking_query_repo=booking_query_repo,
            tour_catalog=tour_catalog,
            user_query_repo=user_query_repo,
        )

    @Logger.io
    async def get_by_id(
        self, *, booking_id: UUID, actor: UserEntity, check_ownership: bool = True
    ) -> BookingDetails:
        booking = await load_booking(self.booking_query_repo, booking_id)
        if check_ownership:
            ensure_booking_access(booking, actor, action='view')
        return await self._with_details(booking)

    @Logger.io
    async def get_by_code(self, *, booking_code: str, actor: UserEntity) -> BookingDetails:
        booking = await self.booking_query_repo.get_by_code(booking_code=booking_code)
        if not booking:
            raise NotFoundError('Booking not found')
        ensure_booking_access(booking, actor, action='view')
        return await self._with_details(booking)

    async def _with_details(self, booking: Booking) -> BookingDetails:
        # joined at read time; a vanished tour or user leaves the field empty
        tour = await self.tour_catalog.get_tour_by_id(tour_id=booking.tour_id)
        user = await self.user_query_repo.get_by_id(user_id=booking.user_id)
        return BookingDetails(booking=booking, tour=tour, user=user)
