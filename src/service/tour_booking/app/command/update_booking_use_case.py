from typing import Any, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.tour_booking.app.booking_access import ensure_booking_access, load_booking
from src.service.tour_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.tour_booking.domain.entity.booking_entity import Booking
from src.service.tour_booking.domain.entity.user_entity import UserEntity


class UpdateBookingUseCase:
    """Owner edits of non-financial fields; blocked fields never reach the store."""

    def __init__(self, *, booking_command_repo: IBookingCommandRepo) -> None:
        self.booking_command_repo = booking_command_repo
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        booking_command_repo: IBookingCommandRepo = Depends(
            Provide[Container.booking_command_repo]
        ),
    ) -> Self:
        return cls(booking_command_repo=booking_command_repo)

    @Logger.io
    async def execute(
        self, *, booking_id: UUID, actor: UserEntity, changes: dict[str, Any]
    ) -> Booking:
        with self.tracer.start_as_current_span(
            'use_case.update_booking',
            attributes={'booking.id': str(booking_id), 'user.id': actor.id},
        ):
            booking = await load_booking(self.booking_command_repo, booking_id)
            ensure_booking_access(booking, actor, action='update')

            return await self.booking_command_repo.update_details(
                booking_id=booking_id, changes=changes, updated_by=actor.id
            )
