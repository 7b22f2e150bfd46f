from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.exception.exceptions import BookingConflictError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.tour_booking.app.booking_access import ensure_booking_access, load_booking
from src.service.tour_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.tour_booking.app.interface.i_tour_catalog import ITourCatalog
from src.service.tour_booking.domain.entity.user_entity import UserEntity
from src.service.tour_booking.domain.enum.booking_status import BookingStatus


class DeleteBookingUseCase:
    """
    Hard-delete a pending booking.

    The slots it held are handed back to the tour best-effort, the same way a
    cancellation releases them.
    """

    def __init__(
        self, *, booking_command_repo: IBookingCommandRepo, tour_catalog: ITourCatalog
    ) -> None:
        self.booking_command_repo = booking_command_repo
        self.tour_catalog = tour_catalog
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        booking_command_repo: IBookingCommandRepo = Depends(
            Provide[Container.booking_command_repo]
        ),
        tour_catalog: ITourCatalog = Depends(Provide[Container.tour_catalog]),
    ) -> Self:
        return cls(booking_command_repo=booking_command_repo, tour_catalog=tour_catalog)

    @Logger.io
    async def execute(self, *, booking_id: UUID, actor: UserEntity) -> None:
        with self.tracer.start_as_current_span(
            'use_case.delete_booking',
            attributes={'booking.id': str(booking_id), 'user.id': actor.id},
        ):
            booking = await load_booking(self.booking_command_repo, booking_id)
            ensure_booking_access(booking, actor, action='delete')

            if booking.status != BookingStatus.PENDING:
                raise BookingConflictError(
                    'Only pending bookings can be deleted. '
                    'Please cancel confirmed bookings instead.'
                )

            await self.booking_command_repo.delete(booking_id=booking_id)
            Logger.base.info(
                f'🗑️ [DELETE-BOOKING] {booking.booking_code} deleted by {actor.id}'
            )

            try:
                await self.tour_catalog.decrement_booked_slots(
                    tour_id=booking.tour_id,
                    start_date=booking.selected_date.start_date,
                    end_date=booking.selected_date.end_date,
                    slots=booking.total_participants,
                )
                metrics.record_booking_released(
                    tour_id=booking.tour_id, slots=booking.total_participants
                )
            except Exception as e:
                metrics.record_side_effect_failure(kind='slot_release')
                Logger.base.error(
                    f'[DELETE-BOOKING] Slot release failed for {booking.booking_code}: {e}'
                )
