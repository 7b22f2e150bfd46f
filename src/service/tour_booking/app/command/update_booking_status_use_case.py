from datetime import datetime, timezone
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.exception.exceptions import InvalidInputError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.tour_booking.app.booking_access import load_booking
from src.service.tour_booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.tour_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.tour_booking.domain.booking_state_machine import BookingStateMachine
from src.service.tour_booking.domain.entity.booking_entity import Booking
from src.service.tour_booking.domain.entity.user_entity import UserEntity
from src.service.tour_booking.domain.enum.booking_status import BookingStatus


class UpdateBookingStatusUseCase:
    """
    Staff-driven status transition.

    A move to `cancelled` goes through CancelBookingUseCase so the refund and
    slot release apply exactly as for an owner cancellation.
    """

    def __init__(
        self,
        *,
        booking_command_repo: IBookingCommandRepo,
        cancel_booking_use_case: CancelBookingUseCase,
    ) -> None:
        self.booking_command_repo = booking_command_repo
        self.cancel_booking_use_case = cancel_booking_use_case
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        booking_command_repo: IBookingCommandRepo = Depends(
            Provide[Container.booking_command_repo]
        ),
        cancel_booking_use_case: CancelBookingUseCase = Depends(CancelBookingUseCase.depends),
    ) -> Self:
        return cls(
            booking_command_repo=booking_command_repo,
            cancel_booking_use_case=cancel_booking_use_case,
        )

    @Logger.io
    async def execute(
        self, *, booking_id: UUID, actor: UserEntity, status: str, note: str = ''
    ) -> Booking:
        try:
            target = BookingStatus(status)
        except ValueError:
            raise InvalidInputError('Invalid booking status') from None

        if target == BookingStatus.CANCELLED:
            result = await self.cancel_booking_use_case.execute(
                booking_id=booking_id, actor=actor, reason=note, check_ownership=False
            )
            return result.booking

        with self.tracer.start_as_current_span(
            'use_case.update_booking_status',
            attributes={'booking.id': str(booking_id), 'booking.target_status': target},
        ):
            booking = await load_booking(self.booking_command_repo, booking_id)
            BookingStateMachine.guard(booking, target, now=datetime.now(timezone.utc))

            updated = await self.booking_command_repo.update_status(
                booking_id=booking_id, status=target, changed_by=actor.id, note=note
            )
            metrics.record_status_transition(from_status=booking.status, to_status=target)
            Logger.base.info(
                f'🔁 [UPDATE-STATUS] {booking.booking_code} {booking.status} -> {target} '
                f'by {actor.id}'
            )
            return updated
