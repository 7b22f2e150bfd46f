from datetime import datetime, timezone
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.tour_booking.app.booking_access import ensure_booking_access, load_booking
from src.service.tour_booking.app.dto.booking_results import CancellationResult
from src.service.tour_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.tour_booking.app.interface.i_notification_gateway import INotificationGateway
from src.service.tour_booking.app.interface.i_tour_catalog import ITourCatalog
from src.service.tour_booking.domain.booking_state_machine import BookingStateMachine
from src.service.tour_booking.domain.entity.booking_entity import Booking
from src.service.tour_booking.domain.entity.user_entity import UserEntity
from src.service.tour_booking.domain.enum.booking_status import BookingStatus
from src.service.tour_booking.domain.refund_policy import RefundPolicy


class CancelBookingUseCase:
    """
    Cancel a pending or confirmed booking.

    The refund is a tiered share of what was actually paid. Releasing the
    slots and the cancellation email are best-effort: once the cancellation is
    persisted the caller always gets a success.
    """

    def __init__(
        self,
        *,
        booking_command_repo: IBookingCommandRepo,
        tour_catalog: ITourCatalog,
        notification_gateway: INotificationGateway,
    ) -> None:
        self.booking_command_repo = booking_command_repo
        self.tour_catalog = tour_catalog
        self.notification_gateway = notification_gateway
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        booking_command_repo: IBookingCommandRepo = Depends(
            Provide[Container.booking_command_repo]
        ),
        tour_catalog: ITourCatalog = Depends(Provide[Container.tour_catalog]),
        notification_gateway: INotificationGateway = Depends(
            Provide[Container.notification_gateway]
        ),
    ) -> Self:
        return cls(
            booking_command_repo=booking_command_repo,
            tour_catalog=tour_catalog,
            notification_gateway=notification_gateway,
        )

    @Logger.io
    async def execute(
        self,
        *,
        booking_id: UUID,
        actor: UserEntity,
        reason: str = '',
        check_ownership: bool = True,
    ) -> CancellationResult:
        with self.tracer.start_as_current_span(
            'use_case.cancel_booking',
            attributes={'booking.id': str(booking_id), 'user.id': actor.id},
        ):
            booking = await load_booking(self.booking_command_repo, booking_id)
            if check_ownership:
                ensure_booking_access(booking, actor, action='cancel')

            now = datetime.now(timezone.utc)
            BookingStateMachine.guard(booking, BookingStatus.CANCELLED, now=now)

            decision = RefundPolicy.decide(
                selected_date=booking.selected_date,
                paid_amount=booking.payment.paid_amount,
                now=now,
            )
            cancelled = await self.booking_command_repo.cancel(
                booking_id=booking_id,
                cancelled_by=actor.id,
                reason=reason,
                refund_amount=decision.refund_amount,
            )
            metrics.record_booking_cancelled(
                tour_id=booking.tour_id, refund_percentage=decision.percentage
            )
            metrics.record_status_transition(
                from_status=booking.status, to_status=BookingStatus.CANCELLED
            )
            Logger.base.info(
                f'🚫 [CANCEL-BOOKING] {booking.booking_code} cancelled, '
                f'{decision.policy_text}, refund {decision.percentage}% = {decision.refund_amount}'
            )

            await self._release_slots(booking)

            try:
                await self.notification_gateway.send_cancellation(
                    booking=cancelled, refund_amount=decision.refund_amount
                )
            except Exception as e:
                metrics.record_side_effect_failure(kind='notification')
                Logger.base.error(
                    f'[CANCEL-BOOKING] Cancellation email failed for {booking.booking_code}: {e}'
                )

            return CancellationResult(
                booking=cancelled,
                refund_amount=decision.refund_amount,
                refund_policy=decision.policy_text,
            )

    async def _release_slots(self, booking: Booking) -> None:
        try:
            await self.tour_catalog.decrement_booked_slots(
                tour_id=booking.tour_id,
                start_date=booking.selected_date.start_date,
                end_date=booking.selected_date.end_date,
                slots=booking.total_participants,
            )
        except Exception as e:
            metrics.record_side_effect_failure(kind='slot_release')
            Logger.base.error(
                f'[CANCEL-BOOKING] Slot release failed for {booking.booking_code}: {e}'
            )
            return
        metrics.record_booking_released(tour_id=booking.tour_id, slots=booking.total_participants)
