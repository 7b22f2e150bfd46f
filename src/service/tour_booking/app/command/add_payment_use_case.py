from datetime import datetime, timezone
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.exception.exceptions import BookingConflictError, InvalidInputError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.tour_booking.app.booking_access import ensure_booking_access, load_booking
from src.service.tour_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.tour_booking.app.interface.i_notification_gateway import INotificationGateway
from src.service.tour_booking.domain.booking_state_machine import BookingStateMachine
from src.service.tour_booking.domain.business_config import BookingDefaults, StatusNotes
from src.service.tour_booking.domain.entity.booking_entity import Booking
from src.service.tour_booking.domain.entity.user_entity import UserEntity
from src.service.tour_booking.domain.enum.booking_status import BookingStatus
from src.service.tour_booking.domain.enum.payment_method import PaymentMethod
from src.service.tour_booking.domain.value_object.payment_ledger import PaymentTransaction


def default_transaction_id(now: datetime) -> str:
    return f'{BookingDefaults.TRANSACTION_ID_PREFIX}{int(now.timestamp() * 1000)}'


class AddPaymentUseCase:
    """
    Record a payment transaction against a booking.

    Flow:
    1. Validate amount (0 < amount <= remaining) and method
    2. Append the transaction; the ledger recomputes paid/remaining/deposit
    3. If this payment flipped the deposit latch on a pending booking, confirm it
       through the same guarded transition used for manual confirmation
    4. Send the payment confirmation email (best-effort)
    """

    def __init__(
        self,
        *,
        booking_command_repo: IBookingCommandRepo,
        notification_gateway: INotificationGateway,
    ) -> None:
        self.booking_command_repo = booking_command_repo
        self.notification_gateway = notification_gateway
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        booking_command_repo: IBookingCommandRepo = Depends(
            Provide[Container.booking_command_repo]
        ),
        notification_gateway: INotificationGateway = Depends(
            Provide[Container.notification_gateway]
        ),
    ) -> Self:
        return cls(
            booking_command_repo=booking_command_repo,
            notification_gateway=notification_gateway,
        )

    @Logger.io
    async def execute(
        self,
        *,
        booking_id: UUID,
        actor: UserEntity,
        amount: Optional[int],
        method: Optional[str] = None,
        transaction_id: Optional[str] = None,
        note: str = '',
        check_ownership: bool = True,
    ) -> Booking:
        with self.tracer.start_as_current_span(
            'use_case.add_payment',
            attributes={'booking.id': str(booking_id), 'user.id': actor.id},
        ):
            booking = await load_booking(self.booking_command_repo, booking_id)
            if check_ownership:
                ensure_booking_access(booking, actor, action='pay for')

            if booking.status == BookingStatus.CANCELLED:
                raise BookingConflictError('Cannot add payment to a cancelled booking')
            if not amount or amount <= 0:
                raise InvalidInputError('Invalid payment amount')
            if amount > booking.payment.remaining_amount:
                raise BookingConflictError(
                    'Payment amount exceeds remaining amount of '
                    f'{booking.payment.remaining_amount}'
                )
            payment_method = self._parse_method(method, fallback=booking.payment.method)

            now = datetime.now(timezone.utc)
            transaction = PaymentTransaction(
                transaction_id=transaction_id or default_transaction_id(now),
                amount=amount,
                method=payment_method,
                paid_at=now,
                note=note,
            )
            paid = await self.booking_command_repo.add_payment_transaction(
                booking_id=booking_id, transaction=transaction, recorded_by=actor.id
            )
            metrics.record_payment(method=payment_method, amount=amount)
            Logger.base.info(
                f'💰 [ADD-PAYMENT] {paid.booking_code} +{amount} via {payment_method}, '
                f'paid={paid.payment.paid_amount} remaining={paid.payment.remaining_amount}'
            )

            try:
                await self.notification_gateway.send_payment_confirmation(booking=paid)
            except Exception as e:
                metrics.record_side_effect_failure(kind='notification')
                Logger.base.error(
                    f'[ADD-PAYMENT] Payment email failed for {paid.booking_code}: {e}'
                )

            target = BookingStateMachine.auto_transition_after_payment(
                before=booking, after=paid, now=now
            )
            if target is None:
                return paid

            confirmed = await self.booking_command_repo.update_status(
                booking_id=booking_id,
                status=target,
                changed_by=actor.id,
                note=StatusNotes.AUTO_CONFIRMED,
            )
            metrics.record_status_transition(from_status=paid.status, to_status=target)
            Logger.base.info(f'✅ [ADD-PAYMENT] {paid.booking_code} auto-confirmed')
            return confirmed

    @staticmethod
    def _parse_method(method: Optional[str], *, fallback: PaymentMethod) -> PaymentMethod:
        if not method:
            return fallback
        try:
            return PaymentMethod(method)
        except ValueError:
            raise InvalidInputError('Invalid payment method') from None
