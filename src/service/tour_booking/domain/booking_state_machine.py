from datetime import datetime
from typing import TYPE_CHECKING, Final, Optional

from src.platform.exception.exceptions import (
    BookingConflictError,
    DomainError,
    PreconditionFailedError,
)
from src.service.tour_booking.domain.enum.booking_status import BookingStatus


if TYPE_CHECKING:
    from src.service.tour_booking.domain.entity.booking_entity import Booking


class BookingStateMachine:
    """
    Guarded transition table for booking status.

        pending   -> confirmed | completed | cancelled
        confirmed -> confirmed | completed | cancelled
        completed, cancelled: terminal

    Manual transitions and the auto-confirm after a deposit payment both go
    through `guard`.
    """

    TRANSITIONS: Final[dict[BookingStatus, frozenset[BookingStatus]]] = {
        BookingStatus.PENDING: frozenset(
            {BookingStatus.CONFIRMED, BookingStatus.COMPLETED, BookingStatus.CANCELLED}
        ),
        BookingStatus.CONFIRMED: frozenset(
            {BookingStatus.CONFIRMED, BookingStatus.COMPLETED, BookingStatus.CANCELLED}
        ),
        BookingStatus.COMPLETED: frozenset(),
        BookingStatus.CANCELLED: frozenset(),
    }

    @classmethod
    def guard(cls, booking: 'Booking', target: BookingStatus, *, now: datetime) -> None:
        current = booking.status
        if current == BookingStatus.CANCELLED:
            raise BookingConflictError('Booking is already cancelled')
        if current == BookingStatus.COMPLETED:
            if target == BookingStatus.CANCELLED:
                raise BookingConflictError('Cannot cancel completed booking')
            raise BookingConflictError('Booking is already completed')
        if target not in cls.TRANSITIONS[current]:
            raise BookingConflictError(f'Cannot change booking status from {current} to {target}')

        if target == BookingStatus.CONFIRMED and not booking.payment.deposit_paid:
            raise PreconditionFailedError('Cannot confirm booking without deposit payment')

        if target == BookingStatus.COMPLETED:
            if booking.payment.remaining_amount > 0:
                raise PreconditionFailedError('Cannot complete booking with outstanding payment')
            if not booking.selected_date.has_started(now=now):
                raise PreconditionFailedError('Cannot complete booking before tour date')

    @classmethod
    def can_transition(cls, booking: 'Booking', target: BookingStatus, *, now: datetime) -> bool:
        try:
            cls.guard(booking, target, now=now)
        except DomainError:
            return False
        return True

    @classmethod
    def auto_transition_after_payment(
        cls, *, before: 'Booking', after: 'Booking', now: datetime
    ) -> Optional[BookingStatus]:
        """Confirm a pending booking when this payment flipped the deposit latch."""
        deposit_just_paid = after.payment.deposit_paid and not before.payment.deposit_paid
        if not deposit_just_paid or after.status != BookingStatus.PENDING:
            return None
        if not cls.can_transition(after, BookingStatus.CONFIRMED, now=now):
            return None
        return BookingStatus.CONFIRMED
