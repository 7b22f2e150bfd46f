"""
Unit tests for BookingStateMachine

Test Focus:
1. Terminal states reject every transition
2. Confirm requires the deposit; complete requires full payment and a started tour
3. Auto-confirm fires only when a payment flips the deposit latch on a pending booking
"""

from datetime import datetime

import pytest

from src.platform.exception.exceptions import BookingConflictError, PreconditionFailedError
from src.service.tour_booking.domain.booking_state_machine import BookingStateMachine
from src.service.tour_booking.domain.enum.booking_status import BookingStatus


@pytest.mark.unit
class TestBookingStateMachineGuard:
    def test_pending_without_deposit_cannot_be_confirmed(self, make_booking, now: datetime):
        booking = make_booking()

        with pytest.raises(PreconditionFailedError, match='without deposit payment'):
            BookingStateMachine.guard(booking, BookingStatus.CONFIRMED, now=now)

    def test_pending_with_deposit_can_be_confirmed(self, make_booking, now: datetime):
        booking = make_booking(paid=4_000_000)

        BookingStateMachine.guard(booking, BookingStatus.CONFIRMED, now=now)

    def test_completion_needs_full_payment(self, make_booking, now: datetime):
        booking = make_booking(days_out=-2, paid=4_000_000)

        with pytest.raises(PreconditionFailedError, match='outstanding payment'):
            BookingStateMachine.guard(booking, BookingStatus.COMPLETED, now=now)

    def test_completion_needs_tour_to_have_started(self, make_booking, now: datetime):
        booking = make_booking(days_out=10, paid=10_000_000)

        with pytest.raises(PreconditionFailedError, match='before tour date'):
            BookingStateMachine.guard(booking, BookingStatus.COMPLETED, now=now)

    def test_fully_paid_started_tour_can_complete(self, make_booking, now: datetime):
        booking = make_booking(days_out=-1, paid=10_000_000)

        BookingStateMachine.guard(booking, BookingStatus.COMPLETED, now=now)

    def test_cancelled_is_terminal(self, make_booking, now: datetime):
        booking = make_booking().with_status(
            status=BookingStatus.CANCELLED, changed_by='user-1', now=now
        )

        for target in BookingStatus:
            with pytest.raises(BookingConflictError, match='already cancelled'):
                BookingStateMachine.guard(booking, target, now=now)

    def test_completed_cannot_be_cancelled(self, make_booking, now: datetime):
        booking = make_booking(days_out=-1, paid=10_000_000).with_status(
            status=BookingStatus.COMPLETED, changed_by='admin-1', now=now
        )

        with pytest.raises(BookingConflictError, match='Cannot cancel completed booking'):
            BookingStateMachine.guard(booking, BookingStatus.CANCELLED, now=now)

    def test_nothing_moves_back_to_pending(self, make_booking, now: datetime):
        booking = make_booking(paid=4_000_000).with_status(
            status=BookingStatus.CONFIRMED, changed_by='admin-1', now=now
        )

        assert BookingStateMachine.can_transition(booking, BookingStatus.PENDING, now=now) is False


@pytest.mark.unit
class TestAutoTransitionAfterPayment:
    def test_deposit_flip_on_pending_confirms(self, make_booking, now: datetime):
        before = make_booking()
        after = make_booking(paid=4_000_000)

        target = BookingStateMachine.auto_transition_after_payment(
            before=before, after=after, now=now
        )

        assert target == BookingStatus.CONFIRMED

    def test_payment_below_deposit_does_not_confirm(self, make_booking, now: datetime):
        before = make_booking()
        after = make_booking(paid=1_000_000)

        assert (
            BookingStateMachine.auto_transition_after_payment(before=before, after=after, now=now)
            is None
        )

    def test_latch_already_set_does_not_confirm_again(self, make_booking, now: datetime):
        before = make_booking(paid=4_000_000)
        after = make_booking(paid=5_000_000)

        assert (
            BookingStateMachine.auto_transition_after_payment(before=before, after=after, now=now)
            is None
        )
