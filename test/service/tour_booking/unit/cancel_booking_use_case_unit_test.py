"""
Unit tests for CancelBookingUseCase

Test Focus:
1. Refund = tier percentage x paid amount
2. Terminal bookings cannot be cancelled
3. Slot release and cancellation email are best-effort
4. Ownership is skipped for staff-initiated cancellation
"""

from unittest.mock import AsyncMock

import pytest

from src.platform.exception.exceptions import BookingConflictError, ForbiddenError
from src.service.tour_booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.tour_booking.domain.enum.booking_status import BookingStatus


@pytest.mark.unit
class TestCancelBookingUseCase:
    @pytest.fixture
    def booking(self, make_booking, now):
        # confirmed after paying the 4,000,000 deposit, departing in 20 days
        return make_booking(adults=4, days_out=20, paid=4_000_000).with_status(
            status=BookingStatus.CONFIRMED, changed_by='user-1', now=now
        )

    @pytest.fixture
    def booking_command_repo(self, booking, stateful_command_repo):
        return stateful_command_repo(booking)

    @pytest.fixture
    def tour_catalog(self):
        return AsyncMock()

    @pytest.fixture
    def notification_gateway(self):
        return AsyncMock()

    @pytest.fixture
    def use_case(self, booking_command_repo, tour_catalog, notification_gateway):
        return CancelBookingUseCase(
            booking_command_repo=booking_command_repo,
            tour_catalog=tour_catalog,
            notification_gateway=notification_gateway,
        )

    @pytest.mark.asyncio
    async def test_cancel_twenty_days_out_refunds_half_of_paid(
        self, use_case, booking, owner, tour_catalog, notification_gateway
    ):
        """
        Given: a confirmed booking with 4,000,000 paid, departing in 20 days
        When: the owner cancels it
        Then: 50% of the paid amount is refunded and the 4 slots are released
        """
        # Act
        result = await use_case.execute(booking_id=booking.id, actor=owner, reason='Sick')

        # Assert
        assert result.refund_amount == 2_000_000
        assert result.refund_policy == '20 days until tour'
        assert result.booking.status == BookingStatus.CANCELLED
        assert result.booking.cancellation.is_cancelled is True
        assert result.booking.cancellation.reason == 'Sick'
        tour_catalog.decrement_booked_slots.assert_awaited_once_with(
            tour_id=booking.tour_id,
            start_date=booking.selected_date.start_date,
            end_date=booking.selected_date.end_date,
            slots=4,
        )
        notification_gateway.send_cancellation.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unpaid_booking_refunds_nothing(
        self, make_booking, owner, stateful_command_repo
    ):
        pending = make_booking(days_out=60)
        use_case = CancelBookingUseCase(
            booking_command_repo=stateful_command_repo(pending),
            tour_catalog=AsyncMock(),
            notification_gateway=AsyncMock(),
        )

        result = await use_case.execute(booking_id=pending.id, actor=owner)

        assert result.refund_amount == 0
        assert result.booking.cancellation.refund_status is None

    @pytest.mark.asyncio
    async def test_already_cancelled(self, use_case, booking, owner):
        await use_case.execute(booking_id=booking.id, actor=owner)

        with pytest.raises(BookingConflictError, match='already cancelled'):
            await use_case.execute(booking_id=booking.id, actor=owner)

    @pytest.mark.asyncio
    async def test_cancel_racing_a_stale_read_releases_nothing(
        self, use_case, booking, owner, booking_command_repo, tour_catalog, notification_gateway
    ):
        """
        Given: the read returns a confirmed snapshot but the stored booking was cancelled since
        When: the owner cancels
        Then: the store refuses the second cancellation and no slots are released
        """
        # Arrange
        await booking_command_repo.cancel(
            booking_id=booking.id, cancelled_by=owner.id, reason='First', refund_amount=0
        )
        booking_command_repo.get_by_id.side_effect = lambda *, booking_id: booking

        # Act / Assert
        with pytest.raises(BookingConflictError, match='already cancelled'):
            await use_case.execute(booking_id=booking.id, actor=owner)
        tour_catalog.decrement_booked_slots.assert_not_awaited()
        notification_gateway.send_cancellation.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_completed_cannot_be_cancelled(
        self, make_booking, owner, now, stateful_command_repo
    ):
        completed = make_booking(days_out=-1, paid=10_000_000).with_status(
            status=BookingStatus.COMPLETED, changed_by='admin-1', now=now
        )
        use_case = CancelBookingUseCase(
            booking_command_repo=stateful_command_repo(completed),
            tour_catalog=AsyncMock(),
            notification_gateway=AsyncMock(),
        )

        with pytest.raises(BookingConflictError, match='Cannot cancel completed booking'):
            await use_case.execute(booking_id=completed.id, actor=owner)

    @pytest.mark.asyncio
    async def test_stranger_cannot_cancel(self, use_case, booking, stranger, booking_command_repo):
        with pytest.raises(ForbiddenError, match='permission to cancel this booking'):
            await use_case.execute(booking_id=booking.id, actor=stranger)
        booking_command_repo.cancel.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_ownership_check_can_be_skipped(self, use_case, booking, stranger):
        result = await use_case.execute(
            booking_id=booking.id, actor=stranger, check_ownership=False
        )

        assert result.booking.cancellation.cancelled_by == stranger.id

    @pytest.mark.asyncio
    async def test_slot_release_failure_still_cancels(
        self, use_case, booking, owner, tour_catalog, notification_gateway
    ):
        # Arrange
        tour_catalog.decrement_booked_slots.side_effect = RuntimeError('catalog down')

        # Act
        result = await use_case.execute(booking_id=booking.id, actor=owner)

        # Assert
        assert result.booking.status == BookingStatus.CANCELLED
        notification_gateway.send_cancellation.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_email_failure_still_cancels(
        self, use_case, booking, owner, notification_gateway
    ):
        notification_gateway.send_cancellation.side_effect = ConnectionError('smtp down')

        result = await use_case.execute(booking_id=booking.id, actor=owner)

        assert result.booking.status == BookingStatus.CANCELLED
