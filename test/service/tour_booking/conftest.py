"""
Shared builders for tour booking unit tests.

Bookings are built through Booking.create so every fixture starts from the
same state a real create would produce.
"""

from collections.abc import Callable
from datetime import date, datetime, timedelta, timezone
from typing import Any
from unittest.mock import AsyncMock

import pytest

from src.service.tour_booking.domain.entity.booking_entity import Booking
from src.service.tour_booking.domain.entity.user_entity import UserEntity, UserRole
from src.service.tour_booking.domain.enum.payment_method import PaymentMethod
from src.service.tour_booking.domain.pricing_calculator import PricingCalculator
from src.service.tour_booking.domain.value_object.booking_contact import CustomerInfo
from src.service.tour_booking.domain.value_object.payment_ledger import PaymentTransaction
from src.service.tour_booking.domain.value_object.selected_date import SelectedDate


ADULT_PRICE = 2_500_000
CHILD_PRICE = 1_500_000


@pytest.fixture
def now() -> datetime:
    return datetime.now(timezone.utc)


@pytest.fixture
def owner() -> UserEntity:
    return UserEntity(
        id='user-1', email='traveler@example.com', full_name='Nguyen Van A', role=UserRole.USER
    )


@pytest.fixture
def stranger() -> UserEntity:
    return UserEntity(id='user-2', email='other@example.com', role=UserRole.USER)


@pytest.fixture
def admin() -> UserEntity:
    return UserEntity(id='admin-1', email='admin@example.com', role=UserRole.ADMIN)


@pytest.fixture
def manager() -> UserEntity:
    return UserEntity(id='manager-1', email='ops@example.com', role=UserRole.MANAGER)


@pytest.fixture
def make_booking(owner: UserEntity, now: datetime) -> Callable[..., Booking]:
    """
    make_booking(adults=4, days_out=60) -> pending booking of `owner`.

    Pass `paid` to record one payment of that amount.
    """

    def _make(
        *,
        adults: int = 4,
        children: int = 0,
        infants: int = 0,
        days_out: int = 60,
        user_id: str | None = None,
        tour_id: str = 'tour-halong-bay',
        paid: int = 0,
        **extra: Any,
    ) -> Booking:
        start = date.today() + timedelta(days=days_out)
        quote = PricingCalculator.calculate(
            adults=adults,
            children=children,
            infants=infants,
            adult_price=ADULT_PRICE,
            child_price=CHILD_PRICE,
        )
        booking = Booking.create(
            tour_id=tour_id,
            user_id=user_id or owner.id,
            selected_date=SelectedDate(start_date=start, end_date=start + timedelta(days=1)),
            number_of_adults=adults,
            number_of_children=children,
            number_of_infants=infants,
            quote=quote,
            customer_info=CustomerInfo(full_name=owner.full_name, email=owner.email),
            now=now,
            **extra,
        )
        if paid:
            booking = booking.with_payment(
                transaction=PaymentTransaction(
                    transaction_id='TXN-FIXTURE',
                    amount=paid,
                    method=PaymentMethod.BANK_TRANSFER,
                    paid_at=now,
                ),
                recorded_by=booking.user_id,
            )
        return booking

    return _make


@pytest.fixture
def stateful_command_repo() -> Callable[[Booking], AsyncMock]:
    """
    stateful_command_repo(booking) -> AsyncMock command repo over one stored booking.

    Mutations go through the entity's with_* methods the way the real stores
    apply them, so follow-up reads see the result.
    """

    def _build(booking: Booking) -> AsyncMock:
        stored: dict[str, Booking | None] = {'booking': booking}

        def _apply(change: Callable[[Booking], Booking]) -> Booking:
            current = stored['booking']
            assert current is not None
            stored['booking'] = change(current)
            return stored['booking']

        def _now() -> datetime:
            return datetime.now(timezone.utc)

        repo = AsyncMock()
        repo.get_by_id.side_effect = lambda *, booking_id: stored['booking']
        repo.add_payment_transaction.side_effect = (
            lambda *, booking_id, transaction, recorded_by: _apply(
                lambda b: b.with_payment(transaction=transaction, recorded_by=recorded_by)
            )
        )
        repo.update_status.side_effect = lambda *, booking_id, status, changed_by, note='': _apply(
            lambda b: b.with_status(status=status, changed_by=changed_by, note=note, now=_now())
        )
        repo.cancel.side_effect = lambda *, booking_id, cancelled_by, reason, refund_amount: _apply(
            lambda b: b.with_cancellation(
                cancelled_by=cancelled_by, reason=reason, refund_amount=refund_amount, now=_now()
            )
        )
        repo.update_details.side_effect = lambda *, booking_id, changes, updated_by: _apply(
            lambda b: b.with_details(changes=changes, updated_by=updated_by, now=_now())
        )
        return repo

    return _build
