"""
In-memory booking record store.

Serves both the command and the query port so reads observe writes
immediately. Every mutation is read-modify-write of one booking under a single
store lock; the mutation itself is the entity's pure `with_*` method.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterator

import anyio
from uuid_utils import UUID

from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.tour_booking.app.dto.booking_listing import (
    BookingFilters,
    BookingPage,
    PageRequest,
    SortOrder,
    booking_sort_value,
)
from src.service.tour_booking.app.dto.booking_statistics import BookingStatistics
from src.service.tour_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.tour_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.tour_booking.domain.entity.booking_entity import Booking
from src.service.tour_booking.domain.enum.booking_status import BookingStatus
from src.service.tour_booking.domain.value_object.payment_ledger import PaymentTransaction


class BookingRepoMemoryImpl(IBookingCommandRepo, IBookingQueryRepo):
    def __init__(self) -> None:
        self._bookings: Dict[str, Booking] = {}
        self._lock = anyio.Lock()

    # ========== Command side ==========

    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        async with self._lock:
            self._bookings[str(booking.id)] = booking
        return booking

    @Logger.io
    async def get_by_id(self, *, booking_id: UUID) -> Booking | None:
        return self._bookings.get(str(booking_id))

    @Logger.io
    async def update_details(
        self, *, booking_id: UUID, changes: dict[str, Any], updated_by: str
    ) -> Booking:
        return await self._mutate(
            booking_id,
            lambda b: b.with_details(changes=changes, updated_by=updated_by, now=_now()),
        )

    @Logger.io
    async def update_status(
        self, *, booking_id: UUID, status: BookingStatus, changed_by: str, note: str = ''
    ) -> Booking:
        return await self._mutate(
            booking_id,
            lambda b: b.with_status(status=status, changed_by=changed_by, note=note, now=_now()),
        )

    @Logger.io
    async def add_payment_transaction(
        self, *, booking_id: UUID, transaction: PaymentTransaction, recorded_by: str
    ) -> Booking:
        return await self._mutate(
            booking_id,
            lambda b: b.with_payment(transaction=transaction, recorded_by=recorded_by),
        )

    @Logger.io
    async def cancel(
        self, *, booking_id: UUID, cancelled_by: str, reason: str, refund_amount: int
    ) -> Booking:
        return await self._mutate(
            booking_id,
            lambda b: b.with_cancellation(
                cancelled_by=cancelled_by, reason=reason, refund_amount=refund_amount, now=_now()
            ),
        )

    @Logger.io
    async def delete(self, *, booking_id: UUID) -> None:
        async with self._lock:
            if self._bookings.pop(str(booking_id), None) is None:
                raise NotFoundError('Booking not found')

    # ========== Query side ==========

    @Logger.io
    async def get_by_code(self, *, booking_code: str) -> Booking | None:
        return next(
            (b for b in self._bookings.values() if b.booking_code == booking_code), None
        )

    @Logger.io
    async def find_all(self, *, filters: BookingFilters, page: PageRequest) -> BookingPage:
        matched = sorted(
            self._iter_matching(filters),
            key=lambda b: (booking_sort_value(b, page.sort_by), str(b.id)),
            reverse=page.sort_order == SortOrder.DESC,
        )
        return BookingPage(
            items=matched[page.offset : page.offset + page.limit],
            total=len(matched),
            page=page.page,
            limit=page.limit,
        )

    @Logger.io
    async def get_statistics(self) -> BookingStatistics:
        bookings = list(self._bookings.values())
        by_status = {status: 0 for status in BookingStatus}
        for booking in bookings:
            by_status[booking.status] += 1
        return BookingStatistics(
            total=len(bookings),
            pending=by_status[BookingStatus.PENDING],
            confirmed=by_status[BookingStatus.CONFIRMED],
            cancelled=by_status[BookingStatus.CANCELLED],
            completed=by_status[BookingStatus.COMPLETED],
            total_revenue=sum(
                b.pricing.total for b in bookings if b.status != BookingStatus.CANCELLED
            ),
            total_paid=sum(b.payment.paid_amount for b in bookings),
        )

    @Logger.io
    def _iter_matching(self, filters: BookingFilters) -> Iterator[Booking]:
        for booking in list(self._bookings.values()):
            if filters.matches(booking):
                yield booking

    async def _mutate(self, booking_id: UUID, apply: Callable[[Booking], Booking]) -> Booking:
        async with self._lock:
            key = str(booking_id)
            current = self._bookings.get(key)
            if current is None:
                raise NotFoundError('Booking not found')
            updated = apply(current)
            self._bookings[key] = updated
            return updated


def _now() -> datetime:
    return datetime.now(timezone.utc)
