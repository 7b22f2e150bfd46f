"""
PostgreSQL booking record store.

Mutations lock the booking row (`SELECT ... FOR UPDATE`), apply the entity's
pure `with_*` method to the stored document and write the document back with
its indexed columns in the same transaction.
"""

from datetime import datetime, timezone
from typing import Any, AsyncContextManager, Callable
import uuid

from sqlalchemy import Select, asc, case, delete, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.tour_booking.app.dto.booking_listing import (
    BookingFilters,
    BookingPage,
    BookingSortField,
    PageRequest,
    SortOrder,
)
from src.service.tour_booking.app.dto.booking_statistics import BookingStatistics
from src.service.tour_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.tour_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.tour_booking.domain.entity.booking_entity import Booking
from src.service.tour_booking.domain.enum.booking_status import BookingStatus
from src.service.tour_booking.domain.value_object.payment_ledger import PaymentTransaction
from src.service.tour_booking.driven_adapter.mapper.booking_document_mapper import (
    booking_to_document,
    document_to_booking,
)
from src.service.tour_booking.driven_adapter.model.booking_model import BookingModel


SessionFactory = Callable[..., AsyncContextManager[AsyncSession]]

_SORT_COLUMNS = {
    BookingSortField.CREATED_AT: BookingModel.created_at,
    BookingSortField.UPDATED_AT: BookingModel.updated_at,
    BookingSortField.TOTAL: BookingModel.total,
}


def _pg_id(booking_id: UUID) -> uuid.UUID:
    # asyncpg binds stdlib UUIDs only
    return uuid.UUID(str(booking_id))


def _apply_columns(model: BookingModel, booking: Booking) -> None:
    model.booking_code = booking.booking_code
    model.user_id = booking.user_id
    model.tour_id = booking.tour_id
    model.status = booking.status.value
    model.start_date = booking.selected_date.start_date
    model.total = booking.pricing.total
    model.paid_amount = booking.payment.paid_amount
    model.created_at = booking.created_at or datetime.now(timezone.utc)
    model.updated_at = booking.updated_at or model.created_at
    model.document = booking_to_document(booking)


class BookingCommandRepoSqlImpl(IBookingCommandRepo):
    def __init__(self, session_factory: SessionFactory) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        async with self.session_factory() as session:
            model = BookingModel(id=_pg_id(booking.id))
            _apply_columns(model, booking)
            session.add(model)
            await session.commit()
        return booking

    @Logger.io
    async def get_by_id(self, *, booking_id: UUID) -> Booking | None:
        async with self.session_factory() as session:
            model = await session.get(BookingModel, _pg_id(booking_id))
            return document_to_booking(model.document) if model else None

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
        async with self.session_factory() as session:
            result = await session.execute(
                delete(BookingModel).where(BookingModel.id == _pg_id(booking_id))
            )
            await session.commit()
            if result.rowcount == 0:  # type: ignore[attr-defined]
                raise NotFoundError('Booking not found')

    async def _mutate(self, booking_id: UUID, apply: Callable[[Booking], Booking]) -> Booking:
        async with self.session_factory() as session:
            async with session.begin():
                model = (
                    await session.execute(
                        select(BookingModel)
                        .where(BookingModel.id == _pg_id(booking_id))
                        .with_for_update()
                    )
                ).scalar_one_or_none()
                if model is None:
                    raise NotFoundError('Booking not found')

                updated = apply(document_to_booking(model.document))
                _apply_columns(model, updated)
            return updated


class BookingQueryRepoSqlImpl(IBookingQueryRepo):
    def __init__(self, session_factory: SessionFactory) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def get_by_id(self, *, booking_id: UUID) -> Booking | None:
        async with self.session_factory() as session:
            model = await session.get(BookingModel, _pg_id(booking_id))
            return document_to_booking(model.document) if model else None

    @Logger.io
    async def get_by_code(self, *, booking_code: str) -> Booking | None:
        async with self.session_factory() as session:
            result = await session.execute(
                select(BookingModel.document)
                .where(BookingModel.booking_code == booking_code)
                .order_by(BookingModel.created_at)
                .limit(1)
            )
            document = result.scalar_one_or_none()
            return document_to_booking(document) if document else None

    @Logger.io
    async def find_all(self, *, filters: BookingFilters, page: PageRequest) -> BookingPage:
        conditions = self._conditions(filters)
        sort_column = _SORT_COLUMNS[page.sort_by]
        ordering = desc if page.sort_order == SortOrder.DESC else asc

        query: Select[Any] = (
            select(BookingModel.document)
            .where(*conditions)
            .order_by(ordering(sort_column), ordering(BookingModel.id))
            .offset(page.offset)
            .limit(page.limit)
        )
        count_query = select(func.count()).select_from(BookingModel).where(*conditions)

        async with self.session_factory() as session:
            total = (await session.execute(count_query)).scalar_one()
            documents = (await session.execute(query)).scalars().all()

        return BookingPage(
            items=[document_to_booking(doc) for doc in documents],
            total=total,
            page=page.page,
            limit=page.limit,
        )

    @Logger.io
    async def get_statistics(self) -> BookingStatistics:
        not_cancelled = BookingModel.status != BookingStatus.CANCELLED.value

        def count_of(status: BookingStatus):
            return func.count(case((BookingModel.status == status.value, 1)))

        query = select(
            func.count(),
            count_of(BookingStatus.PENDING),
            count_of(BookingStatus.CONFIRMED),
            count_of(BookingStatus.CANCELLED),
            count_of(BookingStatus.COMPLETED),
            func.coalesce(func.sum(case((not_cancelled, BookingModel.total), else_=0)), 0),
            func.coalesce(func.sum(BookingModel.paid_amount), 0),
        ).select_from(BookingModel)

        async with self.session_factory() as session:
            row = (await session.execute(query)).one()

        total, pending, confirmed, cancelled, completed, revenue, paid = row
        return BookingStatistics(
            total=total,
            pending=pending,
            confirmed=confirmed,
            cancelled=cancelled,
            completed=completed,
            total_revenue=int(revenue),
            total_paid=int(paid),
        )

    @staticmethod
    def _conditions(filters: BookingFilters) -> list[Any]:
        conditions: list[Any] = []
        if filters.status is not None:
            conditions.append(BookingModel.status == filters.status.value)
        if filters.user_id is not None:
            conditions.append(BookingModel.user_id == filters.user_id)
        if filters.tour_id is not None:
            conditions.append(BookingModel.tour_id == filters.tour_id)
        if filters.start_date_from is not None:
            conditions.append(BookingModel.start_date >= filters.start_date_from)
        if filters.start_date_to is not None:
            conditions.append(BookingModel.start_date <= filters.start_date_to)
        return conditions


def _now() -> datetime:
    return datetime.now(timezone.utc)
