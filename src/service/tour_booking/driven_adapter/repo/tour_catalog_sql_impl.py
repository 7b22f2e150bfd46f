from datetime import date
from typing import Any, AsyncContextManager, Callable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.tour_booking.app.interface.i_tour_catalog import ITourCatalog
from src.service.tour_booking.domain.entity.tour_entity import Tour
from src.service.tour_booking.driven_adapter.mapper.catalog_document_mapper import (
    document_to_tour,
    slot_to_document,
)
from src.service.tour_booking.driven_adapter.model.tour_model import TourModel


def _with_dates(document: dict[str, Any], tour: Tour) -> dict[str, Any]:
    # a fresh dict so the JSONB column is flagged dirty
    return {**document, 'available_dates': [slot_to_document(s) for s in tour.available_dates]}


class TourCatalogSqlImpl(ITourCatalog):
    """Slot counters live inside the tour document; writers lock the tour row."""

    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def get_tour_by_id(self, *, tour_id: str) -> Optional[Tour]:
        async with self.session_factory() as session:
            model = await session.get(TourModel, tour_id)
            return self._to_entity(model) if model else None

    @Logger.io
    async def get_available_slots(self, *, tour_id: str, start_date: date, end_date: date) -> int:
        tour = await self.get_tour_by_id(tour_id=tour_id)
        if tour is None:
            raise NotFoundError('Tour not found')
        return tour.available_slots(start_date=start_date, end_date=end_date)

    @Logger.io
    async def increment_booked_slots(
        self, *, tour_id: str, start_date: date, end_date: date, slots: int
    ) -> None:
        await self._shift(tour_id, start_date, end_date, slots)

    @Logger.io
    async def decrement_booked_slots(
        self, *, tour_id: str, start_date: date, end_date: date, slots: int
    ) -> None:
        await self._shift(tour_id, start_date, end_date, -slots)

    @Logger.io
    async def reserve_slots(
        self, *, tour_id: str, start_date: date, end_date: date, slots: int
    ) -> bool:
        async with self.session_factory() as session:
            async with session.begin():
                model = await self._lock_tour(session, tour_id)
                if model is None:
                    raise NotFoundError('Tour not found')
                tour = self._to_entity(model)
                if tour.find_slot(start_date=start_date, end_date=end_date) is None:
                    return False
                if slots > tour.available_slots(start_date=start_date, end_date=end_date):
                    return False
                tour = tour.with_booked_delta(start_date=start_date, end_date=end_date, delta=slots)
                model.document = _with_dates(model.document, tour)
        return True

    async def _shift(self, tour_id: str, start_date: date, end_date: date, delta: int) -> None:
        async with self.session_factory() as session:
            async with session.begin():
                model = await self._lock_tour(session, tour_id)
                if model is None:
                    return
                tour = self._to_entity(model).with_booked_delta(
                    start_date=start_date, end_date=end_date, delta=delta
                )
                model.document = _with_dates(model.document, tour)

    @staticmethod
    async def _lock_tour(session: AsyncSession, tour_id: str) -> Optional[TourModel]:
        result = await session.execute(
            select(TourModel).where(TourModel.id == tour_id).with_for_update()
        )
        return result.scalar_one_or_none()

    @staticmethod
    def _to_entity(model: TourModel) -> Tour:
        return document_to_tour({**model.document, 'id': model.id, 'title': model.title})
