"""
In-memory tour catalog.

Slot counters are guarded by one anyio.Lock per (tour, start, end) so the
check-and-increment in `reserve_slots` cannot interleave with another
reservation on the same departure.
"""

from collections import defaultdict
from datetime import date
from typing import DefaultDict, Dict, Iterable, Optional, Tuple

import anyio

from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.tour_booking.app.interface.i_tour_catalog import ITourCatalog
from src.service.tour_booking.domain.entity.tour_entity import Tour


SlotKey = Tuple[str, date, date]


class TourCatalogMemoryImpl(ITourCatalog):
    def __init__(self, *, tours: Iterable[Tour] = ()) -> None:
        self._tours: Dict[str, Tour] = {tour.id: tour for tour in tours}
        self._slot_locks: DefaultDict[SlotKey, anyio.Lock] = defaultdict(anyio.Lock)

    def add_tour(self, tour: Tour) -> None:
        self._tours[tour.id] = tour

    @Logger.io
    async def get_tour_by_id(self, *, tour_id: str) -> Optional[Tour]:
        return self._tours.get(tour_id)

    @Logger.io
    async def get_available_slots(self, *, tour_id: str, start_date: date, end_date: date) -> int:
        return self._require(tour_id).available_slots(start_date=start_date, end_date=end_date)

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
        async with self._slot_locks[(tour_id, start_date, end_date)]:
            tour = self._require(tour_id)
            if tour.find_slot(start_date=start_date, end_date=end_date) is None:
                return False
            available = tour.available_slots(start_date=start_date, end_date=end_date)
            if slots > available:
                Logger.base.warning(
                    f'⚠️ [TOUR-CATALOG] Reserve {slots} on {tour_id}@{start_date} refused, '
                    f'{available} left'
                )
                return False
            self._tours[tour_id] = tour.with_booked_delta(
                start_date=start_date, end_date=end_date, delta=slots
            )
            return True

    async def _shift(self, tour_id: str, start_date: date, end_date: date, delta: int) -> None:
        async with self._slot_locks[(tour_id, start_date, end_date)]:
            tour = self._tours.get(tour_id)
            if tour is None:
                return
            self._tours[tour_id] = tour.with_booked_delta(
                start_date=start_date, end_date=end_date, delta=delta
            )

    def _require(self, tour_id: str) -> Tour:
        tour = self._tours.get(tour_id)
        if tour is None:
            raise NotFoundError('Tour not found')
        return tour
