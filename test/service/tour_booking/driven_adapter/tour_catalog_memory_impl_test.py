"""
Tests for TourCatalogMemoryImpl

Test Focus:
1. reserve_slots is an atomic check-and-increment
2. Concurrent reservations on one departure never oversell it
3. Decrement floors at zero; unknown slots are a no-op
"""

from datetime import date, timedelta

import anyio
import pytest

from src.platform.exception.exceptions import NotFoundError
from src.service.tour_booking.domain.entity.tour_entity import Tour, TourDateSlot
from src.service.tour_booking.driven_adapter.repo.tour_catalog_memory_impl import (
    TourCatalogMemoryImpl,
)


START = date.today() + timedelta(days=30)
END = START + timedelta(days=1)


@pytest.fixture
def catalog() -> TourCatalogMemoryImpl:
    return TourCatalogMemoryImpl(
        tours=[
            Tour(
                id='tour-halong-bay',
                title='Ha Long Bay',
                max_group_size=20,
                available_dates=[TourDateSlot(start_date=START, end_date=END, max_slots=10)],
            )
        ]
    )


async def _booked(catalog: TourCatalogMemoryImpl) -> int:
    tour = await catalog.get_tour_by_id(tour_id='tour-halong-bay')
    return tour.available_dates[0].booked_slots


@pytest.mark.unit
class TestTourCatalogMemoryImpl:
    @pytest.mark.asyncio
    async def test_reserve_within_capacity(self, catalog):
        reserved = await catalog.reserve_slots(
            tour_id='tour-halong-bay', start_date=START, end_date=END, slots=4
        )

        assert reserved is True
        assert await _booked(catalog) == 4
        available = await catalog.get_available_slots(
            tour_id='tour-halong-bay', start_date=START, end_date=END
        )
        assert available == 6

    @pytest.mark.asyncio
    async def test_reserve_beyond_capacity_leaves_slot_untouched(self, catalog):
        await catalog.reserve_slots(
            tour_id='tour-halong-bay', start_date=START, end_date=END, slots=6
        )

        reserved = await catalog.reserve_slots(
            tour_id='tour-halong-bay', start_date=START, end_date=END, slots=6
        )

        assert reserved is False
        assert await _booked(catalog) == 6

    @pytest.mark.asyncio
    async def test_concurrent_reservations_do_not_oversell(self, catalog):
        """
        Given: a departure with 10 free seats
        When: two reservations of 6 run concurrently
        Then: exactly one succeeds and booked_slots is 6
        """
        results: list[bool] = []

        async def reserve() -> None:
            results.append(
                await catalog.reserve_slots(
                    tour_id='tour-halong-bay', start_date=START, end_date=END, slots=6
                )
            )

        async with anyio.create_task_group() as tg:
            tg.start_soon(reserve)
            tg.start_soon(reserve)

        assert sorted(results) == [False, True]
        assert await _booked(catalog) == 6

    @pytest.mark.asyncio
    async def test_unknown_departure_cannot_be_reserved(self, catalog):
        reserved = await catalog.reserve_slots(
            tour_id='tour-halong-bay', start_date=START + timedelta(days=7), end_date=END, slots=1
        )

        assert reserved is False

    @pytest.mark.asyncio
    async def test_decrement_floors_at_zero(self, catalog):
        await catalog.increment_booked_slots(
            tour_id='tour-halong-bay', start_date=START, end_date=END, slots=2
        )

        await catalog.decrement_booked_slots(
            tour_id='tour-halong-bay', start_date=START, end_date=END, slots=5
        )

        assert await _booked(catalog) == 0

    @pytest.mark.asyncio
    async def test_unknown_tour(self, catalog):
        assert await catalog.get_tour_by_id(tour_id='tour-missing') is None
        with pytest.raises(NotFoundError, match='Tour not found'):
            await catalog.get_available_slots(
                tour_id='tour-missing', start_date=START, end_date=END
            )
        # increments and decrements on an unknown tour are silently ignored
        await catalog.decrement_booked_slots(
            tour_id='tour-missing', start_date=START, end_date=END, slots=1
        )
