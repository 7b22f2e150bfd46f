"""
Test Configuration and Fixtures

This module provides:
- Environment pinned to the in-memory store and logged notifications
- A TestClient on the test app with a fresh container per test
- Seeded tours whose departures are relative to today
- Bearer headers per role

Architecture:
- Unit tests (test/**/unit/): mock the ports with AsyncMock, no container
- Integration tests: drive the HTTP app against the in-memory store
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# settings and the DI container read these at import time
# =============================================================================
import os


def _early_setup_test_environment() -> None:
    os.environ['STORE_BACKEND'] = 'memory'
    os.environ['NOTIFICATION_BACKEND'] = 'log'
    os.environ['ENABLE_TRACING'] = 'false'
    os.environ['JWT_SECRET'] = 'tour_booking_test_secret'
    os.environ['FRONTEND_URL'] = 'http://frontend.test'


_early_setup_test_environment()

from collections.abc import Callable, Generator  # noqa: E402
from datetime import date, timedelta  # noqa: E402
from functools import partial  # noqa: E402
from typing import Any  # noqa: E402

import anyio  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402

from src.platform.config.di import container  # noqa: E402
from src.platform.constant.route_constant import BOOKING_BASE  # noqa: E402
from src.service.tour_booking.domain.entity.tour_entity import (  # noqa: E402
    Tour,
    TourDateSlot,
    TourPrice,
)
from src.service.tour_booking.domain.entity.user_entity import UserEntity, UserRole  # noqa: E402
from test_main import app  # noqa: E402


HALONG_TOUR_ID = 'tour-halong-bay'
SAPA_TOUR_ID = 'tour-sapa-trek'


# =============================================================================
# Catalog Fixtures
# =============================================================================
@pytest.fixture
def today() -> date:
    return date.today()


@pytest.fixture
def halong_tour(today: date) -> Tour:
    """
    Departures:
    - [0] 60 days out, 10 seats
    - [1] 20 days out, 16 seats
    - [2] started 3 days ago, 10 seats
    """
    return Tour(
        id=HALONG_TOUR_ID,
        title='Ha Long Bay Overnight Cruise',
        price=TourPrice(adult=2_500_000, child=1_500_000, infant=0),
        min_group_size=1,
        max_group_size=20,
        available_dates=[
            TourDateSlot(
                start_date=today + timedelta(days=60),
                end_date=today + timedelta(days=61),
                max_slots=10,
            ),
            TourDateSlot(
                start_date=today + timedelta(days=20),
                end_date=today + timedelta(days=21),
                max_slots=16,
            ),
            TourDateSlot(
                start_date=today - timedelta(days=3),
                end_date=today - timedelta(days=2),
                max_slots=10,
            ),
        ],
    )


@pytest.fixture
def sapa_tour(today: date) -> Tour:
    # no per-slot max: capacity falls back to max_group_size
    return Tour(
        id=SAPA_TOUR_ID,
        title='Sapa Rice Terrace Trek',
        price=TourPrice(adult=3_200_000, child=2_000_000, infant=500_000),
        min_group_size=2,
        max_group_size=12,
        available_dates=[
            TourDateSlot(
                start_date=today + timedelta(days=90),
                end_date=today + timedelta(days=93),
            )
        ],
    )


# =============================================================================
# User Fixtures
# =============================================================================
@pytest.fixture
def users() -> dict[str, UserEntity]:
    return {
        'admin': UserEntity(
            id='admin-1', email='admin@example.com', full_name='Site Admin', role=UserRole.ADMIN
        ),
        'manager': UserEntity(
            id='manager-1', email='ops@example.com', full_name='Ops Manager', role=UserRole.MANAGER
        ),
        'user': UserEntity(
            id='user-1',
            email='traveler@example.com',
            full_name='Nguyen Van A',
            phone='+84901234567',
            address='Hanoi',
            role=UserRole.USER,
        ),
        'other_user': UserEntity(
            id='user-2', email='other@example.com', full_name='Tran Thi B', role=UserRole.USER
        ),
        'guest': UserEntity(
            id='guest-1', email='guest@example.com', full_name='Guest', role=UserRole.GUEST
        ),
    }


# =============================================================================
# App Fixtures
# =============================================================================
@pytest.fixture
def client(
    halong_tour: Tour, sapa_tour: Tour, users: dict[str, UserEntity]
) -> Generator[TestClient, None, None]:
    container.reset_singletons()

    tour_catalog = container.memory_tour_catalog()
    tour_catalog.add_tour(halong_tour)
    tour_catalog.add_tour(sapa_tour)

    user_repo = container.memory_user_repo()
    for user in users.values():
        user_repo.add_user(user)

    with TestClient(app) as test_client:
        yield test_client

    container.reset_singletons()


@pytest.fixture
def auth_headers(users: dict[str, UserEntity]) -> Callable[[str], dict[str, str]]:
    """auth_headers('user') -> {'Authorization': 'Bearer ...'} for that seeded role."""

    def _headers(who: str) -> dict[str, str]:
        token = container.jwt_auth().create_jwt_token(users[who])
        return {'Authorization': f'Bearer {token}'}

    return _headers


@pytest.fixture
def sent_emails(client: TestClient) -> list[dict]:
    return container.notification_gateway().sent_emails


@pytest.fixture
def booked_slots(client: TestClient) -> Callable[[str, date], int]:
    """Read a departure's booked_slots straight from the in-memory catalog."""

    def _booked(tour_id: str, start_date: date) -> int:
        catalog = container.memory_tour_catalog()
        tour = anyio.run(partial(catalog.get_tour_by_id, tour_id=tour_id))
        assert tour is not None
        slot = next(s for s in tour.available_dates if s.start_date == start_date)
        return slot.booked_slots

    return _booked


@pytest.fixture
def create_booking(
    client: TestClient,
    auth_headers: Callable[[str], dict[str, str]],
    halong_tour: Tour,
    sapa_tour: Tour,
) -> Callable[..., dict[str, Any]]:
    """POST a booking as `who` on the departure at `slot_index` and return its payload."""
    tours = {tour.id: tour for tour in (halong_tour, sapa_tour)}

    def _create(
        *,
        who: str = 'user',
        tour_id: str = HALONG_TOUR_ID,
        slot_index: int = 0,
        adults: int = 2,
        children: int = 0,
        infants: int = 0,
        **extra: Any,
    ) -> dict[str, Any]:
        slot = tours[tour_id].available_dates[slot_index]
        body = {
            'tourId': tour_id,
            'selectedDate': {
                'startDate': slot.start_date.isoformat(),
                'endDate': slot.end_date.isoformat(),
            },
            'numberOfAdults': adults,
            'numberOfChildren': children,
            'numberOfInfants': infants,
            **extra,
        }
        response = client.post(BOOKING_BASE, json=body, headers=auth_headers(who))
        assert response.status_code == 201, response.text
        return response.json()['data']

    return _create
