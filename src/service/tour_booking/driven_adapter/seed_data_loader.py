"""Demo tours and users loaded at startup from a JSON file."""

from pathlib import Path
from typing import Any, List

import attrs
import orjson

from src.platform.database.orm_db_setting import Database
from src.platform.logging.loguru_io import Logger
from src.service.tour_booking.domain.entity.tour_entity import Tour
from src.service.tour_booking.domain.entity.user_entity import UserEntity
from src.service.tour_booking.driven_adapter.mapper.catalog_document_mapper import (
    document_to_tour,
    document_to_user,
    slot_to_document,
)
from src.service.tour_booking.driven_adapter.model.tour_model import TourModel
from src.service.tour_booking.driven_adapter.model.user_model import UserModel
from src.service.tour_booking.driven_adapter.repo.tour_catalog_memory_impl import (
    TourCatalogMemoryImpl,
)
from src.service.tour_booking.driven_adapter.repo.user_repo_memory_impl import UserRepoMemoryImpl


@attrs.define
class SeedData:
    tours: List[Tour] = attrs.field(factory=list)
    users: List[UserEntity] = attrs.field(factory=list)


def load_seed_data(path: Path | str) -> SeedData:
    path = Path(path)
    if not path.is_file():
        Logger.base.warning(f'🌱 [SEED] No seed file at {path}, starting empty')
        return SeedData()

    raw: dict[str, Any] = orjson.loads(path.read_bytes())
    data = SeedData(
        tours=[document_to_tour(doc) for doc in raw.get('tours', [])],
        users=[document_to_user(doc) for doc in raw.get('users', [])],
    )
    Logger.base.info(f'🌱 [SEED] Loaded {len(data.tours)} tours, {len(data.users)} users')
    return data


def seed_memory_store(
    data: SeedData, *, tour_catalog: TourCatalogMemoryImpl, user_repo: UserRepoMemoryImpl
) -> None:
    for tour in data.tours:
        tour_catalog.add_tour(tour)
    for user in data.users:
        user_repo.add_user(user)


async def seed_postgres(data: SeedData, *, database: Database) -> None:
    """Insert seed rows that are missing; existing rows keep their counters."""
    async with database.session() as session:
        for tour in data.tours:
            if await session.get(TourModel, tour.id) is None:
                session.add(
                    TourModel(
                        id=tour.id,
                        title=tour.title,
                        document={
                            'price': attrs.asdict(tour.price),
                            'min_group_size': tour.min_group_size,
                            'max_group_size': tour.max_group_size,
                            'is_active': tour.is_active,
                            'available_dates': [
                                slot_to_document(slot) for slot in tour.available_dates
                            ],
                        },
                    )
                )
        for user in data.users:
            if await session.get(UserModel, user.id) is None:
                session.add(
                    UserModel(
                        id=user.id,
                        email=user.email,
                        full_name=user.full_name,
                        phone=user.phone,
                        address=user.address,
                        role=user.role.value,
                        is_active=user.is_active,
                    )
                )
        await session.commit()
