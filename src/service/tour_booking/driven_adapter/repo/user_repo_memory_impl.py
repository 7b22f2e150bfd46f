from typing import Dict, Iterable, Optional

from src.platform.logging.loguru_io import Logger
from src.service.tour_booking.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.tour_booking.domain.entity.user_entity import UserEntity


class UserRepoMemoryImpl(IUserQueryRepo):
    def __init__(self, *, users: Iterable[UserEntity] = ()) -> None:
        self._users: Dict[str, UserEntity] = {user.id: user for user in users}

    def add_user(self, user: UserEntity) -> None:
        self._users[user.id] = user

    @Logger.io
    async def get_by_id(self, *, user_id: str) -> Optional[UserEntity]:
        return self._users.get(user_id)
