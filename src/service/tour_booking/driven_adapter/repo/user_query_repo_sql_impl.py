from typing import AsyncContextManager, Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.tour_booking.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.tour_booking.domain.entity.user_entity import UserEntity, UserRole
from src.service.tour_booking.driven_adapter.model.user_model import UserModel


class UserQueryRepoSqlImpl(IUserQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def get_by_id(self, *, user_id: str) -> Optional[UserEntity]:
        async with self.session_factory() as session:
            user_model = await session.get(UserModel, user_id)
            if not user_model:
                return None
            return self._model_to_entity(user_model)

    def _model_to_entity(self, user_model: UserModel) -> UserEntity:
        return UserEntity(
            id=user_model.id,
            email=user_model.email,
            full_name=user_model.full_name,
            phone=user_model.phone,
            address=user_model.address,
            role=UserRole(user_model.role),
            is_active=user_model.is_active,
        )
