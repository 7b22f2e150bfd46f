from typing import Awaitable, Callable, Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError
from src.service.tour_booking.domain.entity.user_entity import Permission, UserEntity
from src.service.tour_booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


bearer_scheme = HTTPBearer(auto_error=False)


class RoleAuthStrategy:
    @staticmethod
    def can(user: UserEntity, permission: Permission) -> bool:
        return user.has_permission(permission)


@inject
async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> UserEntity:
    """Stateless: the caller is rebuilt from the token claims."""
    token = credentials.credentials if credentials else None
    return jwt_auth.get_current_user_info_from_jwt(token)


def require_permission(permission: Permission) -> Callable[..., Awaitable[UserEntity]]:
    async def dependency(current_user: UserEntity = Depends(get_current_user)) -> UserEntity:
        tracer = trace.get_tracer(__name__)
        with tracer.start_as_current_span(
            'auth.require_permission',
            attributes={
                'user.id': current_user.id,
                'user.role': current_user.role.value,
                'auth.permission': permission.value,
            },
        ):
            if not RoleAuthStrategy.can(current_user, permission):
                raise ForbiddenError("You don't have permission to perform this action")
            return current_user

    return dependency


require_view_own = require_permission(Permission.BOOKING_VIEW_OWN)
require_create = require_permission(Permission.BOOKING_CREATE)
require_view = require_permission(Permission.BOOKING_VIEW)
require_update = require_permission(Permission.BOOKING_UPDATE)
