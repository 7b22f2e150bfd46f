from enum import StrEnum
from typing import Final

import attrs


class Permission(StrEnum):
    BOOKING_VIEW = 'booking:view'
    BOOKING_VIEW_OWN = 'booking:view-own'
    BOOKING_CREATE = 'booking:create'
    BOOKING_UPDATE = 'booking:update'


class UserRole(StrEnum):
    ADMIN = 'admin'
    MANAGER = 'manager'
    USER = 'user'
    GUEST = 'guest'


ROLE_PERMISSIONS: Final[dict[UserRole, frozenset[Permission]]] = {
    UserRole.ADMIN: frozenset(Permission),
    UserRole.MANAGER: frozenset({Permission.BOOKING_VIEW, Permission.BOOKING_UPDATE}),
    UserRole.USER: frozenset({Permission.BOOKING_VIEW_OWN, Permission.BOOKING_CREATE}),
    UserRole.GUEST: frozenset(),
}


@attrs.define
class UserEntity:
    id: str
    email: str = ''
    full_name: str = ''
    phone: str = ''
    address: str = ''
    role: UserRole = UserRole.USER
    is_active: bool = True

    def has_permission(self, permission: Permission) -> bool:
        if self.role == UserRole.ADMIN:
            return True
        return permission in ROLE_PERMISSIONS.get(self.role, frozenset())

    @property
    def bypasses_ownership(self) -> bool:
        return self.has_permission(Permission.BOOKING_VIEW)
