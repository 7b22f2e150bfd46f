"""
Bearer token handling.

Tokens are issued upstream; this service only verifies them and rebuilds the
caller from the claims without a user lookup.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import AuthenticationError, ForbiddenError
from src.service.tour_booking.domain.entity.user_entity import UserEntity, UserRole


class JwtAuth:
    def __init__(self) -> None:
        self.secret = settings.JWT_SECRET.get_secret_value()
        self.algorithm = settings.JWT_ALGORITHM
        self.token_expire_minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES

    def create_jwt_token(self, user_entity: UserEntity) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            'sub': user_entity.id,
            'exp': now + timedelta(minutes=self.token_expire_minutes),
            'iat': now,
            'email': user_entity.email,
            'full_name': user_entity.full_name,
            'role': user_entity.role.value,
            'is_active': user_entity.is_active,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.PyJWTError:
            raise AuthenticationError('Invalid token') from None

    def get_current_user_info_from_jwt(self, token: Optional[str]) -> UserEntity:
        if not token:
            raise AuthenticationError('Not authenticated')

        payload = self.decode_jwt_token(token)
        user_id = payload.get('sub')
        role = payload.get('role')
        if not user_id or not role:
            raise AuthenticationError('Invalid token')
        try:
            user_role = UserRole(role)
        except ValueError:
            raise AuthenticationError('Invalid token') from None

        user_entity = UserEntity(
            id=str(user_id),
            email=payload.get('email', ''),
            full_name=payload.get('full_name', ''),
            role=user_role,
            is_active=payload.get('is_active', True),
        )
        if not user_entity.is_active:
            raise ForbiddenError('User is inactive')
        return user_entity
