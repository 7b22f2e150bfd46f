from typing import Protocol

from uuid_utils import UUID

from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.service.tour_booking.domain.entity.booking_entity import Booking
from src.service.tour_booking.domain.entity.user_entity import UserEntity


class _BookingReader(Protocol):
    async def get_by_id(self, *, booking_id: UUID) -> Booking | None: ...


async def load_booking(repo: _BookingReader, booking_id: UUID) -> Booking:
    booking = await repo.get_by_id(booking_id=booking_id)
    if not booking:
        raise NotFoundError('Booking not found')
    return booking


def ensure_booking_access(booking: Booking, user: UserEntity, *, action: str) -> None:
    """Owners act on their own bookings; staff roles bypass ownership."""
    if booking.is_owned_by(user.id) or user.bypasses_ownership:
        return
    raise ForbiddenError(f'You do not have permission to {action} this booking')
