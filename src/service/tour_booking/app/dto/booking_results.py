from typing import Optional

import attrs

from src.service.tour_booking.domain.entity.booking_entity import Booking
from src.service.tour_booking.domain.entity.tour_entity import Tour
from src.service.tour_booking.domain.entity.user_entity import UserEntity


@attrs.define(frozen=True)
class BookingDetails:
    """A booking joined at read time with its tour and user."""

    booking: Booking
    tour: Optional[Tour] = None
    user: Optional[UserEntity] = None


@attrs.define(frozen=True)
class CancellationResult:
    booking: Booking
    refund_amount: int
    refund_policy: str
