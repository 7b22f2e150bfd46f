from datetime import date
from typing import Optional

import attrs

from src.service.tour_booking.domain.business_config import BookingDefaults


@attrs.frozen
class CustomerInfo:
    full_name: str = ''
    email: str = ''
    phone: str = ''
    address: str = ''
    nationality: str = BookingDefaults.NATIONALITY
    passport_number: str = attrs.field(default='', repr=False)


@attrs.frozen
class Participant:
    """Per-person detail, informational only."""

    full_name: str
    date_of_birth: Optional[date] = None
    gender: str = ''
    passport_number: str = attrs.field(default='', repr=False)


@attrs.frozen
class EmergencyContact:
    name: str = ''
    relationship: str = ''
    phone: str = ''


@attrs.frozen
class AddOn:
    name: str
    price: int = 0
    quantity: int = 1
