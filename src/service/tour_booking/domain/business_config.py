"""Business rules and constants for the booking lifecycle."""

from decimal import Decimal
from typing import Final


class DepositPolicy:
    RATE: Final[Decimal] = Decimal('0.4')


class RefundTiers:
    """(minimum days until tour, refund percentage), evaluated top-down."""

    TIERS: Final[tuple[tuple[int, int], ...]] = (
        (31, 90),
        (15, 50),
        (7, 25),
    )
    NO_REFUND: Final[int] = 0


class BookingCode:
    PREFIX: Final[str] = 'BK'
    DATE_FORMAT: Final[str] = '%Y%m%d'
    SUFFIX_MIN: Final[int] = 0
    SUFFIX_MAX: Final[int] = 9999


class ListingDefaults:
    PAGE: Final[int] = 1
    LIMIT: Final[int] = 10
    MAX_LIMIT: Final[int] = 100


class BookingDefaults:
    NATIONALITY: Final[str] = 'Vietnam'
    TRANSACTION_ID_PREFIX: Final[str] = 'TXN'


class StatusNotes:
    CREATED: Final[str] = 'Booking created'
    AUTO_CONFIRMED: Final[str] = 'Auto-confirmed after deposit payment'
    CANCELLED: Final[str] = 'Booking cancelled'


class UpdatableFields:
    """Owner-editable fields; everything else is stripped from an update."""

    ALLOWED: Final[frozenset[str]] = frozenset(
        {
            'customer_info',
            'participants',
            'special_requests',
            'emergency_contact',
            'internal_notes',
        }
    )
    BLOCKED: Final[frozenset[str]] = frozenset(
        {'id', 'booking_code', 'user_id', 'tour_id', 'created_at', 'created_by', 'status'}
    )
