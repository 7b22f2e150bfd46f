from datetime import datetime

import attrs

from src.service.tour_booking.domain.enum.booking_status import BookingStatus


@attrs.frozen
class StatusHistoryEntry:
    status: BookingStatus
    changed_at: datetime
    changed_by: str
    note: str = ''
