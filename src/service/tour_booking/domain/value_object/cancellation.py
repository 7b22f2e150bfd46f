from datetime import datetime
from typing import Optional

import attrs

from src.service.tour_booking.domain.enum.payment_status import PaymentStatus


@attrs.frozen
class Cancellation:
    cancelled_at: datetime
    cancelled_by: str
    reason: str = ''
    refund_amount: int = 0
    refund_status: Optional[PaymentStatus] = None
    refunded_at: Optional[datetime] = None
    is_cancelled: bool = True
