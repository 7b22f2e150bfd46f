import attrs


@attrs.define(frozen=True)
class BookingStatistics:
    total: int = 0
    pending: int = 0
    confirmed: int = 0
    cancelled: int = 0
    completed: int = 0
    total_revenue: int = 0  # pricing.total of non-cancelled bookings
    total_paid: int = 0  # paid_amount across all bookings
