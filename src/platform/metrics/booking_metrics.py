from prometheus_client import Counter, Gauge, Histogram


class BookingMetrics:
    """Booking lifecycle and slot inventory metrics exposed on /metrics."""

    def __init__(self) -> None:
        # ========== Booking Lifecycle ==========
        self.bookings_created = Counter(
            'tour_bookings_created_total',
            'Bookings persisted',
            ['tour_id'],
        )

        self.bookings_cancelled = Counter(
            'tour_bookings_cancelled_total',
            'Bookings cancelled',
            ['tour_id', 'refund_tier'],  # refund_tier: 90/50/25/0
        )

        self.status_transitions = Counter(
            'tour_booking_status_transitions_total',
            'Status transitions applied',
            ['from_status', 'to_status'],
        )

        # ========== Payments ==========
        self.payments_recorded = Counter(
            'tour_booking_payments_total',
            'Payment transactions recorded',
            ['method'],
        )

        self.payment_amount = Counter(
            'tour_booking_payment_amount_total',
            'Sum of recorded payment amounts',
            ['method'],
        )

        # ========== Slot Inventory ==========
        self.slot_conflicts = Counter(
            'tour_slot_reservation_conflicts_total',
            'Bookings rejected or rolled back for lack of capacity',
            ['tour_id', 'stage'],  # stage: precheck/reserve
        )

        self.reserved_slots = Gauge(
            'tour_slots_reserved',
            'Net slots reserved by this process per tour',
            ['tour_id'],
        )

        self.side_effect_failures = Counter(
            'tour_booking_side_effect_failures_total',
            'Best-effort side effects that failed and were swallowed',
            ['kind'],  # kind: notification/slot_release/slot_reserve
        )

        # ========== Latency ==========
        self.use_case_duration = Histogram(
            'tour_booking_use_case_duration_seconds',
            'Use case execution time',
            ['use_case'],
            buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
        )

    # ========== Helper Methods ==========

    def record_booking_created(self, *, tour_id: str, slots: int) -> None:
        self.bookings_created.labels(tour_id=tour_id).inc()
        self.reserved_slots.labels(tour_id=tour_id).inc(slots)

    def record_booking_released(self, *, tour_id: str, slots: int) -> None:
        self.reserved_slots.labels(tour_id=tour_id).dec(slots)

    def record_booking_cancelled(self, *, tour_id: str, refund_percentage: int) -> None:
        self.bookings_cancelled.labels(tour_id=tour_id, refund_tier=str(refund_percentage)).inc()

    def record_status_transition(self, *, from_status: str, to_status: str) -> None:
        self.status_transitions.labels(from_status=from_status, to_status=to_status).inc()

    def record_payment(self, *, method: str, amount: int) -> None:
        self.payments_recorded.labels(method=method).inc()
        self.payment_amount.labels(method=method).inc(amount)

    def record_slot_conflict(self, *, tour_id: str, stage: str) -> None:
        self.slot_conflicts.labels(tour_id=tour_id, stage=stage).inc()

    def record_side_effect_failure(self, *, kind: str) -> None:
        self.side_effect_failures.labels(kind=kind).inc()


# Global metrics instance
metrics = BookingMetrics()
