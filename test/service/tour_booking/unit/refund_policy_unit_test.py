"""
Unit tests for RefundPolicy

Test Focus:
1. Tier boundaries: >30 days 90%, 15-30 days 50%, 7-14 days 25%, under 7 days 0%
2. Refund is a share of paid_amount, not of the total
3. Partial days round up to a full day
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from src.service.tour_booking.domain.refund_policy import RefundPolicy
from src.service.tour_booking.domain.value_object.selected_date import SelectedDate


NOW = datetime(2026, 10, 17, 0, 0, tzinfo=timezone.utc)


def _departure(days_out: int) -> SelectedDate:
    start = date(2026, 10, 17) + timedelta(days=days_out)
    return SelectedDate(start_date=start, end_date=start + timedelta(days=1))


@pytest.mark.unit
class TestRefundPolicy:
    @pytest.mark.parametrize(
        ('days_out', 'expected_percentage'),
        [
            (45, 90),
            (31, 90),
            (30, 50),
            (15, 50),
            (14, 25),
            (7, 25),
            (6, 0),
            (0, 0),
        ],
    )
    def test_tier_boundaries(self, days_out: int, expected_percentage: int):
        decision = RefundPolicy.decide(
            selected_date=_departure(days_out), paid_amount=1_000_000, now=NOW
        )

        assert decision.days_until_tour == days_out
        assert decision.percentage == expected_percentage

    def test_refund_is_share_of_paid_amount(self):
        decision = RefundPolicy.decide(
            selected_date=_departure(20), paid_amount=4_000_000, now=NOW
        )

        assert decision.refund_amount == 2_000_000
        assert decision.policy_text == '20 days until tour'

    def test_nothing_paid_refunds_nothing(self):
        decision = RefundPolicy.decide(selected_date=_departure(60), paid_amount=0, now=NOW)

        assert decision.percentage == 90
        assert decision.refund_amount == 0

    def test_refund_rounds_to_nearest_unit(self):
        # 25% of 10_001 = 2_500.25
        decision = RefundPolicy.decide(selected_date=_departure(10), paid_amount=10_001, now=NOW)

        assert decision.refund_amount == 2_500

    def test_partial_day_counts_as_full_day(self):
        late_evening = NOW + timedelta(hours=20)

        days = RefundPolicy.days_until_tour(selected_date=_departure(15), now=late_evening)

        assert days == 15
