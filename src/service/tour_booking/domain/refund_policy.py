from datetime import datetime, timezone
from decimal import Decimal
import math

import attrs

from src.service.tour_booking.domain.business_config import RefundTiers
from src.service.tour_booking.domain.pricing_calculator import round_half_up
from src.service.tour_booking.domain.value_object.selected_date import SelectedDate


@attrs.frozen
class RefundDecision:
    days_until_tour: int
    percentage: int
    refund_amount: int

    @property
    def policy_text(self) -> str:
        return f'{self.days_until_tour} days until tour'


class RefundPolicy:
    """Refund on cancellation is a share of what was paid, tiered by days left."""

    @staticmethod
    def days_until_tour(*, selected_date: SelectedDate, now: datetime) -> int:
        delta = selected_date.starts_at() - now.astimezone(timezone.utc)
        return math.ceil(delta.total_seconds() / 86400)

    @staticmethod
    def percentage_for(days_until_tour: int) -> int:
        for min_days, percentage in RefundTiers.TIERS:
            if days_until_tour >= min_days:
                return percentage
        return RefundTiers.NO_REFUND

    @classmethod
    def decide(
        cls, *, selected_date: SelectedDate, paid_amount: int, now: datetime
    ) -> RefundDecision:
        days = cls.days_until_tour(selected_date=selected_date, now=now)
        percentage = cls.percentage_for(days)
        refund_amount = round_half_up(Decimal(paid_amount) * percentage / 100)
        return RefundDecision(
            days_until_tour=days, percentage=percentage, refund_amount=refund_amount
        )
