"""
Unit tests for PricingCalculator

Test Focus:
1. Per-category line items come from quantity x unit price
2. total = subtotal - discount + tax
3. deposit_required = round(total x 0.4)
"""

import pytest

from src.service.tour_booking.domain.pricing_calculator import PricingCalculator


@pytest.mark.unit
class TestPricingCalculator:
    def test_line_items_and_total_for_mixed_group(self):
        quote = PricingCalculator.calculate(
            adults=2,
            children=1,
            infants=1,
            adult_price=2_500_000,
            child_price=1_500_000,
            infant_price=0,
        )

        breakdown = quote.pricing.breakdown
        assert breakdown.adults.total == 5_000_000
        assert breakdown.children.total == 1_500_000
        assert breakdown.infants.total == 0
        assert quote.pricing.subtotal == 6_500_000
        assert quote.pricing.total == 6_500_000
        assert quote.deposit_required == 2_600_000

    def test_discount_and_tax_are_applied_to_total(self):
        quote = PricingCalculator.calculate(
            adults=4, adult_price=1_000_000, discount=400_000, tax=100_000
        )

        assert quote.pricing.subtotal == 4_000_000
        assert quote.pricing.total == 3_700_000
        assert quote.deposit_required == 1_480_000

    def test_deposit_rounds_to_nearest_unit(self):
        # 0.4 x 7 = 2.8 and 0.4 x 3 = 1.2
        assert PricingCalculator.calculate(adults=1, adult_price=7).deposit_required == 3
        assert PricingCalculator.calculate(adults=1, adult_price=3).deposit_required == 1

    def test_same_input_prices_the_same(self):
        first = PricingCalculator.calculate(adults=3, children=2, adult_price=10, child_price=5)
        second = PricingCalculator.calculate(adults=3, children=2, adult_price=10, child_price=5)

        assert first == second

    def test_empty_group_prices_to_zero(self):
        quote = PricingCalculator.calculate()

        assert quote.pricing.total == 0
        assert quote.deposit_required == 0
