from decimal import ROUND_HALF_UP, Decimal

from src.service.tour_booking.domain.business_config import DepositPolicy
from src.service.tour_booking.domain.value_object.pricing import (
    LineItem,
    PriceBreakdown,
    Pricing,
    PricingQuote,
)


def round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal('1'), rounding=ROUND_HALF_UP))


class PricingCalculator:
    """
    Pure pricing: quantity x unit price per category, subtotal, total and deposit.

    total = subtotal - discount + tax
    deposit_required = round(total x 0.4), halves rounded up
    """

    @staticmethod
    def calculate(
        *,
        adults: int = 0,
        children: int = 0,
        infants: int = 0,
        adult_price: int = 0,
        child_price: int = 0,
        infant_price: int = 0,
        discount: int = 0,
        tax: int = 0,
    ) -> PricingQuote:
        breakdown = PriceBreakdown(
            adults=LineItem(quantity=adults, unit_price=adult_price, total=adults * adult_price),
            children=LineItem(
                quantity=children, unit_price=child_price, total=children * child_price
            ),
            infants=LineItem(
                quantity=infants, unit_price=infant_price, total=infants * infant_price
            ),
        )
        subtotal = breakdown.adults.total + breakdown.children.total + breakdown.infants.total
        total = subtotal - discount + tax

        pricing = Pricing(
            adult_price=adult_price,
            child_price=child_price,
            infant_price=infant_price,
            breakdown=breakdown,
            subtotal=subtotal,
            discount=discount,
            tax=tax,
            total=total,
        )
        deposit_required = round_half_up(Decimal(total) * DepositPolicy.RATE)
        return PricingQuote(pricing=pricing, deposit_required=deposit_required)
