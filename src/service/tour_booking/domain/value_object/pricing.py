import attrs


@attrs.frozen
class LineItem:
    quantity: int
    unit_price: int
    total: int


@attrs.frozen
class PriceBreakdown:
    adults: LineItem
    children: LineItem
    infants: LineItem


@attrs.frozen
class Pricing:
    adult_price: int
    child_price: int
    infant_price: int
    breakdown: PriceBreakdown
    subtotal: int
    discount: int
    tax: int
    total: int


@attrs.frozen
class PricingQuote:
    pricing: Pricing
    deposit_required: int
