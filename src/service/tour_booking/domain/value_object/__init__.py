"""Tour Booking Domain Value Objects"""

from src.service.tour_booking.domain.value_object.booking_contact import (
    AddOn,
    CustomerInfo,
    EmergencyContact,
    Participant,
)
from src.service.tour_booking.domain.value_object.cancellation import Cancellation
from src.service.tour_booking.domain.value_object.payment_ledger import Payment, PaymentTransaction
from src.service.tour_booking.domain.value_object.pricing import (
    LineItem,
    PriceBreakdown,
    Pricing,
    PricingQuote,
)
from src.service.tour_booking.domain.value_object.selected_date import SelectedDate
from src.service.tour_booking.domain.value_object.status_history_entry import StatusHistoryEntry

__all__ = [
    'AddOn',
    'Cancellation',
    'CustomerInfo',
    'EmergencyContact',
    'LineItem',
    'Participant',
    'Payment',
    'PaymentTransaction',
    'PriceBreakdown',
    'Pricing',
    'PricingQuote',
    'SelectedDate',
    'StatusHistoryEntry',
]
