from src.service.tour_booking.domain.enum.booking_status import BookingStatus
from src.service.tour_booking.domain.enum.payment_method import PaymentMethod
from src.service.tour_booking.domain.enum.payment_status import PaymentStatus

__all__ = ['BookingStatus', 'PaymentMethod', 'PaymentStatus']
