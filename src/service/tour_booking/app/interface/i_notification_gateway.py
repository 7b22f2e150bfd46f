from abc import ABC, abstractmethod
from typing import Optional

from src.service.tour_booking.domain.entity.booking_entity import Booking
from src.service.tour_booking.domain.entity.tour_entity import Tour


class INotificationGateway(ABC):
    """
    Transactional booking emails.

    Callers treat every method as best-effort: a raised exception is logged and
    never fails the booking operation that triggered it.
    """

    @abstractmethod
    async def send_booking_confirmation(self, *, booking: Booking, tour: Optional[Tour]) -> None:
        pass

    @abstractmethod
    async def send_payment_confirmation(self, *, booking: Booking) -> None:
        """Mentions the latest transaction of booking.payment."""
        pass

    @abstractmethod
    async def send_cancellation(self, *, booking: Booking, refund_amount: int) -> None:
        pass
