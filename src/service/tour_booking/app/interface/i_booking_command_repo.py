"""
Booking Command Repository Interface

Write side of the booking record store. Each mutating call is applied to the
latest stored document of that booking and returns the persisted result.
Persistence failures propagate unchanged.
"""

from abc import ABC, abstractmethod
from typing import Any

from uuid_utils import UUID

from src.service.tour_booking.domain.entity.booking_entity import Booking
from src.service.tour_booking.domain.enum.booking_status import BookingStatus
from src.service.tour_booking.domain.value_object.payment_ledger import PaymentTransaction


class IBookingCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        """Persist a new booking (code uniqueness is not enforced)."""
        pass

    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID) -> Booking | None:
        pass

    @abstractmethod
    async def update_details(
        self, *, booking_id: UUID, changes: dict[str, Any], updated_by: str
    ) -> Booking:
        """Apply owner-editable fields only."""
        pass

    @abstractmethod
    async def update_status(
        self, *, booking_id: UUID, status: BookingStatus, changed_by: str, note: str = ''
    ) -> Booking:
        """Set status and append one status-history entry."""
        pass

    @abstractmethod
    async def add_payment_transaction(
        self, *, booking_id: UUID, transaction: PaymentTransaction, recorded_by: str
    ) -> Booking:
        """Append a transaction and recompute paid/remaining/deposit/payment status."""
        pass

    @abstractmethod
    async def cancel(
        self, *, booking_id: UUID, cancelled_by: str, reason: str, refund_amount: int
    ) -> Booking:
        pass

    @abstractmethod
    async def delete(self, *, booking_id: UUID) -> None:
        pass
