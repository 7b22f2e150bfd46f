from datetime import datetime, timezone
import random
from typing import Any, List, Optional

import attrs
from uuid_utils import UUID
import uuid_utils

from src.platform.exception.exceptions import InvalidInputError
from src.platform.logging.loguru_io import Logger
from src.service.tour_booking.domain.booking_state_machine import BookingStateMachine
from src.service.tour_booking.domain.business_config import (
    BookingCode,
    StatusNotes,
    UpdatableFields,
)
from src.service.tour_booking.domain.enum.booking_status import BookingStatus
from src.service.tour_booking.domain.enum.payment_method import PaymentMethod
from src.service.tour_booking.domain.enum.payment_status import PaymentStatus
from src.service.tour_booking.domain.value_object.booking_contact import (
    AddOn,
    CustomerInfo,
    EmergencyContact,
    Participant,
)
from src.service.tour_booking.domain.value_object.cancellation import Cancellation
from src.service.tour_booking.domain.value_object.payment_ledger import (
    Payment,
    PaymentTransaction,
)
from src.service.tour_booking.domain.value_object.pricing import Pricing, PricingQuote
from src.service.tour_booking.domain.value_object.selected_date import SelectedDate
from src.service.tour_booking.domain.value_object.status_history_entry import (
    StatusHistoryEntry,
)


def generate_booking_code(now: datetime) -> str:
    """BK + creation date + random 4 digits. Collisions are possible and tolerated."""
    suffix = random.randint(BookingCode.SUFFIX_MIN, BookingCode.SUFFIX_MAX)
    return f'{BookingCode.PREFIX}{now.strftime(BookingCode.DATE_FORMAT)}{suffix:04d}'


@attrs.define
class Booking:
    id: UUID
    booking_code: str
    tour_id: str
    user_id: str
    selected_date: SelectedDate
    number_of_adults: int
    number_of_children: int
    number_of_infants: int
    total_participants: int
    pricing: Pricing
    payment: Payment
    customer_info: CustomerInfo = attrs.field(factory=CustomerInfo)
    participants: List[Participant] = attrs.field(factory=list)
    add_ons: List[AddOn] = attrs.field(factory=list)
    emergency_contact: Optional[EmergencyContact] = None
    special_requests: str = ''
    internal_notes: str = ''
    status: BookingStatus = BookingStatus.PENDING
    status_history: List[StatusHistoryEntry] = attrs.field(factory=list)
    cancellation: Optional[Cancellation] = None
    created_by: str = ''
    updated_by: str = ''
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    confirmed_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        tour_id: str,
        user_id: str,
        selected_date: SelectedDate,
        number_of_adults: int,
        number_of_children: int,
        number_of_infants: int,
        quote: PricingQuote,
        customer_info: CustomerInfo,
        participants: Optional[List[Participant]] = None,
        add_ons: Optional[List[AddOn]] = None,
        emergency_contact: Optional[EmergencyContact] = None,
        special_requests: str = '',
        payment_method: PaymentMethod = PaymentMethod.BANK_TRANSFER,
        now: Optional[datetime] = None,
    ) -> 'Booking':
        if min(number_of_adults, number_of_children, number_of_infants) < 0:
            raise InvalidInputError('Participant counts cannot be negative')

        now = now or datetime.now(timezone.utc)
        return cls(
            id=uuid_utils.uuid7(),
            booking_code=generate_booking_code(now),
            tour_id=tour_id,
            user_id=user_id,
            selected_date=selected_date,
            number_of_adults=number_of_adults,
            number_of_children=number_of_children,
            number_of_infants=number_of_infants,
            total_participants=number_of_adults + number_of_children + number_of_infants,
            pricing=quote.pricing,
            payment=Payment.open(
                total=quote.pricing.total,
                deposit_required=quote.deposit_required,
                method=payment_method,
            ),
            customer_info=customer_info,
            participants=list(participants or []),
            add_ons=list(add_ons or []),
            emergency_contact=emergency_contact,
            special_requests=special_requests,
            status=BookingStatus.PENDING,
            status_history=[
                StatusHistoryEntry(
                    status=BookingStatus.PENDING,
                    changed_at=now,
                    changed_by=user_id,
                    note=StatusNotes.CREATED,
                )
            ],
            created_by=user_id,
            updated_by=user_id,
            created_at=now,
            updated_at=now,
        )

    def is_owned_by(self, user_id: str) -> bool:
        return self.user_id == user_id

    @Logger.io
    def with_status(
        self, *, status: BookingStatus, changed_by: str, note: str = '', now: datetime
    ) -> 'Booking':
        """Append exactly one history entry; legality is checked by BookingStateMachine."""
        changes: dict[str, Any] = {
            'status': status,
            'status_history': [
                *self.status_history,
                StatusHistoryEntry(
                    status=status, changed_at=now, changed_by=changed_by, note=note
                ),
            ],
            'updated_by': changed_by,
            'updated_at': now,
        }
        if status == BookingStatus.CONFIRMED:
            changes['confirmed_at'] = now
        elif status == BookingStatus.CANCELLED:
            changes['cancelled_at'] = now
        return attrs.evolve(self, **changes)

    @Logger.io
    def with_payment(self, *, transaction: PaymentTransaction, recorded_by: str) -> 'Booking':
        return attrs.evolve(
            self,
            payment=self.payment.record(transaction, total=self.pricing.total),
            updated_by=recorded_by,
            updated_at=transaction.paid_at,
        )

    @Logger.io
    def with_cancellation(
        self, *, cancelled_by: str, reason: str, refund_amount: int, now: datetime
    ) -> 'Booking':
        BookingStateMachine.guard(self, BookingStatus.CANCELLED, now=now)
        cancelled = self.with_status(
            status=BookingStatus.CANCELLED,
            changed_by=cancelled_by,
            note=reason or StatusNotes.CANCELLED,
            now=now,
        )
        return attrs.evolve(
            cancelled,
            cancellation=Cancellation(
                cancelled_at=now,
                cancelled_by=cancelled_by,
                reason=reason,
                refund_amount=refund_amount,
                refund_status=PaymentStatus.PENDING if refund_amount > 0 else None,
            ),
        )

    @Logger.io
    def with_details(
        self, *, changes: dict[str, Any], updated_by: str, now: datetime
    ) -> 'Booking':
        """Apply owner edits; anything outside UpdatableFields.ALLOWED is dropped."""
        allowed = {
            key: value
            for key, value in changes.items()
            if key in UpdatableFields.ALLOWED and key not in UpdatableFields.BLOCKED
        }
        if 'customer_info' in allowed and allowed['customer_info'] is None:
            del allowed['customer_info']
        if 'participants' in allowed:
            allowed['participants'] = list(allowed['participants'] or [])
        return attrs.evolve(self, **allowed, updated_by=updated_by, updated_at=now)
