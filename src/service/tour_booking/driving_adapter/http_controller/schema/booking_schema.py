from datetime import date, datetime
from typing import Any, List, Optional

import attrs
from pydantic import Field

from src.service.tour_booking.app.dto.booking_listing import BookingPage
from src.service.tour_booking.app.dto.booking_results import BookingDetails, CancellationResult
from src.service.tour_booking.app.dto.booking_statistics import BookingStatistics
from src.service.tour_booking.domain.business_config import BookingDefaults
from src.service.tour_booking.domain.entity.booking_entity import Booking
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
from src.service.tour_booking.domain.value_object.pricing import LineItem, Pricing
from src.service.tour_booking.domain.value_object.status_history_entry import (
    StatusHistoryEntry,
)
from src.service.tour_booking.driving_adapter.http_controller.schema.base_schema import (
    CamelModel,
    Pagination,
)


# ========== Shared parts ==========


class SelectedDateSchema(CamelModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class CustomerInfoSchema(CamelModel):
    full_name: str = ''
    email: str = ''
    phone: str = ''
    address: str = ''
    nationality: str = BookingDefaults.NATIONALITY
    passport_number: str = ''

    def to_domain(self) -> CustomerInfo:
        return CustomerInfo(**self.model_dump())

    @classmethod
    def from_domain(cls, value: CustomerInfo) -> 'CustomerInfoSchema':
        return cls(**attrs.asdict(value))


class ParticipantSchema(CamelModel):
    full_name: str
    date_of_birth: Optional[date] = None
    gender: str = ''
    passport_number: str = ''

    def to_domain(self) -> Participant:
        return Participant(**self.model_dump())

    @classmethod
    def from_domain(cls, value: Participant) -> 'ParticipantSchema':
        return cls(**attrs.asdict(value))


class EmergencyContactSchema(CamelModel):
    name: str = ''
    relationship: str = ''
    phone: str = ''

    def to_domain(self) -> EmergencyContact:
        return EmergencyContact(**self.model_dump())

    @classmethod
    def from_domain(cls, value: EmergencyContact) -> 'EmergencyContactSchema':
        return cls(**attrs.asdict(value))


class AddOnSchema(CamelModel):
    name: str
    price: int = Field(default=0, ge=0)
    quantity: int = Field(default=1, ge=1)

    def to_domain(self) -> AddOn:
        return AddOn(**self.model_dump())

    @classmethod
    def from_domain(cls, value: AddOn) -> 'AddOnSchema':
        return cls(**attrs.asdict(value))


# ========== Requests ==========


class BookingCreateRequest(CamelModel):
    """Client-sent pricing is ignored; the server prices from the tour."""

    model_config = {
        'json_schema_extra': {
            'example': {
                'tourId': 'tour-halong-bay',
                'selectedDate': {'startDate': '2027-03-10', 'endDate': '2027-03-11'},
                'numberOfAdults': 2,
                'numberOfChildren': 1,
                'numberOfInfants': 0,
                'paymentMethod': 'bank_transfer',
            }
        },
    }

    tour_id: str
    selected_date: SelectedDateSchema = Field(default_factory=SelectedDateSchema)
    number_of_adults: int = Field(default=0, ge=0)
    number_of_children: int = Field(default=0, ge=0)
    number_of_infants: int = Field(default=0, ge=0)
    customer_info: Optional[CustomerInfoSchema] = None
    participants: List[ParticipantSchema] = []
    add_ons: List[AddOnSchema] = []
    emergency_contact: Optional[EmergencyContactSchema] = None
    special_requests: str = ''
    payment_method: Optional[str] = None


class BookingUpdateRequest(CamelModel):
    customer_info: Optional[CustomerInfoSchema] = None
    participants: Optional[List[ParticipantSchema]] = None
    special_requests: Optional[str] = None
    emergency_contact: Optional[EmergencyContactSchema] = None
    internal_notes: Optional[str] = None

    def to_changes(self) -> dict[str, Any]:
        """Only the fields the caller actually sent."""
        changes: dict[str, Any] = {}
        for name in self.model_fields_set:
            value = getattr(self, name)
            if name == 'customer_info' and value is None:
                continue
            if name == 'participants':
                value = [p.to_domain() for p in value or []]
            elif name in ('customer_info', 'emergency_contact') and value is not None:
                value = value.to_domain()
            elif name in ('special_requests', 'internal_notes') and value is None:
                value = ''
            changes[name] = value
        return changes


class PaymentRequest(CamelModel):
    model_config = {
        'json_schema_extra': {'example': {'amount': 2000000, 'method': 'bank_transfer'}},
    }

    amount: Optional[int] = None
    method: Optional[str] = None
    transaction_id: Optional[str] = None
    note: str = ''


class CancelBookingRequest(CamelModel):
    reason: str = ''


class BookingStatusUpdateRequest(CamelModel):
    model_config = {
        'json_schema_extra': {'example': {'status': 'confirmed', 'note': 'Deposit verified'}},
    }

    status: str
    note: str = ''


# ========== Responses ==========


class LineItemResponse(CamelModel):
    quantity: int
    unit_price: int
    total: int

    @classmethod
    def from_domain(cls, item: LineItem) -> 'LineItemResponse':
        return cls(quantity=item.quantity, unit_price=item.unit_price, total=item.total)


class PriceBreakdownResponse(CamelModel):
    adults: LineItemResponse
    children: LineItemResponse
    infants: LineItemResponse


class PricingResponse(CamelModel):
    adult_price: int
    child_price: int
    infant_price: int
    breakdown: PriceBreakdownResponse
    subtotal: int
    discount: int
    tax: int
    total: int

    @classmethod
    def from_domain(cls, pricing: Pricing) -> 'PricingResponse':
        return cls(
            adult_price=pricing.adult_price,
            child_price=pricing.child_price,
            infant_price=pricing.infant_price,
            breakdown=PriceBreakdownResponse(
                adults=LineItemResponse.from_domain(pricing.breakdown.adults),
                children=LineItemResponse.from_domain(pricing.breakdown.children),
                infants=LineItemResponse.from_domain(pricing.breakdown.infants),
            ),
            subtotal=pricing.subtotal,
            discount=pricing.discount,
            tax=pricing.tax,
            total=pricing.total,
        )


class TransactionResponse(CamelModel):
    transaction_id: str
    amount: int
    method: str
    status: str
    paid_at: datetime
    note: str = ''

    @classmethod
    def from_domain(cls, tx: PaymentTransaction) -> 'TransactionResponse':
        return cls(
            transaction_id=tx.transaction_id,
            amount=tx.amount,
            method=tx.method.value,
            status=tx.status.value,
            paid_at=tx.paid_at,
            note=tx.note,
        )


class PaymentResponse(CamelModel):
    deposit_required: int
    remaining_amount: int
    method: str
    status: str
    paid_amount: int
    deposit_paid: bool
    deposit_paid_at: Optional[datetime] = None
    transactions: List[TransactionResponse] = []

    @classmethod
    def from_domain(cls, payment: Payment) -> 'PaymentResponse':
        return cls(
            deposit_required=payment.deposit_required,
            remaining_amount=payment.remaining_amount,
            method=payment.method.value,
            status=payment.status.value,
            paid_amount=payment.paid_amount,
            deposit_paid=payment.deposit_paid,
            deposit_paid_at=payment.deposit_paid_at,
            transactions=[TransactionResponse.from_domain(tx) for tx in payment.transactions],
        )


class StatusHistoryResponse(CamelModel):
    status: str
    changed_at: datetime
    changed_by: str
    note: str = ''

    @classmethod
    def from_domain(cls, entry: StatusHistoryEntry) -> 'StatusHistoryResponse':
        return cls(
            status=entry.status.value,
            changed_at=entry.changed_at,
            changed_by=entry.changed_by,
            note=entry.note,
        )


class CancellationResponse(CamelModel):
    is_cancelled: bool
    cancelled_at: datetime
    cancelled_by: str
    reason: str = ''
    refund_amount: int = 0
    refund_status: Optional[str] = None
    refunded_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, cancellation: Cancellation) -> 'CancellationResponse':
        return cls(
            is_cancelled=cancellation.is_cancelled,
            cancelled_at=cancellation.cancelled_at,
            cancelled_by=cancellation.cancelled_by,
            reason=cancellation.reason,
            refund_amount=cancellation.refund_amount,
            refund_status=(
                cancellation.refund_status.value if cancellation.refund_status else None
            ),
            refunded_at=cancellation.refunded_at,
        )


class BookingResponse(CamelModel):
    id: str
    booking_code: str
    tour_id: str
    user_id: str
    selected_date: SelectedDateSchema
    number_of_adults: int
    number_of_children: int
    number_of_infants: int
    total_participants: int
    pricing: PricingResponse
    payment: PaymentResponse
    customer_info: CustomerInfoSchema
    participants: List[ParticipantSchema] = []
    add_ons: List[AddOnSchema] = []
    emergency_contact: Optional[EmergencyContactSchema] = None
    special_requests: str = ''
    internal_notes: str = ''
    status: str
    status_history: List[StatusHistoryResponse] = []
    cancellation: Optional[CancellationResponse] = None
    created_by: str = ''
    updated_by: str = ''
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    confirmed_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, booking: Booking) -> 'BookingResponse':
        return cls(**_booking_fields(booking))


def _booking_fields(booking: Booking) -> dict[str, Any]:
    """Constructor kwargs shared by BookingResponse and BookingDetailResponse."""
    return {
        'id': str(booking.id),
        'booking_code': booking.booking_code,
        'tour_id': booking.tour_id,
        'user_id': booking.user_id,
        'selected_date': SelectedDateSchema(
            start_date=booking.selected_date.start_date,
            end_date=booking.selected_date.end_date,
        ),
        'number_of_adults': booking.number_of_adults,
        'number_of_children': booking.number_of_children,
        'number_of_infants': booking.number_of_infants,
        'total_participants': booking.total_participants,
        'pricing': PricingResponse.from_domain(booking.pricing),
        'payment': PaymentResponse.from_domain(booking.payment),
        'customer_info': CustomerInfoSchema.from_domain(booking.customer_info),
        'participants': [ParticipantSchema.from_domain(p) for p in booking.participants],
        'add_ons': [AddOnSchema.from_domain(a) for a in booking.add_ons],
        'emergency_contact': (
            EmergencyContactSchema.from_domain(booking.emergency_contact)
            if booking.emergency_contact
            else None
        ),
        'special_requests': booking.special_requests,
        'internal_notes': booking.internal_notes,
        'status': booking.status.value,
        'status_history': [StatusHistoryResponse.from_domain(e) for e in booking.status_history],
        'cancellation': (
            CancellationResponse.from_domain(booking.cancellation)
            if booking.cancellation
            else None
        ),
        'created_by': booking.created_by,
        'updated_by': booking.updated_by,
        'created_at': booking.created_at,
        'updated_at': booking.updated_at,
        'confirmed_at': booking.confirmed_at,
        'cancelled_at': booking.cancelled_at,
    }


class TourSummaryResponse(CamelModel):
    id: str
    title: str


class UserSummaryResponse(CamelModel):
    id: str
    email: str
    full_name: str


class BookingDetailResponse(BookingResponse):
    tour: Optional[TourSummaryResponse] = None
    user: Optional[UserSummaryResponse] = None

    @classmethod
    def from_details(cls, details: BookingDetails) -> 'BookingDetailResponse':
        tour, user = details.tour, details.user
        return cls(
            **_booking_fields(details.booking),
            tour=TourSummaryResponse(id=tour.id, title=tour.title) if tour else None,
            user=(
                UserSummaryResponse(id=user.id, email=user.email, full_name=user.full_name)
                if user
                else None
            ),
        )


class CancelBookingResponse(CamelModel):
    booking: BookingResponse
    refund_amount: int
    refund_policy: str

    @classmethod
    def from_result(cls, result: CancellationResult) -> 'CancelBookingResponse':
        return cls(
            booking=BookingResponse.from_entity(result.booking),
            refund_amount=result.refund_amount,
            refund_policy=result.refund_policy,
        )


class BookingStatisticsResponse(CamelModel):
    total: int
    pending: int
    confirmed: int
    cancelled: int
    completed: int
    total_revenue: int
    total_paid: int

    @classmethod
    def from_dto(cls, stats: BookingStatistics) -> 'BookingStatisticsResponse':
        return cls(
            total=stats.total,
            pending=stats.pending,
            confirmed=stats.confirmed,
            cancelled=stats.cancelled,
            completed=stats.completed,
            total_revenue=stats.total_revenue,
            total_paid=stats.total_paid,
        )


def pagination_of(page: BookingPage) -> Pagination:
    return Pagination(
        page=page.page, limit=page.limit, total=page.total, total_pages=page.total_pages
    )
