"""
Booking <-> JSON document mapping.

The SQL store keeps each booking as one JSON document next to a handful of
indexed columns; the in-memory store and seed loader reuse the same shape.
Dates and datetimes are ISO strings, enums their values, money plain ints.
"""

from datetime import date, datetime
from typing import Any, Optional

from uuid_utils import UUID

from src.service.tour_booking.domain.entity.booking_entity import Booking
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
from src.service.tour_booking.domain.value_object.pricing import LineItem, PriceBreakdown, Pricing
from src.service.tour_booking.domain.value_object.selected_date import SelectedDate
from src.service.tour_booking.domain.value_object.status_history_entry import (
    StatusHistoryEntry,
)


def _iso(value: Optional[date | datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


def _parse_date(value: str | date) -> date:
    if isinstance(value, date):
        return value
    # tolerate full timestamps in hand-written seed files
    return date.fromisoformat(value[:10])


def _line_item_doc(item: LineItem) -> dict[str, int]:
    return {'quantity': item.quantity, 'unit_price': item.unit_price, 'total': item.total}


def _transaction_doc(tx: PaymentTransaction) -> dict[str, Any]:
    return {
        'transaction_id': tx.transaction_id,
        'amount': tx.amount,
        'method': tx.method.value,
        'status': tx.status.value,
        'paid_at': _iso(tx.paid_at),
        'note': tx.note,
    }


def booking_to_document(booking: Booking) -> dict[str, Any]:
    pricing = booking.pricing
    payment = booking.payment
    cancellation = booking.cancellation
    return {
        'id': str(booking.id),
        'booking_code': booking.booking_code,
        'tour_id': booking.tour_id,
        'user_id': booking.user_id,
        'selected_date': {
            'start_date': _iso(booking.selected_date.start_date),
            'end_date': _iso(booking.selected_date.end_date),
        },
        'number_of_adults': booking.number_of_adults,
        'number_of_children': booking.number_of_children,
        'number_of_infants': booking.number_of_infants,
        'total_participants': booking.total_participants,
        'pricing': {
            'adult_price': pricing.adult_price,
            'child_price': pricing.child_price,
            'infant_price': pricing.infant_price,
            'breakdown': {
                'adults': _line_item_doc(pricing.breakdown.adults),
                'children': _line_item_doc(pricing.breakdown.children),
                'infants': _line_item_doc(pricing.breakdown.infants),
            },
            'subtotal': pricing.subtotal,
            'discount': pricing.discount,
            'tax': pricing.tax,
            'total': pricing.total,
        },
        'payment': {
            'deposit_required': payment.deposit_required,
            'remaining_amount': payment.remaining_amount,
            'method': payment.method.value,
            'status': payment.status.value,
            'paid_amount': payment.paid_amount,
            'deposit_paid': payment.deposit_paid,
            'deposit_paid_at': _iso(payment.deposit_paid_at),
            'transactions': [_transaction_doc(tx) for tx in payment.transactions],
        },
        'customer_info': {
            'full_name': booking.customer_info.full_name,
            'email': booking.customer_info.email,
            'phone': booking.customer_info.phone,
            'address': booking.customer_info.address,
            'nationality': booking.customer_info.nationality,
            'passport_number': booking.customer_info.passport_number,
        },
        'participants': [
            {
                'full_name': p.full_name,
                'date_of_birth': _iso(p.date_of_birth),
                'gender': p.gender,
                'passport_number': p.passport_number,
            }
            for p in booking.participants
        ],
        'add_ons': [
            {'name': a.name, 'price': a.price, 'quantity': a.quantity} for a in booking.add_ons
        ],
        'emergency_contact': (
            {
                'name': booking.emergency_contact.name,
                'relationship': booking.emergency_contact.relationship,
                'phone': booking.emergency_contact.phone,
            }
            if booking.emergency_contact
            else None
        ),
        'special_requests': booking.special_requests,
        'internal_notes': booking.internal_notes,
        'status': booking.status.value,
        'status_history': [
            {
                'status': entry.status.value,
                'changed_at': _iso(entry.changed_at),
                'changed_by': entry.changed_by,
                'note': entry.note,
            }
            for entry in booking.status_history
        ],
        'cancellation': (
            {
                'is_cancelled': cancellation.is_cancelled,
                'cancelled_at': _iso(cancellation.cancelled_at),
                'cancelled_by': cancellation.cancelled_by,
                'reason': cancellation.reason,
                'refund_amount': cancellation.refund_amount,
                'refund_status': (
                    cancellation.refund_status.value if cancellation.refund_status else None
                ),
                'refunded_at': _iso(cancellation.refunded_at),
            }
            if cancellation
            else None
        ),
        'created_by': booking.created_by,
        'updated_by': booking.updated_by,
        'created_at': _iso(booking.created_at),
        'updated_at': _iso(booking.updated_at),
        'confirmed_at': _iso(booking.confirmed_at),
        'cancelled_at': _iso(booking.cancelled_at),
    }


def _line_item(doc: dict[str, Any]) -> LineItem:
    return LineItem(quantity=doc['quantity'], unit_price=doc['unit_price'], total=doc['total'])


def _transaction(doc: dict[str, Any]) -> PaymentTransaction:
    return PaymentTransaction(
        transaction_id=doc['transaction_id'],
        amount=doc['amount'],
        method=PaymentMethod(doc['method']),
        status=PaymentStatus(doc.get('status', PaymentStatus.COMPLETED)),
        paid_at=datetime.fromisoformat(doc['paid_at']),
        note=doc.get('note', ''),
    )


def _cancellation(doc: Optional[dict[str, Any]]) -> Optional[Cancellation]:
    if not doc:
        return None
    refund_status = doc.get('refund_status')
    return Cancellation(
        cancelled_at=datetime.fromisoformat(doc['cancelled_at']),
        cancelled_by=doc['cancelled_by'],
        reason=doc.get('reason', ''),
        refund_amount=doc.get('refund_amount', 0),
        refund_status=PaymentStatus(refund_status) if refund_status else None,
        refunded_at=_parse_datetime(doc.get('refunded_at')),
        is_cancelled=doc.get('is_cancelled', True),
    )


def document_to_booking(doc: dict[str, Any]) -> Booking:
    pricing = doc['pricing']
    payment = doc['payment']
    customer = doc.get('customer_info') or {}
    emergency = doc.get('emergency_contact')
    return Booking(
        id=UUID(doc['id']),
        booking_code=doc['booking_code'],
        tour_id=doc['tour_id'],
        user_id=doc['user_id'],
        selected_date=SelectedDate(
            start_date=_parse_date(doc['selected_date']['start_date']),
            end_date=_parse_date(doc['selected_date']['end_date']),
        ),
        number_of_adults=doc['number_of_adults'],
        number_of_children=doc['number_of_children'],
        number_of_infants=doc['number_of_infants'],
        total_participants=doc['total_participants'],
        pricing=Pricing(
            adult_price=pricing['adult_price'],
            child_price=pricing['child_price'],
            infant_price=pricing['infant_price'],
            breakdown=PriceBreakdown(
                adults=_line_item(pricing['breakdown']['adults']),
                children=_line_item(pricing['breakdown']['children']),
                infants=_line_item(pricing['breakdown']['infants']),
            ),
            subtotal=pricing['subtotal'],
            discount=pricing['discount'],
            tax=pricing['tax'],
            total=pricing['total'],
        ),
        payment=Payment(
            deposit_required=payment['deposit_required'],
            remaining_amount=payment['remaining_amount'],
            method=PaymentMethod(payment['method']),
            status=PaymentStatus(payment['status']),
            paid_amount=payment['paid_amount'],
            deposit_paid=payment['deposit_paid'],
            deposit_paid_at=_parse_datetime(payment.get('deposit_paid_at')),
            transactions=tuple(_transaction(tx) for tx in payment.get('transactions', [])),
        ),
        customer_info=CustomerInfo(**customer),
        participants=[
            Participant(
                full_name=p.get('full_name', ''),
                date_of_birth=_parse_date(p['date_of_birth']) if p.get('date_of_birth') else None,
                gender=p.get('gender', ''),
                passport_number=p.get('passport_number', ''),
            )
            for p in doc.get('participants', [])
        ],
        add_ons=[AddOn(**a) for a in doc.get('add_ons', [])],
        emergency_contact=EmergencyContact(**emergency) if emergency else None,
        special_requests=doc.get('special_requests', ''),
        internal_notes=doc.get('internal_notes', ''),
        status=BookingStatus(doc['status']),
        status_history=[
            StatusHistoryEntry(
                status=BookingStatus(entry['status']),
                changed_at=datetime.fromisoformat(entry['changed_at']),
                changed_by=entry.get('changed_by', ''),
                note=entry.get('note', ''),
            )
            for entry in doc.get('status_history', [])
        ],
        cancellation=_cancellation(doc.get('cancellation')),
        created_by=doc.get('created_by', ''),
        updated_by=doc.get('updated_by', ''),
        created_at=_parse_datetime(doc.get('created_at')),
        updated_at=_parse_datetime(doc.get('updated_at')),
        confirmed_at=_parse_datetime(doc.get('confirmed_at')),
        cancelled_at=_parse_datetime(doc.get('cancelled_at')),
    )
