"""
Unit tests for the booking response schemas

Test Focus:
1. Responses are built directly from the Booking entity, with camelCase JSON keys
2. Enums are rendered as their values, optional parts as null
3. Detail responses add the joined tour and user summaries
"""

from datetime import date

import pytest

from src.service.tour_booking.app.dto.booking_results import BookingDetails
from src.service.tour_booking.domain.entity.tour_entity import Tour
from src.service.tour_booking.domain.value_object.booking_contact import (
    AddOn,
    EmergencyContact,
    Participant,
)
from src.service.tour_booking.driving_adapter.http_controller.schema.booking_schema import (
    BookingDetailResponse,
    BookingResponse,
)


@pytest.mark.unit
class TestBookingResponse:
    def test_cancelled_booking_renders_every_part(self, make_booking, now):
        """
        Given: a paid, cancelled booking with participants, add-ons and an emergency contact
        When: it is rendered as a response
        Then: the camelCase JSON carries the ledger, history and cancellation as plain values
        """
        # Arrange
        booking = make_booking(
            adults=2,
            paid=2_000_000,
            participants=[Participant(full_name='Le Van C', date_of_birth=date(2015, 5, 1))],
            add_ons=[AddOn(name='Kayak', price=200_000, quantity=2)],
            emergency_contact=EmergencyContact(name='Mai', relationship='sister', phone='090'),
        ).with_cancellation(
            cancelled_by='user-1', reason='Flight cancelled', refund_amount=1_800_000, now=now
        )

        # Act
        data = BookingResponse.from_entity(booking).model_dump(mode='json', by_alias=True)

        # Assert
        assert data['id'] == str(booking.id)
        assert data['status'] == 'cancelled'
        assert data['selectedDate']['startDate'] == booking.selected_date.start_date.isoformat()
        assert data['pricing']['breakdown']['adults'] == {
            'quantity': 2,
            'unitPrice': 2_500_000,
            'total': 5_000_000,
        }
        assert data['payment']['method'] == 'bank_transfer'
        assert data['payment']['paidAmount'] == 2_000_000
        assert data['payment']['transactions'][0]['transactionId'] == 'TXN-FIXTURE'
        assert data['customerInfo']['email'] == 'traveler@example.com'
        assert data['participants'][0]['dateOfBirth'] == '2015-05-01'
        assert data['addOns'] == [{'name': 'Kayak', 'price': 200_000, 'quantity': 2}]
        assert data['emergencyContact']['relationship'] == 'sister'
        assert [entry['status'] for entry in data['statusHistory']] == ['pending', 'cancelled']
        assert data['cancellation']['refundAmount'] == 1_800_000
        assert data['cancellation']['refundStatus'] == 'pending'

    def test_fresh_booking_has_null_optional_parts(self, make_booking):
        data = BookingResponse.from_entity(make_booking()).model_dump(mode='json', by_alias=True)

        assert data['cancellation'] is None
        assert data['emergencyContact'] is None
        assert data['payment']['depositPaidAt'] is None
        assert data['payment']['transactions'] == []

    def test_detail_response_adds_tour_and_user(self, make_booking, owner):
        booking = make_booking()
        details = BookingDetails(
            booking=booking,
            tour=Tour(id='tour-halong-bay', title='Ha Long Bay Overnight Cruise'),
            user=owner,
        )

        data = BookingDetailResponse.from_details(details).model_dump(mode='json', by_alias=True)

        assert data['bookingCode'] == booking.booking_code
        assert data['tour'] == {'id': 'tour-halong-bay', 'title': 'Ha Long Bay Overnight Cruise'}
        assert data['user'] == {
            'id': 'user-1',
            'email': 'traveler@example.com',
            'fullName': 'Nguyen Van A',
        }

    def test_detail_response_without_joins(self, make_booking):
        data = BookingDetailResponse.from_details(
            BookingDetails(booking=make_booking())
        ).model_dump(mode='json', by_alias=True)

        assert data['tour'] is None
        assert data['user'] is None
