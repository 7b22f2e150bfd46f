"""
Tests for the booking and catalog document mappers

Test Focus:
1. A booking with payments, history and cancellation survives a document round trip
2. Documents are JSON-safe (orjson can serialize them without options)
3. Seed documents tolerate missing optional fields
"""

from datetime import date

import orjson
import pytest

from src.service.tour_booking.domain.entity.user_entity import UserRole
from src.service.tour_booking.domain.value_object.booking_contact import (
    AddOn,
    EmergencyContact,
    Participant,
)
from src.service.tour_booking.driven_adapter.mapper.booking_document_mapper import (
    booking_to_document,
    document_to_booking,
)
from src.service.tour_booking.driven_adapter.mapper.catalog_document_mapper import (
    document_to_tour,
    document_to_user,
)


@pytest.mark.unit
class TestBookingDocumentMapper:
    def test_full_booking_round_trips_through_json(self, make_booking, now):
        # Arrange
        booking = make_booking(
            adults=2,
            children=1,
            paid=2_600_000,
            participants=[Participant(full_name='Le Van C', date_of_birth=date(2015, 5, 1))],
            add_ons=[AddOn(name='Kayak', price=200_000, quantity=2)],
            emergency_contact=EmergencyContact(name='Mai', relationship='sister', phone='090'),
            special_requests='Late check-in',
        ).with_cancellation(
            cancelled_by='user-1', reason='Flight cancelled', refund_amount=2_340_000, now=now
        )

        # Act
        stored = orjson.loads(orjson.dumps(booking_to_document(booking)))
        restored = document_to_booking(stored)

        # Assert
        assert restored == booking

    def test_document_uses_plain_values(self, make_booking):
        document = booking_to_document(make_booking())

        assert isinstance(document['id'], str)
        assert document['status'] == 'pending'
        assert document['payment']['method'] == 'bank_transfer'
        assert document['selected_date']['start_date'] == date.fromisoformat(
            document['selected_date']['start_date']
        ).isoformat()
        assert document['cancellation'] is None


@pytest.mark.unit
class TestCatalogDocumentMapper:
    def test_tour_document_with_defaults(self):
        tour = document_to_tour(
            {
                'id': 'tour-sapa-trek',
                'title': 'Sapa Rice Terrace Trek',
                'price': {'adult': 3_200_000},
                'available_dates': [{'start_date': '2027-05-02', 'end_date': '2027-05-05'}],
            }
        )

        assert tour.price.adult == 3_200_000
        assert tour.price.child == 0
        assert tour.available_dates[0].start_date == date(2027, 5, 2)
        assert tour.available_dates[0].max_slots is None
        assert tour.available_dates[0].booked_slots == 0

    def test_user_document(self):
        user = document_to_user({'id': 'manager-1', 'email': 'ops@example.com', 'role': 'manager'})

        assert user.role == UserRole.MANAGER
        assert user.is_active is True
