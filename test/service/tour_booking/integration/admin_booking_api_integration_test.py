"""
Integration tests for the admin booking API

Test Focus:
1. Role gates: admin and manager pass, plain users are rejected with 403
2. Listing filters, per-tour listing and statistics
3. Manual status transitions and their guards
4. Payments recorded by staff on someone else's booking
"""

from fastapi.testclient import TestClient
import pytest

from src.platform.constant.route_constant import (
    BOOKING_ADMIN_ALL,
    BOOKING_ADMIN_BY_ID,
    BOOKING_ADMIN_PAYMENT,
    BOOKING_ADMIN_STATISTICS,
    BOOKING_ADMIN_STATUS,
    BOOKING_ADMIN_TOUR,
    BOOKING_MY_BOOKINGS,
)


ROLE_FORBIDDEN = "You don't have permission to perform this action"


@pytest.mark.integration
class TestAdminAccess:
    @pytest.mark.parametrize('who', ['user', 'guest'])
    def test_non_staff_cannot_list_all(self, client: TestClient, auth_headers, who):
        response = client.get(BOOKING_ADMIN_ALL, headers=auth_headers(who))

        assert response.status_code == 403
        assert response.json()['message'] == ROLE_FORBIDDEN

    def test_manager_can_list_but_has_no_own_bookings_route(
        self, client: TestClient, auth_headers
    ):
        listed = client.get(BOOKING_ADMIN_ALL, headers=auth_headers('manager'))
        own = client.get(BOOKING_MY_BOOKINGS, headers=auth_headers('manager'))

        assert listed.status_code == 200
        assert own.status_code == 403

    def test_admin_reads_any_booking(self, client: TestClient, auth_headers, create_booking):
        booking = create_booking(who='user')

        response = client.get(
            BOOKING_ADMIN_BY_ID.format(booking_id=booking['id']), headers=auth_headers('admin')
        )

        assert response.status_code == 200
        assert response.json()['data']['user']['id'] == 'user-1'


@pytest.mark.integration
class TestAdminListing:
    def test_filters_by_user_and_tour(
        self, client: TestClient, auth_headers, create_booking, sapa_tour
    ):
        create_booking(who='user')
        create_booking(who='other_user')
        create_booking(who='other_user', tour_id=sapa_tour.id)

        by_user = client.get(
            BOOKING_ADMIN_ALL, params={'userId': 'user-2'}, headers=auth_headers('admin')
        ).json()
        by_tour = client.get(
            BOOKING_ADMIN_ALL, params={'tourId': sapa_tour.id}, headers=auth_headers('admin')
        ).json()
        everything = client.get(BOOKING_ADMIN_ALL, headers=auth_headers('admin')).json()

        assert by_user['pagination']['total'] == 2
        assert by_tour['pagination']['total'] == 1
        assert everything['pagination']['total'] == 3

    def test_sorted_by_total_ascending(self, client: TestClient, auth_headers, create_booking):
        create_booking(adults=3)
        create_booking(adults=1)
        create_booking(adults=2)

        response = client.get(
            BOOKING_ADMIN_ALL,
            params={'sortBy': 'total', 'sortOrder': 'asc'},
            headers=auth_headers('admin'),
        )

        totals = [b['pricing']['total'] for b in response.json()['data']]
        assert totals == sorted(totals)

    def test_tour_bookings(self, client: TestClient, auth_headers, create_booking, halong_tour):
        create_booking(who='user')
        create_booking(who='other_user', slot_index=1)

        response = client.get(
            BOOKING_ADMIN_TOUR.format(tour_id=halong_tour.id), headers=auth_headers('manager')
        )

        assert response.status_code == 200
        payload = response.json()
        assert payload['message'] == 'Tour bookings retrieved successfully'
        assert payload['pagination']['total'] == 2

    def test_tour_bookings_date_range(
        self, client: TestClient, auth_headers, create_booking, halong_tour
    ):
        """
        Given: bookings on the 60-day and the 20-day departures of one tour
        When: staff list the tour's bookings with startDate or endDate
        Then: only bookings departing inside the range are returned
        """
        # Arrange
        far = create_booking(who='user', slot_index=0)
        near = create_booking(who='other_user', slot_index=1)
        far_start = halong_tour.available_dates[0].start_date
        near_start = halong_tour.available_dates[1].start_date
        url = BOOKING_ADMIN_TOUR.format(tour_id=halong_tour.id)

        # Act
        from_far = client.get(
            url, params={'startDate': far_start.isoformat()}, headers=auth_headers('manager')
        )
        until_near = client.get(
            url, params={'endDate': near_start.isoformat()}, headers=auth_headers('manager')
        )

        # Assert
        assert from_far.json()['pagination']['total'] == 1
        assert [b['id'] for b in from_far.json()['data']] == [far['id']]
        assert until_near.json()['pagination']['total'] == 1
        assert [b['id'] for b in until_near.json()['data']] == [near['id']]

    def test_statistics(self, client: TestClient, auth_headers, create_booking):
        paid = create_booking(adults=4)
        create_booking(adults=2)
        client.post(
            BOOKING_ADMIN_PAYMENT.format(booking_id=paid['id']),
            json={'amount': 4_000_000},
            headers=auth_headers('admin'),
        )

        response = client.get(BOOKING_ADMIN_STATISTICS, headers=auth_headers('admin'))

        assert response.status_code == 200
        assert response.json()['data'] == {
            'total': 2,
            'pending': 1,
            'confirmed': 1,
            'cancelled': 0,
            'completed': 0,
            'totalRevenue': 15_000_000,
            'totalPaid': 4_000_000,
        }


@pytest.mark.integration
class TestAdminStatusUpdate:
    def test_confirm_requires_deposit(self, client: TestClient, auth_headers, create_booking):
        booking = create_booking()

        response = client.patch(
            BOOKING_ADMIN_STATUS.format(booking_id=booking['id']),
            json={'status': 'confirmed'},
            headers=auth_headers('admin'),
        )

        assert response.status_code == 400
        assert response.json()['message'] == 'Cannot confirm booking without deposit payment'

    def test_confirm_is_allowed_once_deposit_is_in(
        self, client: TestClient, auth_headers, create_booking
    ):
        booking = create_booking(adults=2)
        below_deposit = client.post(
            BOOKING_ADMIN_PAYMENT.format(booking_id=booking['id']),
            json={'amount': 1_000_000, 'method': 'cash', 'note': 'Office desk'},
            headers=auth_headers('manager'),
        )
        assert below_deposit.json()['data']['status'] == 'pending'
        client.post(
            BOOKING_ADMIN_PAYMENT.format(booking_id=booking['id']),
            json={'amount': 1_000_000, 'method': 'cash'},
            headers=auth_headers('manager'),
        )

        response = client.patch(
            BOOKING_ADMIN_STATUS.format(booking_id=booking['id']),
            json={'status': 'confirmed', 'note': 'Checked by phone'},
            headers=auth_headers('manager'),
        )

        assert response.status_code == 200
        data = response.json()['data']
        assert data['status'] == 'confirmed'
        assert data['statusHistory'][-2]['note'] == 'Auto-confirmed after deposit payment'
        assert data['statusHistory'][-1]['note'] == 'Checked by phone'
        assert data['statusHistory'][-1]['changedBy'] == 'manager-1'

    def test_complete_after_departure_when_fully_paid(
        self, client: TestClient, auth_headers, create_booking
    ):
        """
        Given: a booking on a departure that already started
        When: staff record the full amount and mark it completed
        Then: the booking is completed
        """
        # Arrange
        booking = create_booking(slot_index=2, adults=1)
        client.post(
            BOOKING_ADMIN_PAYMENT.format(booking_id=booking['id']),
            json={'amount': 2_500_000},
            headers=auth_headers('admin'),
        )

        # Act
        response = client.patch(
            BOOKING_ADMIN_STATUS.format(booking_id=booking['id']),
            json={'status': 'completed'},
            headers=auth_headers('admin'),
        )

        # Assert
        assert response.status_code == 200
        assert response.json()['data']['status'] == 'completed'

    def test_complete_before_departure_is_rejected(
        self, client: TestClient, auth_headers, create_booking
    ):
        booking = create_booking(adults=1)
        client.post(
            BOOKING_ADMIN_PAYMENT.format(booking_id=booking['id']),
            json={'amount': 2_500_000},
            headers=auth_headers('admin'),
        )

        response = client.patch(
            BOOKING_ADMIN_STATUS.format(booking_id=booking['id']),
            json={'status': 'completed'},
            headers=auth_headers('admin'),
        )

        assert response.status_code == 400
        assert response.json()['message'] == 'Cannot complete booking before tour date'

    def test_cancel_through_status_releases_slots(
        self,
        client: TestClient,
        auth_headers,
        create_booking,
        booked_slots,
        halong_tour,
        sent_emails,
    ):
        booking = create_booking(adults=5)
        start = halong_tour.available_dates[0].start_date

        response = client.patch(
            BOOKING_ADMIN_STATUS.format(booking_id=booking['id']),
            json={'status': 'cancelled', 'note': 'Weather warning'},
            headers=auth_headers('admin'),
        )

        assert response.status_code == 200
        data = response.json()['data']
        assert data['status'] == 'cancelled'
        assert data['cancellation']['cancelledBy'] == 'admin-1'
        assert data['cancellation']['reason'] == 'Weather warning'
        assert booked_slots(halong_tour.id, start) == 0
        assert sent_emails[-1]['subject'] == f'Booking Cancelled - {booking["bookingCode"]}'

    def test_unknown_status(self, client: TestClient, auth_headers, create_booking):
        booking = create_booking()

        response = client.patch(
            BOOKING_ADMIN_STATUS.format(booking_id=booking['id']),
            json={'status': 'archived'},
            headers=auth_headers('admin'),
        )

        assert response.status_code == 400
        assert response.json()['message'] == 'Invalid booking status'

    def test_plain_user_cannot_change_status(
        self, client: TestClient, auth_headers, create_booking
    ):
        booking = create_booking()

        response = client.patch(
            BOOKING_ADMIN_STATUS.format(booking_id=booking['id']),
            json={'status': 'confirmed'},
            headers=auth_headers('user'),
        )

        assert response.status_code == 403


@pytest.mark.integration
class TestAdminPayment:
    def test_staff_payment_on_other_users_booking(
        self, client: TestClient, auth_headers, create_booking
    ):
        booking = create_booking(who='other_user', adults=2)

        response = client.post(
            BOOKING_ADMIN_PAYMENT.format(booking_id=booking['id']),
            json={'amount': 2_000_000},
            headers=auth_headers('admin'),
        )

        assert response.status_code == 200
        payment = response.json()['data']['payment']
        assert payment['paidAmount'] == 2_000_000
        assert payment['status'] == 'partial'
        assert payment['depositPaid'] is True

    def test_amount_is_required(self, client: TestClient, auth_headers, create_booking):
        booking = create_booking()

        response = client.post(
            BOOKING_ADMIN_PAYMENT.format(booking_id=booking['id']),
            json={'method': 'cash'},
            headers=auth_headers('admin'),
        )

        assert response.status_code == 400
        assert response.json()['message'] == 'Payment amount is required'
