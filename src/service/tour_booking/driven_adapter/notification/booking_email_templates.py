"""Plain-text bodies for the transactional booking emails."""

from typing import Optional

import attrs

from src.platform.config.core_setting import settings
from src.service.tour_booking.domain.entity.booking_entity import Booking
from src.service.tour_booking.domain.entity.tour_entity import Tour


@attrs.frozen
class EmailContent:
    to: str
    subject: str
    body: str


def format_amount(amount: int) -> str:
    return f'{amount:,}'.replace(',', '.')


def _booking_url(booking: Booking) -> str:
    return f'{settings.FRONTEND_URL.rstrip("/")}/bookings/{booking.id}'


def booking_confirmation(booking: Booking, tour: Optional[Tour]) -> EmailContent:
    tour_title = tour.title if tour else booking.tour_id
    body = f"""
    Dear {booking.customer_info.full_name or 'Customer'},

    Thank you for booking with us!

    Booking Details:
    ----------------
    Booking code: {booking.booking_code}
    Tour: {tour_title}
    Dates: {booking.selected_date.start_date} - {booking.selected_date.end_date}
    Participants: {booking.total_participants}
    Adults: {booking.number_of_adults}
    Children: {booking.number_of_children}
    Infants: {booking.number_of_infants}
    Total: {format_amount(booking.pricing.total)}
    Deposit required: {format_amount(booking.payment.deposit_required)}
    Status: {booking.status.value.capitalize()}

    View your booking: {_booking_url(booking)}

    Best regards,
    Tour Booking Team
    """
    return EmailContent(
        to=booking.customer_info.email,
        subject=f'Booking Confirmation - {booking.booking_code}',
        body=_dedent(body),
    )


def payment_confirmation(booking: Booking) -> EmailContent:
    transaction = booking.payment.last_transaction
    fully_paid = booking.payment.remaining_amount <= 0
    lines = [
        f'Dear {booking.customer_info.full_name or "Customer"},',
        '',
        'We have received your payment.',
        '',
        'Payment Details:',
        '----------------',
        f'Booking code: {booking.booking_code}',
    ]
    if transaction:
        lines += [
            f'Transaction: {transaction.transaction_id}',
            f'Amount: {format_amount(transaction.amount)}',
            f'Method: {transaction.method.value}',
            f'Paid at: {transaction.paid_at:%Y-%m-%d %H:%M}',
        ]
    lines += [
        f'Remaining: {format_amount(max(booking.payment.remaining_amount, 0))}',
        'Your booking is fully paid.' if fully_paid else '',
        '',
        f'View your booking: {_booking_url(booking)}',
        '',
        'Best regards,',
        'Tour Booking Team',
    ]
    return EmailContent(
        to=booking.customer_info.email,
        subject=f'Payment Received - {booking.booking_code}',
        body='\n'.join(lines),
    )


def cancellation(booking: Booking, refund_amount: int) -> EmailContent:
    reason = booking.cancellation.reason if booking.cancellation else ''
    body = f"""
    Dear {booking.customer_info.full_name or 'Customer'},

    Your booking {booking.booking_code} has been cancelled.
    {f'Reason: {reason}' if reason else ''}
    Refund amount: {format_amount(refund_amount)}

    If you have any questions, please contact our support team.

    Best regards,
    Tour Booking Team
    """
    return EmailContent(
        to=booking.customer_info.email,
        subject=f'Booking Cancelled - {booking.booking_code}',
        body=_dedent(body),
    )


def _dedent(body: str) -> str:
    return '\n'.join(line.strip() for line in body.strip().splitlines())
