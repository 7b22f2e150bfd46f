"""Notification gateway that logs emails instead of sending them."""

from datetime import datetime, timezone
from typing import List, Optional

from src.platform.logging.loguru_io import Logger
from src.service.tour_booking.app.interface.i_notification_gateway import INotificationGateway
from src.service.tour_booking.domain.entity.booking_entity import Booking
from src.service.tour_booking.domain.entity.tour_entity import Tour
from src.service.tour_booking.driven_adapter.notification import booking_email_templates
from src.service.tour_booking.driven_adapter.notification.booking_email_templates import (
    EmailContent,
)


class MockNotificationGateway(INotificationGateway):
    def __init__(self, *, debug: bool = True) -> None:
        self.debug = debug
        self.sent_emails: List[dict] = []  # kept for assertions in tests

    @Logger.io
    async def send_email(self, content: EmailContent) -> None:
        email_data = {
            'to': content.to,
            'subject': content.subject,
            'body': content.body,
            'sent_at': datetime.now(timezone.utc),
        }
        self.sent_emails.append(email_data)

        if self.debug:
            Logger.base.info(
                f'📧 [MOCK-EMAIL] To: {content.to} | Subject: {content.subject}\n{content.body}'
            )

    async def send_booking_confirmation(self, *, booking: Booking, tour: Optional[Tour]) -> None:
        await self.send_email(booking_email_templates.booking_confirmation(booking, tour))

    async def send_payment_confirmation(self, *, booking: Booking) -> None:
        await self.send_email(booking_email_templates.payment_confirmation(booking))

    async def send_cancellation(self, *, booking: Booking, refund_amount: int) -> None:
        await self.send_email(booking_email_templates.cancellation(booking, refund_amount))
