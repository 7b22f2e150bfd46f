from email.message import EmailMessage
import smtplib
from typing import Optional

import anyio.to_thread

from src.platform.config.core_setting import Settings
from src.platform.logging.loguru_io import Logger
from src.service.tour_booking.app.interface.i_notification_gateway import INotificationGateway
from src.service.tour_booking.domain.entity.booking_entity import Booking
from src.service.tour_booking.domain.entity.tour_entity import Tour
from src.service.tour_booking.driven_adapter.notification import booking_email_templates
from src.service.tour_booking.driven_adapter.notification.booking_email_templates import (
    EmailContent,
)


class SmtpNotificationGateway(INotificationGateway):
    """Sends over SMTP; the blocking client runs in a worker thread."""

    def __init__(self, *, config: Settings) -> None:
        self.config = config

    @Logger.io
    async def send_email(self, content: EmailContent) -> None:
        if not content.to:
            Logger.base.warning(f'📧 [SMTP] No recipient for "{content.subject}", skipped')
            return

        message = EmailMessage()
        message['From'] = self.config.SMTP_FROM
        message['To'] = content.to
        message['Subject'] = content.subject
        message.set_content(content.body)

        await anyio.to_thread.run_sync(self._deliver, message)
        Logger.base.info(f'📧 [SMTP] Sent "{content.subject}" to {content.to}')

    def _deliver(self, message: EmailMessage) -> None:
        with smtplib.SMTP(
            self.config.SMTP_HOST, self.config.SMTP_PORT, timeout=self.config.SMTP_TIMEOUT
        ) as client:
            if self.config.SMTP_USE_TLS:
                client.starttls()
            if self.config.SMTP_USERNAME:
                client.login(
                    self.config.SMTP_USERNAME, self.config.SMTP_PASSWORD.get_secret_value()
                )
            client.send_message(message)

    async def send_booking_confirmation(self, *, booking: Booking, tour: Optional[Tour]) -> None:
        await self.send_email(booking_email_templates.booking_confirmation(booking, tour))

    async def send_payment_confirmation(self, *, booking: Booking) -> None:
        await self.send_email(booking_email_templates.payment_confirmation(booking))

    async def send_cancellation(self, *, booking: Booking, refund_amount: int) -> None:
        await self.send_email(booking_email_templates.cancellation(booking, refund_amount))
