import asyncio
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from wedding_api.config.settings import Settings
from wedding_api.email_service.base import EmailServiceBase

logger = logging.getLogger(__name__)


class SMTPEmailService(EmailServiceBase):
    def __init__(self, config: Settings):
        super().__init__(content_config=config)
        self.host = config.smtp_host
        self.port = config.smtp_port
        self.username = config.smtp_user
        self.password = config.smtp_password
        self.from_address = f"{config.wedding_name} Wedding <{config.emails_from}>"

    def _create_message(
        self,
        to_address: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self.from_address
        msg["To"] = to_address

        msg.attach(MIMEText(text_body, "plain"))
        msg.attach(MIMEText(html_body, "html"))

        return msg

    def _deliver(self, msg: MIMEMultipart) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=30) as server:
            if self.username and self.password:
                server.starttls()
                server.login(self.username, self.password)
            server.send_message(msg)

    async def _send(
        self,
        to_address: str,
        subject: str,
        html_body: str,
        text_body: str,
        email_type: str,
    ) -> str | None:
        msg = self._create_message(
            to_address=to_address,
            subject=subject,
            html_body=html_body,
            text_body=text_body,
        )
        # smtplib blocks, keep it off the event loop
        await asyncio.to_thread(self._deliver, msg)
        logger.info("Sent %s email to %s via SMTP", email_type, to_address)
        return None
