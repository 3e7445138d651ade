import logging

import httpx

from wedding_api.config.settings import Settings
from wedding_api.email_service.base import EmailServiceBase

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"


class ResendEmailService(EmailServiceBase):
    def __init__(self, config: Settings, transport: httpx.AsyncBaseTransport | None = None):
        super().__init__(content_config=config)
        self._config = config
        self._transport = transport

    @property
    def from_address(self) -> str:
        return f"{self._config.wedding_name} Wedding <{self._config.emails_from}>"

    async def _send(
        self,
        to_address: str,
        subject: str,
        html_body: str,
        text_body: str,
        email_type: str,
    ) -> str | None:
        """Send email via Resend, returning the Resend email id."""
        async with httpx.AsyncClient(transport=self._transport, timeout=10.0) as client:
            response = await client.post(
                RESEND_API_URL,
                headers={
                    "Authorization": f"Bearer {self._config.resend_api_key}",
                    "Content-Type": "application/json",
                },
                json={
                    "from": self.from_address,
                    "to": [to_address],
                    "subject": subject,
                    "html": html_body,
                    "text": text_body,
                },
            )
            response.raise_for_status()

        resend_email_id = response.json().get("id")
        logger.info("Sent %s email to %s (resend id %s)", email_type, to_address, resend_email_id)
        return resend_email_id
