"""In-memory stand-ins for outbound email, shared by the test suites."""

from dataclasses import dataclass

from wedding_api.config.settings import Settings
from wedding_api.email_service.base import EmailServiceBase


def email_settings(**overrides) -> Settings:
    """Settings with email fully configured, unless overridden."""
    values = {
        "wedding_name": "Sagar & Grace",
        "frontend_url": "https://wedding.example",
        "travel_booking_url": "https://hotel.example/book",
        "emails_from": "rsvp@wedding.example",
        "smtp_host": "localhost",
        "resend_api_key": "",
        "confirmation_email_enabled": True,
    }
    values.update(overrides)
    return Settings(**values)


@dataclass(frozen=True)
class SentEmail:
    to_address: str
    subject: str
    html_body: str
    text_body: str
    email_type: str


class InMemoryEmailService(EmailServiceBase):
    """Records every email instead of delivering it."""

    def __init__(self, config: Settings | None = None, fail_for: tuple[str, ...] = ()):
        super().__init__(content_config=config or email_settings())
        self.outbox: list[SentEmail] = []
        self._fail_for = set(fail_for)

    async def _send(
        self,
        to_address: str,
        subject: str,
        html_body: str,
        text_body: str,
        email_type: str,
    ) -> str | None:
        if to_address in self._fail_for:
            raise ConnectionError("Mail server unavailable")
        self.outbox.append(SentEmail(to_address, subject, html_body, text_body, email_type))
        return f"fake-{len(self.outbox)}"
