from abc import ABC, abstractmethod
from html import escape
from typing import Protocol

from wedding_api.email_service.templates import (
    EmailTemplates,
    build_confirmation_guest_blocks,
    build_confirmation_text,
    build_reminder_bodies,
)
from wedding_api.guests.dtos import GuestDTO


class EmailContentConfig(Protocol):
    wedding_name: str
    frontend_url: str
    travel_booking_url: str

    @property
    def rsvp_url(self) -> str: ...


class EmailServiceBase(ABC):
    """Renders the wedding emails and hands them to a delivery backend."""

    def __init__(self, content_config: EmailContentConfig):
        self._content = content_config

    @abstractmethod
    async def _send(
        self,
        to_address: str,
        subject: str,
        html_body: str,
        text_body: str,
        email_type: str,
    ) -> str | None:
        """Deliver one email. Raises on delivery failure."""
        raise NotImplementedError

    async def send_rsvp_confirmation(self, to_address: str, guests: list[GuestDTO]) -> None:
        wedding_name = self._content.wedding_name
        html_body = EmailTemplates.CONFIRMATION_HTML.format(
            wedding_name=escape(wedding_name),
            guest_blocks=build_confirmation_guest_blocks(guests),
            site_url=escape(self._content.frontend_url),
        )
        await self._send(
            to_address=to_address,
            subject=EmailTemplates.CONFIRMATION_SUBJECT.format(wedding_name=wedding_name),
            html_body=html_body,
            text_body=build_confirmation_text(guests, wedding_name),
            email_type="confirmation",
        )

    async def send_rsvp_reminder(self, to_address: str, first_name: str) -> None:
        html_body, text_body = build_reminder_bodies(
            paragraphs=EmailTemplates.RSVP_REMINDER_PARAGRAPHS,
            headline=EmailTemplates.RSVP_REMINDER_HEADLINE,
            cta_label=EmailTemplates.RSVP_REMINDER_CTA,
            cta_url=self._content.rsvp_url,
            first_name=first_name,
            wedding_name=self._content.wedding_name,
        )
        await self._send(
            to_address=to_address,
            subject=EmailTemplates.RSVP_REMINDER_SUBJECT.format(
                wedding_name=self._content.wedding_name
            ),
            html_body=html_body,
            text_body=text_body,
            email_type="rsvp_reminder",
        )

    async def send_travel_reminder(self, to_address: str, first_name: str) -> None:
        html_body, text_body = build_reminder_bodies(
            paragraphs=EmailTemplates.TRAVEL_REMINDER_PARAGRAPHS,
            headline=EmailTemplates.TRAVEL_REMINDER_HEADLINE,
            cta_label=EmailTemplates.TRAVEL_REMINDER_CTA,
            cta_url=self._content.travel_booking_url or self._content.frontend_url,
            first_name=first_name,
            wedding_name=self._content.wedding_name,
        )
        await self._send(
            to_address=to_address,
            subject=EmailTemplates.TRAVEL_REMINDER_SUBJECT.format(
                wedding_name=self._content.wedding_name
            ),
            html_body=html_body,
            text_body=text_body,
            email_type="travel_reminder",
        )
