"""Confirmation and reminder emails built on top of the email service.

Confirmations are fire-and-forget: they run after the RSVP response has been
sent and never raise. Reminders are sent one guest at a time and report
per-guest outcomes back to the admin who triggered them.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from wedding_api.admin.repository.write_models import AdminGuestWriteModel, SqlAdminGuestWriteModel
from wedding_api.config.settings import Settings, settings
from wedding_api.email_service import get_email_service
from wedding_api.email_service.base import EmailServiceBase
from wedding_api.guests.dtos import ReminderKind
from wedding_api.guests.repository.read_models import GroupReadModel, SqlGroupReadModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReminderErrorDTO:
    guest_id: str
    name: str
    email: str
    reason: str


@dataclass
class ReminderResultDTO:
    sent: int = 0
    skipped: int = 0
    errors: list[ReminderErrorDTO] = field(default_factory=list)


class RsvpNotifier:
    def __init__(
        self,
        email_service: EmailServiceBase,
        group_read_model: GroupReadModel,
        guest_write_model: AdminGuestWriteModel,
        config: Settings,
    ):
        self._email_service = email_service
        self._group_read_model = group_read_model
        self._guest_write_model = guest_write_model
        self._config = config

    async def send_group_confirmation(self, group_id: UUID) -> None:
        """Email the group's RSVP summary to its first guest. Never raises."""
        if not self._config.confirmation_email_enabled or not self._config.email_configured:
            logger.info(
                "Confirmation email skipped for group %s (enabled=%s, configured=%s)",
                group_id,
                self._config.confirmation_email_enabled,
                self._config.email_configured,
            )
            return

        try:
            group = await self._group_read_model.get_group(group_id)
            if group is None or not group.guests:
                logger.warning("Group or guests not found for confirmation email: %s", group_id)
                return

            to_address = (group.first_guest.email or "").strip()
            if not to_address:
                logger.warning("No email for first guest of group %s, skipping confirmation", group_id)
                return

            await self._email_service.send_rsvp_confirmation(to_address, group.guests)
            logger.info("RSVP confirmation email sent for group %s to %s", group_id, to_address)
        except Exception:
            logger.exception("Error sending RSVP confirmation email for group %s", group_id)

    async def send_reminders(self, kind: ReminderKind, guest_ids: Sequence[UUID]) -> ReminderResultDTO:
        """Send one reminder per guest; a failure for one guest does not stop the rest."""
        result = ReminderResultDTO()
        if not self._config.email_configured:
            result.errors.append(
                ReminderErrorDTO(guest_id="", name="", email="", reason="Email not configured")
            )
            return result

        send = (
            self._email_service.send_rsvp_reminder
            if kind == ReminderKind.RSVP
            else self._email_service.send_travel_reminder
        )

        for guest_id in guest_ids:
            guest = await self._guest_write_model.get_guest(guest_id)
            if guest is None:
                result.errors.append(
                    ReminderErrorDTO(guest_id=str(guest_id), name="", email="", reason="Guest not found")
                )
                continue

            email = (guest.email or "").strip()
            if not email:
                result.skipped += 1
                result.errors.append(
                    ReminderErrorDTO(
                        guest_id=str(guest_id),
                        name=guest.full_name,
                        email="",
                        reason="No email address",
                    )
                )
                continue

            try:
                await send(email, guest.first_name)
            except Exception as e:
                logger.warning("%s reminder to %s failed: %s", kind.value, email, e)
                result.errors.append(
                    ReminderErrorDTO(
                        guest_id=str(guest_id),
                        name=guest.full_name,
                        email=email,
                        reason=f"Send failed: {e}",
                    )
                )
                continue

            result.sent += 1
            try:
                await self._guest_write_model.mark_reminder_sent(guest_id, kind, datetime.now(UTC))
            except Exception as e:
                # The email went out, only the timestamp is missing
                logger.exception("Could not record %s reminder for guest %s", kind.value, guest_id)
                result.errors.append(
                    ReminderErrorDTO(
                        guest_id=str(guest_id),
                        name=guest.full_name,
                        email=email,
                        reason=f"Sent, but recording the reminder failed: {e}",
                    )
                )

        logger.info(
            "%s reminders: %d sent, %d skipped, %d errors",
            kind.value,
            result.sent,
            result.skipped,
            len(result.errors),
        )
        return result


def get_rsvp_notifier() -> RsvpNotifier:
    """Dependency wiring the notifier to the configured email provider and SQL models."""
    return RsvpNotifier(
        email_service=get_email_service(settings),
        group_read_model=SqlGroupReadModel(),
        guest_write_model=SqlAdminGuestWriteModel(),
        config=settings,
    )
