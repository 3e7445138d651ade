"""Guest-facing RSVP flow as a small state machine.

lookup -> chooseGroup -> form -> review -> confirmation

A single lookup match goes straight to the form. A failed submission sends
the guest back to the form with the server's message. Nothing is retried
automatically.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from uuid import UUID

from email_validator import EmailNotValidError, validate_email

from wedding_api.client.api import RsvpApiClient, RsvpApiError
from wedding_api.client.storage import SavedGroupStore
from wedding_api.guests.dtos import Attendance, GuestStatus, MailingAddressDTO
from wedding_api.guests.rsvp_rules import filter_events
from wedding_api.guests.schemas import GroupResponse, GuestResponse

logger = logging.getLogger(__name__)


class WizardStep(str, Enum):
    LOOKUP = "lookup"
    CHOOSE_GROUP = "chooseGroup"
    FORM = "form"
    REVIEW = "review"
    CONFIRMATION = "confirmation"


class WizardStateError(RuntimeError):
    """An action was attempted from a step that does not allow it."""


_ATTENDING_BY_STATUS: dict[GuestStatus, Attendance] = {
    GuestStatus.CONFIRMED: True,
    GuestStatus.MAYBE: "maybe",
    GuestStatus.DECLINED: False,
    GuestStatus.PENDING: None,
}


@dataclass
class GuestForm:
    """Editable answers for one guest. ``attending`` is None until answered."""

    guest_id: UUID
    first_name: str
    last_name: str
    allowed_plus_one: bool = False
    attending: Attendance = None
    email: str = ""
    events: list[str] = field(default_factory=list)
    dietary_restrictions: str = ""
    bring_plus_one: bool = False
    plus_one_name: str = ""
    plus_one_dietary_restrictions: str = ""
    song_request: str = ""
    mailing_address: MailingAddressDTO = field(default_factory=MailingAddressDTO)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_attending(self) -> bool:
        return self.attending is True or self.attending == "maybe"

    @classmethod
    def from_guest(cls, guest: GuestResponse) -> "GuestForm":
        """Prefill the form with whatever the guest answered last time."""
        address = guest.mailing_address
        return cls(
            guest_id=guest.id,
            first_name=guest.first_name,
            last_name=guest.last_name,
            allowed_plus_one=guest.allowed_plus_one,
            attending=_ATTENDING_BY_STATUS[guest.rsvp_status],
            email=guest.email or "",
            events=list(guest.events),
            dietary_restrictions=guest.dietary_restrictions,
            bring_plus_one=bool(guest.plus_one and guest.plus_one.name.strip()),
            plus_one_name=guest.plus_one.name if guest.plus_one else "",
            plus_one_dietary_restrictions=(
                guest.plus_one.dietary_restrictions if guest.plus_one else ""
            ),
            song_request=guest.song_request,
            mailing_address=address.to_dto() if address else MailingAddressDTO(),
        )

    def validate(self) -> str | None:
        """Return the first problem with this guest's answers, or None."""
        if self.attending is None:
            return f"Please let us know if {self.first_name} will attend"
        if not self.is_attending:
            return None

        if not self.email.strip():
            return f"Please enter an email address for {self.first_name}"
        try:
            validate_email(self.email.strip(), check_deliverability=False)
        except EmailNotValidError:
            return f"Please enter a valid email address for {self.first_name}"
        if not filter_events(self.events):
            return f"Please select at least one event for {self.first_name}"
        if not self.mailing_address.is_complete():
            return f"Please complete the mailing address for {self.first_name}"
        if self.allowed_plus_one and self.bring_plus_one and not self.plus_one_name.strip():
            return f"Please enter the name of {self.first_name}'s plus-one"
        return None

    def to_payload(self) -> dict:
        """Build this guest's entry of the submission body (camelCase keys)."""
        payload: dict = {"guestId": str(self.guest_id), "attending": self.attending}
        if self.email.strip():
            payload["email"] = self.email.strip()
        if not self.is_attending:
            return payload

        plus_one = None
        if self.allowed_plus_one and self.bring_plus_one and self.plus_one_name.strip():
            plus_one = {
                "name": self.plus_one_name.strip(),
                "dietaryRestrictions": self.plus_one_dietary_restrictions.strip(),
            }
        address = self.mailing_address
        payload.update(
            {
                "events": filter_events(self.events),
                "dietaryRestrictions": self.dietary_restrictions.strip(),
                "plusOne": plus_one,
                "songRequest": self.song_request.strip(),
                "mailingAddress": {
                    "addressLine1": address.address_line1,
                    "addressLine2": address.address_line2,
                    "city": address.city,
                    "stateOrProvince": address.state_or_province,
                    "postalCode": address.postal_code,
                    "country": address.country,
                },
            }
        )
        return payload


class RsvpWizard:
    def __init__(self, api: RsvpApiClient, store: SavedGroupStore | None = None):
        self._api = api
        self._store = store
        self._clear()

    def _clear(self) -> None:
        self.step = WizardStep.LOOKUP
        self.candidates: list[GroupResponse] = []
        self.group: GroupResponse | None = None
        self.forms: list[GuestForm] = []
        self.error: str | None = None
        self.rsvp_open = True
        self.rsvp_by_date: str | None = None
        self.confirmation_message: str | None = None

    def _require_step(self, *steps: WizardStep) -> None:
        if self.step not in steps:
            allowed = ", ".join(step.value for step in steps)
            raise WizardStateError(f"Cannot do that from step {self.step.value} (needs {allowed})")

    def _select_group(self, group: GroupResponse) -> None:
        self.group = group
        self.forms = [GuestForm.from_guest(guest) for guest in group.guests]
        self.error = None
        self.step = WizardStep.FORM
        if self._store is not None:
            self._store.save(group)

    def resume(self) -> bool:
        """Start at the form if a group was picked on an earlier visit."""
        self._require_step(WizardStep.LOOKUP)
        if self._store is None:
            return False
        group = self._store.load()
        if group is None:
            return False
        self._select_group(group)
        return True

    async def submit_lookup(self, first_name: str, last_name: str) -> WizardStep:
        self._require_step(WizardStep.LOOKUP)
        first_name, last_name = first_name.strip(), last_name.strip()
        if not first_name or not last_name:
            self.error = "Please enter your first and last name"
            return self.step

        try:
            result = await self._api.lookup(first_name, last_name)
        except RsvpApiError as e:
            self.error = e.message
            return self.step

        self.rsvp_open = result.rsvp_open
        self.rsvp_by_date = result.rsvp_by_date
        if not result.groups:
            self.error = "No guest found with that name"
        elif len(result.groups) == 1:
            self._select_group(result.groups[0])
        else:
            self.candidates = result.groups
            self.error = None
            self.step = WizardStep.CHOOSE_GROUP
        return self.step

    def choose_group(self, index: int) -> WizardStep:
        self._require_step(WizardStep.CHOOSE_GROUP)
        if not 0 <= index < len(self.candidates):
            raise IndexError(f"No group at position {index}")
        self._select_group(self.candidates[index])
        return self.step

    def review(self) -> WizardStep:
        self._require_step(WizardStep.FORM)
        for form in self.forms:
            problem = form.validate()
            if problem:
                self.error = problem
                return self.step
        self.error = None
        self.step = WizardStep.REVIEW
        return self.step

    def edit(self) -> WizardStep:
        self._require_step(WizardStep.REVIEW)
        self.step = WizardStep.FORM
        return self.step

    async def confirm(self) -> WizardStep:
        self._require_step(WizardStep.REVIEW)
        if self.group is None:
            raise WizardStateError("No group selected")
        try:
            self.confirmation_message = await self._api.submit(
                self.group.id, [form.to_payload() for form in self.forms]
            )
        except RsvpApiError as e:
            logger.info("RSVP submission for group %s rejected: %s", self.group.id, e.message)
            self.error = e.message
            self.step = WizardStep.FORM
            return self.step

        self.error = None
        self.step = WizardStep.CONFIRMATION
        return self.step

    def reset(self) -> WizardStep:
        """Forget everything, including the saved group, and go back to lookup."""
        if self._store is not None:
            self._store.clear()
        self._clear()
        return self.step
