from dataclasses import dataclass
from html import escape

from wedding_api.guests.dtos import GuestDTO, GuestStatus


@dataclass(frozen=True)
class EventInfo:
    day_of_week: str
    date: str
    time: str
    name: str

    @property
    def day_label(self) -> str:
        return f"{self.day_of_week}, {self.date}"


# Must stay in sync with the event list shown on the RSVP form
EVENT_CALENDAR: dict[str, EventInfo] = {
    "welcome": EventInfo("Friday", "April 2, 2027", "6:00 PM", "Welcome Dinner"),
    "haldi": EventInfo("Saturday", "April 3, 2027", "10:00 AM", "Haldi Ceremony"),
    "mehndi": EventInfo("Saturday", "April 3, 2027", "2:00 PM", "Mehndi Ceremony"),
    "baraat": EventInfo("Sunday", "April 4, 2027", "4:00 PM", "Baraat Procession"),
    "wedding": EventInfo("Sunday", "April 4, 2027", "5:30 PM", "Wedding Ceremony"),
    "cocktail": EventInfo("Sunday", "April 4, 2027", "6:30 PM", "Cocktail Hour"),
    "reception": EventInfo("Sunday", "April 4, 2027", "7:30 PM", "Reception Dinner"),
}

STATUS_LABELS = {
    GuestStatus.CONFIRMED: "Attending",
    GuestStatus.MAYBE: "Maybe",
    GuestStatus.DECLINED: "Not attending",
}


def status_label(status: GuestStatus) -> str:
    return STATUS_LABELS.get(status, "Pending")


def group_events_by_day(event_ids: list[str]) -> list[tuple[str, list[EventInfo]]]:
    """Group a guest's events by day, in calendar order."""
    by_day: dict[str, list[EventInfo]] = {}
    for event_id in EVENT_CALENDAR:
        if event_id in event_ids:
            info = EVENT_CALENDAR[event_id]
            by_day.setdefault(info.day_label, []).append(info)
    return list(by_day.items())


def _guest_details(guest: GuestDTO) -> list[tuple[str, str]]:
    details = []
    if guest.dietary_restrictions.strip():
        details.append(("Dietary", guest.dietary_restrictions.strip()))
    if guest.plus_one and guest.plus_one.name.strip():
        details.append(("Plus one", guest.plus_one.name.strip()))
    if guest.song_request.strip():
        details.append(("Song request", guest.song_request.strip()))
    if guest.mailing_address and guest.mailing_address.format_single_line():
        details.append(("Mailing address", guest.mailing_address.format_single_line()))
    return details


def build_confirmation_text(guests: list[GuestDTO], wedding_name: str) -> str:
    lines = [
        "Thank you for your RSVP! We're so excited to celebrate with you.",
        "",
        "Here is a summary of your response:",
        "",
    ]
    for guest in guests:
        lines.append(f"{guest.full_name}: {status_label(guest.rsvp_status)}")
        if guest.is_attending:
            for day_label, events in group_events_by_day(guest.events):
                lines.append(f"  {day_label}")
                lines.extend(f"    - {event.name} at {event.time}" for event in events)
            lines.extend(f"  {label}: {value}" for label, value in _guest_details(guest))
        lines.append("")
    lines.append(f"We look forward to seeing you at {wedding_name}'s wedding!")
    return "\n".join(lines)


def build_confirmation_guest_blocks(guests: list[GuestDTO]) -> str:
    blocks = []
    for guest in guests:
        rows = []
        if guest.is_attending:
            for day_label, events in group_events_by_day(guest.events):
                rows.append(f'<p style="margin: 10px 0 4px 0; font-weight: 600;">{escape(day_label)}</p>')
                rows.extend(
                    f'<p style="margin: 2px 0 2px 16px;">{escape(event.name)} &middot; {escape(event.time)}</p>'
                    for event in events
                )
            rows.extend(
                f'<p style="margin: 6px 0;"><strong>{escape(label)}:</strong> {escape(value)}</p>'
                for label, value in _guest_details(guest)
            )
        blocks.append(
            EmailTemplates.CONFIRMATION_GUEST_BLOCK_HTML.format(
                guest_name=escape(guest.full_name),
                status=escape(status_label(guest.rsvp_status)),
                details="".join(rows),
            )
        )
    return "".join(blocks)


@dataclass
class EmailTemplates:
    CONFIRMATION_SUBJECT = "We've received your RSVP - {wedding_name}"
    CONFIRMATION_HTML = """
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
    </head>
    <body style="font-family: Georgia, serif; line-height: 1.6; color: #8B7355; background-color: #FAF8F5; max-width: 600px; margin: 0 auto; padding: 20px;">
        <div style="background-color: #1E3A5F; color: #FAF8F5; text-align: center; padding: 24px;">
            <h1 style="margin: 0 0 8px 0;">We've received your RSVP</h1>
            <p style="margin: 0;">{wedding_name}</p>
        </div>

        <p>Thank you for your RSVP! We're so excited to celebrate with you.</p>
        <p style="color: #1E3A5F; font-weight: 600;">Here is a summary of your response:</p>

        {guest_blocks}

        <p>We look forward to seeing you at our wedding!</p>

        <p style="text-align: center;"><a href="{site_url}" style="color: #D4AF37;">Visit our wedding site</a></p>
    </body>
    </html>
    """
    CONFIRMATION_GUEST_BLOCK_HTML = """
        <div style="background-color: white; border: 1px solid #C4A77D; border-radius: 8px; padding: 16px 20px; margin: 12px 0;">
            <strong style="color: #1E3A5F;">{guest_name}</strong> &middot; <span style="color: #2E8B8B;">{status}</span>
            {details}
        </div>
    """

    RSVP_REMINDER_SUBJECT = "Don't forget to RSVP - {wedding_name}"
    RSVP_REMINDER_HEADLINE = "We'd love to have you!"
    RSVP_REMINDER_PARAGRAPHS = (
        "Hey {first_name},",
        "We're so excited to celebrate our wedding with you! A quick reminder to RSVP "
        "if you haven't already. We'd love to know if you can make it.",
        "And don't forget: this is a destination wedding, so start thinking about travel. "
        "We can't wait to see you there!",
    )
    RSVP_REMINDER_CTA = "RSVP here"

    TRAVEL_REMINDER_SUBJECT = "Book your travel - {wedding_name}"
    TRAVEL_REMINDER_HEADLINE = "Time to book your travel!"
    TRAVEL_REMINDER_PARAGRAPHS = (
        "Hey {first_name},",
        "Thank you for RSVPing! We're thrilled you're coming.",
        "A friendly reminder: please book your hotel and travel soon. "
        "Use our group link to reserve your room.",
    )
    TRAVEL_REMINDER_CTA = "Book your travel"

    REMINDER_HTML = """
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
    </head>
    <body style="font-family: Georgia, serif; line-height: 1.6; color: #8B7355; background-color: #FAF8F5; max-width: 600px; margin: 0 auto; padding: 20px;">
        <div style="background-color: #1E3A5F; color: #FAF8F5; text-align: center; padding: 24px;">
            <h1 style="margin: 0 0 8px 0;">{headline}</h1>
            <p style="margin: 0;">{wedding_name}</p>
        </div>

        {paragraphs}

        <div style="text-align: center; margin: 30px 0;">
            <a href="{cta_url}" style="background-color: #2E8B8B; color: #FAF8F5; padding: 12px 24px; text-decoration: none; border-radius: 6px; font-weight: 600;">
                {cta_label}
            </a>
        </div>

        <p style="font-size: 14px; text-align: center;">See you at the ocean</p>
    </body>
    </html>
    """


def build_reminder_bodies(
    paragraphs: tuple[str, ...],
    headline: str,
    cta_label: str,
    cta_url: str,
    first_name: str,
    wedding_name: str,
) -> tuple[str, str]:
    """Render the (html, text) bodies shared by the RSVP and travel reminders."""
    rendered = [paragraph.format(first_name=first_name) for paragraph in paragraphs]
    html_body = EmailTemplates.REMINDER_HTML.format(
        headline=escape(headline),
        wedding_name=escape(wedding_name),
        paragraphs="".join(f"<p>{escape(paragraph)}</p>" for paragraph in rendered),
        cta_url=escape(cta_url),
        cta_label=escape(cta_label),
    )
    text_body = "\n\n".join([*rendered, f"{cta_label}: {cta_url}"])
    return html_body, text_body
