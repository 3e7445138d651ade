import csv
import io
from collections.abc import Iterable

from wedding_api.email_service.templates import status_label
from wedding_api.guests.dtos import GuestDTO

CSV_HEADERS = [
    "First Name",
    "Last Name",
    "Email",
    "Group",
    "Status",
    "Events",
    "Dietary",
    "Plus One",
    "Song Request",
    "Mailing Address",
    "Has Booked",
]


def guest_to_row(guest: GuestDTO) -> dict[str, str]:
    return {
        "First Name": guest.first_name,
        "Last Name": guest.last_name,
        "Email": guest.email or "",
        "Group": guest.group_name or "",
        "Status": status_label(guest.rsvp_status),
        "Events": "; ".join(guest.events),
        "Dietary": guest.dietary_restrictions,
        "Plus One": guest.plus_one.name if guest.plus_one else "",
        "Song Request": guest.song_request,
        "Mailing Address": guest.mailing_address.format_single_line() if guest.mailing_address else "",
        "Has Booked": "Yes" if guest.has_booked else "No",
    }


def guests_to_csv(guests: Iterable[GuestDTO]) -> str:
    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=CSV_HEADERS, quoting=csv.QUOTE_ALL)
    writer.writeheader()
    for guest in guests:
        writer.writerow(guest_to_row(guest))
    return output.getvalue()
