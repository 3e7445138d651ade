"""CLI commands for wedding RSVP management."""

import asyncio
from datetime import timedelta
from uuid import UUID

import typer

from wedding_api.admin.auth import create_admin_token
from wedding_api.admin.dtos import GuestCreateDTO
from wedding_api.admin.repository.write_models import (
    SqlAdminGroupWriteModel,
    SqlAdminGuestWriteModel,
)
from wedding_api.client.api import RsvpApiClient
from wedding_api.client.storage import DEFAULT_STORE_PATH, SavedGroupStore
from wedding_api.client.wizard import GuestForm, RsvpWizard, WizardStep
from wedding_api.config.database import async_session_manager
from wedding_api.config.logging import setup_logging
from wedding_api.config.settings import Settings, settings
from wedding_api.email_service.templates import EVENT_CALENDAR
from wedding_api.errors import AppError
from wedding_api.guests.dtos import GroupDTO, MailingAddressDTO
from wedding_api.guests.rsvp_window import RsvpWindow
from wedding_api.seed import seed_database

app = typer.Typer(help="CLI commands for wedding RSVP management")


@app.callback()
def main():
    setup_logging()


def _fail(message: str) -> None:
    typer.secho(message, fg=typer.colors.RED)
    raise typer.Exit(1)


def _print_group(group: GroupDTO) -> None:
    typer.secho(f"Group: {group.name or '(unnamed)'}", fg=typer.colors.GREEN)
    typer.secho(f"  Group ID: {group.id}", fg=typer.colors.CYAN)
    if not group.guests:
        typer.secho("  No guests yet", fg=typer.colors.YELLOW)
    for guest in group.guests:
        typer.secho(
            f"  - {guest.full_name} <{guest.email or 'no email'}> [{guest.rsvp_status.value}]",
            fg=typer.colors.BLUE,
        )
        typer.secho(f"    ID: {guest.id}", fg=typer.colors.CYAN)
        if guest.events:
            typer.echo(f"    Events: {', '.join(guest.events)}")


@app.command()
def seed(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
):
    """Delete all groups and guests and load demo data in mixed RSVP states."""
    if not yes:
        typer.confirm("This deletes every group and guest. Continue?", abort=True)

    async def _seed():
        async with async_session_manager() as session:
            return await seed_database(session)

    summary = asyncio.run(_seed())

    typer.secho("Seed complete!", fg=typer.colors.GREEN)
    for key in ("groups", "guests", "confirmed", "maybe", "declined", "pending", "has_booked"):
        typer.secho(f"  {key.replace('_', ' ').capitalize()}: {summary[key]}", fg=typer.colors.BLUE)


@app.command()
def create_group(
    name: str = typer.Option("", "--name", "-n", help="Optional group name"),
):
    """Create a new, empty guest group."""
    group = asyncio.run(SqlAdminGroupWriteModel().create_group(name))

    typer.secho("Group created!", fg=typer.colors.GREEN)
    typer.secho(f"  Group ID: {group.id}", fg=typer.colors.CYAN)
    if group.name:
        typer.secho(f"  Group Name: {group.name}", fg=typer.colors.BLUE)


@app.command()
def add_guest(
    group_id: UUID = typer.Argument(..., help="Group UUID to add the guest to"),
    first_name: str = typer.Argument(..., help="First name of the guest"),
    last_name: str = typer.Argument(..., help="Last name of the guest"),
    email: str = typer.Option(None, "--email", "-e", help="Guest email"),
    allowed_plus_one: bool = typer.Option(
        False, "--plus-one/--no-plus-one", help="Whether the guest may bring a plus-one"
    ),
):
    """Add a pending guest to an existing group."""
    data = GuestCreateDTO(
        first_name=first_name,
        last_name=last_name,
        group_id=group_id,
        email=email,
        allowed_plus_one=allowed_plus_one,
    )
    try:
        guest = asyncio.run(SqlAdminGuestWriteModel().create_guest(data))
    except AppError as e:
        _fail(e.message)

    typer.secho("Guest created!", fg=typer.colors.GREEN)
    typer.secho(f"  Name: {guest.full_name}", fg=typer.colors.BLUE)
    typer.secho(f"  Guest ID: {guest.id}", fg=typer.colors.CYAN)
    typer.secho(f"  Email: {guest.email or 'N/A'}", fg=typer.colors.BLUE)


@app.command()
def show_group(
    group_id: UUID = typer.Argument(..., help="Group UUID to show"),
):
    """Show a group and its guests."""
    group = asyncio.run(SqlAdminGroupWriteModel().get_group(group_id))
    if group is None:
        _fail(f"Group not found: {group_id}")
    _print_group(group)


@app.command()
def issue_admin_token(
    email: str = typer.Option(..., "--email", "-e", help="Admin email"),
    admin_id: str = typer.Option("admin", "--id", help="Admin identifier"),
    expires_minutes: int = typer.Option(
        None, "--expires-minutes", help="Token lifetime (defaults to ACCESS_TOKEN_EXPIRE_MINUTES)"
    ),
):
    """Print a bearer token for the admin API."""
    expires = timedelta(minutes=expires_minutes) if expires_minutes else None
    token = create_admin_token(admin_id=admin_id, email=email, expires_delta=expires)
    typer.echo(token)


@app.command()
def rsvp_status():
    """Show whether RSVPs are currently accepted."""
    window = RsvpWindow.from_setting(Settings().rsvp_by_date)
    if window.is_open():
        typer.secho("RSVP is open", fg=typer.colors.GREEN)
    else:
        typer.secho("RSVP has closed", fg=typer.colors.RED)
    typer.secho(f"  RSVP by: {window.rsvp_by_date or 'no deadline'}", fg=typer.colors.BLUE)


def _prompt_attending(form: GuestForm) -> None:
    default = {True: "y", False: "n", "maybe": "m"}.get(form.attending, "")
    while True:
        answer = typer.prompt(
            f"Will {form.full_name} attend? [y]es/[n]o/[m]aybe", default=default or None
        )
        answer = answer.strip().lower()[:1]
        if answer in ("y", "n", "m"):
            form.attending = {"y": True, "n": False, "m": "maybe"}[answer]
            return
        typer.secho("Please answer y, n or m", fg=typer.colors.YELLOW)


def _prompt_guest(form: GuestForm) -> None:
    typer.secho(f"\n{form.full_name}", fg=typer.colors.GREEN, bold=True)
    _prompt_attending(form)
    form.email = typer.prompt("  Email", default=form.email or "", show_default=bool(form.email))
    if not form.is_attending:
        return

    typer.echo("  Events:")
    for index, info in enumerate(EVENT_CALENDAR.values(), start=1):
        typer.echo(f"    {index}. {info.name} ({info.day_label}, {info.time})")
    chosen = typer.prompt(
        "  Event numbers, comma separated",
        default=",".join(
            str(index)
            for index, event_id in enumerate(EVENT_CALENDAR, start=1)
            if event_id in form.events
        ),
    )
    event_ids = list(EVENT_CALENDAR)
    form.events = [
        event_ids[int(part) - 1]
        for part in chosen.replace(" ", "").split(",")
        if part.isdigit() and 0 < int(part) <= len(event_ids)
    ]
    form.dietary_restrictions = typer.prompt(
        "  Dietary restrictions", default=form.dietary_restrictions, show_default=False
    )
    if form.allowed_plus_one:
        form.bring_plus_one = typer.confirm("  Bringing a plus-one?", default=form.bring_plus_one)
        if form.bring_plus_one:
            form.plus_one_name = typer.prompt("  Plus-one name", default=form.plus_one_name or None)
            form.plus_one_dietary_restrictions = typer.prompt(
                "  Plus-one dietary restrictions",
                default=form.plus_one_dietary_restrictions,
                show_default=False,
            )
    form.song_request = typer.prompt("  Song request", default=form.song_request, show_default=False)

    address = form.mailing_address
    form.mailing_address = MailingAddressDTO(
        address_line1=typer.prompt("  Address line 1", default=address.address_line1 or None),
        address_line2=typer.prompt(
            "  Address line 2", default=address.address_line2, show_default=False
        ),
        city=typer.prompt("  City", default=address.city or None),
        state_or_province=typer.prompt(
            "  State/Province", default=address.state_or_province or None
        ),
        postal_code=typer.prompt("  Postal code", default=address.postal_code or None),
        country=typer.prompt("  Country", default=address.country or None),
    )


def _print_review(wizard: RsvpWizard) -> None:
    typer.secho("\nPlease review your RSVP:", fg=typer.colors.GREEN)
    for form in wizard.forms:
        answer = {True: "Attending", False: "Not attending", "maybe": "Maybe"}[form.attending]
        typer.secho(f"  {form.full_name}: {answer}", fg=typer.colors.BLUE)
        if form.is_attending:
            names = [EVENT_CALENDAR[event_id].name for event_id in form.events]
            typer.echo(f"    Events: {', '.join(names)}")
            if form.bring_plus_one and form.plus_one_name:
                typer.echo(f"    Plus-one: {form.plus_one_name}")


async def _run_wizard(wizard: RsvpWizard) -> None:
    if wizard.resume():
        typer.secho("Welcome back!", fg=typer.colors.GREEN)

    while wizard.step != WizardStep.CONFIRMATION:
        if wizard.error:
            typer.secho(wizard.error, fg=typer.colors.RED)

        if wizard.step == WizardStep.LOOKUP:
            first_name = typer.prompt("First name")
            last_name = typer.prompt("Last name")
            await wizard.submit_lookup(first_name, last_name)
            if wizard.step != WizardStep.LOOKUP and not wizard.rsvp_open:
                typer.secho("RSVP has closed", fg=typer.colors.YELLOW)
        elif wizard.step == WizardStep.CHOOSE_GROUP:
            for index, group in enumerate(wizard.candidates, start=1):
                names = ", ".join(f"{g.first_name} {g.last_name}" for g in group.guests)
                typer.echo(f"  {index}. {group.name or names} ({names})")
            choice = typer.prompt("Which party are you with?", type=int)
            try:
                wizard.choose_group(choice - 1)
            except IndexError:
                typer.secho("Please pick one of the listed numbers", fg=typer.colors.YELLOW)
        elif wizard.step == WizardStep.FORM:
            for form in wizard.forms:
                _prompt_guest(form)
            wizard.review()
        elif wizard.step == WizardStep.REVIEW:
            _print_review(wizard)
            if typer.confirm("Submit this RSVP?", default=True):
                await wizard.confirm()
            else:
                wizard.edit()

    typer.secho(wizard.confirmation_message or "RSVP submitted!", fg=typer.colors.GREEN)


@app.command()
def rsvp(
    api_url: str = typer.Option(
        f"http://localhost:{settings.app_port}", "--api-url", help="RSVP API base URL"
    ),
    forget: bool = typer.Option(False, "--forget", help="Forget the saved party and start over"),
):
    """Walk through the guest RSVP flow against a running API."""
    wizard = RsvpWizard(RsvpApiClient(api_url), SavedGroupStore(DEFAULT_STORE_PATH))
    if forget:
        wizard.reset()
    asyncio.run(_run_wizard(wizard))


if __name__ == "__main__":
    app()
