from datetime import datetime
from uuid import UUID

from sqlalchemy import JSON, Boolean, DateTime, Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from wedding_api.config.table_names import TableNames
from wedding_api.guests.dtos import GuestStatus
from wedding_api.models.base import Base, TimeStamp


class Group(Base, TimeStamp):
    __tablename__ = TableNames.GROUPS.value

    name: Mapped[str] = mapped_column(String(200), nullable=False, default="")

    def __repr__(self) -> str:
        return f"<Group {self.name or self.uuid}>"


class Guest(Base, TimeStamp):
    __tablename__ = TableNames.GUESTS.value

    group_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.GROUPS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    # Stored lower-cased; NULL when the guest has no address on file
    email: Mapped[str | None] = mapped_column(String(254), nullable=True, unique=True)

    # RSVP answers
    rsvp_status: Mapped[GuestStatus] = mapped_column(
        Enum(GuestStatus, name="rsvp_status_enum", values_callable=lambda x: [e.value for e in x]),
        default=GuestStatus.PENDING,
        nullable=False,
        index=True,
    )
    rsvp_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    events: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    dietary_restrictions: Mapped[str] = mapped_column(Text, nullable=False, default="")
    plus_one: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    song_request: Mapped[str] = mapped_column(Text, nullable=False, default="")
    mailing_address: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    # Admin-managed flags
    allowed_plus_one: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    has_booked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    last_rsvp_reminder_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )
    last_travel_reminder_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"<Guest {self.name} - {self.rsvp_status}>"
