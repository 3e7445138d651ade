"""create_groups_and_guests

Revision ID: 5b1f0c2a7d41
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "5b1f0c2a7d41"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "groups",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False, server_default=""),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_groups_created_at", "groups", ["created_at"])

    op.create_table(
        "guests",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("group_id", sa.UUID(), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=254), nullable=True),
        sa.Column(
            "rsvp_status",
            sa.Enum("pending", "confirmed", "maybe", "declined", name="rsvp_status_enum"),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("rsvp_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("events", sa.JSON(), nullable=False, server_default=sa.text("'[]'")),
        sa.Column("dietary_restrictions", sa.Text(), nullable=False, server_default=""),
        sa.Column("plus_one", sa.JSON(), nullable=True),
        sa.Column("song_request", sa.Text(), nullable=False, server_default=""),
        sa.Column("mailing_address", sa.JSON(), nullable=True),
        sa.Column("allowed_plus_one", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("has_booked", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("last_rsvp_reminder_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_travel_reminder_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.ForeignKeyConstraint(["group_id"], ["groups.uuid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("uuid"),
        sa.UniqueConstraint("email", name="uq_guests_email"),
    )
    op.create_index("ix_guests_group_id", "guests", ["group_id"])
    op.create_index("ix_guests_first_name", "guests", ["first_name"])
    op.create_index("ix_guests_last_name", "guests", ["last_name"])
    op.create_index("ix_guests_rsvp_status", "guests", ["rsvp_status"])
    op.create_index("ix_guests_created_at", "guests", ["created_at"])
    # Case-insensitive name lookup
    op.create_index(
        "ix_guests_lower_name",
        "guests",
        [sa.text("lower(first_name)"), sa.text("lower(last_name)")],
    )


def downgrade() -> None:
    op.drop_index("ix_guests_lower_name", table_name="guests")
    op.drop_index("ix_guests_created_at", table_name="guests")
    op.drop_index("ix_guests_rsvp_status", table_name="guests")
    op.drop_index("ix_guests_last_name", table_name="guests")
    op.drop_index("ix_guests_first_name", table_name="guests")
    op.drop_index("ix_guests_group_id", table_name="guests")
    op.drop_table("guests")
    op.drop_index("ix_groups_created_at", table_name="groups")
    op.drop_table("groups")
    op.execute("DROP TYPE rsvp_status_enum")
