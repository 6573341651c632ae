"""create users, events, queries, query_messages and registrations

Revision ID: 8c41d2f0a9e7
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "8c41d2f0a9e7"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
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
    ]


def upgrade() -> None:
    """Upgrade schema: identity, events, query threads and registrations."""
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("google_id", sa.String(length=128), nullable=True),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("name", sa.String(length=256), nullable=True),
        sa.Column("profile_picture", sa.String(length=1024), nullable=True),
        sa.Column(
            "user_type",
            sa.String(length=16),
            nullable=False,
            server_default="user",
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_google_id", "users", ["google_id"], unique=True)

    op.create_table(
        "events",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("event_name", sa.String(length=256), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Float(), nullable=True),
        sa.Column("last_date", sa.String(length=32), nullable=True),
        sa.Column("event_date", sa.String(length=32), nullable=True),
        sa.Column("event_time", sa.String(length=32), nullable=True),
        sa.Column("venue", sa.String(length=512), nullable=True),
        sa.Column("contact", sa.String(length=256), nullable=True),
        sa.Column("custom_fields", sa.JSON(), nullable=True),
        sa.Column("capacity", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("registered_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("manager_id", postgresql.UUID(as_uuid=True), nullable=True),
        *_timestamps(),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["manager_id"], ["users.id"], ondelete="SET NULL"),
        sa.CheckConstraint("capacity >= 0", name="ck_events_capacity_non_negative"),
        sa.CheckConstraint(
            "registered_count >= 0 AND registered_count <= capacity",
            name="ck_events_registered_within_capacity",
        ),
    )
    op.create_index("ix_events_manager_id", "events", ["manager_id"], unique=False)
    op.create_index("ix_events_deleted_at", "events", ["deleted_at"], unique=False)

    op.create_table(
        "queries",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("event_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("event_name", sa.String(length=256), nullable=True),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("user_name", sa.String(length=256), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="open"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="SET NULL"),
    )
    op.create_index(
        "ix_queries_event_id_user_id",
        "queries",
        ["event_id", "user_id"],
        unique=False,
    )
    op.create_index("ix_queries_updated_at", "queries", ["updated_at"], unique=False)

    op.create_table(
        "query_messages",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("query_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("sender", sa.String(length=16), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["query_id"], ["queries.id"], ondelete="CASCADE"),
    )
    op.create_index(
        "ix_query_messages_query_id", "query_messages", ["query_id"], unique=False
    )

    op.create_table(
        "registrations",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("event_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(length=256), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("phone_number", sa.String(length=64), nullable=True),
        sa.Column("transaction_screenshot", sa.Text(), nullable=True),
        sa.Column(
            "registered_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"]),
        sa.UniqueConstraint("event_id", "email", name="uq_registrations_event_email"),
    )
    op.create_index(
        "ix_registrations_event_id", "registrations", ["event_id"], unique=False
    )


def downgrade() -> None:
    """Drop all eventdesk tables."""
    op.drop_index("ix_registrations_event_id", table_name="registrations")
    op.drop_table("registrations")
    op.drop_index("ix_query_messages_query_id", table_name="query_messages")
    op.drop_table("query_messages")
    op.drop_index("ix_queries_updated_at", table_name="queries")
    op.drop_index("ix_queries_event_id_user_id", table_name="queries")
    op.drop_table("queries")
    op.drop_index("ix_events_deleted_at", table_name="events")
    op.drop_index("ix_events_manager_id", table_name="events")
    op.drop_table("events")
    op.drop_index("ix_users_google_id", table_name="users")
    op.drop_table("users")
