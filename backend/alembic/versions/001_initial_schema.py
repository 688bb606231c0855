"""Initial schema: users, bookings (all kinds), forms, notifications.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

STATUSES = "'Pending', 'Approved', 'Rejected', 'Booked', 'Confirmed', 'Awarded'"
KINDS = "'general', 'samuh_lagan', 'student_award'"


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    # Users table
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("username", sa.String(100), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default=sa.text("'user'")),
        sa.Column("phone", sa.String(20), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    # Bookings table: single-table inheritance on `kind`
    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("kind", sa.String(20), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default=sa.text("'Pending'")),
        sa.Column("rejection_reason", sa.Text(), nullable=True),
        sa.Column("payment_confirmed", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(20), nullable=False),
        sa.Column("event_date", sa.Date(), nullable=True),
        # general
        sa.Column("first_name", sa.String(100), nullable=True),
        sa.Column("surname", sa.String(100), nullable=True),
        sa.Column("event_type", sa.String(100), nullable=True),
        sa.Column("village_name", sa.String(100), nullable=True),
        sa.Column("guest_count", sa.Integer(), nullable=True),
        sa.Column("additional_services", sa.JSON(), nullable=True),
        sa.Column("additional_notes", sa.Text(), nullable=True),
        sa.Column("is_samaj_member", sa.Boolean(), nullable=True),
        sa.Column("event_document", sa.String(500), nullable=True),
        sa.Column("document_type", sa.String(50), nullable=True),
        sa.Column("documents", sa.JSON(), nullable=True),
        # samuh_lagan
        sa.Column("bride", sa.JSON(), nullable=True),
        sa.Column("groom", sa.JSON(), nullable=True),
        sa.Column("payment_status", sa.String(20), nullable=True),
        # student_award
        sa.Column("name", sa.String(200), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("school_name", sa.String(200), nullable=True),
        sa.Column("standard", sa.String(50), nullable=True),
        sa.Column("board_name", sa.String(100), nullable=True),
        sa.Column("exam_year", sa.String(10), nullable=True),
        sa.Column("total_percentage", sa.Float(), nullable=True),
        sa.Column("rank", sa.String(10), nullable=True),
        sa.Column("marksheet", sa.String(500), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(f"status IN ({STATUSES})", name="check_booking_status"),
        sa.CheckConstraint(f"kind IN ({KINDS})", name="check_booking_kind"),
        sa.CheckConstraint(
            "status != 'Rejected' OR (rejection_reason IS NOT NULL AND rejection_reason != '')",
            name="check_rejection_has_reason",
        ),
    )
    op.create_index("ix_bookings_id", "bookings", ["id"])
    op.create_index("ix_bookings_user_id", "bookings", ["user_id"])
    # Admin listings filter by kind and status together.
    op.create_index("ix_bookings_kind_status", "bookings", ["kind", "status"])
    # Calendar lookups and the blocked-date check go by event date.
    op.create_index("ix_bookings_event_date", "bookings", ["event_date"])

    # Form windows
    op.create_table(
        "forms",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("form_type", sa.String(30), nullable=False, unique=True),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("event_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_updated", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_forms_id", "forms", ["id"])

    # Notifications
    op.create_table(
        "notifications",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("form_type", sa.String(30), nullable=True),
        sa.Column("booking_id", sa.Integer(), sa.ForeignKey("bookings.id", ondelete="SET NULL"), nullable=True),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("read", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        *_timestamps(),
    )
    op.create_index("ix_notifications_id", "notifications", ["id"])
    op.create_index("ix_notifications_user_created", "notifications", ["user_id", "created_at"])


def downgrade() -> None:
    op.drop_table("notifications")
    op.drop_table("forms")
    op.drop_table("bookings")
    op.drop_table("users")
