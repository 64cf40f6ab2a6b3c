"""Initial schema: users, catalog tables, professors.

Revision ID: 001
Revises: None
Create Date: 2026-09-28
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(255), unique=True, nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("is_active", sa.Boolean(), default=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_users_email", "users", ["email"])

    op.create_table(
        "countries",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(120), unique=True, nullable=False),
        sa.Column("code", sa.String(3), server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        "universities",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("country", sa.String(120), server_default=""),
        sa.Column("city", sa.String(120), server_default=""),
        sa.Column("website", sa.String(500), server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("idx_universities_country", "universities", ["country"])

    op.create_table(
        "scholarships",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("country", sa.String(120), server_default=""),
        sa.Column("description", sa.Text(), server_default=""),
        sa.Column("deadline", sa.Date(), nullable=True),
        sa.Column("website", sa.String(500), server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("idx_scholarships_deadline", "scholarships", ["deadline"])

    op.create_table(
        "professors",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column(
            "university_id", UUID(as_uuid=True), sa.ForeignKey("universities.id", ondelete="SET NULL"), nullable=True
        ),
        sa.Column("university_name", sa.String(255), server_default=""),
        sa.Column("country", sa.String(120), server_default=""),
        sa.Column("department", sa.String(255), server_default=""),
        sa.Column("lab", sa.String(255), server_default=""),
        sa.Column("research", sa.Text(), server_default=""),
        sa.Column("scholarship", sa.String(255), server_default=""),
        sa.Column("notes", sa.Text(), server_default=""),
        sa.Column("status", sa.String(20), nullable=False, server_default="Pending"),
        sa.Column("email_date", sa.Date(), nullable=True),
        sa.Column("reply_date", sa.Date(), nullable=True),
        sa.Column("reminder_date", sa.Date(), nullable=True),
        sa.Column("last_notification_sent_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("notification_enabled", sa.Boolean(), server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_professors_user_id", "professors", ["user_id"])
    op.create_index("idx_professors_status_email_date", "professors", ["status", "email_date"])
    op.create_index("idx_professors_reminder_date", "professors", ["reminder_date"])
    op.create_index("idx_professors_created", "professors", ["created_at"])


def downgrade() -> None:
    op.drop_table("professors")
    op.drop_table("scholarships")
    op.drop_table("universities")
    op.drop_table("countries")
    op.drop_table("users")
