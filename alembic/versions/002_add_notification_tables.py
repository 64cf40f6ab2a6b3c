"""Add notification_settings and notification_history tables.

Revision ID: 002
Revises: 001
Create Date: 2026-10-02
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects.postgresql import UUID

revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "notification_settings",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "user_id",
            UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("email_notifications", sa.Boolean(), server_default=sa.true()),
        sa.Column("sms_notifications", sa.Boolean(), server_default=sa.false()),
        sa.Column("phone_number", sa.String(50), server_default=""),
        sa.Column("reminder_days", sa.Integer(), server_default="7"),
        sa.Column(
            "followup_message_template",
            sa.Text(),
            server_default="Time to follow up with {name} from {university}.",
        ),
        sa.Column("status_update_template", sa.Text(), server_default="Status update for {name}: {status}"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        "notification_history",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "professor_id", UUID(as_uuid=True), sa.ForeignKey("professors.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("notification_type", sa.String(20), nullable=False),
        sa.Column("message", sa.Text(), server_default=""),
        sa.Column("status", sa.String(10), nullable=False),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.Column("sent_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("idx_history_user_sent", "notification_history", ["user_id", "sent_at"])
    op.create_index("idx_history_professor", "notification_history", ["professor_id"])


def downgrade() -> None:
    op.drop_index("idx_history_professor", table_name="notification_history")
    op.drop_index("idx_history_user_sent", table_name="notification_history")
    op.drop_table("notification_history")
    op.drop_table("notification_settings")
