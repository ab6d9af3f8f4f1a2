"""initial_schema

Revision ID: 0001a2b3c4d5
Revises:
Create Date: 2026-10-19 09:00:00.000000

Creates the settings store, theme presets, communication log and the
webhook outbox.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001a2b3c4d5"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSONType = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def _enum(name: str, *values: str) -> sa.Enum:
    return sa.Enum(*values, name=name, native_enum=False, create_constraint=True)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "system_settings",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("key", sa.String(100), nullable=False),
        sa.Column("value", JSONType, nullable=True),
        sa.Column("default_value", JSONType, nullable=True),
        sa.Column("label", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_public", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_encrypted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "data_type",
            _enum("setting_data_type", "string", "number", "boolean", "json"),
            nullable=False,
            server_default="string",
        ),
        sa.Column("version", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("category", "key", name="uq_system_settings_category_key"),
    )
    op.create_index("ix_system_settings_category", "system_settings", ["category"])

    op.create_table(
        "theme_presets",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("colors", JSONType, nullable=False),
        sa.Column("typography", JSONType, nullable=True),
        sa.Column("layout", JSONType, nullable=True),
        sa.Column("is_default", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_custom", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    # At most one default preset
    op.create_index(
        "uq_theme_presets_single_default",
        "theme_presets",
        ["is_default"],
        unique=True,
        postgresql_where=sa.text("is_default"),
        sqlite_where=sa.text("is_default = 1"),
    )

    op.create_table(
        "communication_logs",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "type",
            _enum("communication_type", "email", "sms", "whatsapp"),
            nullable=False,
        ),
        sa.Column("recipient", sa.String(255), nullable=False),
        sa.Column("subject", sa.String(500), nullable=True),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column(
            "status",
            _enum("communication_status", "sent", "failed", "pending"),
            nullable=False,
        ),
        sa.Column("message_id", sa.String(255), nullable=True),
        sa.Column("error", sa.Text(), nullable=True),
        sa.Column("sent_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=True),
        sa.Column("metadata", JSONType, nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_communication_logs_user_id", "communication_logs", ["user_id"])
    op.create_index(
        "ix_communication_logs_type_sent_at", "communication_logs", ["type", "sent_at"]
    )

    op.create_table(
        "webhook_outbox",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "event_type",
            _enum("webhook_event_type", "donation_created", "error_logged", "telegram_notify"),
            nullable=False,
        ),
        sa.Column("payload", JSONType, nullable=False),
        sa.Column(
            "status",
            _enum("outbox_status", "pending", "succeeded", "failed"),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("attempts", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("max_attempts", sa.Integer(), nullable=False, server_default="5"),
        sa.Column("next_attempt_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_error", sa.Text(), nullable=True),
        sa.Column("delivered_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index(
        "ix_webhook_outbox_status_next_attempt",
        "webhook_outbox",
        ["status", "next_attempt_at"],
    )


def downgrade() -> None:
    op.drop_index("ix_webhook_outbox_status_next_attempt", table_name="webhook_outbox")
    op.drop_table("webhook_outbox")
    op.drop_index("ix_communication_logs_type_sent_at", table_name="communication_logs")
    op.drop_index("ix_communication_logs_user_id", table_name="communication_logs")
    op.drop_table("communication_logs")
    op.drop_index("uq_theme_presets_single_default", table_name="theme_presets")
    op.drop_table("theme_presets")
    op.drop_index("ix_system_settings_category", table_name="system_settings")
    op.drop_table("system_settings")
