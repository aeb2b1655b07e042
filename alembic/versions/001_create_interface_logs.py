"""Create interface_logs table

Revision ID: 001_create_interface_logs
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001_create_interface_logs"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

INDEXES = [
    ("ix_interface_logs_interface_name", ["interface_name"]),
    ("ix_interface_logs_integration_key", ["integration_key"]),
    ("ix_interface_logs_status", ["status"]),
    ("ix_interface_logs_severity", ["severity"]),
    ("ix_interface_logs_timestamp", ["timestamp"]),
    ("ix_interface_logs_interface_name_timestamp", ["interface_name", "timestamp"]),
    ("ix_interface_logs_integration_key_timestamp", ["integration_key", "timestamp"]),
    ("ix_interface_logs_status_timestamp", ["status", "timestamp"]),
]


def upgrade() -> None:
    op.create_table(
        "interface_logs",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("interface_name", sa.String(255), nullable=False),
        sa.Column("integration_key", sa.String(255), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("severity", sa.String(20), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("records_processed", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
        sa.Column("metadata", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "status IN ('success', 'failed', 'warning', 'running')",
            name="ck_interface_logs_status",
        ),
        sa.CheckConstraint(
            "severity IN ('low', 'medium', 'high', 'critical')",
            name="ck_interface_logs_severity",
        ),
        sa.CheckConstraint("duration >= 0", name="ck_interface_logs_duration"),
        sa.CheckConstraint("records_processed >= 0", name="ck_interface_logs_records"),
    )
    for name, columns in INDEXES:
        op.create_index(name, "interface_logs", columns)


def downgrade() -> None:
    for name, _ in reversed(INDEXES):
        op.drop_index(name, table_name="interface_logs")
    op.drop_table("interface_logs")
