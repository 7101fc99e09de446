"""Create the records table.

Revision ID: 001
Revises:
Create Date: 2026-10-18

The serial ``id`` column is the natural order used when no sort field is
requested; ``(owner, name)`` is the record key.
"""

import sqlalchemy as sa
from alembic import op

revision = "001"
down_revision = None
branch_labels = None
depends_on = None

TEXT_COLUMNS = (
    "organization",
    "created_time",
    "client_ip",
    "user",
    "method",
    "request_uri",
    "action",
    "language",
    "status",
)


def upgrade() -> None:
    """Create records table and indexes."""
    op.create_table(
        "records",
        sa.Column("id", sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column("owner", sa.String(100), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        *[
            sa.Column(column, sa.String(1000), nullable=False, server_default="")
            for column in TEXT_COLUMNS
        ],
        sa.Column("object", sa.Text, nullable=False, server_default=""),
        sa.Column("response", sa.Text, nullable=False, server_default=""),
        sa.UniqueConstraint("owner", "name", name="uq_records_key"),
    )
    op.create_index("idx_records_organization", "records", ["organization", "id"])


def downgrade() -> None:
    """Drop records table."""
    op.drop_index("idx_records_organization", table_name="records")
    op.drop_table("records")
