"""Create the payment_addresses table.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "payment_addresses",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("domain", sa.String(255), nullable=False, comment="Served domain"),
        sa.Column("username", sa.String(255), nullable=False, comment="Local part"),
        sa.Column(
            "destination",
            sa.Text(),
            nullable=False,
            comment="Destination in canonical text form",
        ),
        sa.Column(
            "token_hash",
            sa.String(128),
            nullable=False,
            comment="Salted SHA-256 of the authentication token",
        ),
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
        sa.UniqueConstraint("domain", "username", name="uq_payment_addresses_key"),
    )


def downgrade() -> None:
    op.drop_table("payment_addresses")
