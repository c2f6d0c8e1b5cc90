"""create contracts and webhook config

Revision ID: 3a1f0c9e7b52
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "3a1f0c9e7b52"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "contracts",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("client_name", sa.String(length=200), nullable=False),
        sa.Column("client_phone", sa.String(length=40), nullable=False),
        sa.Column("company_name", sa.String(length=200), nullable=False),
        sa.Column("document", sa.String(length=40), nullable=False),
        sa.Column("contract_duration", sa.String(length=20), nullable=False),
        sa.Column("product", sa.String(length=120), nullable=False),
        sa.Column("ticket_value", sa.String(length=60), nullable=False),
        sa.Column("payment_frequency", sa.String(length=20), server_default=sa.text("'monthly'"), nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("pdf_url", sa.Text(), nullable=False),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_contracts_submitted_at", "contracts", ["submitted_at"], unique=False)
    op.create_index("ix_contracts_product", "contracts", ["product"], unique=False)

    op.create_table(
        "webhook_config",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("webhook_config")
    op.drop_index("ix_contracts_product", table_name="contracts")
    op.drop_index("ix_contracts_submitted_at", table_name="contracts")
    op.drop_table("contracts")
