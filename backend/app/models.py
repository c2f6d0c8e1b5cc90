from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    DateTime,
    String,
    Text,
    text,
    Index,
)
from sqlalchemy.orm import Mapped, mapped_column

from backend.app.db import Base


# -------------------------
# Helpers
# -------------------------

def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def uuid_str() -> str:
    return str(uuid.uuid4())


# -------------------------
# Contracts
# -------------------------

class Contract(Base):
    """
    A signed client contract. ticket_value is kept as the text the staff
    member typed (BR or EN notation); analytics parse it on read.
    """
    __tablename__ = "contracts"
    __table_args__ = (
        Index("ix_contracts_submitted_at", "submitted_at"),
        Index("ix_contracts_product", "product"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=uuid_str)

    client_name: Mapped[str] = mapped_column(String(200), nullable=False)
    client_phone: Mapped[str] = mapped_column(String(40), nullable=False)
    company_name: Mapped[str] = mapped_column(String(200), nullable=False)
    document: Mapped[str] = mapped_column(String(40), nullable=False)

    contract_duration: Mapped[str] = mapped_column(String(20), nullable=False)
    product: Mapped[str] = mapped_column(String(120), nullable=False)
    ticket_value: Mapped[str] = mapped_column(String(60), nullable=False)
    payment_frequency: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        server_default=text("'monthly'"),
        default="monthly",
    )
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    pdf_url: Mapped[str] = mapped_column(Text, nullable=False)
    submitted_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


class WebhookConfig(Base):
    """Single-row outbound webhook target for contract events."""
    __tablename__ = "webhook_config"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=uuid_str)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        server_default=text("true"),
        default=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )
