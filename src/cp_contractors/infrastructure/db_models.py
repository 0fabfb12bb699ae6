"""SQLAlchemy ORM model for the contractors table (migration 004)."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.cp_common.database import Base


class ContractorModel(Base):
    __tablename__ = "contractors"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    phone: Mapped[str | None] = mapped_column(String(50))
    company: Mapped[str | None] = mapped_column(String(200))
    address: Mapped[str | None] = mapped_column(String(500))
    city: Mapped[str | None] = mapped_column(String(100))
    state: Mapped[str | None] = mapped_column(String(50))
    zip_code: Mapped[str | None] = mapped_column(String(20))
    trades: Mapped[list[str]] = mapped_column(JSONB, nullable=False, default=list)
    contractor_type: Mapped[str] = mapped_column(
        String(30), nullable=False, default="SUBCONTRACTOR"
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="PENDING")
    insurance_status: Mapped[str] = mapped_column(String(20), nullable=False, default="PENDING")

    broker_type: Mapped[str | None] = mapped_column(String(20))
    broker_name: Mapped[str | None] = mapped_column(String(200))
    broker_email: Mapped[str | None] = mapped_column(String(255))
    broker_phone: Mapped[str | None] = mapped_column(String(50))
    broker_company: Mapped[str | None] = mapped_column(String(200))
    broker_gl_name: Mapped[str | None] = mapped_column(String(200))
    broker_gl_email: Mapped[str | None] = mapped_column(String(255))
    broker_gl_phone: Mapped[str | None] = mapped_column(String(50))
    broker_umbrella_name: Mapped[str | None] = mapped_column(String(200))
    broker_umbrella_email: Mapped[str | None] = mapped_column(String(255))
    broker_umbrella_phone: Mapped[str | None] = mapped_column(String(50))
    broker_auto_name: Mapped[str | None] = mapped_column(String(200))
    broker_auto_email: Mapped[str | None] = mapped_column(String(255))
    broker_auto_phone: Mapped[str | None] = mapped_column(String(50))
    broker_wc_name: Mapped[str | None] = mapped_column(String(200))
    broker_wc_email: Mapped[str | None] = mapped_column(String(255))
    broker_wc_phone: Mapped[str | None] = mapped_column(String(50))

    created_by_id: Mapped[uuid.UUID | None] = mapped_column(UUID(as_uuid=True))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=text("NOW()")
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=text("NOW()")
    )
