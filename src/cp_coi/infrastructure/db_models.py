"""SQLAlchemy ORM model for the generated_cois table (migration 007).

One row per (project, subcontractor) ACORD 25 certificate. Policy columns are
repeated per policy type: GL, UMBRELLA, AUTO and WC.
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.cp_common.database import Base


class GeneratedCOIModel(Base):
    __tablename__ = "generated_cois"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
    )
    project_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    subcontractor_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("contractors.id", ondelete="CASCADE"), nullable=False
    )
    assigned_admin_email: Mapped[str | None] = mapped_column(String(255))
    status: Mapped[str] = mapped_column(
        String(40), nullable=False, default="AWAITING_BROKER_INFO"
    )

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

    first_coi_url: Mapped[str | None] = mapped_column(String(1000))
    first_coi_uploaded: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    gl_policy_url: Mapped[str | None] = mapped_column(String(1000))
    umbrella_policy_url: Mapped[str | None] = mapped_column(String(1000))
    auto_policy_url: Mapped[str | None] = mapped_column(String(1000))
    wc_policy_url: Mapped[str | None] = mapped_column(String(1000))

    gl_broker_signature_url: Mapped[str | None] = mapped_column(String(1000))
    umbrella_broker_signature_url: Mapped[str | None] = mapped_column(String(1000))
    auto_broker_signature_url: Mapped[str | None] = mapped_column(String(1000))
    wc_broker_signature_url: Mapped[str | None] = mapped_column(String(1000))

    gl_expiration_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    umbrella_expiration_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    auto_expiration_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    wc_expiration_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    gc_name: Mapped[str | None] = mapped_column(String(200))
    project_name: Mapped[str | None] = mapped_column(String(200))
    subcontractor_name: Mapped[str | None] = mapped_column(String(200))
    deficiency_notes: Mapped[str | None] = mapped_column(Text)

    hold_harmless_status: Mapped[str | None] = mapped_column(String(30))
    hold_harmless_document_url: Mapped[str | None] = mapped_column(String(1000))

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=text("NOW()")
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=text("NOW()")
    )
