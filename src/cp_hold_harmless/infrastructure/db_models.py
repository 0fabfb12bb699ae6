"""SQLAlchemy ORM model for the hold_harmless table (migration 008)."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.cp_common.database import Base


class HoldHarmlessModel(Base):
    __tablename__ = "hold_harmless"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
    )
    coi_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("generated_cois.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    program_id: Mapped[uuid.UUID | None] = mapped_column(UUID(as_uuid=True))
    template_url: Mapped[str | None] = mapped_column(String(1000))
    status: Mapped[str] = mapped_column(
        String(30), nullable=False, default="PENDING_SUB_SIGNATURE"
    )

    project_address: Mapped[str | None] = mapped_column(String(500))
    gc_name: Mapped[str | None] = mapped_column(String(200))
    gc_email: Mapped[str | None] = mapped_column(String(255))
    owners_entity: Mapped[str | None] = mapped_column(String(200))
    additional_insureds: Mapped[list[str]] = mapped_column(JSONB, nullable=False, default=list)
    subcontractor_name: Mapped[str | None] = mapped_column(String(200))
    subcontractor_email: Mapped[str | None] = mapped_column(String(255))

    sub_signature_token: Mapped[str | None] = mapped_column(String(64), unique=True)
    sub_signature_link_sent_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    sub_signature_url: Mapped[str | None] = mapped_column(String(1000))
    sub_signed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    sub_signed_by: Mapped[str | None] = mapped_column(String(200))

    gc_signature_token: Mapped[str | None] = mapped_column(String(64), unique=True)
    gc_signature_link_sent_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    gc_signature_url: Mapped[str | None] = mapped_column(String(1000))
    gc_signed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    gc_signed_by: Mapped[str | None] = mapped_column(String(200))

    final_doc_url: Mapped[str | None] = mapped_column(String(1000))
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    notifications_sent: Mapped[list[str]] = mapped_column(JSONB, nullable=False, default=list)
    notified_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    generated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=text("NOW()")
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=text("NOW()")
    )
