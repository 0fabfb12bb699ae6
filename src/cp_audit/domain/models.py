"""Domain models for cp_audit — pure dataclasses, no business logic."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class AuditEntry:
    action: str
    resource: str
    user_id: str | None = None
    resource_id: str | None = None
    changes: dict[str, Any] | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    ip_address: str | None = None
    user_agent: str | None = None


@dataclass
class AuditFilter:
    user_id: str | None = None
    action: str | None = None
    resource: str | None = None
    resource_id: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
