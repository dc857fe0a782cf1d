"""
AuditLog Entity

Immutable log of administrative actions.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from src.domain.base import utcnow


class AuditLog(SQLModel, table=True):
    """
    AuditLog entity - immutable log of administrative actions.

    Business Rules:
    - Immutable (never updated or deleted)
    - user_id nullable for system actions
    - request_data stores old/new values and other context
    """

    __tablename__ = "audit_logs"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: Optional[UUID] = Field(default=None, index=True)
    tenant_id: Optional[UUID] = Field(default=None, index=True)

    action: str = Field(max_length=100)  # e.g., "tenant_deleted", "plan_changed"
    resource_type: str = Field(max_length=50)
    resource_id: Optional[str] = Field(default=None, max_length=64)
    request_data: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    performed_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_audit_performed_at", "performed_at"),
        Index("idx_audit_tenant_action", "tenant_id", "action"),
        Index("idx_audit_resource", "resource_type", "resource_id"),
    )
