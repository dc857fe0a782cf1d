"""
TenantSettingsVersion Entity

Versioned snapshots of a tenant's custom settings.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from src.domain.base import utcnow


class TenantSettingsVersion(SQLModel, table=True):
    """
    TenantSettingsVersion entity - one row per change of custom settings.

    Business Rules:
    - Versions start at 1 and increase by one per tenant
    - Only the custom (extension) keys are versioned; features/limits
      follow the plan and are never rolled back
    """

    __tablename__ = "tenant_settings_versions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False)
    version: int = Field(nullable=False)

    old_value: dict = Field(default_factory=dict, sa_column=Column(JSON))
    new_value: dict = Field(default_factory=dict, sa_column=Column(JSON))

    changed_by: Optional[UUID] = Field(default=None)
    reason: Optional[str] = Field(default=None, max_length=255)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_settings_version_tenant_version", "tenant_id", "version", unique=True),
    )
