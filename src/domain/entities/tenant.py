"""
Tenant Entity

Represents an isolated customer organization.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow

from .enums import SubscriptionStatus, TenantStatus


class Tenant(SQLModel, table=True):
    """
    Tenant entity - isolated customer organization.

    Business Rules:
    - Domain is unique across all tenants
    - settings.features / settings.limits mirror the assigned plan
    - Any other settings key is tenant-custom and survives plan updates
    - Archive is a soft delete: deleted_at + status, dependent rows stay
    """

    __tablename__ = "tenants"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    domain: str = Field(unique=True, index=True, max_length=255)

    status: TenantStatus = Field(default=TenantStatus.active)

    plan_id: Optional[UUID] = Field(default=None, foreign_key="plans.id", index=True)
    settings: dict = Field(default_factory=dict, sa_column=Column(JSON))
    subscription_status: Optional[SubscriptionStatus] = Field(default=None)

    trial_ends_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Soft delete support
    deleted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_tenant_status", "status"),
        Index("idx_tenant_deleted_at", "deleted_at"),
    )
