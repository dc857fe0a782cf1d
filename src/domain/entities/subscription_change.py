"""
SubscriptionChange Entity

Append-only history of plan changes for billing continuity.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class SubscriptionChange(SQLModel, table=True):
    """
    SubscriptionChange entity - one row per plan change.

    Business Rules:
    - Immutable (never updated or deleted)
    - old_plan_id is null when the tenant had no plan before
    """

    __tablename__ = "subscription_changes"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False)
    old_plan_id: Optional[UUID] = Field(default=None, foreign_key="plans.id")
    new_plan_id: UUID = Field(foreign_key="plans.id", nullable=False)
    reason: Optional[str] = Field(default=None, max_length=255)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_subscription_change_tenant_created", "tenant_id", "created_at"),
    )
