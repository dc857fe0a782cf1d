"""
Subscription Entity

Links a tenant to a plan for a bounded time window.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Numeric, text
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow

from .enums import BillingCycle, SubscriptionStatus


class Subscription(SQLModel, table=True):
    """
    Subscription entity - the record of what a tenant pays for which plan.

    Business Rules:
    - At most one active subscription per tenant (partial unique index)
    - Status transitions: active -> cancelled, never back
    - ends_at is null while active
    - Never hard-deleted
    """

    __tablename__ = "subscriptions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)
    plan_id: UUID = Field(foreign_key="plans.id", nullable=False, index=True)

    status: SubscriptionStatus = Field(default=SubscriptionStatus.active)
    amount: Decimal = Field(
        default=Decimal("0.00"), sa_column=Column(Numeric(10, 2), nullable=False)
    )
    billing_cycle: BillingCycle = Field(default=BillingCycle.monthly)

    starts_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    ends_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index(
            "uq_subscription_active_tenant",
            "tenant_id",
            unique=True,
            sqlite_where=text("status = 'active'"),
            postgresql_where=text("status = 'active'"),
        ),
        Index("idx_subscription_tenant_created", "tenant_id", "created_at"),
    )
