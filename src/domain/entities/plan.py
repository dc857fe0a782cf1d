"""
Plan Entity

A named bundle of price, feature flags and usage limits.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Numeric
from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow

from .enums import BillingCycle


class Plan(SQLModel, table=True):
    """
    Plan entity - what a tenant subscribes to.

    Business Rules:
    - Identity is immutable; features/limits are edited in place
    - Feature/limit edits propagate to every tenant on the plan
    - Deleting a plan referenced by tenants is rejected
    - Subscriptions keep the amount charged at creation, not the current price
    """

    __tablename__ = "plans"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    description: Optional[str] = Field(default=None)

    price: Decimal = Field(
        default=Decimal("0.00"), sa_column=Column(Numeric(10, 2), nullable=False)
    )
    billing_cycle: BillingCycle = Field(default=BillingCycle.monthly)

    features: list = Field(default_factory=list, sa_column=Column(JSON))
    limits: dict = Field(default_factory=dict, sa_column=Column(JSON))

    trial_days: int = Field(default=0)
    is_active: bool = Field(default=True)
    sort_order: int = Field(default=0)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_plan_active_sort", "is_active", "sort_order"),
    )
