"""
Product Entity

Tenant-owned catalogue row. Read-only from this service.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Numeric
from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utcnow


class Product(SQLModel, table=True):
    __tablename__ = "products"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)

    name: str = Field(max_length=255)
    sku: Optional[str] = Field(default=None, max_length=100)
    price: Decimal = Field(
        default=Decimal("0.00"), sa_column=Column(Numeric(10, 2), nullable=False)
    )

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
