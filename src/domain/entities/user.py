"""
User Entity

A person working inside a tenant, or platform staff when tenant_id is null.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow

from .enums import UserRole


class User(SQLModel, table=True):
    """
    User entity.

    Business Rules:
    - Email must be unique across all users
    - Only super_admin users may archive or restore tenants
    - Archiving a tenant deactivates its users; restoring reactivates them
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: Optional[UUID] = Field(default=None, foreign_key="tenants.id", index=True)

    name: str = Field(max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    role: UserRole = Field(default=UserRole.user)
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_tenant_active", "tenant_id", "is_active"),)
