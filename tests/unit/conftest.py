import pytest
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

from src.domain.entities import User, UserRole


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def super_admin(mock_uow):
    """Platform super admin, resolvable through uow.users.get_by_id"""
    admin = User(id=uuid4(), name="Root", email="root@platform.example.com", role=UserRole.super_admin)
    mock_uow.users.get_by_id = AsyncMock(return_value=admin)
    return admin
