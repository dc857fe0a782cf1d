from decimal import Decimal

import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from tests.fixtures.json_loader import TestDataLoader
from src.depends import get_notification_service, get_unit_of_work
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.utils.jwt import generate_jwt
from src.domain.entities import BillingCycle, Plan, Tenant, User, UserRole


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def app(db_session):
    from src.api.app import create_app
    from src.adapter.services.notification_service import LoggingNotificationService
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_notification_service] = LoggingNotificationService
    return app


@pytest_asyncio.fixture
async def client(app):
    from httpx import ASGITransport

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def super_admin(db_session):
    user = User(name="Platform Admin", email="admin@platform.example.com", role=UserRole.super_admin)
    db_session.add(user)
    await db_session.commit()
    return user


@pytest_asyncio.fixture
async def admin_headers(super_admin):
    token = generate_jwt(super_admin.id, None, UserRole.super_admin.value)
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def make_plan(db_session, test_data):
    """Persist a plan from test_data.json plans[<key>] with optional overrides"""

    async def _make(key: str = "starter", **overrides) -> Plan:
        data = test_data.plan(key, **overrides)
        plan = Plan(
            name=data["name"],
            description=data.get("description"),
            price=Decimal(str(data["price"])),
            billing_cycle=BillingCycle(data["billing_cycle"]),
            features=data["features"],
            limits=data["limits"],
            trial_days=data.get("trial_days", 0),
            is_active=data.get("is_active", True),
            sort_order=data.get("sort_order", 0),
        )
        db_session.add(plan)
        await db_session.commit()
        return plan

    return _make


@pytest_asyncio.fixture
async def make_tenant(db_session):
    counter = {"n": 0}

    async def _make(**overrides) -> Tenant:
        counter["n"] += 1
        data = {"name": f"Tenant {counter['n']}", "domain": f"tenant-{counter['n']}"}
        data.update(overrides)
        tenant = Tenant(**data)
        db_session.add(tenant)
        await db_session.commit()
        return tenant

    return _make
