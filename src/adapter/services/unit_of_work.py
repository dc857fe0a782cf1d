from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.audit_log_repository import AuditLogRepository
from src.adapter.repositories.business_data_repository import BusinessDataRepository
from src.adapter.repositories.plan_repository import PlanRepository
from src.adapter.repositories.settings_version_repository import SettingsVersionRepository
from src.adapter.repositories.subscription_change_repository import SubscriptionChangeRepository
from src.adapter.repositories.subscription_repository import SubscriptionRepository
from src.adapter.repositories.tenant_repository import TenantRepository
from src.adapter.repositories.user_repository import UserRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.plans = PlanRepository(self.session)
        self.tenants = TenantRepository(self.session)
        self.subscriptions = SubscriptionRepository(self.session)
        self.subscription_changes = SubscriptionChangeRepository(self.session)
        self.users = UserRepository(self.session)
        self.business_data = BusinessDataRepository(self.session)
        self.audit_logs = AuditLogRepository(self.session)
        self.settings_versions = SettingsVersionRepository(self.session)
        return self

    async def __aexit__(self, *args):
        # Anything not committed by the use case is discarded
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
