from abc import ABC, abstractmethod

from src.app.repositories.audit_log_repository import IAuditLogRepository
from src.app.repositories.business_data_repository import IBusinessDataRepository
from src.app.repositories.plan_repository import IPlanRepository
from src.app.repositories.settings_version_repository import ISettingsVersionRepository
from src.app.repositories.subscription_change_repository import ISubscriptionChangeRepository
from src.app.repositories.subscription_repository import ISubscriptionRepository
from src.app.repositories.tenant_repository import ITenantRepository
from src.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    plans: IPlanRepository
    tenants: ITenantRepository
    subscriptions: ISubscriptionRepository
    subscription_changes: ISubscriptionChangeRepository
    users: IUserRepository
    business_data: IBusinessDataRepository
    audit_logs: IAuditLogRepository
    settings_versions: ISettingsVersionRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
