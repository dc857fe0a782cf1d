"""
Audit API Routes

Read access to the administrative audit trail.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from src.api.error import raise_for_error
from src.api.utils.admin_auth import require_super_admin
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.audit import GetAuditLogsUseCase
from src.depends import get_unit_of_work

router = APIRouter(prefix="/admin/audit-logs", tags=["Audit"])


class AuditLogResponse(BaseModel):
    """Single audit log entry in response"""

    id: str
    action: str
    user_id: Optional[str]
    tenant_id: Optional[str]
    resource_type: str
    resource_id: Optional[str]
    request_data: Dict[str, Any]
    timestamp: str


class AuditLogsResponse(BaseModel):
    """GET /admin/audit-logs response payload"""

    logs: List[AuditLogResponse]
    next_cursor: Optional[str]


@router.get("", status_code=status.HTTP_200_OK, response_model=AuditLogsResponse)
async def get_audit_logs(
    tenant_id: Optional[UUID] = Query(None),
    action: Optional[str] = Query(None, max_length=100),
    limit: int = Query(50, ge=1, le=200, description="Maximum number of entries to return"),
    cursor: Optional[str] = Query(None, description="Pagination cursor"),
    current_user: dict = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Audit Logs

    Query Parameters:
        - tenant_id: only entries for this tenant
        - action: only entries with this action (e.g. tenant_deleted)
        - limit: Maximum number of entries to return (1-200, default 50)
        - cursor: Pagination cursor for fetching next page

    Returns:
        - logs: entries ordered by newest first
        - next_cursor: Cursor for next page (null if no more entries)
    """
    result = await GetAuditLogsUseCase(uow).execute(
        tenant_id=tenant_id, action=action, limit=limit, cursor=cursor
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value
