from fastapi import status
from libs.result import Error

# Business error code -> HTTP status. Unknown codes are server errors.
ERROR_STATUS = {
    "VALIDATION_ERROR": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "PLAN_INACTIVE": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "DOMAIN_TAKEN": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "SETTINGS_VERSION_NOT_FOUND": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "PLAN_IN_USE": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "TENANT_ALREADY_ARCHIVED": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "TENANT_NOT_ARCHIVED": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "INVALID_TRANSITION": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "SUBSCRIPTION_CONFLICT": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "NO_ACTIVE_PLAN": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "INSUFFICIENT_ROLE": status.HTTP_403_FORBIDDEN,
    "TENANT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "PLAN_NOT_FOUND": status.HTTP_404_NOT_FOUND,
}


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def raise_for_error(error: Error):
    """Raise the ClientError/ServerError matching a use case error."""
    status_code = ERROR_STATUS.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)
