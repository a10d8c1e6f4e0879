# File: /testdesk/core/exceptions.py | Version: 1.0 | Title: Business exceptions (translated once at the HTTP boundary)
from __future__ import annotations

from typing import Any, Dict, Optional

from testdesk.core.result_codes import ResultCode


class BusinessError(Exception):
    """
    Base for every error the services raise on purpose.

    `message_key` is an i18n key; the exception handler translates it with
    the request locale and renders the envelope with `code`.
    """

    def __init__(
        self,
        message_key: str,
        *,
        code: int = ResultCode.FAILED,
        status_code: int = 500,
        params: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message_key = message_key
        self.code = int(code)
        self.status_code = status_code
        self.params: Dict[str, Any] = params or {}
        super().__init__(message_key)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message_key": self.message_key,
            "params": self.params,
        }


# ---- User views ----


class UserViewExistError(BusinessError):
    def __init__(self, name: str):
        super().__init__(
            "user_view.exist",
            code=ResultCode.USER_VIEW_EXIST,
            status_code=400,
            params={"name": name},
        )


class UserViewOwnerError(BusinessError):
    def __init__(self, view_id: Optional[str] = None):
        super().__init__(
            "check_owner_case",
            code=ResultCode.FORBIDDEN,
            status_code=403,
            params={"id": view_id},
        )


class ConditionDecodeError(BusinessError):
    """Stored condition row carries a value type tag we do not know."""

    def __init__(self, value_type: Any):
        super().__init__(
            "invalid_enum",
            params={"enum": "UserViewConditionValueType", "value": value_type},
        )


# ---- Notice / message tasks ----


class ProjectNotExistError(BusinessError):
    def __init__(self, project_id: str):
        super().__init__("project_is_not_exist", params={"project_id": project_id})


class RobotNotExistError(BusinessError):
    def __init__(self, robot_id: Optional[str]):
        super().__init__("robot_is_not_exist", params={"robot_id": robot_id})


class ReceiverNotExistError(BusinessError):
    def __init__(self, receivers):
        super().__init__(
            "receiver_is_not_exist", params={"receivers": ", ".join(receivers)}
        )
