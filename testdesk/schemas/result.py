# File: /testdesk/schemas/result.py | Version: 1.0 | Title: ResultHolder response envelope
from __future__ import annotations

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

from testdesk.core.result_codes import ResultCode

T = TypeVar("T")


class ResultHolder(BaseModel, Generic[T]):
    code: int = int(ResultCode.SUCCESS)
    message: Optional[str] = None
    message_detail: Optional[str] = None
    data: Optional[T] = None

    @classmethod
    def success(cls, data=None) -> "ResultHolder":
        return cls(code=int(ResultCode.SUCCESS), data=data)
