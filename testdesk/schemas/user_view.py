# File: /testdesk/schemas/user_view.py | Version: 1.0 | Title: Pydantic v2 schemas for user views (requests + DTOs)
from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from testdesk.core.constants import SearchMode
from testdesk.schemas._base import BaseSchema


class CombineCondition(BaseSchema):
    name: Optional[str] = None  # field being filtered
    operator: Optional[str] = None  # e.g. "eq", "in", "between"
    # Raw JSON value; its Python type decides the stored value_type
    value: Any = None
    custom_field: bool = False
    custom_field_type: Optional[str] = None


class UserViewAddRequest(BaseModel):
    scope_id: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=255)
    search_mode: SearchMode = SearchMode.AND
    conditions: Optional[List[CombineCondition]] = None


class UserViewUpdateRequest(BaseModel):
    id: str = Field(min_length=1, max_length=50)
    name: Optional[str] = Field(default=None, max_length=255)
    search_mode: Optional[SearchMode] = None
    # None/omitted keeps the stored conditions, [] clears them
    conditions: Optional[List[CombineCondition]] = None


class UserViewOut(BaseSchema):
    id: str
    scope_id: Optional[str] = None
    view_type: str
    user_id: Optional[str] = None
    name: str
    pos: int
    search_mode: Optional[str] = SearchMode.AND.value
    create_time: Optional[datetime] = None
    update_time: Optional[datetime] = None
    internal: bool = False


class UserViewDTO(UserViewOut):
    conditions: List[CombineCondition] = Field(default_factory=list)


class UserViewListGroupedDTO(BaseModel):
    internal_views: List[UserViewOut] = Field(default_factory=list)
    custom_views: List[UserViewOut] = Field(default_factory=list)
