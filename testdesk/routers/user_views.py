# File: /testdesk/routers/user_views.py | Version: 1.0 | Title: User views (saved filters) endpoints, owner-only
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from testdesk.core.constants import UserViewType
from testdesk.core.i18n import Translator
from testdesk.db.session import get_db
from testdesk.dependencies import get_me, get_translator
from testdesk.models.core_entities import User
from testdesk.schemas.result import ResultHolder
from testdesk.schemas.user_view import (
    UserViewAddRequest,
    UserViewDTO,
    UserViewListGroupedDTO,
    UserViewOut,
    UserViewUpdateRequest,
)
from testdesk.services import user_view_service

router = APIRouter(prefix="/user-view/{view_type}", tags=["User Views"])


@router.get(
    "/list",
    response_model=ResultHolder[List[UserViewOut]],
    summary="My views for a scope: custom views first, then built-in ones",
)
def list_views(
    view_type: UserViewType,
    scope_id: str = Query(min_length=1),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_me),
    translator: Translator = Depends(get_translator),
):
    views = user_view_service.list_views(db, scope_id, view_type, str(current_user.id), translator)
    return ResultHolder.success(views)


@router.get(
    "/grouped/list",
    response_model=ResultHolder[UserViewListGroupedDTO],
    summary="Built-in and custom views, grouped",
)
def grouped_list(
    view_type: UserViewType,
    scope_id: str = Query(min_length=1),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_me),
    translator: Translator = Depends(get_translator),
):
    grouped = user_view_service.grouped_list(db, scope_id, view_type, str(current_user.id), translator)
    return ResultHolder.success(grouped)


@router.get("/get/{view_id}", response_model=ResultHolder[UserViewDTO], summary="Get a view (owner-only)")
def get_view(
    view_type: UserViewType,
    view_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_me),
    translator: Translator = Depends(get_translator),
):
    view = user_view_service.get_view(db, view_id, view_type, str(current_user.id), translator)
    return ResultHolder.success(view)


@router.post("/add", response_model=ResultHolder[UserViewDTO], summary="Create a view")
def add_view(
    view_type: UserViewType,
    request: UserViewAddRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_me),
):
    view = user_view_service.add_view(db, request, view_type, str(current_user.id))
    return ResultHolder.success(view)


@router.post("/update", response_model=ResultHolder[UserViewDTO], summary="Update a view (owner-only)")
def update_view(
    view_type: UserViewType,
    request: UserViewUpdateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_me),
):
    view = user_view_service.update_view(db, request, view_type, str(current_user.id))
    return ResultHolder.success(view)


@router.get("/delete/{view_id}", response_model=ResultHolder[None], summary="Delete a view (owner-only)")
def delete_view(
    view_type: UserViewType,
    view_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_me),
):
    user_view_service.delete_view(db, view_id, str(current_user.id))
    return ResultHolder.success()
