# File: /testdesk/services/user_view_service.py | Version: 1.0 | Title: User view business logic (ownership, uniqueness, ordering)
"""User view service: per-user saved filters merged with the built-in views."""
from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from testdesk.core.constants import InternalUserView, UserViewType
from testdesk.core.exceptions import UserViewExistError, UserViewOwnerError
from testdesk.core.i18n import Translator
from testdesk.crud import user_view as crud_view
from testdesk.models.core_entities import utcnow
from testdesk.models.user_view import UserView, UserViewCondition
from testdesk.schemas.user_view import (
    CombineCondition,
    UserViewAddRequest,
    UserViewDTO,
    UserViewListGroupedDTO,
    UserViewOut,
    UserViewUpdateRequest,
)
from testdesk.services import condition_codec

log = logging.getLogger(__name__)

# Gap between consecutive positions; leaves room to insert between two views later
POS_STEP = 5000


# ---------------------------
# Ordering
# ---------------------------


def get_next_pos(db: Session, scope_id: str, user_id: str, view_type: UserViewType) -> int:
    pos = crud_view.get_last_pos(db, scope_id=scope_id, user_id=user_id, view_type=view_type.value)
    return (pos or 0) + POS_STEP


# ---------------------------
# Guards
# ---------------------------


def check_add_exist(db: Session, request: UserViewAddRequest, view_type: UserViewType, user_id: str) -> None:
    count = crud_view.count_views(
        db,
        user_id=user_id,
        scope_id=request.scope_id,
        view_type=view_type.value,
        name=request.name,
    )
    if count > 0:
        raise UserViewExistError(request.name)


def check_update_exist(db: Session, name: Optional[str], origin: UserView, user_id: str) -> None:
    # No rename requested
    if name is None or not name.strip():
        return
    count = crud_view.count_views(
        db,
        user_id=user_id,
        scope_id=origin.scope_id,
        view_type=origin.view_type,
        name=name,
        exclude_id=origin.id,
    )
    if count > 0:
        raise UserViewExistError(name)


def check_owner(user_id: str, view: Optional[UserView], view_id: Optional[str] = None) -> UserView:
    """Only the creator may read or change a custom view. A missing view fails the same way."""
    if view is None or str(view.user_id) != str(user_id):
        log.warning("User %s denied access to view %s", user_id, view_id or getattr(view, "id", None))
        raise UserViewOwnerError(view_id or getattr(view, "id", None))
    return view


# ---------------------------
# Conditions
# ---------------------------


def _add_conditions(
    db: Session, conditions: Optional[List[CombineCondition]], user_view_id: str
) -> List[UserViewCondition]:
    if not conditions:
        return []
    rows = []
    for condition in conditions:
        value, value_type = condition_codec.encode(condition.value)
        rows.append(
            UserViewCondition(
                user_view_id=user_view_id,
                name=condition.name,
                operator=condition.operator,
                value=value,
                value_type=value_type.value,
                custom_field=bool(condition.custom_field),
                custom_field_type=condition.custom_field_type,
            )
        )
    crud_view.batch_insert_conditions(db, rows)
    return rows


def _condition_out(row: UserViewCondition) -> CombineCondition:
    # Responses always carry the decoded stored value, never the raw request value
    return CombineCondition(
        name=row.name,
        operator=row.operator,
        value=condition_codec.decode(row.value_type, row.value),
        custom_field=bool(row.custom_field),
        custom_field_type=row.custom_field_type,
    )


def _load_conditions(db: Session, user_view_id: str) -> List[CombineCondition]:
    return [_condition_out(row) for row in crud_view.get_conditions(db, user_view_id)]


# ---------------------------
# Internal (built-in) views
# ---------------------------


def translate_internal_view(view: InternalUserView, translator: Translator) -> str:
    return translator.get(view.message_key)


def _internal_view_out(
    view: InternalUserView,
    view_type: UserViewType,
    translator: Translator,
    *,
    scope_id: Optional[str] = None,
    user_id: Optional[str] = None,
) -> UserViewOut:
    return UserViewOut(
        id=view.view_id,
        name=translate_internal_view(view, translator),
        view_type=view_type.value,
        scope_id=scope_id,
        user_id=user_id,
        pos=view.value,
        internal=True,
    )


# ---------------------------
# Operations
# ---------------------------


def get_view(
    db: Session, view_id: str, view_type: UserViewType, user_id: str, translator: Translator
) -> UserViewDTO:
    internal = InternalUserView.match(view_id)
    if internal is not None:
        out = _internal_view_out(internal, view_type, translator, user_id=user_id)
        # Built-in views do not expose their conditions
        return UserViewDTO(**out.model_dump(), conditions=[])

    view = check_owner(user_id, crud_view.get_view(db, view_id), view_id)
    dto = UserViewDTO.model_validate(view)
    dto.conditions = _load_conditions(db, view.id)
    return dto


def add_view(
    db: Session, request: UserViewAddRequest, view_type: UserViewType, user_id: str
) -> UserViewDTO:
    check_add_exist(db, request, view_type, user_id)
    now = utcnow()
    view = UserView(
        user_id=user_id,
        scope_id=request.scope_id,
        view_type=view_type.value,
        name=request.name,
        search_mode=request.search_mode.value,
        pos=get_next_pos(db, request.scope_id, user_id, view_type),
        create_time=now,
        update_time=now,
    )
    try:
        crud_view.insert_view(db, view)
        conditions = [_condition_out(row) for row in _add_conditions(db, request.conditions, view.id)]
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent add of the same name
        db.rollback()
        raise UserViewExistError(request.name) from None
    except Exception:
        db.rollback()
        raise
    db.refresh(view)

    log.info("User %s added %s view %s at pos %s", user_id, view_type.value, view.id, view.pos)
    dto = UserViewDTO.model_validate(view)
    dto.conditions = conditions
    return dto


def update_view(
    db: Session, request: UserViewUpdateRequest, view_type: UserViewType, user_id: str
) -> UserViewDTO:
    view = check_owner(user_id, crud_view.get_view(db, request.id), request.id)
    check_update_exist(db, request.name, view, user_id)

    conditions: Optional[List[CombineCondition]] = None
    try:
        if request.name is not None and request.name.strip():
            view.name = request.name
        if request.search_mode is not None:
            view.search_mode = request.search_mode.value
        view.update_time = utcnow()
        db.flush()

        if request.conditions is not None:
            # Replace wholesale: drop every stored condition, then insert the new set
            crud_view.delete_conditions(db, view.id)
            conditions = [_condition_out(row) for row in _add_conditions(db, request.conditions, view.id)]
        db.commit()
    except IntegrityError:
        db.rollback()
        raise UserViewExistError(request.name or "") from None
    except Exception:
        db.rollback()
        raise
    db.refresh(view)

    log.info("User %s updated %s view %s", user_id, view_type.value, view.id)
    dto = UserViewDTO.model_validate(view)
    dto.conditions = conditions if conditions is not None else _load_conditions(db, view.id)
    return dto


def delete_view(db: Session, view_id: str, user_id: str) -> None:
    view = check_owner(user_id, crud_view.get_view(db, view_id), view_id)
    try:
        crud_view.delete_conditions(db, view.id)
        crud_view.delete_view(db, view)
        db.commit()
    except Exception:
        db.rollback()
        raise
    log.info("User %s deleted view %s", user_id, view_id)


def grouped_list(
    db: Session, scope_id: str, view_type: UserViewType, user_id: str, translator: Translator
) -> UserViewListGroupedDTO:
    internal_views = [
        _internal_view_out(v, view_type, translator, scope_id=scope_id, user_id=user_id)
        for v in view_type.internal_views
    ]
    custom_views = sorted(
        crud_view.list_views(db, user_id=user_id, scope_id=scope_id, view_type=view_type.value),
        key=lambda v: v.pos,
        reverse=True,
    )
    return UserViewListGroupedDTO(
        internal_views=internal_views,
        custom_views=[UserViewOut.model_validate(v) for v in custom_views],
    )


def list_views(
    db: Session, scope_id: str, view_type: UserViewType, user_id: str, translator: Translator
) -> List[UserViewOut]:
    grouped = grouped_list(db, scope_id, view_type, user_id, translator)
    return grouped.custom_views + grouped.internal_views
