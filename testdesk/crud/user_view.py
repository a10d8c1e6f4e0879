# File: /testdesk/crud/user_view.py | Version: 1.0 | Title: Data access for user views and their conditions
"""
Query helpers only; callers own the transaction (flush here, commit in the
service layer).
"""
from __future__ import annotations

from typing import Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from testdesk.models.user_view import UserView, UserViewCondition


def get_view(db: Session, view_id: str) -> Optional[UserView]:
    return db.query(UserView).filter(UserView.id == view_id).first()


def count_views(
    db: Session,
    *,
    user_id: str,
    scope_id: str,
    view_type: str,
    name: str,
    exclude_id: Optional[str] = None,
) -> int:
    q = db.query(UserView).filter(
        UserView.user_id == user_id,
        UserView.scope_id == scope_id,
        UserView.view_type == view_type,
        UserView.name == name,
    )
    if exclude_id is not None:
        q = q.filter(UserView.id != exclude_id)
    return q.count()


def list_views(db: Session, *, user_id: str, scope_id: str, view_type: str) -> List[UserView]:
    return (
        db.query(UserView)
        .filter(
            UserView.user_id == user_id,
            UserView.scope_id == scope_id,
            UserView.view_type == view_type,
        )
        .all()
    )


def get_last_pos(db: Session, *, scope_id: str, user_id: str, view_type: str) -> Optional[int]:
    return (
        db.query(func.max(UserView.pos))
        .filter(
            UserView.scope_id == scope_id,
            UserView.user_id == user_id,
            UserView.view_type == view_type,
        )
        .scalar()
    )


def insert_view(db: Session, view: UserView) -> UserView:
    db.add(view)
    db.flush()
    return view


def delete_view(db: Session, view: UserView) -> None:
    db.delete(view)
    db.flush()


def get_conditions(db: Session, user_view_id: str) -> List[UserViewCondition]:
    return (
        db.query(UserViewCondition)
        .filter(UserViewCondition.user_view_id == user_view_id)
        .all()
    )


def batch_insert_conditions(db: Session, conditions: Iterable[UserViewCondition]) -> None:
    db.add_all(list(conditions))
    db.flush()


def delete_conditions(db: Session, user_view_id: str) -> int:
    deleted = (
        db.query(UserViewCondition)
        .filter(UserViewCondition.user_view_id == user_view_id)
        .delete(synchronize_session=False)
    )
    db.flush()
    return deleted
