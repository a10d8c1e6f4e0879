# File: /testdesk/models/user_view.py | Version: 1.0 | Title: SQLAlchemy models for user-defined views and their conditions
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, Boolean, DateTime, ForeignKey, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from testdesk.db.base_class import Base
from testdesk.models.core_entities import gen_uuid, utcnow


class UserView(Base):
    __tablename__ = "user_view"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=gen_uuid)
    user_id: Mapped[str] = mapped_column(String, nullable=False)
    scope_id: Mapped[str] = mapped_column(String, nullable=False)
    # FUNCTIONAL_CASE | BUG | CASE_REVIEW | ...
    view_type: Mapped[str] = mapped_column(String(50), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    pos: Mapped[int] = mapped_column(BigInteger, nullable=False)
    search_mode: Mapped[str] = mapped_column(String(10), default="AND", nullable=False)
    create_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    update_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    __table_args__ = (
        UniqueConstraint("user_id", "scope_id", "view_type", "name", name="uq_user_view_owner_scope_type_name"),
        Index("ix_user_view_scope_user_type_pos", "scope_id", "user_id", "view_type", "pos"),
    )


class UserViewCondition(Base):
    __tablename__ = "user_view_condition"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=gen_uuid)
    user_view_id: Mapped[str] = mapped_column(
        ForeignKey("user_view.id", ondelete="CASCADE"), index=True, nullable=False
    )
    name: Mapped[Optional[str]] = mapped_column(String(255))
    operator: Mapped[Optional[str]] = mapped_column(String(50))
    value: Mapped[Optional[str]] = mapped_column(Text)
    # STRING | INT | FLOAT | ARRAY
    value_type: Mapped[str] = mapped_column(String(20), nullable=False)
    custom_field: Mapped[bool] = mapped_column(Boolean, default=False)
    custom_field_type: Mapped[Optional[str]] = mapped_column(String(50))
