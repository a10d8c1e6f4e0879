# File: /testdesk/models/message_task.py | Version: 1.0 | Title: SQLAlchemy model for notice message tasks (one row per receiver)
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from testdesk.db.base_class import Base
from testdesk.models.core_entities import gen_uuid, utcnow


class MessageTask(Base):
    __tablename__ = "message_task"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=gen_uuid)
    project_id: Mapped[str] = mapped_column(ForeignKey("project.id"), nullable=False)
    task_type: Mapped[str] = mapped_column(String(64), nullable=False)
    event: Mapped[str] = mapped_column(String(64), nullable=False)
    # A user id or a placeholder such as CREATOR / FOLLOW_PEOPLE
    receiver: Mapped[str] = mapped_column(String, nullable=False)
    project_robot_id: Mapped[str] = mapped_column(ForeignKey("project_robot.id"), nullable=False)
    enable: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    template: Mapped[Optional[str]] = mapped_column(Text)
    use_default_template: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    test_id: Mapped[Optional[str]] = mapped_column(String)
    create_user: Mapped[Optional[str]] = mapped_column(String)
    create_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    update_user: Mapped[Optional[str]] = mapped_column(String)
    update_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    __table_args__ = (
        UniqueConstraint(
            "task_type", "event", "receiver", "project_id", name="uq_message_task_type_event_receiver_project"
        ),
        Index("ix_message_task_project_id", "project_id"),
    )
