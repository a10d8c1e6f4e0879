# File: /testdesk/schemas/message_task.py | Version: 1.0 | Title: Pydantic v2 schemas for notice message tasks
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from testdesk.core.constants import Event, TaskType
from testdesk.schemas._base import BaseSchema


class MessageTaskRequest(BaseModel):
    project_id: str = Field(min_length=1, max_length=50)
    task_type: TaskType
    event: Event
    receiver_ids: List[str] = Field(min_length=1)
    # null -> the project's default robot
    robot_id: Optional[str] = None
    # null is stored as disabled
    enable: Optional[bool] = None
    template: Optional[str] = None
    test_id: Optional[str] = None


class MessageTaskOut(BaseSchema):
    id: str
    project_id: str
    task_type: str
    event: str
    receiver: str
    project_robot_id: str
    enable: bool
    template: Optional[str] = None
    use_default_template: bool = True
    test_id: Optional[str] = None
    create_user: Optional[str] = None
    create_time: Optional[datetime] = None
    update_time: Optional[datetime] = None


class MessageTaskSaveOut(BaseModel):
    tasks: List[MessageTaskOut] = Field(default_factory=list)
    unresolved_receivers: List[str] = Field(default_factory=list)
