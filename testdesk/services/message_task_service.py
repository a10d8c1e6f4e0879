# File: /testdesk/services/message_task_service.py | Version: 1.0 | Title: Notice message task save/list
"""Message task service.

A saved notice configuration fans out to one `MessageTask` row per receiver,
keyed on (task_type, event, receiver, project_id).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from sqlalchemy.orm import Session

from testdesk.core.constants import RelatedUser
from testdesk.core.exceptions import (
    ProjectNotExistError,
    ReceiverNotExistError,
    RobotNotExistError,
)
from testdesk.crud import message_task as crud_task
from testdesk.models.core_entities import Project, ProjectRobot, utcnow
from testdesk.models.message_task import MessageTask
from testdesk.schemas.message_task import MessageTaskRequest

log = logging.getLogger(__name__)


@dataclass
class MessageTaskSaveResult:
    tasks: List[MessageTask] = field(default_factory=list)
    unresolved_receivers: List[str] = field(default_factory=list)

    @property
    def partial(self) -> bool:
        return bool(self.unresolved_receivers)


def check_project_exist(db: Session, project_id: str) -> Project:
    project = crud_task.get_project(db, project_id)
    if project is None:
        log.warning("Message task request for unknown project %s", project_id)
        raise ProjectNotExistError(project_id)
    return project


def resolve_robot(db: Session, project_id: str, robot_id: str | None) -> ProjectRobot:
    if robot_id:
        robot = crud_task.get_robot(db, robot_id)
    else:
        robot = crud_task.get_default_robot(db, project_id)
    if robot is None:
        log.warning("Robot %s not found (project %s)", robot_id, project_id)
        raise RobotNotExistError(robot_id)
    return robot


def resolve_receivers(db: Session, project_id: str, receiver_ids: List[str]) -> tuple[List[str], List[str]]:
    """
    Split receivers into (valid, unresolved), keeping request order and
    dropping duplicates. Placeholders are always valid; literal ids must be
    live members of the project.
    """
    ordered: List[str] = []
    for rid in receiver_ids:
        rid = (rid or "").strip()
        if rid and rid not in ordered:
            ordered.append(rid)

    placeholders = RelatedUser.values()
    literal = [r for r in ordered if r not in placeholders]
    members = crud_task.get_member_user_ids(db, project_id=project_id, user_ids=literal)

    valid = [r for r in ordered if r in placeholders or r in members]
    unresolved = [r for r in ordered if r not in placeholders and r not in members]
    return valid, unresolved


def save(db: Session, request: MessageTaskRequest, user_id: str) -> MessageTaskSaveResult:
    check_project_exist(db, request.project_id)
    robot = resolve_robot(db, request.project_id, request.robot_id)
    valid, unresolved = resolve_receivers(db, request.project_id, request.receiver_ids)
    if not valid:
        raise ReceiverNotExistError(unresolved)

    task_type = request.task_type.value
    event = request.event.value
    enable = bool(request.enable)
    result = MessageTaskSaveResult(unresolved_receivers=unresolved)
    now = utcnow()
    try:
        for receiver in valid:
            task = crud_task.get_task(
                db,
                project_id=request.project_id,
                task_type=task_type,
                event=event,
                receiver=receiver,
            )
            if task is None:
                task = crud_task.insert_task(
                    db,
                    MessageTask(
                        project_id=request.project_id,
                        task_type=task_type,
                        event=event,
                        receiver=receiver,
                        project_robot_id=robot.id,
                        enable=enable,
                        template=request.template,
                        use_default_template=request.template is None,
                        test_id=request.test_id,
                        create_user=user_id,
                        create_time=now,
                        update_user=user_id,
                        update_time=now,
                    ),
                )
            else:
                task.project_robot_id = robot.id
                task.enable = enable
                if request.template is not None:
                    task.template = request.template
                    task.use_default_template = False
                if request.test_id is not None:
                    task.test_id = request.test_id
                task.update_user = user_id
                task.update_time = now
            result.tasks.append(task)
        db.commit()
    except Exception:
        db.rollback()
        raise

    for task in result.tasks:
        db.refresh(task)
    log.info(
        "Saved %d message task(s) for project %s %s/%s (unresolved: %s)",
        len(result.tasks),
        request.project_id,
        task_type,
        event,
        ", ".join(unresolved) or "-",
    )
    return result


def get(db: Session, project_id: str) -> List[MessageTask]:
    check_project_exist(db, project_id)
    return crud_task.list_tasks(db, project_id)
