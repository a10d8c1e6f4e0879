# File: /testdesk/crud/message_task.py | Version: 1.0 | Title: Data access for message tasks and the project data they reference
from __future__ import annotations

from typing import Iterable, List, Optional, Set

from sqlalchemy.orm import Session

from testdesk.core.constants import RobotPlatform
from testdesk.models.core_entities import Project, ProjectMember, ProjectRobot, User
from testdesk.models.message_task import MessageTask


# ----- Project / robots / members -----


def get_project(db: Session, project_id: str) -> Optional[Project]:
    return (
        db.query(Project)
        .filter(Project.id == project_id, Project.deleted == False)  # noqa: E712
        .first()
    )


def get_robot(db: Session, robot_id: str) -> Optional[ProjectRobot]:
    # A robot may be shared by tasks of any project; only its existence is checked
    return db.query(ProjectRobot).filter(ProjectRobot.id == robot_id).first()


def get_default_robot(db: Session, project_id: str) -> Optional[ProjectRobot]:
    """
    The in-site robot if the project has an enabled one, else the oldest
    enabled robot.
    """
    robots = (
        db.query(ProjectRobot)
        .filter(ProjectRobot.project_id == project_id, ProjectRobot.enable == True)  # noqa: E712
        .order_by(ProjectRobot.created_at.asc(), ProjectRobot.id.asc())
        .all()
    )
    for robot in robots:
        if robot.platform == RobotPlatform.IN_SITE.value:
            return robot
    return robots[0] if robots else None


def get_member_user_ids(db: Session, *, project_id: str, user_ids: Iterable[str]) -> Set[str]:
    """Subset of `user_ids` that are live users and members of the project."""
    ids = list(user_ids)
    if not ids:
        return set()
    rows = (
        db.query(User.id)
        .join(ProjectMember, ProjectMember.user_id == User.id)
        .filter(
            ProjectMember.project_id == project_id,
            User.id.in_(ids),
            User.deleted == False,  # noqa: E712
        )
        .all()
    )
    return {r[0] for r in rows}


# ----- Message tasks -----


def get_task(
    db: Session, *, project_id: str, task_type: str, event: str, receiver: str
) -> Optional[MessageTask]:
    return (
        db.query(MessageTask)
        .filter(
            MessageTask.project_id == project_id,
            MessageTask.task_type == task_type,
            MessageTask.event == event,
            MessageTask.receiver == receiver,
        )
        .first()
    )


def list_tasks(db: Session, project_id: str) -> List[MessageTask]:
    return (
        db.query(MessageTask)
        .filter(MessageTask.project_id == project_id)
        .order_by(
            MessageTask.task_type.asc(),
            MessageTask.event.asc(),
            MessageTask.receiver.asc(),
        )
        .all()
    )


def insert_task(db: Session, task: MessageTask) -> MessageTask:
    db.add(task)
    db.flush()
    return task
