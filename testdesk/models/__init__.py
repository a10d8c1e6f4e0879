# File: /testdesk/models/__init__.py | Version: 1.0 | Title: Models Package Exports
from .core_entities import Project, ProjectMember, ProjectRobot, User
from .message_task import MessageTask
from .user_view import UserView, UserViewCondition

__all__ = [
    "User",
    "Project",
    "ProjectMember",
    "ProjectRobot",
    "MessageTask",
    "UserView",
    "UserViewCondition",
]
