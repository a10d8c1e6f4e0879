# File: /testdesk/schemas/__init__.py | Version: 1.0 | Path: /testdesk/schemas/__init__.py
from . import auth, message_task, result, user_view

__all__ = ["auth", "message_task", "result", "user_view"]
