# File: /testdesk/routers/__init__.py | Version: 1.0 | Path: /testdesk/routers/__init__.py
"""
Router package exports.

Keeping these explicit helps static analyzers and avoids surprises
when importing submodules like: `from testdesk.routers import user_views`.
"""
from . import auth, health, message_tasks, user_views

__all__ = ["auth", "health", "message_tasks", "user_views"]
