# File: /testdesk/main.py | Version: 1.0 | Title: FastAPI App (notice message tasks + user views)
from __future__ import annotations

import logging

from fastapi import FastAPI

from testdesk.core.error_handlers import register_exception_handlers
from testdesk.core.logging import configure_logging
from testdesk.observability.sentry import init_sentry_if_configured
from testdesk.routers import auth, health, message_tasks, user_views

# Initialize logging & observability
configure_logging()
# Silence very verbose multipart parser logs to avoid pytest "closed file" noise
logging.getLogger("python_multipart.multipart").setLevel(logging.WARNING)
init_sentry_if_configured()

# App
app = FastAPI(title="Testdesk API")

app.include_router(auth.router)
app.include_router(health.router)
app.include_router(message_tasks.router)
app.include_router(user_views.router)

# Every error leaves as a ResultHolder envelope
register_exception_handlers(app)
