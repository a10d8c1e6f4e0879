# File: /testdesk/dependencies.py | Version: 1.0 | Path: /testdesk/dependencies.py
from fastapi import Depends, Request

from testdesk.core.i18n import Translator, normalize_locale
from testdesk.db.session import get_db
from testdesk.security import get_current_user


def get_translator(request: Request) -> Translator:
    return Translator(normalize_locale(request.headers.get("accept-language")))


def get_me(current_user=Depends(get_current_user)):
    """
    Wrapper dependency so routers can just Depends(get_me)
    to fetch the authenticated user object.
    """
    return current_user


__all__ = ["get_db", "get_me", "get_translator"]
