# File: /testdesk/routers/auth.py | Version: 1.0 | Title: Auth Router (JSON+form tolerant) + Access & Refresh Tokens
from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, Form, HTTPException, Request, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from testdesk.db.session import get_db
from testdesk.models.core_entities import User
from testdesk.schemas.auth import LoginRequest, TokenResponse
from testdesk.security import tokens_for_user, verify_password

router = APIRouter(prefix="/auth", tags=["Auth"])


async def _read_json_or_form(request: Request) -> Dict[str, Any]:
    """Accept JSON or form-encoded bodies and normalize keys."""
    ctype = (request.headers.get("content-type") or "").lower()
    data: Dict[str, Any] = {}
    if "application/json" in ctype:
        try:
            body = await request.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            data = body
    else:
        form = await request.form()
        data = dict(form)

    # alias: username -> email (OAuth-style)
    if "username" in data and "email" not in data:
        data["email"] = data["username"]
    return data


def _authenticate(db: Session, email: str, password: str) -> User:
    user = db.query(User).filter(User.email == email).first()
    if (
        not user
        or user.deleted
        or not user.is_active
        or not verify_password(password, user.hashed_password)
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
        )
    return user


def _issue_tokens_for_user(user: User) -> TokenResponse:
    access_token, refresh_token = tokens_for_user(user)
    return TokenResponse(access_token=access_token, refresh_token=refresh_token)


@router.post("/login", response_model=TokenResponse)
async def login(request: Request, db: Session = Depends(get_db)):
    """
    Login with JSON or form {email/username, password}.
    """
    payload = await _read_json_or_form(request)
    email = (payload.get("email") or "").strip().lower()
    password = payload.get("password")

    if not email or not password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email and password required",
        )
    try:
        creds = LoginRequest(email=email, password=password)
    except ValidationError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid email",
        ) from None
    return _issue_tokens_for_user(_authenticate(db, creds.email, creds.password))


@router.post("/token", response_model=TokenResponse)
def login_oauth_form(
    db: Session = Depends(get_db),
    username: str = Form(...),
    password: str = Form(...),
):
    """
    OAuth2 form variant used by the OpenAPI "Authorize" button.
    """
    email = (username or "").strip().lower()
    return _issue_tokens_for_user(_authenticate(db, email, password))
