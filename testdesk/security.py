# File: /testdesk/security.py | Version: 1.1 | Title: JWT bearer tokens for project users, OAuth2 tokenUrl=/auth/token
from datetime import UTC, datetime, timedelta
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from testdesk.core.config import settings
from testdesk.db.session import get_db
from testdesk.models import User

ACCESS = "access"
REFRESH = "refresh"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Point to the form-based token endpoint
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def _issue(claims: dict, token_type: str, lifetime: timedelta) -> str:
    to_encode = dict(claims)
    to_encode.update({"exp": datetime.now(UTC) + lifetime, "type": token_type})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return _issue(data, ACCESS, lifetime)


def create_refresh_token(data: dict, expires_minutes: Optional[int] = None) -> str:
    minutes = expires_minutes or settings.REFRESH_TOKEN_EXPIRE_MINUTES
    return _issue(data, REFRESH, timedelta(minutes=minutes))


def tokens_for_user(user: User) -> tuple[str, str]:
    """(access, refresh) pair whose subject is the user id."""
    sub = {"sub": str(user.id)}
    return create_access_token(sub), create_refresh_token(sub)


def token_user_id(token: str, expected_type: str = ACCESS) -> str:
    """
    User id carried by a token. Raises JWTError for a bad signature, an
    expired token, a token of the wrong type or one without a subject.
    """
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    # Tokens minted without a type are treated as access tokens
    if payload.get("type", ACCESS) != expected_type:
        raise JWTError(f"expected a {expected_type} token")
    user_id = payload.get("sub")
    if not user_id:
        raise JWTError("token has no subject")
    return str(user_id)


def get_live_user(db: Session, user_id: str) -> Optional[User]:
    return (
        db.query(User)
        .filter(User.id == user_id, User.deleted == False, User.is_active == True)  # noqa: E712
        .first()
    )


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        user_id = token_user_id(token)
    except JWTError:
        raise credentials_exception

    user = get_live_user(db, user_id)
    if user is None:
        raise credentials_exception
    return user
