"""
Admin session and flash cookies, signed as short JWTs
"""

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from fastapi import Request
from jose import JWTError, jwt

from app.core.config import settings
from app.core.errors import AdminLoginRequired
from app.schemas.common import Flash

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
SESSION_COOKIE = "admin_session"
FLASH_COOKIE = "flash"
FLASH_MAX_AGE = 60  # seconds

@dataclass(frozen=True)
class AdminContext:
    """Who is acting on an admin request; built per request from the cookie"""
    subject: str
    expires_at: datetime

def check_admin_password(password: str) -> bool:
    expected = settings.ADMIN_PASSWORD
    if not expected:
        return False
    return secrets.compare_digest(password.encode("utf-8"), expected.encode("utf-8"))

def create_session_token(subject: str = "admin", expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.ADMIN_SESSION_MINUTES))
    return jwt.encode({"sub": subject, "exp": expire}, settings.SECRET_KEY, algorithm=ALGORITHM)

def get_admin_context(request: Request) -> Optional[AdminContext]:
    """Validate the session cookie on this request"""
    token = request.cookies.get(SESSION_COOKIE)
    if not token:
        return None
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
    subject = payload.get("sub")
    if subject != "admin":
        return None
    return AdminContext(subject=subject, expires_at=datetime.utcfromtimestamp(payload["exp"]))

def require_admin(request: Request) -> AdminContext:
    """Dependency for admin-only routes"""
    admin = get_admin_context(request)
    if admin is None:
        raise AdminLoginRequired()
    return admin

def encode_flash(flash: Flash) -> str:
    expire = datetime.utcnow() + timedelta(seconds=FLASH_MAX_AGE)
    return jwt.encode({**flash.model_dump(), "exp": expire}, settings.SECRET_KEY, algorithm=ALGORITHM)

def decode_flash(token: Optional[str]) -> Optional[Flash]:
    if not token:
        return None
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
        return Flash(kind=payload["kind"], message=payload["message"])
    except (JWTError, KeyError, ValueError):
        logger.debug("Ignoring unreadable flash cookie")
        return None
