"""
Page rendering and redirect helpers
"""

from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

from app.core.config import settings
from app.schemas.common import Flash
from app.utils.security import (
    FLASH_COOKIE,
    FLASH_MAX_AGE,
    SESSION_COOKIE,
    decode_flash,
    encode_flash,
    get_admin_context,
)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

def render_page(
    request: Request,
    view: str,
    title: str,
    context: Optional[Dict[str, Any]] = None,
    status_code: int = 200,
    flash: Optional[Flash] = None,
):
    """Render a view inside the layout, consuming any pending flash message"""
    pending = request.cookies.get(FLASH_COOKIE)
    if flash is None:
        flash = decode_flash(pending)

    response = templates.TemplateResponse(
        request,
        f"{view}.html",
        {
            "title": title,
            "admin": get_admin_context(request) is not None,
            "flash": flash,
            **(context or {}),
        },
        status_code=status_code,
    )
    if pending:
        response.delete_cookie(FLASH_COOKIE)
    return response

def redirect(url: str, flash: Optional[Flash] = None) -> RedirectResponse:
    """303 redirect, optionally carrying a flash message to the next page"""
    response = RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)
    if flash:
        set_cookie(response, FLASH_COOKIE, encode_flash(flash), max_age=FLASH_MAX_AGE)
    return response

def info(message: str) -> Flash:
    return Flash(kind="info", message=message)

def error(message: str) -> Flash:
    return Flash(kind="error", message=message)

def set_cookie(response, key: str, value: str, max_age: Optional[int] = None) -> None:
    response.set_cookie(
        key,
        value,
        max_age=max_age,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )

def set_admin_session(response, token: str) -> None:
    set_cookie(response, SESSION_COOKIE, token, max_age=settings.ADMIN_SESSION_MINUTES * 60)

def clear_admin_session(response) -> None:
    response.delete_cookie(SESSION_COOKIE)
