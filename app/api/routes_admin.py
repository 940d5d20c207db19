"""
Admin routes - requires an admin session
"""

import logging

from fastapi import APIRouter, Depends, Form, Request
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.db import get_db
from app.core.errors import EventMissing, NotFound, NotificationFailed, ValidationFailed
from app.core.themes import THEMES, get_theme
from app.api.routes_invite import get_dispatcher
from app.schemas.event import EventCreate, MenuUpdate
from app.schemas.invite import InviteCreate, InviteView
from app.schemas.menu import Menu, parse_lines
from app.services.event_service import EventService, format_date, parse_date
from app.services.invite_service import InviteStateMachine
from app.services.notification_service import NotificationDispatcher
from app.services.repositories import InviteRepo
from app.services.token_service import TokenIssuer, invite_url
from app.utils.responses import (
    clear_admin_session,
    error,
    info,
    redirect,
    render_page,
    set_admin_session,
)
from app.utils.security import (
    AdminContext,
    check_admin_password,
    create_session_token,
    get_admin_context,
    require_admin,
)

logger = logging.getLogger(__name__)

router = APIRouter()

DASHBOARD = "/admin/dashboard"

def event_url(event_id: str) -> str:
    return f"/admin/date-night/{event_id}"

@router.get("")
async def admin_home(request: Request):
    if get_admin_context(request) is None:
        return redirect("/admin/login")
    return redirect(DASHBOARD)

@router.get("/login")
async def login_page(request: Request):
    return render_page(request, "admin_login", "Admin login • Date Night Cottage")

@router.post("/login")
async def login(password: str = Form("")):
    if not settings.ADMIN_PASSWORD:
        return redirect("/admin/login", error("ADMIN_PASSWORD is not set in .env"))
    if not check_admin_password(password):
        logger.warning("Failed admin login attempt")
        return redirect("/admin/login", error("Nope, that password doesn’t match 🌧️"))

    response = redirect(DASHBOARD, info("Welcome in 🌿"))
    set_admin_session(response, create_session_token())
    return response

@router.get("/logout")
async def logout():
    response = redirect("/admin/login")
    clear_admin_session(response)
    return response

@router.get("/dashboard")
async def dashboard(
    request: Request,
    db: Session = Depends(get_db),
    admin: AdminContext = Depends(require_admin),
):
    return render_page(request, "admin_dashboard", "Admin • Date Night Cottage", {
        "date_nights": EventService.list_events(db),
    })

@router.get("/new")
async def new_event_page(request: Request, admin: AdminContext = Depends(require_admin)):
    return render_page(request, "admin_new", "New date night • Date Night Cottage", {"themes": THEMES})

@router.post("/new")
async def create_event(
    title: str = Form(""),
    themeId: str = Form(""),
    date: str = Form(""),
    dinner: str = Form(""),
    activity: str = Form(""),
    mood: str = Form(""),
    db: Session = Depends(get_db),
    admin: AdminContext = Depends(require_admin),
):
    """Create a date night; any filled-in menu section overrides the theme's defaults"""
    try:
        override = None
        if any(text.strip() for text in (dinner, activity, mood)):
            theme = get_theme(themeId.strip())
            defaults = theme.options if theme else Menu()
            override = Menu(
                dinner=parse_lines(dinner) or defaults.dinner,
                activity=parse_lines(activity) or defaults.activity,
                mood=parse_lines(mood) or defaults.mood,
            )
        data = EventCreate(title=title, theme_id=themeId, event_date=parse_date(date), menu=override)
        event = EventService.create_event(db, data)
    except ValidationFailed as e:
        return redirect("/admin/new", error(e.message))

    return redirect(event_url(event.id))

@router.get("/date-night/{event_id}")
async def event_detail(
    event_id: str,
    request: Request,
    db: Session = Depends(get_db),
    admin: AdminContext = Depends(require_admin),
):
    try:
        event = EventService.get_event(db, event_id)
    except NotFound:
        return redirect(DASHBOARD, error("Date night not found."))

    theme = get_theme(event.theme_id)
    if not theme:
        return redirect(DASHBOARD, error("Theme missing."))

    invites = [
        InviteView(
            id=invite.id,
            url=invite_url(invite.token),
            used=invite.is_used,
            recipient_email=invite.recipient_email,
            selection_summary=invite.selection.summary if invite.selection else None,
        )
        for invite in event.invites
    ]

    return render_page(request, "admin_date_night", f"{event.title} • Admin • Date Night Cottage", {
        "date_night": event,
        "date_text": format_date(event.date),
        "theme": theme,
        "menu": event.menu,
        "invites": invites,
        "planner_email": settings.PLANNER_EMAIL.strip(),
    })

@router.post("/date-night/{event_id}/delete")
async def delete_event(
    event_id: str,
    db: Session = Depends(get_db),
    admin: AdminContext = Depends(require_admin),
):
    try:
        EventService.delete_event(db, event_id)
    except NotFound:
        return redirect(DASHBOARD, error("Date night not found."))
    return redirect(DASHBOARD, info("Deleted 🌿"))

@router.post("/date-night/{event_id}/invite")
async def create_invite(
    event_id: str,
    recipientEmail: str = Form(""),
    db: Session = Depends(get_db),
    admin: AdminContext = Depends(require_admin),
    notifications: NotificationDispatcher = Depends(get_dispatcher),
):
    try:
        payload = InviteCreate(recipient_email=recipientEmail.strip() or None)
    except ValidationError:
        return redirect(event_url(event_id), error("That email address doesn’t look right."))

    try:
        invite = TokenIssuer.issue(db, event_id, payload.recipient_email)
    except NotFound:
        return redirect(DASHBOARD, error("Date night not found."))

    if not invite.recipient_email:
        return redirect(event_url(event_id), info("Invite created. Copy the link and send it 💌"))

    try:
        await notifications.send_invite(invite.event, invite)
    except NotificationFailed as e:
        logger.warning(f"{e} (invite {invite.id})")
        return redirect(event_url(event_id), error(f"Invite created, but email failed: {e.cause}"))
    return redirect(event_url(event_id), info("Invite created and emailed ✉️"))

@router.post("/invite/{invite_id}/resend")
async def resend_invite(
    invite_id: str,
    db: Session = Depends(get_db),
    admin: AdminContext = Depends(require_admin),
    notifications: NotificationDispatcher = Depends(get_dispatcher),
):
    """Re-send the original invite email with the same token"""
    invite = InviteRepo.get(db, invite_id)
    if not invite or not invite.recipient_email:
        return redirect(DASHBOARD, error("Invite not found or missing recipient email."))

    try:
        event = InviteStateMachine.resolve_event(db, invite)
    except EventMissing:
        return redirect(DASHBOARD, error(EventMissing.message))

    try:
        await notifications.send_invite(event, invite)
    except NotificationFailed as e:
        logger.warning(f"{e} (invite {invite.id})")
        return redirect(event_url(event.id), error(f"Re-send failed: {e.cause}"))
    return redirect(event_url(event.id), info("Invite re-sent ✉️"))

@router.get("/date-night/{event_id}/menu")
async def edit_menu_page(
    event_id: str,
    request: Request,
    db: Session = Depends(get_db),
    admin: AdminContext = Depends(require_admin),
):
    try:
        event = EventService.get_event(db, event_id)
    except NotFound:
        return redirect(DASHBOARD)

    menu = event.menu
    return render_page(request, "admin_edit_menu", f"Edit itinerary • {event.title}", {
        "date_night": event,
        "blurb": event.blurb or "",
        "dinner_text": "\n".join(menu.dinner),
        "activity_text": "\n".join(menu.activity),
        "mood_text": "\n".join(menu.mood),
    })

@router.post("/date-night/{event_id}/menu")
async def save_menu(
    event_id: str,
    dinner: str = Form(""),
    activity: str = Form(""),
    mood: str = Form(""),
    blurb: str = Form(""),
    db: Session = Depends(get_db),
    admin: AdminContext = Depends(require_admin),
):
    update = MenuUpdate(
        menu=Menu(dinner=parse_lines(dinner), activity=parse_lines(activity), mood=parse_lines(mood)),
        blurb=blurb,
    )
    try:
        EventService.update_menu(db, event_id, update)
    except NotFound:
        return redirect(DASHBOARD)
    except ValidationFailed as e:
        return redirect(f"{event_url(event_id)}/menu", error(e.message))

    return redirect(event_url(event_id), info("Itinerary saved 🌼"))
