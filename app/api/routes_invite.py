"""
Recipient-facing invite routes - the token is the only credential
"""

import logging

from fastapi import APIRouter, Depends, Form, Request
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.core.errors import AlreadyUsed, EventMissing, InvalidSelection, NotFound
from app.core.themes import get_theme
from app.schemas.invite import SelectionSubmit
from app.services.event_service import format_date
from app.services.invite_service import InviteStateMachine
from app.services.notification_service import NotificationDispatcher
from app.services.selection_service import SelectionRecorder
from app.services.token_service import TokenIssuer, invite_url
from app.utils.responses import error, redirect, render_page

logger = logging.getLogger(__name__)

router = APIRouter()

dispatcher = NotificationDispatcher()

def get_dispatcher() -> NotificationDispatcher:
    return dispatcher

@router.get("/invite/{token}")
async def invite_page(token: str, request: Request, db: Session = Depends(get_db)):
    """Show the menu, or that the invite was already used"""
    try:
        invite = TokenIssuer.resolve(db, token)
    except NotFound:
        return render_page(
            request, "thanks", "Invite not found",
            flash=error("That invite link doesn’t seem to exist."),
            status_code=404,
        )

    try:
        event = InviteStateMachine.resolve_event(db, invite)
    except EventMissing as e:
        return render_page(request, "thanks", "Invite error", flash=error(e.message), status_code=404)

    theme = get_theme(event.theme_id)
    if not theme:
        return render_page(
            request, "thanks", "Invite error",
            flash=error("This date night has an unknown theme."),
            status_code=500,
        )

    return render_page(request, "invite", f"Invite • {event.title}", {
        "token": token,
        "date_night": event,
        "date_text": format_date(event.date),
        "theme_name": theme.name,
        "menu": event.menu,
        "used": invite.is_used,
    })

@router.post("/invite/{token}")
async def submit_invite(
    token: str,
    request: Request,
    dinnerChoice: str = Form(""),
    activityChoice: str = Form(""),
    moodChoice: str = Form(""),
    notes: str = Form(""),
    db: Session = Depends(get_db),
    notifications: NotificationDispatcher = Depends(get_dispatcher),
):
    """Record the recipient's choices, then notify the planner and recipient"""
    back = f"/invite/{token}"
    submitted = SelectionSubmit.from_form(dinnerChoice, activityChoice, moodChoice, notes)

    try:
        invite = TokenIssuer.resolve(db, token)
        event = InviteStateMachine.check_usable(db, invite)
        if not get_theme(event.theme_id):
            return redirect(back)
        selection = SelectionRecorder.record(
            db,
            invite,
            submitted.dinner,
            submitted.activity,
            submitted.mood,
            submitted.notes,
        )
    except (NotFound, EventMissing):
        return redirect(back, error("That invite doesn’t exist."))
    except AlreadyUsed:
        return redirect(back, error("This invite was already used."))
    except InvalidSelection as e:
        logger.info(f"Rejected selection for invite token ending {token[-4:]}: {e.fields}")
        return redirect(back, error("One or more choices were invalid. Please try again."))

    # Committed; email trouble from here on is only logged
    await notifications.dispatch_selection(event, invite, selection, invite_url(token))

    return render_page(request, "thanks", "Thanks • Date Night Cottage")
