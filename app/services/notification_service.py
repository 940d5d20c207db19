"""
Notifications sent around the invite lifecycle
"""

import logging
from typing import Callable, List, Optional

from starlette.concurrency import run_in_threadpool

from app.core.config import settings
from app.core.errors import NotificationFailed
from app.core.themes import get_theme
from app.models import Event, Invite, Selection
from app.services.email_service import (
    EmailMessage,
    render_confirmation_email,
    render_invite_email,
    render_planner_email,
    send_email,
)
from app.services.token_service import invite_url

logger = logging.getLogger(__name__)

class NotificationDispatcher:
    """Sends invite, planner and confirmation emails.

    Every send is independent. Failures come back as NotificationFailed from
    the single-purpose methods and as warnings from dispatch_selection, which
    runs after the selection has already been committed.
    """

    def __init__(
        self,
        sender: Callable[[str, EmailMessage], object] = send_email,
        planner_email: Optional[str] = None,
    ):
        self.sender = sender
        self._planner_email = planner_email

    @property
    def planner_email(self) -> str:
        if self._planner_email is not None:
            return self._planner_email.strip()
        return settings.PLANNER_EMAIL.strip()

    async def _deliver(self, channel: str, to: str, message: EmailMessage) -> None:
        try:
            await run_in_threadpool(self.sender, to, message)
        except Exception as e:
            raise NotificationFailed(channel, e) from e

    async def send_invite(self, event: Event, invite: Invite) -> None:
        if not invite.recipient_email:
            return
        theme_name, theme_blurb = _theme_text(event)
        message = render_invite_email(
            title=event.title,
            theme_name=theme_name,
            theme_blurb=event.blurb or theme_blurb,
            invite_url=invite_url(invite.token),
        )
        await self._deliver("Invite", invite.recipient_email, message)

    async def notify_planner(self, event: Event, selection: Selection, url: str) -> None:
        planner = self.planner_email
        if not planner:
            logger.info("[planner-email:missing] Set PLANNER_EMAIL to receive selections.")
            return
        theme_name, _ = _theme_text(event)
        message = render_planner_email(
            title=event.title,
            theme_name=theme_name,
            invite_url=url,
            dinner=selection.dinner_choice,
            activity=selection.activity_choice,
            mood=selection.mood_choice,
            notes=selection.notes,
        )
        await self._deliver("Planner", planner, message)

    async def notify_recipient(self, event: Event, recipient_email: Optional[str]) -> None:
        if not recipient_email:
            return
        theme_name, _ = _theme_text(event)
        message = render_confirmation_email(title=event.title, theme_name=theme_name)
        await self._deliver("Confirmation", recipient_email, message)

    async def dispatch_selection(self, event: Event, invite: Invite, selection: Selection, url: str) -> List[str]:
        """Fire both post-selection emails; return a warning per failure"""
        warnings = []
        for notify in (
            lambda: self.notify_planner(event, selection, url),
            lambda: self.notify_recipient(event, invite.recipient_email),
        ):
            try:
                await notify()
            except NotificationFailed as e:
                logger.warning(f"{e} (invite {invite.id})")
                warnings.append(str(e))
        return warnings

def _theme_text(event: Event):
    theme = get_theme(event.theme_id)
    if not theme:
        return event.theme_id, ""
    return theme.name, theme.blurb
