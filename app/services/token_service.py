"""
Invite token issuing and resolution
"""

import logging
import secrets
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import NotFound, TokenAllocationFailed
from app.models import Invite
from app.services.repositories import EventRepo, InviteRepo

logger = logging.getLogger(__name__)

def new_id() -> str:
    """Opaque 12-character row identifier"""
    return secrets.token_urlsafe(9)

def generate_token() -> str:
    """URL-safe token with 128 bits of entropy (22 characters)"""
    return secrets.token_urlsafe(16)

def invite_url(token: str) -> str:
    return f"{settings.BASE_URL.rstrip('/')}/invite/{token}"

class TokenIssuer:
    """Creates invites with unguessable tokens and looks them up again"""

    MAX_ATTEMPTS = 5

    @staticmethod
    def issue(db: Session, event_id: str, recipient_email: Optional[str] = None) -> Invite:
        """Persist a new pending invite for an event.

        A token that is already taken is never reused or overwritten: the
        lookup catches most collisions and the unique index catches the rest
        at commit, and either way a fresh token is drawn.
        """
        event = EventRepo.get(db, event_id)
        if not event:
            raise NotFound("Date night")

        for attempt in range(1, TokenIssuer.MAX_ATTEMPTS + 1):
            token = generate_token()
            if InviteRepo.get_by_token(db, token):
                logger.warning(f"Invite token collision on attempt {attempt}, regenerating")
                continue

            invite = Invite(
                id=new_id(),
                event_id=event.id,
                token=token,
                recipient_email=recipient_email,
                used_at=None,
            )
            db.add(invite)
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                logger.warning(f"Invite token collision at commit on attempt {attempt}, regenerating")
                continue

            db.refresh(invite)
            logger.info(f"Issued invite {invite.id} for date night {event.id}")
            return invite

        raise TokenAllocationFailed()

    @staticmethod
    def resolve(db: Session, token: str) -> Invite:
        invite = InviteRepo.get_by_token(db, token)
        if not invite:
            raise NotFound("Invite")
        return invite
