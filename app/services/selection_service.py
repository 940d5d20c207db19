"""
Recording a recipient's selection
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import AlreadyUsed, NotFound
from app.models import Invite, Selection
from app.services.invite_service import InviteStateMachine
from app.services.menu_validator import validate_selection
from app.services.repositories import InviteRepo
from app.services.token_service import new_id

logger = logging.getLogger(__name__)

class SelectionRecorder:
    """Stores a selection and marks its invite used in one transaction"""

    @staticmethod
    def record(
        db: Session,
        invite: Invite,
        dinner: str,
        activity: str,
        mood: str,
        notes: Optional[str] = None,
    ) -> Selection:
        # Re-read state instead of trusting whatever the caller loaded earlier
        current = InviteRepo.get(db, invite.id, fresh=True)
        if not current:
            raise NotFound("Invite")
        event = InviteStateMachine.check_usable(db, current)

        # Validated against the menu as it is now, not as it was rendered
        validate_selection(event.menu, dinner, activity, mood)

        now = datetime.utcnow()
        selection = Selection(
            id=new_id(),
            invite_id=current.id,
            dinner_choice=dinner,
            activity_choice=activity,
            mood_choice=mood,
            notes=notes,
            created_at=now,
        )

        try:
            db.add(selection)
            db.flush()
            if not InviteRepo.mark_used(db, current.id, now):
                raise AlreadyUsed()
            db.commit()
        except IntegrityError:
            # Unique invite_id: a concurrent submission committed first
            db.rollback()
            logger.info(f"Lost selection race for invite {current.id}")
            raise AlreadyUsed()
        except AlreadyUsed:
            db.rollback()
            logger.info(f"Invite {current.id} was marked used concurrently")
            raise

        db.refresh(current)
        db.refresh(selection)
        logger.info(f"Recorded selection {selection.id} for invite {current.id}")
        return selection
