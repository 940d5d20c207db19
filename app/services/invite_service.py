"""
Invite lifecycle: pending until a selection is recorded, then used for good.
"""

from sqlalchemy.orm import Session

from app.core.errors import AlreadyUsed, EventMissing
from app.models import Event, Invite
from app.services.repositories import EventRepo

class InviteStateMachine:
    """Read-only gate over an invite's state.

    The pending -> used transition itself happens in SelectionRecorder so that
    it commits together with the selection that causes it.
    """

    @staticmethod
    def resolve_event(db: Session, invite: Invite) -> Event:
        # Always from storage: the event may have been deleted or its menu edited
        event = EventRepo.get(db, invite.event_id, fresh=True)
        if event is None:
            raise EventMissing()
        return event

    @staticmethod
    def check_usable(db: Session, invite: Invite) -> Event:
        if invite.is_used:
            raise AlreadyUsed()
        return InviteStateMachine.resolve_event(db, invite)
