"""
Repository layer wrapping the SQLAlchemy queries used by the services.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy import func, update
from sqlalchemy.orm import Session

from app.models import Event, Invite, Selection


# -------- Event repository --------

class EventRepo:
    @staticmethod
    def get(db: Session, event_id: str, fresh: bool = False) -> Optional[Event]:
        query = db.query(Event).filter(Event.id == event_id)
        if fresh:
            query = query.populate_existing()
        return query.first()

    @staticmethod
    def list_with_invite_counts(db: Session) -> List[Tuple[Event, int]]:
        invite_count = (
            db.query(func.count(Invite.id))
            .filter(Invite.event_id == Event.id)
            .correlate(Event)
            .scalar_subquery()
        )
        return db.query(Event, invite_count).order_by(Event.created_at.desc()).all()


# -------- Invite repository --------

class InviteRepo:
    @staticmethod
    def get(db: Session, invite_id: str, fresh: bool = False) -> Optional[Invite]:
        query = db.query(Invite).filter(Invite.id == invite_id)
        if fresh:
            query = query.populate_existing()
        return query.first()

    @staticmethod
    def get_by_token(db: Session, token: str) -> Optional[Invite]:
        return db.query(Invite).filter(Invite.token == token).first()

    @staticmethod
    def mark_used(db: Session, invite_id: str, used_at) -> bool:
        """Set used_at only if still pending. Returns False if another writer got there first."""
        result = db.execute(
            update(Invite)
            .where(Invite.id == invite_id, Invite.used_at.is_(None))
            .values(used_at=used_at)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1


# -------- Selection repository --------

class SelectionRepo:
    @staticmethod
    def get_for_invite(db: Session, invite_id: str) -> Optional[Selection]:
        return db.query(Selection).filter(Selection.invite_id == invite_id).first()

    @staticmethod
    def count_for_invite(db: Session, invite_id: str) -> int:
        return db.query(Selection).filter(Selection.invite_id == invite_id).count()
