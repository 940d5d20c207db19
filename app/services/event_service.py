"""
Date night administration: create, list, edit the itinerary, delete
"""

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.errors import NotFound, ValidationFailed
from app.core.themes import get_theme
from app.models import Event
from app.schemas.event import EventCreate, EventSummary, MenuUpdate
from app.services.repositories import EventRepo
from app.services.token_service import new_id

logger = logging.getLogger(__name__)

def format_date(value: Optional[date]) -> Optional[str]:
    """June 15, 2024"""
    if not value:
        return None
    return f"{value:%B} {value.day}, {value.year}"

def parse_date(value: str) -> Optional[date]:
    value = (value or "").strip()
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationFailed("That date doesn't look right (use YYYY-MM-DD).")

class EventService:
    """Service for date night administration"""

    @staticmethod
    def create_event(db: Session, data: EventCreate) -> Event:
        if not data.title:
            raise ValidationFailed("Please add a title.")
        theme = get_theme(data.theme_id)
        if not theme:
            raise ValidationFailed("That theme doesn’t exist.")

        menu = data.menu or theme.options.model_copy(deep=True)
        if not menu.is_complete():
            raise ValidationFailed("Please provide at least 1 option in each section.")

        event = Event(
            id=new_id(),
            title=data.title,
            theme_id=theme.id,
            date=data.event_date,
            menu=menu,
            blurb=theme.blurb,
        )
        db.add(event)
        db.commit()
        db.refresh(event)
        logger.info(f"Created date night {event.id} ({theme.id})")
        return event

    @staticmethod
    def get_event(db: Session, event_id: str) -> Event:
        event = EventRepo.get(db, event_id)
        if not event:
            raise NotFound("Date night")
        return event

    @staticmethod
    def list_events(db: Session) -> List[EventSummary]:
        summaries = []
        for event, invite_count in EventRepo.list_with_invite_counts(db):
            theme = get_theme(event.theme_id)
            summaries.append(EventSummary(
                id=event.id,
                title=event.title,
                theme_name=theme.name if theme else event.theme_id,
                invite_count=invite_count,
                date_text=format_date(event.date),
            ))
        return summaries

    @staticmethod
    def update_menu(db: Session, event_id: str, update: MenuUpdate) -> Event:
        """Replace the itinerary; applies to every invite of the event, used or not"""
        event = EventService.get_event(db, event_id)
        if not update.menu.is_complete():
            raise ValidationFailed("Please provide at least 1 option in each section.")

        event.menu = update.menu
        event.blurb = (update.blurb or "").strip() or None
        db.commit()
        db.refresh(event)
        logger.info(f"Updated itinerary for date night {event.id}")
        return event

    @staticmethod
    def delete_event(db: Session, event_id: str) -> None:
        """Delete a date night with its invites and their selections"""
        event = EventService.get_event(db, event_id)
        db.delete(event)
        db.commit()
        logger.info(f"Deleted date night {event_id}")
