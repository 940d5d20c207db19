"""
Event-related Pydantic schemas
"""

import datetime as dt
from typing import Optional
from pydantic import BaseModel, field_validator

from app.schemas.menu import Menu

class EventCreate(BaseModel):
    """Schema for creating a date night"""
    title: str
    theme_id: str
    event_date: Optional[dt.date] = None
    menu: Optional[Menu] = None

    @field_validator("title", "theme_id")
    @classmethod
    def strip_text(cls, value: str) -> str:
        return value.strip()

class MenuUpdate(BaseModel):
    """Schema for replacing a date night's itinerary"""
    menu: Menu
    blurb: Optional[str] = None

class EventSummary(BaseModel):
    """Dashboard row"""
    id: str
    title: str
    theme_name: str
    invite_count: int
    date_text: Optional[str] = None
