"""
Date night (event) model
"""

from datetime import datetime
from sqlalchemy import Column, String, Text, Date, DateTime
from sqlalchemy.orm import relationship

from app.core.db import Base
from app.models.types import MenuType

class Event(Base):
    __tablename__ = "date_nights"
    
    id = Column(String(32), primary_key=True)
    title = Column(String(255), nullable=False)
    theme_id = Column(String(100), nullable=False)
    date = Column(Date, nullable=True)
    menu = Column(MenuType, nullable=False)
    blurb = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    
    # Relationships
    invites = relationship(
        "Invite",
        back_populates="event",
        cascade="all, delete-orphan",
        order_by="Invite.created_at.desc()",
    )
