"""
Invite model
"""

from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from app.core.db import Base

class Invite(Base):
    __tablename__ = "invites"
    
    id = Column(String(32), primary_key=True)
    event_id = Column(String(32), ForeignKey("date_nights.id", ondelete="CASCADE"), nullable=False, index=True)
    token = Column(String(64), unique=True, nullable=False, index=True)
    recipient_email = Column(String(255), nullable=True)
    used_at = Column(DateTime, nullable=True)  # None while pending
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    
    # Relationships
    event = relationship("Event", back_populates="invites")
    selection = relationship(
        "Selection",
        back_populates="invite",
        uselist=False,
        cascade="all, delete-orphan",
    )

    @property
    def is_used(self) -> bool:
        return self.used_at is not None
