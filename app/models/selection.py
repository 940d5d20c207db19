"""
Selection model
"""

from datetime import datetime
from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from app.core.db import Base

class Selection(Base):
    __tablename__ = "selections"
    
    id = Column(String(32), primary_key=True)
    # unique: one selection per invite, enforced by the database
    invite_id = Column(String(32), ForeignKey("invites.id", ondelete="CASCADE"), unique=True, nullable=False)
    dinner_choice = Column(String(255), nullable=False)
    activity_choice = Column(String(255), nullable=False)
    mood_choice = Column(String(255), nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    
    # Relationships
    invite = relationship("Invite", back_populates="selection")

    @property
    def summary(self) -> str:
        return f"🍲 {self.dinner_choice} • 🎲 {self.activity_choice} • 💛 {self.mood_choice}"
