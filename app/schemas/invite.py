"""
Invite-related Pydantic schemas
"""

from typing import Optional
from pydantic import BaseModel, EmailStr

class InviteCreate(BaseModel):
    """Schema for issuing an invite"""
    recipient_email: Optional[EmailStr] = None

class SelectionSubmit(BaseModel):
    """Recipient's submitted choices, already trimmed"""
    dinner: str
    activity: str
    mood: str
    notes: Optional[str] = None

    @classmethod
    def from_form(cls, dinner: str, activity: str, mood: str, notes: str = "") -> "SelectionSubmit":
        return cls(
            dinner=(dinner or "").strip(),
            activity=(activity or "").strip(),
            mood=(mood or "").strip(),
            notes=(notes or "").strip() or None,
        )

class InviteView(BaseModel):
    """Invite row on the admin detail page"""
    id: str
    url: str
    used: bool
    recipient_email: Optional[str] = None
    selection_summary: Optional[str] = None
