"""
Database models package
"""

from .event import Event
from .invite import Invite
from .selection import Selection

__all__ = ["Event", "Invite", "Selection"]
