"""
Pydantic schemas package
"""

from .common import *
from .menu import *
from .event import *
from .invite import *

__all__ = [
    "Flash",
    "Menu",
    "MENU_GROUPS",
    "parse_lines",
    "encode_menu",
    "decode_menu",
    "EventCreate",
    "MenuUpdate",
    "EventSummary",
    "InviteCreate",
    "SelectionSubmit",
    "InviteView",
]
