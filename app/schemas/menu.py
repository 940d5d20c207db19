"""
Menu schema and its storage codec
"""

import json
import logging
from typing import List

from pydantic import BaseModel

logger = logging.getLogger(__name__)

MENU_GROUPS = ("dinner", "activity", "mood")

class Menu(BaseModel):
    """Three ordered option groups offered on an invite"""
    dinner: List[str] = []
    activity: List[str] = []
    mood: List[str] = []

    def empty_groups(self) -> List[str]:
        return [group for group in MENU_GROUPS if not getattr(self, group)]

    def is_complete(self) -> bool:
        return not self.empty_groups()

def parse_lines(text: str) -> List[str]:
    """Split a textarea into trimmed, non-blank lines"""
    return [line.strip() for line in (text or "").split("\n") if line.strip()]

def encode_menu(menu: Menu) -> str:
    return json.dumps(menu.model_dump())

def decode_menu(raw: str) -> Menu:
    """Decode a stored menu.

    Anything that is not a JSON object falls back to an empty menu, and any
    group that is not a list of strings falls back to an empty group. Both
    cases are logged so corrupted rows do not go unnoticed.
    """
    try:
        data = json.loads(raw) if raw else {}
    except (TypeError, ValueError) as e:
        logger.warning(f"Undecodable menu, using empty groups: {e}")
        return Menu()

    if not isinstance(data, dict):
        logger.warning(f"Stored menu is a {type(data).__name__}, using empty groups")
        return Menu()

    groups = {}
    for group in MENU_GROUPS:
        value = data.get(group)
        if isinstance(value, list) and all(isinstance(v, str) for v in value):
            groups[group] = value
        else:
            if value is not None:
                logger.warning(f"Menu group '{group}' is malformed, using empty group")
            groups[group] = []
    return Menu(**groups)
