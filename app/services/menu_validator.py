"""
Validation of submitted choices against a menu
"""

from app.core.errors import InvalidSelection
from app.schemas.menu import Menu

def validate_selection(menu: Menu, dinner: str, activity: str, mood: str) -> None:
    """Raise InvalidSelection unless every choice is on its menu group.

    Membership is exact and case-sensitive. Empty strings get no special
    treatment: they pass only if the group literally contains one.
    """
    submitted = {"dinner": dinner, "activity": activity, "mood": mood}
    failed = [group for group, value in submitted.items() if value not in getattr(menu, group)]
    if failed:
        raise InvalidSelection(failed)
