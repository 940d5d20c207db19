"""
Static theme catalog
"""

from typing import List, Optional
from pydantic import BaseModel

from app.schemas.menu import Menu

class Theme(BaseModel):
    id: str
    name: str
    blurb: str
    options: Menu

THEMES: List[Theme] = [
    Theme(
        id="cottagecore-classic",
        name="Cottagecore Classic",
        blurb="Warm bread, soft blankets, candlelight, and gentle joy.",
        options=Menu(
            dinner=["Soup + fresh bread", "Pasta night", "Charcuterie + fruit", "Takeout plated nicely"],
            activity=["Bake something sweet", "Cozy movie", "Board games", "Long chat + tea"],
            mood=["Romantic", "Soft & slow", "Playful", "Deep & cozy"],
        ),
    ),
]

def get_theme(theme_id: str) -> Optional[Theme]:
    return next((t for t in THEMES if t.id == theme_id), None)
