"""
Common Pydantic schemas
"""

from typing import Literal
from pydantic import BaseModel

class Flash(BaseModel):
    """Transient status message shown on the next rendered page"""
    kind: Literal["info", "error"]
    message: str
