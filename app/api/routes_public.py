"""
Public routes - no authentication required
"""

from fastapi import APIRouter
from fastapi.responses import RedirectResponse

router = APIRouter()

@router.get("/")
async def root():
    return RedirectResponse("/admin")

@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok"}
