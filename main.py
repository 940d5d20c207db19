"""
Date Night Cottage - FastAPI application
Main application entry point
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
import uvicorn

from app.core.db import engine, Base
from app.core.errors import AdminLoginRequired
from app.api import routes_admin, routes_invite, routes_public
from app.utils.responses import redirect

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    # Create database tables
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")
    yield
    logger.info("Application shutdown")

# Create FastAPI application
app = FastAPI(
    title="Date Night Cottage",
    description="Themed date night invites with single-use links",
    version="1.0.0",
    lifespan=lifespan
)

@app.exception_handler(AdminLoginRequired)
async def admin_login_required(request: Request, exc: AdminLoginRequired):
    return redirect("/admin/login")

# Include routers
app.include_router(routes_public.router, tags=["public"])
app.include_router(routes_invite.router, tags=["invite"])
app.include_router(routes_admin.router, prefix="/admin", tags=["admin"])

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=8000,
        reload=True
    )
