"""
Configuration settings for the application
"""

import os
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""
    
    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./date_night.db")
    SQL_ECHO: bool = os.getenv("SQL_ECHO", "false").lower() in ("1", "true", "yes")
    
    # Security
    ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "")
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret-change-me")
    ADMIN_SESSION_MINUTES: int = 720
    SESSION_COOKIE_SECURE: bool = os.getenv("SESSION_COOKIE_SECURE", "false").lower() in ("1", "true", "yes")
    
    # Application
    BASE_URL: str = os.getenv("BASE_URL", "http://localhost:8000")
    
    # Email
    PLANNER_EMAIL: str = os.getenv("PLANNER_EMAIL", "")
    RESEND_API_KEY: str = os.getenv("RESEND_API_KEY", "")
    EMAIL_FROM: str = os.getenv("EMAIL_FROM", "Date Night Cottage <onboarding@resend.dev>")
    
    class Config:
        env_file = ".env"

settings = Settings()
