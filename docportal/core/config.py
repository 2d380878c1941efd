"""
Application Configuration Module

This module defines all configuration settings for the document portal.
Settings are loaded from environment variables (via .env file) using Pydantic.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """
    Application-wide configuration settings.

    All settings can be overridden via environment variables.
    The .env file is automatically loaded if present.
    """
    # === Application Metadata ===
    PROJECT_NAME: str = "GestorDoc Pro"
    VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"  # API version prefix for all routes

    # === Database Configuration ===
    # Leave unset to keep all state in a process-lifetime in-memory SQLite database
    DATABASE_URL: Optional[str] = None  # e.g., "sqlite:///./docportal.db"
    SEED_DEMO_CLIENTS: bool = True  # Create the two demo clients on startup

    # === Admin Credential ===
    # The administrator is a single configured credential, not a client record
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "admin123"

    # === Security Configuration ===
    # IMPORTANT: Change SECRET_KEY in production to a strong random value
    SECRET_KEY: str = "your-super-secret-key-change-me"  # Used for JWT token signing
    ALGORITHM: str = "HS256"  # JWT encoding algorithm
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24  # Token validity: 1 day

    # === Document Analyzer (Gemini) ===
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com"
    GEMINI_TIMEOUT_S: int = 60

    # === Logging ===
    LOG_LEVEL: str = "INFO"

    # Pydantic configuration
    model_config = SettingsConfigDict(
        env_file=".env",        # Load environment variables from .env file
        case_sensitive=True,    # Environment variable names must match case
        extra="ignore"          # Ignore extra environment variables not defined here
    )

# Create a single global settings instance
# This is imported throughout the application for configuration access
settings = Settings()
