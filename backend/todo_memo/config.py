"""
Todo Memo Backend — Application Configuration
===============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Values are read from environment variables (or a .env file), validated
       at import time, and exposed through the module-level `settings` object.
Who:   Imported by main.py, database.py and the store implementations.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have development defaults. Attributes are grouped by concern.
    """

    # ── Document Store ────────────────────────────────────────────────────
    # 'mongo' talks to a MongoDB server through motor; 'memory' keeps todos in
    # process memory (lost on restart).
    store_backend: str = Field(default="mongo")

    # Format: mongodb://[user:password@]host[:port] or mongodb+srv://...
    mongo_url: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URL",
    )
    mongo_db_name: str = Field(default="todo_memo")
    mongo_collection: str = Field(default="todos")

    # How long the driver waits to find a usable server before failing an operation
    mongo_server_selection_timeout_ms: int = Field(default=5000, ge=100, le=60000)

    # ── Static Assets ─────────────────────────────────────────────────────
    # Served at "/" only when the directory exists
    static_dir: str = Field(default="./assets")

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated URLs, or "*" for any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3000, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("store_backend")
    @classmethod
    def validate_store_backend(cls, v: str) -> str:
        """Only the MongoDB and in-memory stores exist."""
        normalized = v.strip().lower()
        if normalized not in {"mongo", "memory"}:
            raise ValueError(f"Invalid store_backend '{v}'. Must be 'mongo' or 'memory'")
        return normalized

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # MONGO_URL and mongo_url both work
    }


# Imported throughout the application
settings = Settings()
