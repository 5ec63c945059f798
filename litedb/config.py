"""Configuration management for litedb."""

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from .types import Environment

JOURNAL_MODES = ("DELETE", "TRUNCATE", "PERSIST", "MEMORY", "WAL", "OFF")


class Settings(BaseModel):
    """Runtime settings for database handles."""

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development/production/testing)",
    )
    log_level: str = Field(default="INFO", description="Logging level")

    database_dir: Path | None = Field(
        default=None,
        description="Directory for relative database paths (cwd when unset)",
    )
    journal_mode: str = Field(default="DELETE", description="SQLite journal mode")
    busy_timeout_ms: int = Field(
        default=60000, ge=0, description="SQLite busy timeout in milliseconds"
    )
    connect_timeout: float = Field(
        default=60.0, gt=0, description="sqlite3.connect timeout in seconds"
    )
    foreign_keys: bool = Field(
        default=True, description="Whether to enable foreign key enforcement"
    )

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        # Tests always run with rollback-journal files next to the database
        if self.is_testing:
            self.journal_mode = "DELETE"

    @field_validator("journal_mode")
    @classmethod
    def validate_journal_mode(cls, v: str) -> str:
        """Validate SQLite journal mode."""
        mode = v.upper()
        if mode not in JOURNAL_MODES:
            raise ValueError(f"Invalid journal mode: {v}")
        return mode

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == Environment.TESTING

    def resolve_path(self, path: str | Path) -> Path:
        """Resolve a database path against database_dir."""
        db_path = Path(path)
        if not db_path.is_absolute() and self.database_dir is not None:
            db_path = self.database_dir / db_path
        return db_path.resolve()


def load_settings() -> Settings:
    """Load settings from environment variables."""

    # Load .env file if it exists
    load_dotenv()

    database_dir = os.getenv("LITEDB_DATABASE_DIR")
    foreign_keys = os.getenv("LITEDB_FOREIGN_KEYS", "true").lower() in [
        "true",
        "1",
        "yes",
        "on",
    ]

    return Settings(
        environment=Environment(os.getenv("LITEDB_ENV", "development")),
        log_level=os.getenv("LITEDB_LOG_LEVEL", "INFO").upper(),
        database_dir=Path(database_dir) if database_dir else None,
        journal_mode=os.getenv("LITEDB_JOURNAL_MODE", "DELETE"),
        busy_timeout_ms=int(os.getenv("LITEDB_BUSY_TIMEOUT_MS", "60000")),
        connect_timeout=float(os.getenv("LITEDB_CONNECT_TIMEOUT", "60.0")),
        foreign_keys=foreign_keys,
    )


# Global settings instance
settings = load_settings()
