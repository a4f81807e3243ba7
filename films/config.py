from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Settings:
    """Service configuration, read from environment variables.

    Attributes:
        database_url: SQLAlchemy URL of the film database
        db_echo: Log every SQL statement
        db_max_retries: Connection attempts at start-up
        db_retry_delay: Seconds between connection attempts
        mail_url: Endpoint of the mail service; unset means log only
        mail_timeout: Timeout for a mail request in seconds
        log_level: Root log level
    """

    database_url: str = "sqlite:///./films.db"
    db_echo: bool = False
    db_max_retries: int = 10
    db_retry_delay: float = 3.0
    mail_url: Optional[str] = None
    mail_timeout: float = 5.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Settings:
        """Load configuration from environment variables."""
        return cls(
            database_url=os.getenv("DATABASE_URL", "sqlite:///./films.db"),
            db_echo=os.getenv("DB_ECHO", "false").lower() == "true",
            db_max_retries=int(os.getenv("DB_MAX_RETRIES", "10")),
            db_retry_delay=float(os.getenv("DB_RETRY_DELAY", "3")),
            mail_url=os.getenv("MAIL_URL") or None,
            mail_timeout=float(os.getenv("MAIL_TIMEOUT", "5")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


settings = Settings.from_env()
