from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
import time
import logging

from films.config import settings
from films import models  # noqa: F401  registers the tables on SQLModel.metadata

logger = logging.getLogger(__name__)


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
        )
    return create_engine(
        database_url,
        pool_pre_ping=True,
        connect_args={"connect_timeout": 10},
        echo=echo,
    )


engine = create_db_engine(settings.database_url, echo=settings.db_echo)


def wait_for_db(
    db_engine: Engine = engine,
    max_retries: int = settings.db_max_retries,
    retry_delay: float = settings.db_retry_delay,
) -> None:
    for attempt in range(1, max_retries + 1):
        try:
            logger.info(f"Attempt {attempt}/{max_retries}: Connecting to DB...")
            with Session(db_engine) as session:
                session.execute(text("SELECT 1"))
            logger.info(f"Connected to {db_engine.dialect.name}")
            if not inspect(db_engine).has_table("film"):
                SQLModel.metadata.create_all(db_engine)
                logger.info("Database tables created")
            return
        except Exception as e:
            logger.error(f"Connection failed: {type(e).__name__}: {str(e)}")
            if attempt == max_retries:
                raise RuntimeError(f"Failed to connect to DB after {max_retries} attempts") from e
            time.sleep(retry_delay)
