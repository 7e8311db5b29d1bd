"""
Database connectivity and session management

The Database object owns the SQLAlchemy engine and session factory.
It is constructed explicitly and handed to the app, so nothing here
connects at import time.
"""

import logging
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, declarative_base, Session
from sqlalchemy.pool import NullPool
from fastapi import Request

logger = logging.getLogger(__name__)

# Base class for ORM models
Base = declarative_base()


class Database:
    """Engine and session factory for one database URL."""

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        connect_args = {}
        if url.startswith("sqlite"):
            # Sessions are opened and closed on different threadpool workers
            connect_args["check_same_thread"] = False

        # Using NullPool for better compatibility with containerized environments
        self.engine = create_engine(
            url,
            poolclass=NullPool,
            connect_args=connect_args,
            echo=echo,
        )
        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=self.engine
        )

    def connect(self) -> None:
        """Verify connectivity and make sure every table exists."""
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        self.create_tables()
        logger.info(f"Connected to database {self.engine.url.render_as_string(hide_password=True)}")

    def create_tables(self) -> None:
        Base.metadata.create_all(bind=self.engine)

    def drop_database(self) -> None:
        """Drop every table owned by the models."""
        logger.warning(f"Dropping database {self.engine.url.render_as_string(hide_password=True)}")
        Base.metadata.drop_all(bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def check_connection(self) -> bool:
        """
        Test database connectivity
        Returns True if connection successful, False otherwise
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception:
            logger.warning("Database connectivity check failed", exc_info=True)
            return False

    def close(self) -> None:
        self.engine.dispose()
        logger.info("Database connection closed")


def get_database(request: Request) -> Database:
    """Return the Database attached to the running app."""
    return request.app.state.database


def get_db(request: Request):
    """
    Dependency injection for database sessions
    Usage in FastAPI endpoints:

    @router.get("/endpoint")
    def endpoint(db: Session = Depends(get_db)):
        # use db here
        pass
    """
    db = get_database(request).session()
    try:
        yield db
    finally:
        db.close()
