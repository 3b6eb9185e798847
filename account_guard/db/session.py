"""Database session management."""
import logging
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from .models import Base

logger = logging.getLogger(__name__)

class SessionManager:
    """Hands out sessions for one database and scopes a unit of work.

    Used as a context manager the session is committed when the block
    succeeds and rolled back when it raises.
    """

    def __init__(self, database_url: str):
        self.engine = create_engine(database_url)
        self.SessionLocal = sessionmaker(autoflush=False, bind=self.engine)

    def create_tables(self) -> None:
        """Create any missing account and agent tables."""
        logger.info(f"Creating tables on {self.engine.url!r}")
        Base.metadata.create_all(self.engine)

    def get_session(self) -> Session:
        return self.SessionLocal()

    def __enter__(self) -> Session:
        self.session = self.get_session()
        return self.session

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is None:
                self.session.commit()
            else:
                self.session.rollback()
        finally:
            self.session.close()
