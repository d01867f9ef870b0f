from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ..exceptions import StorageError, StorageUnavailableError
from ..utils.logger import get_logger
from .models import Base

logger = get_logger("storage.db")


class Database:
    """Owns one engine and session factory for a preferences database."""

    def __init__(self, dsn: str, echo: bool = False):
        self.dsn = dsn
        try:
            self.engine: Engine = create_engine(dsn, echo=echo)
        except (SQLAlchemyError, ImportError) as e:
            raise StorageUnavailableError(f"Cannot open database {dsn}: {e}") from e

        self._session_maker = sessionmaker(self.engine, class_=Session, expire_on_commit=False)
        logger.info("Database connection initialized")

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        session = self._session_maker()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageError(f"Database operation failed: {e}") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create_tables(self) -> None:
        try:
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            raise StorageUnavailableError(f"Cannot create tables: {e}") from e
        logger.info("Database tables created")

    def close(self) -> None:
        self.engine.dispose()
        logger.info("Database connection closed")
