# product_api/db.py

import logging

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .errors import StartupError

logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    """
    Owns the SQLAlchemy engine and session factory for one application.

    Lifecycle: initialize() -> connect() -> ... -> shutdown(). Nothing touches
    the network until connect() (or the first request) runs.
    """

    def __init__(self, url: str):
        self.url = url
        self.engine = None
        self.SessionLocal = None

    def initialize(self):
        engine_kwargs = {}
        if self.url.startswith("sqlite"):
            # Sync handlers run in a threadpool, so connections cross threads
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if self.url in ("sqlite://", "sqlite:///:memory:"):
                engine_kwargs["poolclass"] = StaticPool

        self.engine = create_engine(self.url, **engine_kwargs)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        logger.info(f"Product API: Database engine created for {self.engine.url!r}.")

    def connect(self):
        """Verify the connection and create missing tables."""
        if self.engine is None:
            self.initialize()
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            raise StartupError(f"Could not connect to the database: {e}") from e
        logger.info("Product API: Successfully connected to the database and ensured tables exist.")

    def session(self):
        if self.SessionLocal is None:
            self.initialize()
        return self.SessionLocal()

    def shutdown(self):
        if self.engine is not None:
            self.engine.dispose()
            logger.info("Product API: Database engine disposed.")
        self.engine = None
        self.SessionLocal = None


def get_db(request: Request):
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
