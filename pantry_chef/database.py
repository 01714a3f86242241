import logging
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone

from fastapi import Request
from sqlalchemy import create_engine, Column, DateTime, Uuid
from sqlalchemy.orm import sessionmaker, DeclarativeBase, Session

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_database_url(url: str) -> str:
    """Ensure Postgres URLs use the psycopg v3 driver (not psycopg2)."""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg://", 1)
    return url


def _connect_args(url: str) -> dict:
    if url.startswith("sqlite"):
        # Sessions are handed across the threadpool FastAPI runs sync routes in
        return {"check_same_thread": False}
    # Cloud Postgres providers (Supabase, Neon) require SSL connections
    if "supabase" in url or "neon.tech" in url:
        return {"sslmode": "require"}
    return {}


class Base(DeclarativeBase):
    pass


class IdMixin:
    """Adds a UUID primary key."""

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)


class TimestampMixin:
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class Database:
    """Owns the engine and session factory for one application instance.

    Built by the app factory, opened in the lifespan startup and disposed
    on shutdown. Routes get sessions through :func:`get_db`.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = normalize_database_url(url)
        self.engine = create_engine(self.url, connect_args=_connect_args(self.url), echo=echo)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_all(self) -> None:
        import pantry_chef.models  # noqa: F401  register all tables
        Base.metadata.create_all(self.engine)

    def drop_all(self) -> None:
        Base.metadata.drop_all(self.engine)

    @contextmanager
    def session(self):
        db: Session = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        logger.info("Disposing database engine")
        self.engine.dispose()


def get_db(request: Request):
    database: Database = request.app.state.db
    with database.session() as db:
        yield db
