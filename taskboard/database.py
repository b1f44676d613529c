"""Store engine construction, schema creation and the per-request session."""

import logging

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine, select

from taskboard.config import Settings
from taskboard.models import STATUSES, TaskStatus

logger = logging.getLogger(__name__)


def normalize_database_url(url: str) -> str:
    """Point bare PostgreSQL URLs at the psycopg (v3) driver."""
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return "postgresql+psycopg://" + url[len(prefix):]
    return url


def build_engine(settings: Settings) -> Engine:
    """Create the pooled engine described by *settings*.

    With ``database_ssl`` the connection is encrypted but the server
    certificate is not verified (``sslmode=require``).
    """
    url = normalize_database_url(settings.database_url)
    connect_args: dict = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    elif settings.database_ssl:
        connect_args["sslmode"] = "require"
        logger.warning("PGSSL enabled: store certificate will not be verified")

    return create_engine(url, echo=False, pool_pre_ping=True, connect_args=connect_args)


def seed_statuses(session: Session) -> None:
    """Insert any missing reference statuses. Existing rows are left alone."""
    existing = set(session.exec(select(TaskStatus.id)).all())
    missing = [(sid, name) for sid, name in STATUSES if sid not in existing]
    if not missing:
        return
    for sid, name in missing:
        session.add(TaskStatus(id=sid, name=name))
    session.commit()
    logger.info("Seeded %d task statuses", len(missing))


def create_db_and_tables(engine: Engine) -> None:
    """Create all tables from SQLModel metadata, then seed the statuses."""
    SQLModel.metadata.create_all(engine)
    logger.info("Schema ready")
    with Session(engine) as session:
        seed_statuses(session)


def get_session(request: Request):
    """Yield a session bound to the application's engine for one request."""
    with Session(request.app.state.engine) as session:
        yield session
