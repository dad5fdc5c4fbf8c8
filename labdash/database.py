"""Database configuration, session management and change capture."""

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .core.config import settings
from .realtime.hub import ChangeSignal, change_hub, INSERT, UPDATE, DELETE

DATABASE_URL = settings.database_url

_CHANGES_KEY = "labdash_pending_changes"


def is_postgresql() -> bool:
    """Check if the configured database is PostgreSQL."""
    return DATABASE_URL.startswith("postgresql")


if DATABASE_URL.startswith("sqlite"):
    engine = create_engine(
        DATABASE_URL,
        connect_args={"check_same_thread": False}
    )

    # SQLite ignores ON DELETE clauses unless foreign keys are switched on
    # for every connection.
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
else:
    engine = create_engine(
        DATABASE_URL,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_recycle=settings.db_pool_recycle,
        pool_pre_ping=True,
    )

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """FastAPI dependency yielding a session.

    Rolls back on unhandled exceptions so the connection goes back to the
    pool clean.
    """
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db() -> None:
    """Create all tables that do not exist yet."""
    from . import models  # noqa: F401  (registers the mappers)
    Base.metadata.create_all(bind=engine)


# ---------------------------------------------------------------------------
# Change capture: every committed insert/update/delete becomes a ChangeSignal
# ---------------------------------------------------------------------------

def _signal_for(obj, op: str):
    table = getattr(obj, "__tablename__", None)
    if table is None:
        return None
    return ChangeSignal(table=table, op=op, user_id=getattr(obj, "user_id", None))


@event.listens_for(Session, "after_flush")
def _collect_changes(session, flush_context):
    pending = session.info.setdefault(_CHANGES_KEY, [])
    for objects, op in ((session.new, INSERT), (session.dirty, UPDATE), (session.deleted, DELETE)):
        for obj in objects:
            if op == UPDATE and not session.is_modified(obj, include_collections=False):
                continue
            signal = _signal_for(obj, op)
            if signal is not None and signal not in pending:
                pending.append(signal)


@event.listens_for(Session, "after_commit")
def _publish_changes(session):
    pending = session.info.pop(_CHANGES_KEY, None)
    if pending:
        change_hub.publish_many(pending)


@event.listens_for(Session, "after_rollback")
def _discard_changes(session):
    session.info.pop(_CHANGES_KEY, None)
