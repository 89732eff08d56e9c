"""
Database engine, session management, and base model.

The ledger engine never touches the database. This module backs
the snapshot store, the persistence collaborator that receives a
full ledger snapshot after every mutation and hands the latest
one back at startup.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from personal_ledger.config import get_settings

settings = get_settings()

# --- Engine ---
# SQLite needs check_same_thread disabled because FastAPI may
# run sync endpoints and the snapshot subscriber on different
# worker threads.
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=(
        {"check_same_thread": False}
        if settings.DATABASE_URL.startswith("sqlite")
        else {}
    ),
)

# --- Session Factory ---
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    pass


# --- Dependency for FastAPI ---
def get_db():
    """
    Provide a database session for a single request.

    The try/finally pattern ensures the session is always
    closed, even if the endpoint raises.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
