# app/db/database.py

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from core.config import DATABASE_URL

if not DATABASE_URL:
    raise RuntimeError("DATABASE_URL environment variable is required")


def build_engine(url: str):
    """
    Pooled engine for server databases; SQLite gets its own pool rules.
    """
    if not url.startswith("sqlite"):
        return create_engine(
            url,
            pool_pre_ping=True,
            pool_size=10,
            max_overflow=20,
        )

    # sessions are handed across FastAPI's threadpool workers
    kwargs = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url:
        # one shared connection, otherwise each thread sees its own empty db
        kwargs["poolclass"] = StaticPool
    return create_engine(url, pool_pre_ping=True, **kwargs)


engine = build_engine(DATABASE_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()

def init_db():
    """
    Create all tables if they do not exist.
    Safe to call multiple times.
    """
    import db.models
    Base.metadata.create_all(bind=engine)
