"""
Database connection and session management for the reference store.
Provides one pooled engine per process and scoped sessions.
"""
import logging
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool

from crypto_gateway.config import Settings, settings
from crypto_gateway.models import Base

logger = logging.getLogger(__name__)


def build_engine(config: Settings) -> Engine:
    """Create the shared engine with a bounded connection pool."""
    return create_engine(
        config.database_url,
        poolclass=QueuePool,
        pool_size=config.db_pool_size,
        max_overflow=config.db_max_overflow,
        pool_timeout=config.db_pool_timeout_seconds,
        pool_recycle=config.db_pool_recycle_seconds,
        pool_pre_ping=True,  # Verify connections before using
        echo=False,
    )


engine = build_engine(settings)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind: Engine = engine):
    """Initialize database schema. Safe to call multiple times."""
    logger.info("Initializing reference database schema...")
    Base.metadata.create_all(bind=bind)
    logger.info("Reference database schema initialized successfully")


@contextmanager
def session_scope(factory: sessionmaker = SessionLocal) -> Session:
    """
    Context manager for read sessions.
    The pooled connection is released on every exit path.
    """
    session = factory()
    try:
        yield session
    except Exception as e:
        session.rollback()
        logger.error(f"Database session error: {e}")
        raise
    finally:
        session.close()
