from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy.pool import StaticPool
from revi.core.config import settings
import logging

logger = logging.getLogger(__name__)


def _normalize_database_url(url: str) -> str:
    """SQLAlchemy prefers postgresql:// over postgres:// (the form most providers hand out)."""
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # Single shared connection so an in-memory database survives across sessions
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    return {
        "pool_pre_ping": True,  # Verify connections before using
        "pool_size": 5,
        "max_overflow": 10,
    }


db_url = _normalize_database_url(settings.database_url)

logger.info(f"Connecting to database: {db_url[:20]}...")  # Log partial URL for debugging

engine = create_engine(db_url, echo=False, **_engine_options(db_url))


def get_session():
    """Dependency for getting database sessions."""
    with Session(engine) as session:
        yield session


def init_db():
    """Initialize database tables."""
    SQLModel.metadata.create_all(engine)
