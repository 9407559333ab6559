from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from .config import settings

# check_same_thread=False: FastAPI serves sync endpoints from a thread pool
engine = create_engine(
    settings.resolved_database_url,
    connect_args={"check_same_thread": False}
    if settings.resolved_database_url.startswith("sqlite")
    else {},
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)


def init_db() -> None:
    """Create the remote collections if they do not exist yet."""
    from .models.tables import Base
    Base.metadata.create_all(bind=engine)
