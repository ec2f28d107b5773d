from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from geosnap.utils.config import settings


SQLALCHEMY_DATABASE_URL = settings.DATABASE_URL
_is_sqlite = SQLALCHEMY_DATABASE_URL.startswith("sqlite")

# For SQLite, check_same_thread=False is required only for multi-threaded contexts.
engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False} if _is_sqlite else {},
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def init_db() -> None:
    # Register every model on Base.metadata before creating tables
    import geosnap.models  # noqa: F401
    Base.metadata.create_all(bind=engine)
