from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker

from mohalla.core.config import settings


def _engine_options(url: str) -> dict:
    # SQLite connections are handed across the request thread pool.
    if make_url(url).get_backend_name() == "sqlite":
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


engine = create_engine(settings.DATABASE_URL, future=True, **_engine_options(settings.DATABASE_URL))
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, future=True)
Base = declarative_base()


def get_db():
    """Yield a request-scoped session and close it when the response is sent."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
