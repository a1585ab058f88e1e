from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from itrack.config import settings

_connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(settings.DATABASE_URL, connect_args=_connect_args, pool_pre_ping=True)
SessionLocal = sessionmaker(bind=engine, autoflush=False)


class Base(DeclarativeBase):
    pass


def get_db():
    """Request-scoped session; closed when the request finishes."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
