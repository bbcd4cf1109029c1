from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker, scoped_session
from sqlmodel import SQLModel

from app.config.settings import settings
from app.core.exceptions.exceptions import DatabaseConnectionError
from app.utils.log import app_logger

_url = settings.sqlalchemy_url

if _url.startswith("sqlite"):
    # sqlite connections are shared across the request thread pool
    engine = create_engine(_url, connect_args={"check_same_thread": False}, echo=False)
else:
    engine = create_engine(
        _url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        pool_timeout=30,
        echo=False
    )

# session factory (scoped session if multithreaded or async)
SessionLocal = scoped_session(sessionmaker(autocommit=False, autoflush=False, bind=engine))


def get_db():
    """
    generates a new database session.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None) -> None:
    """Create missing tables. Migrations (alembic) remain the source of truth in production."""
    # register tables on SQLModel.metadata
    from app.models import event, product, shop  # noqa: F401

    bind = bind if bind is not None else engine
    try:
        SQLModel.metadata.create_all(bind=bind)
    except OperationalError as e:
        app_logger.error("db.init.error", error=str(e))
        raise DatabaseConnectionError(bind.url.database or str(bind.url)) from e
    app_logger.info("db.init.done", tables=sorted(SQLModel.metadata.tables.keys()))
