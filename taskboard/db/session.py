from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import create_engine, Session, SQLModel
from ..core.config import settings


# Helper function to ensure URL format is correct
def get_db_url():
    url = settings.DATABASE_URL
    if not url:
        return "sqlite:///./taskboard.db"
    # The stores use a sync Session; strip async drivers if configured
    url = url.replace("postgres://", "postgresql://")
    return url.replace("+asyncpg", "").replace("+aiosqlite", "")


def build_engine(db_url: str, echo: bool = False, **engine_kwargs) -> Engine:
    # --- CONFIGURATION FOR SQLITE ---
    if db_url.startswith("sqlite"):
        engine = create_engine(
            db_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            **engine_kwargs
        )

        # SQLite leaves foreign keys off unless asked per connection
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    # --- CONFIGURATION FOR POSTGRESQL ---
    return create_engine(
        db_url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
        **engine_kwargs
    )


engine = build_engine(get_db_url(), echo=settings.SQL_ECHO)


def create_db_and_tables(bind: Engine = engine) -> None:
    # Register every table on the metadata before create_all
    from .. import models  # noqa: F401

    SQLModel.metadata.create_all(bind)


# Dependency: one Session per request
def get_session():
    with Session(engine) as session:
        yield session
