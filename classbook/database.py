import sqlite3

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from classbook.config import settings

engine = create_engine(settings.database_url, echo=settings.echo_sql)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

Base = declarative_base()


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection"""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def init_db(bind=None):
    """Create all tables"""
    # Models must be imported so they register on Base.metadata
    import classbook.models  # noqa: F401
    Base.metadata.create_all(bind=bind or engine)


def drop_db(bind=None):
    """Drop all tables"""
    import classbook.models  # noqa: F401
    Base.metadata.drop_all(bind=bind or engine)
