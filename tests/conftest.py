"""
Shared test fixtures.

Provides: in-memory SQLite database with the full schema, and factories for
classes, sessions and sequences
Dependencies: pytest, sqlalchemy
System role: Test infrastructure and fixture management
"""

from datetime import datetime, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from classbook.database import Base
import classbook.models  # noqa: F401  (registers tables)
from classbook.crud import create_classroom, create_session, create_sequence
from classbook.schemas import ClassroomCreate, SessionCreate, SequenceCreate


@pytest.fixture
def engine():
    """In-memory SQLite engine shared across connections, foreign keys on."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    """Session factory configured like classbook.database.SessionLocal."""
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    """Database session for one test."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def make_class(db):
    """Create a class."""
    def _make(name: str = "2nde B", level: str = "2nde"):
        return create_classroom(
            db, ClassroomCreate(name=name, level=level, subject="Histoire", color="#4CAF50")
        )
    return _make


@pytest.fixture
def classroom(make_class):
    """A class to attach sessions and sequences to."""
    return make_class()


@pytest.fixture
def make_sessions(db):
    """Create `count` sessions for a class, one per day starting at `start`."""
    def _make(class_id: str, count: int, start: datetime = datetime(2025, 9, 1, 8, 0)):
        return [
            create_session(
                db,
                SessionCreate(
                    class_id=class_id,
                    subject=f"Séance {i + 1}",
                    date=start + timedelta(days=i),
                    duration=55,
                ),
            )
            for i in range(count)
        ]
    return _make


@pytest.fixture
def make_sequence(db):
    """Create a sequence needing `session_count` sessions."""
    def _make(class_id: str, name: str = "La Révolution française", session_count: int = 3, **fields):
        return create_sequence(
            db,
            SequenceCreate(
                class_id=class_id,
                name=name,
                color="#2196F3",
                session_count=session_count,
                **fields,
            ),
        )
    return _make
