from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from datetime import datetime
from classbook.database import Base
from classbook.models.ids import generate_id

SESSION_PLANNED = "planned"
SESSION_IN_PROGRESS = "in_progress"
SESSION_COMPLETED = "completed"

class ClassSession(Base):
    """A scheduled lesson slot for a class"""
    __tablename__ = "sessions"
    __table_args__ = (
        Index("idx_sessions_class_date", "class_id", "date"),
    )
    
    id = Column(String, primary_key=True, default=lambda: generate_id("session"))
    class_id = Column(String, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False)
    subject = Column(String, nullable=False)
    description = Column(String)
    date = Column(DateTime, nullable=False)
    duration = Column(Integer, nullable=False)  # minutes
    status = Column(String, nullable=False, default=SESSION_PLANNED)  # planned, in_progress, completed
    created_at = Column(DateTime, default=datetime.utcnow)
    
    classroom = relationship("Classroom", back_populates="sessions")
    sequence_link = relationship(
        "SessionSequence",
        back_populates="session",
        uselist=False,
        cascade="all, delete",
        passive_deletes=True,
    )
