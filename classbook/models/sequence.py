from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from classbook.database import Base
from classbook.models.ids import generate_id

STATUS_PLANNED = "planned"
STATUS_IN_PROGRESS = "in-progress"
STATUS_COMPLETED = "completed"

class Sequence(Base):
    """Pedagogical unit spanning a target number of sessions"""
    __tablename__ = "sequences"
    
    id = Column(String, primary_key=True, default=lambda: generate_id("seq"))
    class_id = Column(String, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text)
    color = Column(String, nullable=False)
    order = Column("order_num", Integer, nullable=False, default=0)  # zero-based display order within the class
    session_count = Column(Integer, nullable=False)  # sessions needed to complete the sequence
    theme = Column(String)
    objectives = Column(JSON)  # ["Situer la Révolution", ...]
    resources = Column(JSON)
    # Derived from the number of linked sessions, written only by the sequence engine
    status = Column(String, nullable=False, default=STATUS_PLANNED)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime)
    
    classroom = relationship("Classroom", back_populates="sequences")
    session_links = relationship(
        "SessionSequence",
        back_populates="sequence",
        order_by="SessionSequence.order_in_sequence",
        cascade="all, delete",
        passive_deletes=True,
    )
