from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from classbook.database import Base

class SessionSequence(Base):
    """Link between a session and the sequence it belongs to"""
    __tablename__ = "session_sequences"
    
    # One row per session: a session belongs to at most one sequence
    session_id = Column(String, ForeignKey("sessions.id", ondelete="CASCADE"), primary_key=True)
    sequence_id = Column(String, ForeignKey("sequences.id", ondelete="CASCADE"), nullable=False, index=True)
    order_in_sequence = Column(Integer, nullable=False)  # 1-based
    
    session = relationship("ClassSession", back_populates="sequence_link")
    sequence = relationship("Sequence", back_populates="session_links")
