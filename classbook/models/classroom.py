from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from classbook.database import Base
from classbook.models.ids import generate_id

class Classroom(Base):
    """A class taught by the teacher"""
    __tablename__ = "classes"
    
    id = Column(String, primary_key=True, default=lambda: generate_id("class"))
    name = Column(String, nullable=False)
    level = Column(String, nullable=False)  # "6eme", "2nde", ...
    subject = Column(String)
    color = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    
    sessions = relationship("ClassSession", back_populates="classroom", cascade="all, delete", passive_deletes=True)
    sequences = relationship("Sequence", back_populates="classroom", cascade="all, delete", passive_deletes=True)
