from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime

class ClassroomCreate(BaseModel):
    """Schema for creating a class"""
    name: str = Field(min_length=1)
    level: str = Field(min_length=1)
    subject: Optional[str] = None
    color: str

class SessionCreate(BaseModel):
    """Schema for scheduling a session"""
    class_id: str
    subject: str = Field(min_length=1)
    description: Optional[str] = None
    date: datetime
    duration: int = Field(gt=0)  # minutes

class SessionResponse(SessionCreate):
    """Schema for a stored session"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    status: str
    created_at: Optional[datetime] = None

class SessionInSequence(SessionResponse):
    """Session annotated with its position inside a sequence"""
    order_in_sequence: int

class SequenceCreate(BaseModel):
    """Schema for creating a sequence (order and status are assigned by the store)"""
    class_id: str
    name: str = Field(min_length=1)
    description: Optional[str] = None
    color: str
    session_count: int = Field(gt=0)
    theme: Optional[str] = None
    objectives: Optional[List[str]] = None
    resources: Optional[List[str]] = None

class SequenceUpdate(BaseModel):
    """Partial update; only fields explicitly set are written"""
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    color: Optional[str] = None
    session_count: Optional[int] = Field(default=None, gt=0)
    theme: Optional[str] = None
    objectives: Optional[List[str]] = None
    resources: Optional[List[str]] = None

class SequenceResponse(BaseModel):
    """Schema for a stored sequence"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    class_id: str
    name: str
    description: Optional[str] = None
    color: str
    order: int
    session_count: int
    theme: Optional[str] = None
    objectives: Optional[List[str]] = None
    resources: Optional[List[str]] = None
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class SequenceWithPosition(SequenceResponse):
    """Sequence annotated with the position of one of its sessions"""
    order_in_sequence: int

class AllocationItem(BaseModel):
    """Sessions handed to one sequence by an auto-assign plan"""
    sequence_id: str
    session_ids: List[str]

class ClassStatistics(BaseModel):
    """Assignment progress for a class"""
    total_sequences: int
    total_sessions: int
    assigned_sessions: int
    unassigned_sessions: int
    completion_percentage: int
