from sqlalchemy import exists
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from classbook.models import ClassSession, SessionSequence
from classbook.schemas import SessionCreate
from classbook.exceptions import DataIntegrityError
from typing import List, Optional

def create_session(db: Session, session: SessionCreate) -> ClassSession:
    """Schedule a session for a class"""
    db_session = ClassSession(**session.model_dump())
    db.add(db_session)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise DataIntegrityError(
            "Could not create session",
            operation="create_session",
            details={"class_id": session.class_id},
        ) from e
    db.refresh(db_session)
    return db_session

def get_session(db: Session, session_id: str) -> Optional[ClassSession]:
    """Get session by ID"""
    return db.query(ClassSession).filter(ClassSession.id == session_id).first()

def get_sessions_by_class(db: Session, class_id: str, ascending: bool = True) -> List[ClassSession]:
    """Get all sessions of a class ordered by date (id breaks ties)"""
    if ascending:
        ordering = (ClassSession.date.asc(), ClassSession.id.asc())
    else:
        ordering = (ClassSession.date.desc(), ClassSession.id.desc())
    return db.query(ClassSession).filter(
        ClassSession.class_id == class_id
    ).order_by(*ordering).all()

def get_unassigned_sessions(db: Session, class_id: str) -> List[ClassSession]:
    """
    Get sessions of a class that are not linked to any sequence.
    
    Earliest first; sessions sharing a date are ordered by id so the
    result does not depend on storage order.
    """
    linked = exists().where(SessionSequence.session_id == ClassSession.id)
    return db.query(ClassSession).filter(
        ClassSession.class_id == class_id,
        ~linked
    ).order_by(ClassSession.date.asc(), ClassSession.id.asc()).all()

def count_sessions_by_class(db: Session, class_id: str) -> int:
    """Number of sessions scheduled for a class"""
    return db.query(ClassSession).filter(ClassSession.class_id == class_id).count()
