"""
Session-to-sequence link store.

None of these functions commit: they are building blocks for the sequence
engine, which commits once per operation. Writes are flushed so that
constraint violations surface at the call site.
"""

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from classbook.models import SessionSequence, Sequence, ClassSession
from classbook.exceptions import DataIntegrityError
from typing import List, Optional

def delete_links_for_sessions(db: Session, session_ids: List[str]) -> int:
    """Remove the links of the given sessions, whatever sequence they point to"""
    if not session_ids:
        return 0
    deleted = db.query(SessionSequence).filter(
        SessionSequence.session_id.in_(session_ids)
    ).delete(synchronize_session="fetch")
    db.flush()
    return deleted

def delete_links_for_sequence(db: Session, sequence_id: str) -> int:
    """Remove every link of a sequence"""
    deleted = db.query(SessionSequence).filter(
        SessionSequence.sequence_id == sequence_id
    ).delete(synchronize_session="fetch")
    db.flush()
    return deleted

def get_sequence_ids_for_sessions(db: Session, session_ids: List[str]) -> List[str]:
    """Distinct sequences currently holding any of the given sessions"""
    if not session_ids:
        return []
    rows = db.query(SessionSequence.sequence_id).filter(
        SessionSequence.session_id.in_(session_ids)
    ).distinct().all()
    return [row[0] for row in rows]

def insert_links(db: Session, sequence_id: str, session_ids: List[str], start_position: int = 1) -> List[SessionSequence]:
    """Link sessions to a sequence in list order, positions counting from start_position"""
    links = [
        SessionSequence(
            session_id=session_id,
            sequence_id=sequence_id,
            order_in_sequence=position
        )
        for position, session_id in enumerate(session_ids, start=start_position)
    ]
    db.add_all(links)
    try:
        db.flush()
    except IntegrityError as e:
        db.rollback()
        raise DataIntegrityError(
            "Could not link sessions to sequence",
            operation="insert_links",
            details={"sequence_id": sequence_id, "session_ids": list(session_ids)},
        ) from e
    return links

def get_links_by_sequence(db: Session, sequence_id: str) -> List[SessionSequence]:
    """Links of a sequence by position"""
    return db.query(SessionSequence).filter(
        SessionSequence.sequence_id == sequence_id
    ).order_by(SessionSequence.order_in_sequence.asc()).all()

def get_link_by_session(db: Session, session_id: str) -> Optional[SessionSequence]:
    """The link of a session, if it has one"""
    return db.query(SessionSequence).filter(SessionSequence.session_id == session_id).first()

def delete_link_by_session(db: Session, session_id: str) -> bool:
    """Remove the link of a single session"""
    deleted = db.query(SessionSequence).filter(
        SessionSequence.session_id == session_id
    ).delete(synchronize_session="fetch")
    db.flush()
    return deleted > 0

def count_links_for_sequence(db: Session, sequence_id: str) -> int:
    """Number of sessions currently linked to a sequence"""
    return db.query(SessionSequence).filter(SessionSequence.sequence_id == sequence_id).count()

def count_assigned_sessions_by_class(db: Session, class_id: str) -> int:
    """Distinct sessions linked to any sequence belonging to the class"""
    return db.query(
        func.count(func.distinct(SessionSequence.session_id))
    ).select_from(SessionSequence).join(
        Sequence, SessionSequence.sequence_id == Sequence.id
    ).filter(Sequence.class_id == class_id).scalar() or 0

def get_sessions_with_positions(db: Session, sequence_id: str) -> List[tuple]:
    """(session, order_in_sequence) pairs of a sequence, by position"""
    return db.query(ClassSession, SessionSequence.order_in_sequence).join(
        SessionSequence, SessionSequence.session_id == ClassSession.id
    ).filter(
        SessionSequence.sequence_id == sequence_id
    ).order_by(SessionSequence.order_in_sequence.asc()).all()
