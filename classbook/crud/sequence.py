from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from classbook.models import Sequence
from classbook.models.sequence import STATUS_PLANNED
from classbook.schemas import SequenceCreate, SequenceUpdate
from classbook.exceptions import DataIntegrityError, NotFoundError
from datetime import datetime
from typing import List, Optional

def next_order(db: Session, class_id: str) -> int:
    """Order value for a new sequence: max existing + 1, or 0"""
    max_order = db.query(func.max(Sequence.order)).filter(Sequence.class_id == class_id).scalar()
    return 0 if max_order is None else max_order + 1

def create_sequence(db: Session, sequence: SequenceCreate) -> Sequence:
    """Create a sequence at the end of its class's order, status planned"""
    db_sequence = Sequence(
        **sequence.model_dump(),
        order=next_order(db, sequence.class_id),
        status=STATUS_PLANNED
    )
    db.add(db_sequence)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise DataIntegrityError(
            "Could not create sequence",
            operation="create_sequence",
            details={"class_id": sequence.class_id},
        ) from e
    db.refresh(db_sequence)
    return db_sequence

def get_sequences_by_class(db: Session, class_id: str) -> List[Sequence]:
    """Get all sequences of a class in display order"""
    return db.query(Sequence).filter(
        Sequence.class_id == class_id
    ).order_by(Sequence.order.asc(), Sequence.created_at.asc()).all()

def get_sequence(db: Session, sequence_id: str) -> Optional[Sequence]:
    """Get sequence by ID"""
    return db.query(Sequence).filter(Sequence.id == sequence_id).first()

def require_sequence(db: Session, sequence_id: str) -> Sequence:
    """Get sequence by ID or raise NotFoundError"""
    sequence = get_sequence(db, sequence_id)
    if sequence is None:
        raise NotFoundError("sequence", sequence_id)
    return sequence

def update_sequence(db: Session, sequence_id: str, sequence_data: SequenceUpdate) -> Optional[Sequence]:
    """
    Update the fields that were explicitly set.
    
    Status is not touched here even when session_count changes; it is
    re-derived by the next assignment operation.
    """
    db_sequence = get_sequence(db, sequence_id)
    if db_sequence:
        for key, value in sequence_data.model_dump(exclude_unset=True).items():
            setattr(db_sequence, key, value)
        db_sequence.updated_at = datetime.utcnow()
        db.commit()
        db.refresh(db_sequence)
    return db_sequence

def update_sequence_status(db: Session, sequence_id: str, status: str) -> Optional[Sequence]:
    """
    Write a derived status. Flushes without committing: only the sequence
    engine calls this, inside its own transaction.
    """
    db_sequence = get_sequence(db, sequence_id)
    if db_sequence:
        db_sequence.status = status
        db_sequence.updated_at = datetime.utcnow()
        db.flush()
    return db_sequence

def delete_sequence(db: Session, sequence_id: str) -> bool:
    """Delete a sequence; its session links go with it (ON DELETE CASCADE)"""
    db_sequence = get_sequence(db, sequence_id)
    if not db_sequence:
        return False
    db.delete(db_sequence)
    db.commit()
    return True

def reorder_sequences(db: Session, class_id: str, sequence_ids: List[str]):
    """
    Persist order = position for each id, scoped to the class.
    
    Ids of another class are ignored. Sequences left out of the list keep
    their current order, so callers pass the complete list.
    """
    for position, sequence_id in enumerate(sequence_ids):
        db.query(Sequence).filter(
            Sequence.id == sequence_id,
            Sequence.class_id == class_id
        ).update({Sequence.order: position}, synchronize_session="fetch")
    db.commit()
