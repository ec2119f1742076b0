from sqlalchemy.orm import Session
from classbook.models import Classroom
from classbook.schemas import ClassroomCreate
from classbook.exceptions import NotFoundError
from typing import List, Optional

def create_classroom(db: Session, classroom: ClassroomCreate) -> Classroom:
    """Create a new class"""
    db_classroom = Classroom(**classroom.model_dump())
    db.add(db_classroom)
    db.commit()
    db.refresh(db_classroom)
    return db_classroom

def get_classroom(db: Session, class_id: str) -> Optional[Classroom]:
    """Get class by ID"""
    return db.query(Classroom).filter(Classroom.id == class_id).first()

def require_classroom(db: Session, class_id: str) -> Classroom:
    """Get class by ID or raise NotFoundError"""
    classroom = get_classroom(db, class_id)
    if classroom is None:
        raise NotFoundError("class", class_id)
    return classroom

def list_classrooms(db: Session) -> List[Classroom]:
    """Get all classes, by name"""
    return db.query(Classroom).order_by(Classroom.name.asc()).all()
