from classbook.models.classroom import Classroom
from classbook.models.session import ClassSession
from classbook.models.sequence import Sequence
from classbook.models.session_sequence import SessionSequence

__all__ = [
    "Classroom",
    "ClassSession",
    "Sequence",
    "SessionSequence",
]
