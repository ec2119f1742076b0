"""
Sequence assignment engine.

Maps a class's ordered sequences onto its dated sessions. Every operation
that changes which sessions a sequence holds re-derives the sequence status
through recompute_sequence_status before committing, so the stored status
always matches the link count.

Each public operation runs as one transaction: it commits on success and
rolls back on any error. Missing sequence or session ids are logged and
ignored.

Dependencies: sqlalchemy, classbook.crud, classbook.allocation
System role: The only cross-entity logic between sessions and sequences
"""

from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy.orm import Session

from classbook.allocation import SequenceAllocator
from classbook.crud.assignment import (
    count_assigned_sessions_by_class,
    count_links_for_sequence,
    delete_link_by_session,
    delete_links_for_sequence,
    delete_links_for_sessions,
    get_link_by_session,
    get_links_by_sequence,
    get_sequence_ids_for_sessions,
    get_sessions_with_positions,
    insert_links,
)
from classbook.crud.sequence import (
    get_sequence,
    get_sequences_by_class,
    reorder_sequences as store_reorder_sequences,
    update_sequence_status,
)
from classbook.crud.session import count_sessions_by_class, get_unassigned_sessions
from classbook.logger import get_logger
from classbook.schemas import (
    AllocationItem,
    ClassStatistics,
    SequenceResponse,
    SequenceWithPosition,
    SessionInSequence,
    SessionResponse,
)

logger = get_logger(__name__)


@contextmanager
def _transaction(db: Session) -> Iterator[None]:
    """Commit the wrapped operation, or roll it back and re-raise."""
    try:
        yield
        db.commit()
    except Exception:
        db.rollback()
        raise


def recompute_sequence_status(db: Session, sequence_id: str) -> Optional[str]:
    """
    Re-derive a sequence's status from its link count and persist it.

    This is the only place a status is written after creation. Does not
    commit.

    Args:
        db: Database session
        sequence_id: Sequence to refresh

    Returns:
        The new status, or None if the sequence does not exist
    """
    sequence = get_sequence(db, sequence_id)
    if sequence is None:
        return None
    assigned = count_links_for_sequence(db, sequence_id)
    status = SequenceAllocator.derive_status(assigned, sequence.session_count)
    update_sequence_status(db, sequence_id, status)
    return status


def _replace_sequence_sessions(db: Session, sequence_id: str, session_ids: List[str]) -> str:
    # Sessions moving in from other sequences lose their old link first
    previous_owners = [
        owner for owner in get_sequence_ids_for_sessions(db, session_ids) if owner != sequence_id
    ]
    delete_links_for_sessions(db, session_ids)
    delete_links_for_sequence(db, sequence_id)
    insert_links(db, sequence_id, session_ids)
    for owner in previous_owners:
        recompute_sequence_status(db, owner)
    return recompute_sequence_status(db, sequence_id)


def assign_sessions_to_sequence(db: Session, sequence_id: str, session_ids: List[str]) -> None:
    """
    Make session_ids, in this order, the sessions of a sequence.

    Sessions already linked elsewhere are moved, and the sequences they
    leave have their status refreshed too. Sessions previously linked
    to this sequence but absent from the list are released, so an empty list
    clears the sequence back to "planned". Positions are 1-based and follow
    the list order. Calling twice with the same list is harmless.

    Session ids are expected to belong to the sequence's class; this is not
    checked. An unknown or repeated session id raises DataIntegrityError and
    nothing is written.

    Args:
        db: Database session
        sequence_id: Target sequence
        session_ids: Ordered session ids
    """
    if get_sequence(db, sequence_id) is None:
        logger.warning(f"Assign skipped: sequence {sequence_id} not found")
        return

    with _transaction(db):
        status = _replace_sequence_sessions(db, sequence_id, list(session_ids))

    logger.info(
        f"Assigned {len(session_ids)} session(s) to sequence {sequence_id}, status {status}"
    )


def unassign_session(db: Session, session_id: str) -> None:
    """
    Detach one session from its sequence and refresh that sequence's status.

    A session without a link is left alone.
    """
    link = get_link_by_session(db, session_id)
    if link is None:
        logger.warning(f"Unassign skipped: session {session_id} has no sequence")
        return
    sequence_id = link.sequence_id

    with _transaction(db):
        delete_link_by_session(db, session_id)
        status = recompute_sequence_status(db, sequence_id)

    logger.info(f"Unassigned session {session_id} from sequence {sequence_id}, status {status}")


def reorder_sequences(db: Session, class_id: str, sequence_ids: List[str]) -> None:
    """
    Set each sequence's display order to its position in sequence_ids.

    Callers pass the class's complete list; duplicates or omissions are not
    detected and can leave two sequences sharing an order value.
    """
    store_reorder_sequences(db, class_id, sequence_ids)
    logger.info(f"Reordered {len(sequence_ids)} sequence(s) of class {class_id}")


def auto_assign_sequences(db: Session, class_id: str) -> List[AllocationItem]:
    """
    Fill a class's sequences from its unassigned sessions, earliest first.

    Sequences are served in display order. Each one takes up to session_count
    sessions from the front of the chronological pool, so earlier sequences
    are served before later ones receive anything. Sessions a sequence already
    holds do not reduce what it takes; the new ones are appended after them.
    Sequences that get nothing are left untouched.

    Args:
        db: Database session
        class_id: Class whose sequences are filled

    Returns:
        The allocations that were applied (sequences that received sessions)
    """
    sequences = get_sequences_by_class(db, class_id)
    pool = [session.id for session in get_unassigned_sessions(db, class_id)]

    existing = {
        sequence.id: [link.session_id for link in get_links_by_sequence(db, sequence.id)]
        for sequence in sequences
    }
    demands = [(sequence.id, sequence.session_count) for sequence in sequences]
    plan = [item for item in SequenceAllocator.plan(demands, pool) if item.session_ids]

    with _transaction(db):
        for item in plan:
            _replace_sequence_sessions(db, item.sequence_id, existing[item.sequence_id] + item.session_ids)

    assigned = sum(len(item.session_ids) for item in plan)
    logger.info(
        f"Auto-assigned {assigned} of {len(pool)} free session(s) "
        f"across {len(plan)} of {len(sequences)} sequence(s) in class {class_id}"
    )
    return plan


def _percent_half_up(part: int, whole: int) -> int:
    # Integer arithmetic so exact halves (1 of 8 -> 12.5) always round up
    return (part * 200 + whole) // (whole * 2)


def get_class_statistics(db: Session, class_id: str) -> ClassStatistics:
    """
    Assignment progress of a class.

    Assigned sessions are counted distinctly through a join on the class's
    sequences. The completion percentage is 0 for a class with no sessions.
    """
    total_sequences = len(get_sequences_by_class(db, class_id))
    total_sessions = count_sessions_by_class(db, class_id)
    assigned_sessions = count_assigned_sessions_by_class(db, class_id)

    completion_percentage = (
        _percent_half_up(assigned_sessions, total_sessions) if total_sessions > 0 else 0
    )

    return ClassStatistics(
        total_sequences=total_sequences,
        total_sessions=total_sessions,
        assigned_sessions=assigned_sessions,
        unassigned_sessions=total_sessions - assigned_sessions,
        completion_percentage=completion_percentage,
    )


def get_sessions_by_sequence(db: Session, sequence_id: str) -> List[SessionInSequence]:
    """Sessions of a sequence with their positions, first position first."""
    rows = get_sessions_with_positions(db, sequence_id)
    return [
        SessionInSequence(
            **SessionResponse.model_validate(session).model_dump(),
            order_in_sequence=position,
        )
        for session, position in rows
    ]


def get_sequence_by_session(db: Session, session_id: str) -> Optional[SequenceWithPosition]:
    """The sequence a session belongs to with the session's position, or None."""
    link = get_link_by_session(db, session_id)
    if link is None:
        return None
    sequence = get_sequence(db, link.sequence_id)
    if sequence is None:
        return None
    return SequenceWithPosition(
        **SequenceResponse.model_validate(sequence).model_dump(),
        order_in_sequence=link.order_in_sequence,
    )
