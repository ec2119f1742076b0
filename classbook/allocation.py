from typing import List, Tuple

from classbook.models.sequence import STATUS_PLANNED, STATUS_IN_PROGRESS, STATUS_COMPLETED
from classbook.schemas import AllocationItem

class SequenceAllocator:
    """
    Database-free rules behind sequence scheduling.

    Status derivation and the greedy auto-assign plan live here so they can
    be reasoned about and tested without a session store.
    """

    @staticmethod
    def derive_status(assigned_count: int, session_count: int) -> str:
        """
        Status of a sequence given how many sessions are linked to it.

        Args:
            assigned_count: Sessions currently linked to the sequence
            session_count: Sessions the sequence needs

        Returns:
            "planned" with nothing linked, "completed" once the target is
            reached, "in-progress" in between
        """
        if assigned_count <= 0:
            return STATUS_PLANNED
        if assigned_count >= session_count:
            return STATUS_COMPLETED
        return STATUS_IN_PROGRESS

    @staticmethod
    def plan(demands: List[Tuple[str, int]], pool: List[str]) -> List[AllocationItem]:
        """
        Hand out pool sessions to sequences, first sequence first.

        Each sequence takes up to its demand from the front of what is left
        of the pool, so earlier sequences are always filled before later ones
        get anything. Once the pool runs dry the remaining sequences get an
        empty list.

        Args:
            demands: (sequence_id, sessions wanted) in display order
            pool: Session ids, already sorted chronologically

        Returns:
            One AllocationItem per demand, in the same order
        """
        cursor = 0
        allocations = []
        for sequence_id, wanted in demands:
            taken = pool[cursor:cursor + max(wanted, 0)]
            cursor += len(taken)
            allocations.append(AllocationItem(sequence_id=sequence_id, session_ids=taken))
        return allocations
