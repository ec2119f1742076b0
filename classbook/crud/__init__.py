from classbook.crud.classroom import create_classroom, get_classroom, require_classroom, list_classrooms
from classbook.crud.session import (
    create_session,
    get_session,
    get_sessions_by_class,
    get_unassigned_sessions,
    count_sessions_by_class
)
from classbook.crud.sequence import (
    create_sequence,
    get_sequences_by_class,
    get_sequence,
    require_sequence,
    update_sequence,
    update_sequence_status,
    delete_sequence,
    reorder_sequences
)
from classbook.crud.assignment import (
    delete_links_for_sessions,
    delete_links_for_sequence,
    insert_links,
    get_links_by_sequence,
    get_link_by_session,
    delete_link_by_session,
    count_links_for_sequence,
    count_assigned_sessions_by_class,
    get_sessions_with_positions,
    get_sequence_ids_for_sessions
)

__all__ = [
    "create_classroom",
    "get_classroom",
    "require_classroom",
    "list_classrooms",
    "create_session",
    "get_session",
    "get_sessions_by_class",
    "get_unassigned_sessions",
    "count_sessions_by_class",
    "create_sequence",
    "get_sequences_by_class",
    "get_sequence",
    "require_sequence",
    "update_sequence",
    "update_sequence_status",
    "delete_sequence",
    "reorder_sequences",
    "delete_links_for_sessions",
    "delete_links_for_sequence",
    "insert_links",
    "get_links_by_sequence",
    "get_link_by_session",
    "delete_link_by_session",
    "count_links_for_sequence",
    "count_assigned_sessions_by_class",
    "get_sessions_with_positions",
    "get_sequence_ids_for_sessions",
]
