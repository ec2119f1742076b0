"""
Test suite for the sequence store.

System role: Verification of sequence persistence, ordering and cascades
"""

import pytest

from classbook.crud import (
    create_sequence,
    get_sequence,
    get_sequences_by_class,
    require_sequence,
    update_sequence,
    update_sequence_status,
    delete_sequence,
    reorder_sequences,
    insert_links,
    get_link_by_session,
    get_session,
)
from classbook.exceptions import DataIntegrityError, NotFoundError
from classbook.schemas import SequenceCreate, SequenceUpdate


class TestCreateSequence:
    """Test suite for create_sequence()."""

    def test_create_sequence_should_start_planned_at_order_zero(self, db, classroom, make_sequence) -> None:
        """Test the first sequence of a class gets order 0 and status planned."""
        sequence = make_sequence(classroom.id, objectives=["Situer", "Expliquer"], theme="Histoire moderne")

        assert sequence.order == 0
        assert sequence.status == "planned"
        assert sequence.id.startswith("seq_")
        assert sequence.objectives == ["Situer", "Expliquer"]
        assert sequence.resources is None
        assert sequence.updated_at is None

    def test_create_sequence_should_append_after_max_order(self, db, classroom, make_sequence) -> None:
        """Test order is max existing + 1, even with gaps."""
        first = make_sequence(classroom.id, "A")
        second = make_sequence(classroom.id, "B")
        reorder_sequences(db, classroom.id, [second.id, first.id])
        first_again = get_sequence(db, first.id)
        first_again.order = 7
        db.commit()

        third = make_sequence(classroom.id, "C")

        assert third.order == 8

    def test_create_sequence_should_number_each_class_separately(self, db, make_class, make_sequence) -> None:
        """Test order values are per class."""
        first, second = make_class("A"), make_class("B")
        make_sequence(first.id, "A1")
        make_sequence(first.id, "A2")

        assert make_sequence(second.id, "B1").order == 0

    def test_create_sequence_should_raise_for_unknown_class(self, db) -> None:
        """Test the foreign key to classes is enforced."""
        with pytest.raises(DataIntegrityError):
            create_sequence(
                db,
                SequenceCreate(class_id="class_missing", name="X", color="#000", session_count=2),
            )

    def test_sequence_create_schema_should_reject_non_positive_count(self) -> None:
        """Test session_count must be at least 1."""
        with pytest.raises(ValueError):
            SequenceCreate(class_id="c", name="X", color="#000", session_count=0)


class TestReadSequences:
    """Test suite for sequence lookups."""

    def test_get_sequences_by_class_should_follow_order(self, db, classroom, make_sequence) -> None:
        """Test listing is by ascending order."""
        a = make_sequence(classroom.id, "A")
        b = make_sequence(classroom.id, "B")

        assert [s.id for s in get_sequences_by_class(db, classroom.id)] == [a.id, b.id]
        assert get_sequences_by_class(db, "class_empty") == []

    def test_get_sequence_should_return_none_when_missing(self, db) -> None:
        """Test missing ids are a soft miss."""
        assert get_sequence(db, "seq_missing") is None

    def test_require_sequence_should_raise_not_found(self, db) -> None:
        """Test the strict lookup raises with the id in details."""
        with pytest.raises(NotFoundError) as exc_info:
            require_sequence(db, "seq_missing")

        assert exc_info.value.details == {"sequence_id": "seq_missing"}
        assert "seq_missing" in str(exc_info.value)


class TestUpdateSequence:
    """Test suite for update_sequence() and update_sequence_status()."""

    def test_update_sequence_should_only_touch_set_fields(self, db, classroom, make_sequence) -> None:
        """Test partial update keeps untouched fields and stamps updated_at."""
        sequence = make_sequence(classroom.id, "A", session_count=3, theme="Antiquité")

        updated = update_sequence(db, sequence.id, SequenceUpdate(name="A bis", resources=["Manuel p.12"]))

        assert updated.name == "A bis"
        assert updated.resources == ["Manuel p.12"]
        assert updated.theme == "Antiquité"
        assert updated.session_count == 3
        assert updated.updated_at is not None

    def test_update_sequence_should_clear_field_set_to_none(self, db, classroom, make_sequence) -> None:
        """Test an explicit None clears an optional field."""
        sequence = make_sequence(classroom.id, "A", description="Intro")

        updated = update_sequence(db, sequence.id, SequenceUpdate(description=None))

        assert updated.description is None

    def test_update_sequence_should_return_none_when_missing(self, db) -> None:
        """Test updating an unknown id is a no-op."""
        assert update_sequence(db, "seq_missing", SequenceUpdate(name="X")) is None

    def test_update_sequence_status_should_write_status(self, db, classroom, make_sequence) -> None:
        """Test the status writer sets status and timestamp."""
        sequence = make_sequence(classroom.id)

        update_sequence_status(db, sequence.id, "in-progress")
        db.commit()

        assert get_sequence(db, sequence.id).status == "in-progress"
        assert get_sequence(db, sequence.id).updated_at is not None


class TestDeleteSequence:
    """Test suite for delete_sequence()."""

    def test_delete_sequence_should_cascade_to_links(self, db, classroom, make_sessions, make_sequence) -> None:
        """Test links disappear with the sequence while sessions remain."""
        sessions = make_sessions(classroom.id, 2)
        sequence = make_sequence(classroom.id)
        insert_links(db, sequence.id, [s.id for s in sessions])
        db.commit()

        assert delete_sequence(db, sequence.id) is True

        assert get_sequence(db, sequence.id) is None
        assert get_link_by_session(db, sessions[0].id) is None
        assert get_session(db, sessions[0].id) is not None

    def test_delete_sequence_should_return_false_when_missing(self, db) -> None:
        """Test deleting an unknown id reports False."""
        assert delete_sequence(db, "seq_missing") is False


class TestReorderSequences:
    """Test suite for reorder_sequences()."""

    def test_reorder_should_round_trip(self, db, classroom, make_sequence) -> None:
        """Test listing after reorder yields the requested order."""
        s1 = make_sequence(classroom.id, "S1")
        s2 = make_sequence(classroom.id, "S2")
        s3 = make_sequence(classroom.id, "S3")

        reorder_sequences(db, classroom.id, [s3.id, s1.id, s2.id])

        listed = get_sequences_by_class(db, classroom.id)
        assert [s.id for s in listed] == [s3.id, s1.id, s2.id]
        assert [s.order for s in listed] == [0, 1, 2]

    def test_reorder_should_ignore_other_class_ids(self, db, make_class, make_sequence) -> None:
        """Test a sequence of another class keeps its order."""
        first, second = make_class("A"), make_class("B")
        mine = make_sequence(first.id, "Mine")
        make_sequence(second.id, "Theirs 0")
        theirs = make_sequence(second.id, "Theirs 1")

        reorder_sequences(db, first.id, [theirs.id, mine.id])

        assert get_sequence(db, theirs.id).order == 1
        assert get_sequence(db, mine.id).order == 1
