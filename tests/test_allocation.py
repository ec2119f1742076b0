"""
Test suite for SequenceAllocator.

Covers status derivation and the greedy auto-assign plan without a database.

System role: Verification of sequence scheduling rules
"""

import pytest

from classbook.allocation import SequenceAllocator


class TestDeriveStatus:
    """Test suite for SequenceAllocator.derive_status()."""

    @pytest.mark.parametrize(
        "assigned, needed, expected",
        [
            (0, 3, "planned"),
            (1, 3, "in-progress"),
            (2, 3, "in-progress"),
            (3, 3, "completed"),
            (5, 3, "completed"),
            (0, 1, "planned"),
            (1, 1, "completed"),
        ],
    )
    def test_derive_status_should_follow_assigned_count(self, assigned, needed, expected) -> None:
        """Test status is planned at zero, completed at target, in-progress between."""
        assert SequenceAllocator.derive_status(assigned, needed) == expected


class TestPlan:
    """Test suite for SequenceAllocator.plan()."""

    def test_plan_should_fill_earlier_sequences_first(self) -> None:
        """Test greedy allocation: A(3) gets p,q,r and B(2) gets t."""
        # Arrange
        demands = [("A", 3), ("B", 2)]
        pool = ["p", "q", "r", "t"]

        # Act
        plan = SequenceAllocator.plan(demands, pool)

        # Assert
        assert [item.sequence_id for item in plan] == ["A", "B"]
        assert plan[0].session_ids == ["p", "q", "r"]
        assert plan[1].session_ids == ["t"]

    def test_plan_should_give_empty_lists_once_pool_is_exhausted(self) -> None:
        """Test sequences after the pool runs out receive nothing."""
        plan = SequenceAllocator.plan([("A", 2), ("B", 2), ("C", 1)], ["p", "q"])

        assert [item.session_ids for item in plan] == [["p", "q"], [], []]

    def test_plan_should_keep_leftover_sessions_unused(self) -> None:
        """Test pool sessions beyond total demand are not handed out."""
        plan = SequenceAllocator.plan([("A", 1)], ["p", "q", "r"])

        assert plan[0].session_ids == ["p"]

    def test_plan_should_skip_sequences_with_zero_demand(self) -> None:
        """Test a complete sequence does not consume from the pool."""
        plan = SequenceAllocator.plan([("A", 0), ("B", 2)], ["p", "q"])

        assert plan[0].session_ids == []
        assert plan[1].session_ids == ["p", "q"]

    def test_plan_should_return_empty_for_no_sequences(self) -> None:
        """Test an empty class yields an empty plan."""
        assert SequenceAllocator.plan([], ["p"]) == []
