"""Tests for the state and exit cause enums."""

from enum import unique

import pytest

from topsort import ExitCause, StrEnumWithDoc, TraversalState


class Mode(StrEnumWithDoc):
    EAGER = "eager", "Resolve every dependency up front"
    LAZY = "lazy"  # No docstring provided


class TestStrEnumWithDoc:
    """Tests for StrEnumWithDoc."""

    def test_value_and_doc(self) -> None:
        """Should split the member tuple into value and docstring."""
        assert Mode.EAGER.value == "eager"
        assert Mode.EAGER.__doc__ == "Resolve every dependency up front"

    def test_member_without_doc_has_empty_doc(self) -> None:
        """Should give an empty docstring to members declared without one."""
        assert Mode.LAZY.__doc__ == ""

    def test_members_are_strings(self) -> None:
        """Should behave as plain strings."""
        assert isinstance(Mode.LAZY, str)
        assert f"{Mode.LAZY}" == "lazy"
        assert Mode("eager") is Mode.EAGER

    def test_unique_considers_values_only(self) -> None:
        """Should reject two members with the same value."""
        with pytest.raises(ValueError, match="duplicate values"):

            @unique
            class Duplicated(StrEnumWithDoc):
                FIRST = "same", "First docstring"
                SECOND = "same", "Second docstring"


class TestExitCause:
    """Tests for ExitCause."""

    def test_exactly_four_causes(self) -> None:
        """Should define the four exit causes in order."""
        assert [cause.value for cause in ExitCause] == [
            "already_sorted",
            "cycle",
            "dependency_cycle",
            "sorted",
        ]

    @pytest.mark.parametrize("cause", list(ExitCause))
    def test_every_cause_is_documented(self, cause: ExitCause) -> None:
        """Should document every exit cause."""
        assert cause.__doc__

    @pytest.mark.parametrize(
        ("cause", "expected"),
        [
            (ExitCause.ALREADY_SORTED, False),
            (ExitCause.CYCLE, True),
            (ExitCause.DEPENDENCY_CYCLE, True),
            (ExitCause.SORTED, False),
        ],
    )
    def test_is_failure(self, cause: ExitCause, expected: bool) -> None:
        """Should flag only the cycle causes as failures."""
        assert cause.is_failure is expected


class TestTraversalState:
    """Tests for TraversalState."""

    def test_states(self) -> None:
        """Should define the three traversal states in order."""
        assert list(TraversalState) == [
            TraversalState.UNVISITED,
            TraversalState.IN_PROGRESS,
            TraversalState.FINISHED,
        ]
        assert TraversalState.IN_PROGRESS == "in_progress"
