"""
Unit tests for model building.

:return : Test suite.
:return: Unit tests for ModelBuilder.
"""

import pytest
from desframe.models.automaton import Event, State, Transition
from desframe.models.errors import BuilderFinalized, IntegrityViolation
from desframe.xmd.builder import BuilderState, ModelBuilder, find_integrity_problems


def test_builder_lifecycle() -> None:
    """
    Test that the builder finalizes exactly once.

    :return : None.
    :return: Test assertion.
    """
    builder = ModelBuilder()
    assert builder.state is BuilderState.ACCUMULATING

    builder.add_state(State(state_id=0, is_initial=True))
    automaton = builder.finalize()

    assert builder.state is BuilderState.FINALIZED
    assert automaton.num_states == 1

    with pytest.raises(BuilderFinalized):
        builder.add_state(State(state_id=1))
    with pytest.raises(BuilderFinalized):
        builder.finalize()


def test_failed_validation_still_finalizes() -> None:
    builder = ModelBuilder()
    builder.add_transition(Transition(transition_id=0, source=0, target=0, event=0))

    with pytest.raises(IntegrityViolation):
        builder.finalize()

    assert builder.state is BuilderState.FINALIZED


def test_integrity_problems_listed() -> None:
    """
    Test duplicate and dangling reference detection.

    :return : None.
    :return: Test assertion.
    """
    states = [State(state_id=0), State(state_id=0), State(state_id=1)]
    events = [Event(event_id=0)]
    transitions = [
        Transition(transition_id=0, source=0, target=1, event=0),
        Transition(transition_id=1, source=2, target=1, event=5),
    ]

    problems = find_integrity_problems(states, events, transitions)

    assert problems == [
        "duplicate state id 0 (2 occurrences)",
        "transition 1 source state 2 does not exist",
        "transition 1 event 5 does not exist",
    ]


def test_integrity_violation_carries_problems() -> None:
    builder = ModelBuilder()
    builder.add_event(Event(event_id=3))
    builder.add_event(Event(event_id=3))

    with pytest.raises(IntegrityViolation) as excinfo:
        builder.finalize()

    assert excinfo.value.problems == ["duplicate event id 3 (2 occurrences)"]
