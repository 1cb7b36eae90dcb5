"""
Unit tests for automaton model classes.

:return : Test suite.
:return: Unit tests for lookups and serialization.
"""

import dataclasses
import pytest
from datetime import datetime
from desframe.models.automaton import Automaton, Event, SourceFile, State, Transition


def _automaton() -> Automaton:
    return Automaton(
        states=(
            State(state_id=0, name="idle", is_initial=True),
            State(state_id=1, is_marked=True),
        ),
        events=(Event(event_id=0, name="go", is_controllable=True, is_observable=True),),
        transitions=(
            Transition(transition_id=0, source=0, target=1, event=0),
            Transition(transition_id=1, source=1, target=0, event=0),
        ),
    )


def test_counts_and_lookups() -> None:
    """
    Test counts and identifier lookups.

    :return : None.
    :return: Test assertion.
    """
    automaton = _automaton()

    assert automaton.num_states == len(automaton.states) == 2
    assert automaton.num_events == 1
    assert automaton.num_transitions == 2
    assert automaton.state(1).is_marked is True
    assert automaton.state(9) is None
    assert automaton.event(0).name == "go"
    assert automaton.transition(1).target == 0
    assert [s.state_id for s in automaton.initial_states] == [0]
    assert [s.state_id for s in automaton.marked_states] == [1]
    assert [t.transition_id for t in automaton.outgoing(0)] == [0]


def test_entities_are_immutable() -> None:
    state = State(state_id=0)

    with pytest.raises(dataclasses.FrozenInstanceError):
        state.is_initial = True


def test_display_strings() -> None:
    automaton = _automaton()

    assert str(automaton.states[0]) == "idle"
    assert str(automaton.states[1]) == "q1"
    assert str(automaton.transitions[0]) == "q0 --[e0]--> q1"


def test_automaton_serialization(tmp_path) -> None:
    """
    Test automaton JSON serialization with source bookkeeping.

    :return : None.
    :return: Test assertion.
    """
    source = SourceFile(
        filename="plant",
        path="/models",
        extension=".xmd",
        full_path="/models/plant.xmd",
        load_date=datetime(2024, 1, 2, 3, 4, 5),
        mod_date=datetime(2024, 1, 1),
    )
    automaton = dataclasses.replace(_automaton(), source=source)

    path = tmp_path / "plant.json"
    automaton.to_json(str(path))
    restored = Automaton.from_json(str(path))

    assert restored == automaton
    assert restored.source == source
    assert restored.to_dict()["num_transitions"] == 2
