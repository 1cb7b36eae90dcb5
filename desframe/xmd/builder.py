"""
Automaton model assembly.

Accumulates extracted records in document order and emits the final,
immutable Automaton exactly once.

:return : Model building utilities.
:return: ModelBuilder and integrity checking.
"""

from collections import Counter
from enum import Enum
from typing import List, Optional
from desframe.models.automaton import Automaton, Event, SourceFile, State, Transition
from desframe.models.errors import BuilderFinalized, IntegrityViolation


class BuilderState(Enum):
    ACCUMULATING = "accumulating"
    FINALIZED = "finalized"


class ModelBuilder:
    """
    Single-use accumulator for automaton records.

    :param validate_integrity: Reject duplicate identifiers and dangling
        transition references on finalize.
    :return : ModelBuilder instance.
    :return: A builder in the ACCUMULATING state.
    """

    def __init__(self, validate_integrity: bool = True) -> None:
        self.validate_integrity = validate_integrity
        self.state = BuilderState.ACCUMULATING
        self._states: List[State] = []
        self._events: List[Event] = []
        self._transitions: List[Transition] = []

    def _check_open(self) -> None:
        if self.state is BuilderState.FINALIZED:
            raise BuilderFinalized("Model builder has already been finalized")

    def add_state(self, state: State) -> None:
        self._check_open()
        self._states.append(state)

    def add_event(self, event: Event) -> None:
        self._check_open()
        self._events.append(event)

    def add_transition(self, transition: Transition) -> None:
        self._check_open()
        self._transitions.append(transition)

    def finalize(self, source: Optional[SourceFile] = None) -> Automaton:
        """
        Produce the automaton and close the builder.

        :param source: File the records were read from, if any.
        :return : Automaton instance.
        :return: Immutable model with collections in insertion order.
        """
        self._check_open()
        self.state = BuilderState.FINALIZED
        if self.validate_integrity:
            problems = find_integrity_problems(
                self._states, self._events, self._transitions
            )
            if problems:
                raise IntegrityViolation(problems)
        return Automaton(
            states=tuple(self._states),
            events=tuple(self._events),
            transitions=tuple(self._transitions),
            source=source,
        )


def find_integrity_problems(
    states: List[State], events: List[Event], transitions: List[Transition]
) -> List[str]:
    """
    Collect duplicate identifiers and dangling transition references.

    :param states: Extracted states.
    :param events: Extracted events.
    :param transitions: Extracted transitions.
    :return : List of problem descriptions.
    :return: Empty list when the records are consistent.
    """
    problems: List[str] = []

    for kind, ids in (
        ("state", [s.state_id for s in states]),
        ("event", [e.event_id for e in events]),
        ("transition", [t.transition_id for t in transitions]),
    ):
        for ident, count in Counter(ids).items():
            if count > 1:
                problems.append(f"duplicate {kind} id {ident} ({count} occurrences)")

    state_ids = {s.state_id for s in states}
    event_ids = {e.event_id for e in events}
    for t in transitions:
        if t.source not in state_ids:
            problems.append(f"transition {t.transition_id} source state {t.source} does not exist")
        if t.target not in state_ids:
            problems.append(f"transition {t.transition_id} target state {t.target} does not exist")
        if t.event not in event_ids:
            problems.append(f"transition {t.transition_id} event {t.event} does not exist")

    return problems
