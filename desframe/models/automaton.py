"""
Discrete-event automaton model definitions.

This module provides immutable dataclasses for an automaton read from an XMD document:
- G = ⟨Q, Σ, δ, Q0, Qm⟩
- Q: states, each optionally initial and/or marked
- Σ: events, each optionally controllable and/or observable
- δ: transitions referencing states and events by identifier
- Q0 / Qm: initial and marked subsets of Q

:return : Automaton model components.
:return: Classes for State, Event, Transition, SourceFile and Automaton.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
import json


@dataclass(frozen=True)
class State:
    """
    Automaton state.

    :param state_id: Non-negative identifier, unique within a well-formed model.
    :param name: Optional display name.
    :param is_initial: Whether the state is flagged initial.
    :param is_marked: Whether the state is flagged marked.
    :return : State instance.
    :return: An automaton state.
    """

    state_id: int
    name: Optional[str] = None
    is_initial: bool = False
    is_marked: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize state to dictionary.

        :return : Dictionary representation.
        :return: Dict with id, name and flags.
        """
        return {
            "id": self.state_id,
            "name": self.name,
            "initial": self.is_initial,
            "marked": self.is_marked,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "State":
        """
        Deserialize state from dictionary.

        :param data: Dictionary with id, name and flags.
        :return : State instance.
        :return: Reconstructed State.
        """
        return State(
            state_id=data["id"],
            name=data.get("name"),
            is_initial=data.get("initial", False),
            is_marked=data.get("marked", False),
        )

    def __str__(self) -> str:
        return self.name if self.name else f"q{self.state_id}"


@dataclass(frozen=True)
class Event:
    """
    Automaton event.

    :param event_id: Non-negative identifier, unique within a well-formed model.
    :param name: Optional display name.
    :param is_controllable: Whether the event is flagged controllable.
    :param is_observable: Whether the event is flagged observable.
    :return : Event instance.
    :return: An automaton event.
    """

    event_id: int
    name: Optional[str] = None
    is_controllable: bool = False
    is_observable: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize event to dictionary.

        :return : Dictionary representation.
        :return: Dict with id, name and flags.
        """
        return {
            "id": self.event_id,
            "name": self.name,
            "controllable": self.is_controllable,
            "observable": self.is_observable,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Event":
        """
        Deserialize event from dictionary.

        :param data: Dictionary with id, name and flags.
        :return : Event instance.
        :return: Reconstructed Event.
        """
        return Event(
            event_id=data["id"],
            name=data.get("name"),
            is_controllable=data.get("controllable", False),
            is_observable=data.get("observable", False),
        )

    def __str__(self) -> str:
        return self.name if self.name else f"e{self.event_id}"


@dataclass(frozen=True)
class Transition:
    """
    Automaton transition.

    References its endpoints and label by identifier; use Automaton.resolve
    to obtain the State and Event objects.

    :param transition_id: Non-negative identifier.
    :param source: Source state identifier.
    :param target: Target state identifier.
    :param event: Event identifier.
    :return : Transition instance.
    :return: An automaton transition.
    """

    transition_id: int
    source: int
    target: int
    event: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "id": self.transition_id,
            "source": self.source,
            "target": self.target,
            "event": self.event,
        }

    @staticmethod
    def from_dict(data: Dict[str, int]) -> "Transition":
        return Transition(
            transition_id=data["id"],
            source=data["source"],
            target=data["target"],
            event=data["event"],
        )

    def __str__(self) -> str:
        return f"q{self.source} --[e{self.event}]--> q{self.target}"


@dataclass(frozen=True)
class SourceFile:
    """
    Bookkeeping for the file an automaton was loaded from.

    :param filename: File name without directory or extension.
    :param path: Directory containing the file.
    :param extension: File extension including the dot.
    :param full_path: Full path to the file.
    :param load_date: When the file was read.
    :param mod_date: File modification time at load.
    :return : SourceFile instance.
    :return: Source file descriptor.
    """

    filename: str
    path: str
    extension: str
    full_path: str
    load_date: datetime
    mod_date: datetime

    def to_dict(self) -> Dict[str, str]:
        return {
            "filename": self.filename,
            "path": self.path,
            "extension": self.extension,
            "full_path": self.full_path,
            "load_date": self.load_date.isoformat(),
            "mod_date": self.mod_date.isoformat(),
        }

    @staticmethod
    def from_dict(data: Dict[str, str]) -> "SourceFile":
        return SourceFile(
            filename=data["filename"],
            path=data["path"],
            extension=data["extension"],
            full_path=data["full_path"],
            load_date=datetime.fromisoformat(data["load_date"]),
            mod_date=datetime.fromisoformat(data["mod_date"]),
        )


@dataclass(frozen=True)
class Automaton:
    """
    Discrete-event automaton extracted from one XMD document.

    Collections keep document order. Identifier lookups return the first
    entity carrying the identifier, which is the only one when the model
    passed integrity validation.

    :param states: Ordered states.
    :param events: Ordered events.
    :param transitions: Ordered transitions.
    :param source: File the model was loaded from, if any.
    :return : Automaton instance.
    :return: An automaton model.
    """

    states: Tuple[State, ...] = ()
    events: Tuple[Event, ...] = ()
    transitions: Tuple[Transition, ...] = ()
    source: Optional[SourceFile] = field(default=None, compare=False)

    @property
    def num_states(self) -> int:
        return len(self.states)

    @property
    def num_events(self) -> int:
        return len(self.events)

    @property
    def num_transitions(self) -> int:
        return len(self.transitions)

    @property
    def initial_states(self) -> List[State]:
        """
        States flagged initial.

        A well-formed automaton has exactly one; this is not enforced here.

        :return : List of states.
        :return: Initial states in document order.
        """
        return [s for s in self.states if s.is_initial]

    @property
    def marked_states(self) -> List[State]:
        return [s for s in self.states if s.is_marked]

    def state(self, state_id: int) -> Optional[State]:
        """
        Look up a state by identifier.

        :param state_id: State identifier.
        :return : State or None.
        :return: First state with that identifier.
        """
        return self._state_index.get(state_id)

    def event(self, event_id: int) -> Optional[Event]:
        """
        Look up an event by identifier.

        :param event_id: Event identifier.
        :return : Event or None.
        :return: First event with that identifier.
        """
        return self._event_index.get(event_id)

    def transition(self, transition_id: int) -> Optional[Transition]:
        return self._transition_index.get(transition_id)

    def resolve(
        self, transition: Transition
    ) -> Tuple[Optional[State], Optional[Event], Optional[State]]:
        """
        Resolve a transition's identifier references.

        :param transition: Transition to resolve.
        :return : Tuple (source_state, event, target_state).
        :return: Referenced entities, None where the reference dangles.
        """
        return (
            self.state(transition.source),
            self.event(transition.event),
            self.state(transition.target),
        )

    def outgoing(self, state_id: int) -> List[Transition]:
        return [t for t in self.transitions if t.source == state_id]

    @property
    def _state_index(self) -> Dict[int, State]:
        return _first_by_id(self.states, lambda s: s.state_id, self, "_states_by_id")

    @property
    def _event_index(self) -> Dict[int, Event]:
        return _first_by_id(self.events, lambda e: e.event_id, self, "_events_by_id")

    @property
    def _transition_index(self) -> Dict[int, Transition]:
        return _first_by_id(
            self.transitions, lambda t: t.transition_id, self, "_transitions_by_id"
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize automaton to dictionary.

        :return : Dictionary representation.
        :return: Dict with counts and all entity collections.
        """
        return {
            "num_states": self.num_states,
            "num_events": self.num_events,
            "num_transitions": self.num_transitions,
            "states": [s.to_dict() for s in self.states],
            "events": [e.to_dict() for e in self.events],
            "transitions": [t.to_dict() for t in self.transitions],
            "source": self.source.to_dict() if self.source else None,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Automaton":
        """
        Deserialize automaton from dictionary.

        Stored counts are ignored; they are always derived from the collections.

        :param data: Dictionary with automaton data.
        :return : Automaton instance.
        :return: Reconstructed Automaton.
        """
        source = data.get("source")
        return Automaton(
            states=tuple(State.from_dict(s) for s in data.get("states", [])),
            events=tuple(Event.from_dict(e) for e in data.get("events", [])),
            transitions=tuple(
                Transition.from_dict(t) for t in data.get("transitions", [])
            ),
            source=SourceFile.from_dict(source) if source else None,
        )

    def to_json(self, filepath: str) -> None:
        """
        Save automaton to JSON file.

        :param filepath: Path to output file.
        :return : None.
        :return: File write side-effect.
        """
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @staticmethod
    def from_json(filepath: str) -> "Automaton":
        with open(filepath, "r") as f:
            data = json.load(f)
        return Automaton.from_dict(data)


def _first_by_id(items, key, owner: Automaton, cache_name: str) -> Dict[int, Any]:
    # Frozen dataclass: cache through object.__setattr__ on first use.
    cached = owner.__dict__.get(cache_name)
    if cached is None:
        cached = {}
        for item in items:
            cached.setdefault(key(item), item)
        object.__setattr__(owner, cache_name, cached)
    return cached
