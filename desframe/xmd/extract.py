"""
Typed record extraction from classified XMD elements.

:return : Attribute and property extraction utilities.
:return: Functions turning state, event and transition nodes into model records.
"""

from typing import Optional
from desframe.models.automaton import Event, State, Transition
from desframe.models.errors import MalformedIdentifier
from desframe.xmd.tree import DocumentNode, find_child, has_child


def parse_identifier(node: DocumentNode, attribute: str) -> int:
    """
    Parse an identifier attribute as a non-negative integer.

    :param node: Element carrying the attribute.
    :param attribute: Attribute name (id, source, target, event).
    :return : Integer identifier.
    :return: Parsed non-negative integer.
    """
    raw = node.attributes.get(attribute)
    if raw is None:
        raise MalformedIdentifier(node.tag or "?", attribute, None)
    value = raw.strip()
    # ASCII digits only: rejects signs, fractions, exponents and non-Latin numerals
    if not (value.isascii() and value.isdecimal()):
        raise MalformedIdentifier(node.tag or "?", attribute, raw)
    return int(value)


def extract_name(node: DocumentNode) -> Optional[str]:
    """
    Read the optional display name from a name child.

    :param node: State or event element.
    :return : Name or None.
    :return: Stripped text of the name child, None if absent or empty.
    """
    name_node = find_child(node, "name")
    if name_node is None or name_node.text is None:
        return None
    return name_node.text.strip() or None


def extract_state(node: DocumentNode) -> State:
    """
    Extract a State record from a state element.

    A missing properties child leaves both flags false.

    :param node: State element.
    :return : State instance.
    :return: Extracted state.
    """
    properties = find_child(node, "properties")
    return State(
        state_id=parse_identifier(node, "id"),
        name=extract_name(node),
        is_initial=has_child(properties, "initial"),
        is_marked=has_child(properties, "marked"),
    )


def extract_event(node: DocumentNode) -> Event:
    """
    Extract an Event record from an event element.

    :param node: Event element.
    :return : Event instance.
    :return: Extracted event.
    """
    properties = find_child(node, "properties")
    return Event(
        event_id=parse_identifier(node, "id"),
        name=extract_name(node),
        is_controllable=has_child(properties, "controllable"),
        is_observable=has_child(properties, "observable"),
    )


def extract_transition(node: DocumentNode) -> Transition:
    return Transition(
        transition_id=parse_identifier(node, "id"),
        source=parse_identifier(node, "source"),
        target=parse_identifier(node, "target"),
        event=parse_identifier(node, "event"),
    )
