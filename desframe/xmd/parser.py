"""
XMD document to automaton extraction.

Locates the model and data nodes, walks the children of data in document
order and hands each state, event and transition record to a ModelBuilder.

:return : XMD parsing pipeline.
:return: parse_document, ParseConfig and the logging observer.
"""

from dataclasses import dataclass
from typing import Callable, Literal, Optional, Union
import logging
from desframe.models.automaton import Automaton, Event, SourceFile, State, Transition
from desframe.models.errors import MalformedIdentifier, StructureMissing
from desframe.xmd.builder import ModelBuilder
from desframe.xmd.classify import NodeKind, classify_node
from desframe.xmd.extract import extract_event, extract_state, extract_transition
from desframe.xmd.tree import DocumentNode, find_child

logger = logging.getLogger(__name__)

Record = Union[State, Event, Transition]
RecordObserver = Callable[[NodeKind, Record], None]

_EXTRACTORS = {
    NodeKind.STATE: extract_state,
    NodeKind.EVENT: extract_event,
    NodeKind.TRANSITION: extract_transition,
}


@dataclass
class ParseConfig:
    """
    Parsing policy.

    :param identifier_policy: "fail" aborts on a malformed identifier,
        "skip" drops the offending element and continues.
    :param validate_integrity: Reject duplicate identifiers and dangling
        transition references.
    :return : ParseConfig instance.
    :return: Parser configuration.
    """

    identifier_policy: Literal["fail", "skip"] = "fail"
    validate_integrity: bool = True

    def __post_init__(self) -> None:
        if self.identifier_policy not in ("fail", "skip"):
            raise ValueError(f"Unknown identifier policy: {self.identifier_policy}")


def log_record(kind: NodeKind, record: Record) -> None:
    """
    Observer that reports each extracted record through logging.

    :param kind: Element kind.
    :param record: Extracted record.
    :return : None.
    :return: Logging side-effect.
    """
    if isinstance(record, State):
        logger.debug(f"Found state {record.state_id} ({record})")
        if record.is_initial:
            logger.debug(f"\tState {record.state_id} is the initial state")
        if record.is_marked:
            logger.debug(f"\tState {record.state_id} is marked")
    elif isinstance(record, Event):
        logger.debug(f"Found event {record.event_id} ({record})")
        if record.is_controllable:
            logger.debug(f"\tEvent {record.event_id} is controllable")
        if record.is_observable:
            logger.debug(f"\tEvent {record.event_id} is observable")
    else:
        logger.debug(
            f"Found transition {record.transition_id}: from state {record.source} "
            f"to {record.target} on event {record.event}"
        )


def locate_data_node(root: DocumentNode) -> DocumentNode:
    """
    Find the data node below the model node.

    The model node may be the given node itself or one of its direct children
    (a document node).

    :param root: Document or model node.
    :return : Data node.
    :return: The data element holding states, events and transitions.
    """
    model_node = root if root.tag == "model" else find_child(root, "model")
    if model_node is None:
        raise StructureMissing("model")
    data_node = find_child(model_node, "data")
    if data_node is None:
        raise StructureMissing("data")
    return data_node


def parse_document(
    root: DocumentNode,
    config: Optional[ParseConfig] = None,
    observer: Optional[RecordObserver] = None,
    source: Optional[SourceFile] = None,
) -> Automaton:
    """
    Extract an automaton from a parsed XMD document.

    :param root: Document node (or the model node itself).
    :param config: Parsing policy, defaults to ParseConfig().
    :param observer: Called with every extracted record in document order.
    :param source: Source file bookkeeping to attach to the model.
    :return : Automaton instance.
    :return: Model with states, events and transitions in document order.
    """
    config = config or ParseConfig()
    data_node = locate_data_node(root)
    builder = ModelBuilder(validate_integrity=config.validate_integrity)
    adders = {
        NodeKind.STATE: builder.add_state,
        NodeKind.EVENT: builder.add_event,
        NodeKind.TRANSITION: builder.add_transition,
    }

    skipped = 0
    for child in data_node.children:
        kind = classify_node(child)
        if kind is None:
            continue
        try:
            record = _EXTRACTORS[kind](child)
        except MalformedIdentifier as e:
            if config.identifier_policy == "fail":
                raise
            skipped += 1
            logger.warning(f"Skipping <{kind.value}>: {e}")
            continue
        if observer is not None:
            observer(kind, record)
        adders[kind](record)

    automaton = builder.finalize(source=source)
    logger.info(
        f"Built automaton with {automaton.num_states} states, "
        f"{automaton.num_events} events and {automaton.num_transitions} transitions"
        + (f" ({skipped} malformed elements skipped)" if skipped else "")
    )
    return automaton
