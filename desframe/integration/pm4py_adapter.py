"""
pm4py and pandas integration adapter.

Provides views of a finished automaton for downstream tooling: a pm4py Petri
net (with PNML export), a pandas transition table and JSON export.

:return : Integration utilities.
:return: Functions converting and exporting automata.
"""

from typing import Dict, Optional, Tuple
import logging
import pandas as pd
from pm4py.objects.petri_net.obj import PetriNet, Marking
from pm4py.objects.petri_net.utils import petri_utils
from pm4py.objects.petri_net.exporter import exporter as pnml_exporter
from desframe.models.automaton import Automaton

logger = logging.getLogger(__name__)

TRANSITION_COLUMNS = [
    "transition_id",
    "source",
    "source_name",
    "event",
    "event_name",
    "controllable",
    "observable",
    "target",
    "target_name",
]


def automaton_to_petri_net(
    automaton: Automaton,
) -> Tuple[PetriNet, Marking, Optional[Marking]]:
    """
    Map an automaton to a state-machine Petri net.

    One place per state and one visible transition per automaton transition,
    labelled with the event name. Transitions with dangling references are
    left out.

    :param automaton: Automaton model.
    :return : Tuple of (petri_net, initial_marking, final_marking).
    :return: Petri net; final marking only when exactly one state is marked.
    """
    net = PetriNet(name="XMD_Automaton")
    places: Dict[int, PetriNet.Place] = {}

    for state in automaton.states:
        if state.state_id in places:
            continue
        place = PetriNet.Place(f"q{state.state_id}")
        net.places.add(place)
        places[state.state_id] = place

    for trans in automaton.transitions:
        source, event, target = automaton.resolve(trans)
        if source is None or event is None or target is None:
            logger.warning(f"Leaving out transition {trans.transition_id} with dangling reference")
            continue
        pn_trans = PetriNet.Transition(name=f"t{trans.transition_id}", label=str(event))
        net.transitions.add(pn_trans)
        petri_utils.add_arc_from_to(places[trans.source], pn_trans, net)
        petri_utils.add_arc_from_to(pn_trans, places[trans.target], net)

    initial_marking = Marking()
    for state in automaton.initial_states:
        initial_marking[places[state.state_id]] = 1

    final_marking = None
    marked = automaton.marked_states
    if len(marked) == 1:
        final_marking = Marking()
        final_marking[places[marked[0].state_id]] = 1

    return net, initial_marking, final_marking


def export_automaton_to_pnml(automaton: Automaton, filepath: str) -> None:
    """
    Export the Petri net view of an automaton to PNML.

    :param automaton: Automaton model.
    :param filepath: Output file path.
    :return : None.
    :return: File write side-effect.
    """
    net, initial_marking, final_marking = automaton_to_petri_net(automaton)
    pnml_exporter.apply(net, initial_marking, filepath, final_marking=final_marking)


def transitions_to_dataframe(automaton: Automaton) -> pd.DataFrame:
    """
    Tabulate transitions with resolved state and event data.

    :param automaton: Automaton model.
    :return : DataFrame with one row per transition.
    :return: Transition table in document order.
    """
    rows = []
    for trans in automaton.transitions:
        source, event, target = automaton.resolve(trans)
        rows.append(
            {
                "transition_id": trans.transition_id,
                "source": trans.source,
                "source_name": str(source) if source else None,
                "event": trans.event,
                "event_name": str(event) if event else None,
                "controllable": event.is_controllable if event else None,
                "observable": event.is_observable if event else None,
                "target": trans.target,
                "target_name": str(target) if target else None,
            }
        )
    return pd.DataFrame(rows, columns=TRANSITION_COLUMNS)


def export_automaton_to_csv(automaton: Automaton, filepath: str) -> None:
    transitions_to_dataframe(automaton).to_csv(filepath, index=False)


def export_automaton_to_json(automaton: Automaton, filepath: str) -> None:
    automaton.to_json(filepath)
