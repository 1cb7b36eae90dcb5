"""
Simple example script to read the example machine automaton.

Loads examples/machine.xmd and exports its Petri net view and transition table.
"""

import logging
from pathlib import Path
from desframe.sources.io import load_xmd
from desframe.xmd.parser import log_record
from desframe.integration.pm4py_adapter import (
    export_automaton_to_pnml,
    transitions_to_dataframe,
)


def main():
    logging.basicConfig(
        level=logging.DEBUG,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    xmd_path = Path(__file__).parent / "examples" / "machine.xmd"

    print(f"Loading XMD document: {xmd_path}")
    automaton = load_xmd(str(xmd_path), observer=log_record)

    print(f"✓ Read automaton with {automaton.num_states} states, "
          f"{automaton.num_events} events and {automaton.num_transitions} transitions")

    print("\nTransition table:")
    print(transitions_to_dataframe(automaton).to_string(index=False))

    output_path = Path(__file__).parent / "output" / "machine.pnml"
    output_path.parent.mkdir(parents=True, exist_ok=True)

    export_automaton_to_pnml(automaton, str(output_path))
    print(f"\n✓ Exported Petri net to: {output_path}")

    return automaton


if __name__ == "__main__":
    automaton = main()
