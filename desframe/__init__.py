"""
DESFrame: discrete-event automata from XMD documents.

This package reads XMD documents (an XML dialect describing states, events and
transitions of a discrete-event automaton) into immutable in-memory models.

Main components:
- xmd: Tree navigation, node classification, record extraction, model building
- models: Automaton entities and error types
- sources: .xmd file acquisition
- integration: pm4py / pandas views and exports
- cli: Command-line interface

:return : Package initialization.
:return: Module exports for public API.
"""

__version__ = "0.1.0"
__author__ = "DESFrame Team"

from desframe.models.automaton import Automaton, Event, SourceFile, State, Transition
from desframe.models.errors import (
    IntegrityViolation,
    MalformedIdentifier,
    StructureMissing,
    XMDError,
)
from desframe.xmd.parser import ParseConfig, parse_document
from desframe.sources.io import load_xmd

__all__ = [
    "Automaton",
    "Event",
    "SourceFile",
    "State",
    "Transition",
    "IntegrityViolation",
    "MalformedIdentifier",
    "StructureMissing",
    "XMDError",
    "ParseConfig",
    "parse_document",
    "load_xmd",
]
