"""
XMD document acquisition.

Resolves and checks source paths, records load and modification times, and
reads the XML into a DocumentNode for the parser.

:return : XMD file I/O.
:return: Functions for resolving, reading and loading .xmd files.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple
import logging
import xml.etree.ElementTree as ET
from desframe.models.automaton import Automaton, SourceFile
from desframe.models.errors import DocumentReadError, UnsupportedFileType
from desframe.xmd.parser import ParseConfig, RecordObserver, parse_document
from desframe.xmd.tree import DocumentNode, ElementNode

logger = logging.getLogger(__name__)

XMD_EXTENSION = ".xmd"


def resolve_source(filepath: str) -> SourceFile:
    """
    Resolve an .xmd path and record its bookkeeping data.

    A bare file name resolves against the current working directory.

    :param filepath: Path to the .xmd file, with or without directory.
    :return : SourceFile instance.
    :return: Resolved file descriptor with load and modification dates.
    """
    path = Path(filepath)
    if path.suffix != XMD_EXTENSION:
        raise UnsupportedFileType(path.suffix)

    directory = path.parent if str(path.parent) not in ("", ".") else Path.cwd()
    full_path = directory / path.name
    try:
        mod_time = full_path.stat().st_mtime
    except OSError as e:
        raise DocumentReadError(str(full_path), e.strerror or str(e)) from e

    return SourceFile(
        filename=path.stem,
        path=str(directory),
        extension=path.suffix,
        full_path=str(full_path),
        load_date=datetime.now(),
        mod_date=datetime.fromtimestamp(mod_time),
    )


def read_xmd(filepath: str) -> Tuple[DocumentNode, SourceFile]:
    """
    Read an .xmd file into a document tree.

    :param filepath: Path to the .xmd file.
    :return : Tuple (document_node, source_file).
    :return: Parsed document and its bookkeeping data.
    """
    source = resolve_source(filepath)
    try:
        tree = ET.parse(source.full_path)
    except ET.ParseError as e:
        raise DocumentReadError(source.full_path, str(e)) from e
    except OSError as e:
        raise DocumentReadError(source.full_path, e.strerror or str(e)) from e

    logger.info(f"Read XMD document: {source.full_path}")
    return ElementNode.document(tree), source


def load_xmd(
    filepath: str,
    config: Optional[ParseConfig] = None,
    observer: Optional[RecordObserver] = None,
) -> Automaton:
    """
    Read an .xmd file and extract its automaton.

    :param filepath: Path to the .xmd file.
    :param config: Parsing policy.
    :param observer: Record observer passed to parse_document.
    :return : Automaton instance.
    :return: Model carrying its SourceFile.
    """
    document, source = read_xmd(filepath)
    return parse_document(document, config=config, observer=observer, source=source)
