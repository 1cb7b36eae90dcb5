"""
Unit tests for XMD file acquisition.

:return : Test suite.
:return: Unit tests for resolving, reading and loading .xmd files.
"""

import os
import pytest
from datetime import datetime
from pathlib import Path
from desframe.models.errors import DocumentReadError, UnsupportedFileType
from desframe.sources.io import load_xmd, read_xmd, resolve_source
from desframe.xmd.parser import ParseConfig
from desframe.xmd.tree import find_child

XMD = """<?xml version="1.0" encoding="UTF-8"?>
<model>
  <data>
    <state id="0"><properties><initial/><marked/></properties><name>s0</name></state>
    <state id="1"/>
    <event id="0"><properties><controllable/><observable/></properties></event>
    <transition id="0" source="0" target="1" event="0"/>
    <transition id="1" source="1" target="0" event="0"/>
  </data>
</model>
"""


def _write(tmp_path, name: str = "plant.xmd", content: str = XMD):
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return path


def test_resolve_source_records_bookkeeping(tmp_path) -> None:
    """
    Test path splitting and modification time bookkeeping.

    :return : None.
    :return: Test assertion.
    """
    path = _write(tmp_path)
    mtime = datetime(2023, 5, 6, 7, 8, 9).timestamp()
    os.utime(path, (mtime, mtime))

    source = resolve_source(str(path))

    assert source.filename == "plant"
    assert source.extension == ".xmd"
    assert source.path == str(tmp_path)
    assert source.full_path == str(path)
    assert source.mod_date == datetime(2023, 5, 6, 7, 8, 9)
    assert source.load_date >= source.mod_date


def test_bare_file_name_resolves_against_cwd(tmp_path, monkeypatch) -> None:
    _write(tmp_path)
    monkeypatch.chdir(tmp_path)

    source = resolve_source("plant.xmd")

    assert source.path == str(tmp_path)


@pytest.mark.parametrize("name", ["plant.xml", "plant", "plant.XMD"])
def test_unsupported_file_type(tmp_path, name: str) -> None:
    """
    Test that only the .xmd extension is accepted.

    :return : None.
    :return: Test assertion.
    """
    path = _write(tmp_path, name=name)

    with pytest.raises(UnsupportedFileType):
        resolve_source(str(path))


def test_missing_file(tmp_path) -> None:
    with pytest.raises(DocumentReadError):
        read_xmd(str(tmp_path / "absent.xmd"))


def test_not_well_formed(tmp_path) -> None:
    path = _write(tmp_path, content="<model><data></model>")

    with pytest.raises(DocumentReadError) as excinfo:
        read_xmd(str(path))

    assert excinfo.value.filepath == str(path)


def test_read_xmd_returns_document_node(tmp_path) -> None:
    document, source = read_xmd(str(_write(tmp_path)))

    assert find_child(document, "model") is not None
    assert source.filename == "plant"


def test_load_xmd(tmp_path) -> None:
    """
    Test reading and parsing an .xmd file end to end.

    :return : None.
    :return: Test assertion.
    """
    automaton = load_xmd(str(_write(tmp_path)))

    assert automaton.num_states == 2
    assert automaton.num_events == 1
    assert automaton.num_transitions == 2
    assert automaton.states[0].is_initial and automaton.states[0].is_marked
    assert automaton.events[0].is_observable
    assert automaton.source is not None
    assert automaton.source.filename == "plant"


def test_load_xmd_with_config(tmp_path) -> None:
    content = XMD.replace('<state id="1"/>', '<state id="1"/><state id="1"/>')
    path = _write(tmp_path, content=content)

    automaton = load_xmd(str(path), config=ParseConfig(validate_integrity=False))

    assert automaton.num_states == 3


def test_load_bundled_example() -> None:
    """
    Test loading the example machine automaton shipped with the repository.

    :return : None.
    :return: Test assertion.
    """
    path = Path(__file__).parent.parent / "examples" / "machine.xmd"

    automaton = load_xmd(str(path))

    assert (automaton.num_states, automaton.num_events, automaton.num_transitions) == (3, 4, 4)
    assert [str(s) for s in automaton.initial_states] == ["Idle"]
    assert [str(e) for e in automaton.events if e.is_controllable] == ["start", "repair"]
