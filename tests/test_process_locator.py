"""Process locator strategy tests."""

from __future__ import annotations

import os
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from core.errors import CollaboratorError
from os_controller import process_locator
from os_controller.process_locator import (
    PgrepLocator,
    ProcessTableLocator,
    build_process_locator,
    matches_process,
)


@pytest.mark.parametrize(
    ("name", "cmdline", "expected"),
    [
        ("firefox", [], True),
        ("GeckoMain", ["/usr/lib/firefox/firefox", "-contentproc"], True),
        ("python3", ["firefox"], True),
        ("firefox-bin", ["/usr/bin/firefox-bin"], False),
        ("bash", ["bash", "-c", "firefox"], False),
        (None, None, False),
    ],
)
def test_matches_process(name: str | None, cmdline: list[str] | None, expected: bool) -> None:
    assert matches_process("firefox", name, cmdline) is expected


def test_pgrep_locator_unions_name_and_command_line(monkeypatch: pytest.MonkeyPatch) -> None:
    fake = MagicMock(side_effect=[(0, "101\n", ""), (0, "101\n202\n", "")])
    monkeypatch.setattr(process_locator, "run_command", fake)
    assert PgrepLocator().locate("firefox") == {101, 202}
    name_call, cmdline_call = (c.args[0] for c in fake.call_args_list)
    assert name_call == ["pgrep", "-x", "--", "firefox"]
    assert cmdline_call[:3] == ["pgrep", "-f", "--"]
    assert cmdline_call[3].startswith("^([^[:space:]]*/)?firefox(")


def test_pgrep_locator_escapes_regex_characters(monkeypatch: pytest.MonkeyPatch) -> None:
    fake = MagicMock(return_value=(1, "", ""))
    monkeypatch.setattr(process_locator, "run_command", fake)
    assert PgrepLocator().locate("g++") == frozenset()
    assert "g\\+\\+" in fake.call_args.args[0][3]


def test_pgrep_locator_never_reports_itself(monkeypatch: pytest.MonkeyPatch) -> None:
    own = str(os.getpid())
    monkeypatch.setattr(process_locator, "run_command", MagicMock(return_value=(0, own, "")))
    assert PgrepLocator().locate("python3") == frozenset()


def test_pgrep_failure_is_fatal(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(process_locator, "run_command", MagicMock(return_value=(2, "", "bad regex")))
    with pytest.raises(CollaboratorError):
        PgrepLocator().locate("firefox")


def test_process_table_locator(monkeypatch: pytest.MonkeyPatch) -> None:
    procs = [
        SimpleNamespace(info={"pid": 10, "name": "firefox", "cmdline": ["firefox"]}),
        SimpleNamespace(info={"pid": 11, "name": "bash", "cmdline": ["bash"]}),
        SimpleNamespace(info={"pid": 12, "name": "GeckoMain", "cmdline": ["/opt/firefox/firefox"]}),
        SimpleNamespace(info={"pid": os.getpid(), "name": "firefox", "cmdline": None}),
        SimpleNamespace(info={"pid": 13, "name": None, "cmdline": None}),
    ]
    monkeypatch.setattr(process_locator.psutil, "process_iter", MagicMock(return_value=iter(procs)))
    assert ProcessTableLocator().locate("firefox") == {10, 12}


def test_build_process_locator_prefers_pgrep(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(process_locator.shutil, "which", MagicMock(return_value="/usr/bin/pgrep"))
    assert isinstance(build_process_locator("auto"), PgrepLocator)
    monkeypatch.setattr(process_locator.shutil, "which", MagicMock(return_value=None))
    assert isinstance(build_process_locator("auto"), ProcessTableLocator)


def test_build_process_locator_explicit_strategies() -> None:
    assert isinstance(build_process_locator("scan"), ProcessTableLocator)
    assert isinstance(build_process_locator("pgrep"), PgrepLocator)
    with pytest.raises(ValueError):
        build_process_locator("magic")
