"""Launcher tests; no real process is started."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from core.errors import CollaboratorError, CommandNotFound
from os_controller import launcher
from os_controller.launcher import PosixLauncher


@pytest.fixture
def on_path(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(launcher.shutil, "which", MagicMock(return_value="/usr/bin/firefox"))


def test_unknown_command_is_reported(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(launcher.shutil, "which", MagicMock(return_value=None))
    popen = MagicMock()
    monkeypatch.setattr(launcher.subprocess, "Popen", popen)
    with pytest.raises(CommandNotFound, match="nosuchapp"):
        PosixLauncher().launch("nosuchapp", [], detach=True)
    popen.assert_not_called()


@pytest.mark.usefixtures("on_path")
def test_detached_launch_starts_new_session(monkeypatch: pytest.MonkeyPatch) -> None:
    popen = MagicMock()
    popen.return_value.pid = 321
    monkeypatch.setattr(launcher.subprocess, "Popen", popen)
    assert PosixLauncher().launch("firefox", ["--url", "x"], detach=True) == 321
    assert popen.call_args.args[0] == ["firefox", "--url", "x"]
    assert popen.call_args.kwargs["executable"] == "/usr/bin/firefox"
    assert popen.call_args.kwargs["start_new_session"] is True


@pytest.mark.usefixtures("on_path")
def test_no_fork_replaces_process(monkeypatch: pytest.MonkeyPatch) -> None:
    execv = MagicMock()
    monkeypatch.setattr(launcher.os, "execv", execv)
    popen = MagicMock()
    monkeypatch.setattr(launcher.subprocess, "Popen", popen)
    PosixLauncher().launch("firefox", ["-P"], detach=False)
    execv.assert_called_once_with("/usr/bin/firefox", ["firefox", "-P"])
    popen.assert_not_called()


@pytest.mark.usefixtures("on_path")
def test_exec_failure_is_wrapped(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(launcher.os, "execv", MagicMock(side_effect=PermissionError("denied")))
    with pytest.raises(CollaboratorError, match="denied"):
        PosixLauncher().launch("firefox", [], detach=False)
