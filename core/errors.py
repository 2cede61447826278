"""Fatal error kinds raised during one run-or-raise invocation."""

from __future__ import annotations


class RunOrRaiseError(Exception):
    """Base class for every error that terminates an invocation."""


class PrerequisiteMissing(RunOrRaiseError):
    """A required external tool is not installed."""

    def __init__(self, tool: str) -> None:
        super().__init__(f"required tool '{tool}' not found in PATH")
        self.tool = tool


class CommandNotFound(RunOrRaiseError):
    """The launch target cannot be located."""

    def __init__(self, command: str) -> None:
        super().__init__(f"command '{command}' not found")
        self.command = command


class ActivationFailure(RunOrRaiseError):
    """The window manager refused to activate the selected window."""

    def __init__(self, identifier: str, window_id: int) -> None:
        super().__init__(f"failed to activate window 0x{window_id:08x} of '{identifier}'")
        self.identifier = identifier
        self.window_id = window_id


class ProcessRunningNoWindow(RunOrRaiseError):
    """A matching process exists but has no interactable window."""

    def __init__(self, identifier: str, pids: frozenset[int]) -> None:
        pid_list = ", ".join(str(pid) for pid in sorted(pids))
        super().__init__(
            f"'{identifier}' is running (pid {pid_list}) but has no window to focus; "
            "use -f to start another instance"
        )
        self.identifier = identifier
        self.pids = pids


class CollaboratorError(RunOrRaiseError):
    """An external command failed or returned output that cannot be parsed."""


class ConfigError(RunOrRaiseError):
    """The configuration file is malformed."""


class UsageError(RunOrRaiseError):
    """The invocation itself is unusable, e.g. an empty command."""
